"""Uniqueness resolver: no two stops of a ramp may share a hex value.

Collisions are common at the extremes, where the gamut is narrow and
several target lightnesses quantize to the same 8-bit color. Within a
group of identical hexes the lowest stop number keeps its color; every
other member is nudged by the smallest perceptible amount, trying hue,
then chroma, then lightness (primary direction, then the opposite one).

Manual overrides are never nudged, but their hexes still count as taken.
"""

from __future__ import annotations

import enum
import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional

from octarine import defaults
from octarine.colorspace import clamp_chroma_to_gamut, contrast_ratio, to_hex, to_perceptual
from octarine.types import GeneratedStop, NudgeAmount, Oklch

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    """Resolver states, visited in order until one yields a unique hex."""
    HUE = "hue"
    CHROMA = "chroma"
    LIGHTNESS = "lightness"
    LIGHTNESS_FALLBACK = "lightness-fallback"
    RESOLVED = "resolved"
    STILL_COLLIDING = "still-colliding"


@dataclass(frozen=True)
class Candidate:
    """A nudged color whose hex is not taken.

    nudge holds only the offset the phase asked for; gamut clamping may
    still have reduced the chroma of color.
    """
    color: Oklch
    hex: str
    nudge: NudgeAmount


@dataclass(frozen=True)
class ResolutionResult:
    stops: tuple[GeneratedStop, ...]
    had_duplicates: bool
    unresolved: tuple[int, ...]


def _first_unique(
    attempts: Iterable[tuple[NudgeAmount, Oklch]],
    taken: set[str],
) -> Optional[Candidate]:
    for nudge, color in attempts:
        color = clamp_chroma_to_gamut(color)
        hex_value = to_hex(color)
        if hex_value not in taken:
            return Candidate(color, hex_value, nudge)
    return None


def try_hue_nudges(color: Oklch, taken: set[str]) -> Optional[Candidate]:
    return _first_unique(
        ((NudgeAmount(hue=float(offset)), replace(color, h=color.h + offset))
         for offset in defaults.HUE_NUDGES),
        taken,
    )


def try_chroma_nudges(color: Oklch, taken: set[str]) -> Optional[Candidate]:
    def attempts():
        for offset in defaults.CHROMA_NUDGES:
            c = max(0.0, color.c + offset)
            yield NudgeAmount(chroma=c - color.c), replace(color, c=c)

    return _first_unique(attempts(), taken)


def try_lightness_nudges(
    color: Oklch,
    taken: set[str],
    direction: float,
    ceiling: Optional[float] = None,
) -> Optional[Candidate]:
    """Walk lightness in one direction, one step (about one 8-bit level) at a time."""
    def attempts():
        for step in range(1, defaults.LIGHTNESS_NUDGE_MAX_STEPS + 1):
            l = color.l + direction * defaults.LIGHTNESS_NUDGE_STEP * step
            if ceiling is not None:
                l = min(l, ceiling)
            yield NudgeAmount(lightness=l - color.l), replace(color, l=l)

    return _first_unique(attempts(), taken)


def lightness_direction(
    color: Oklch,
    hex_value: str,
    background: str,
    target_contrast: Optional[float] = None,
) -> float:
    """Primary lightness nudge direction (+1 lighter, -1 darker).

    With a contrast target, move away from the background when contrast is
    short and towards it otherwise. Without one, move towards the nearer end.
    """
    if target_contrast is None:
        return 1.0 if color.l >= 0.5 else -1.0
    light_bg = to_perceptual(background).l > 0.5
    if contrast_ratio(hex_value, background) < target_contrast:
        return -1.0 if light_bg else 1.0
    return 1.0 if light_bg else -1.0


def resolve_stop(
    stop: GeneratedStop,
    taken: set[str],
    background: str,
) -> tuple[Phase, Optional[Candidate]]:
    """Run one colliding stop through the resolver phases.

    Returns the terminal phase and, when RESOLVED, the accepted candidate.
    """
    color = stop.color
    direction = lightness_direction(color, stop.hex, background, stop.target_contrast)
    phases: list[tuple[Phase, Callable[[], Optional[Candidate]]]] = [
        (Phase.HUE, lambda: try_hue_nudges(color, taken)),
        (Phase.CHROMA, lambda: try_chroma_nudges(color, taken)),
        (Phase.LIGHTNESS, lambda: try_lightness_nudges(
            color, taken, direction, stop.lightness_ceiling)),
        (Phase.LIGHTNESS_FALLBACK, lambda: try_lightness_nudges(
            color, taken, -direction, stop.lightness_ceiling)),
    ]
    for phase, attempt in phases:
        candidate = attempt()
        if candidate is not None:
            logger.debug("Stop %d resolved in %s phase: %s -> %s",
                         stop.number, phase.value, stop.hex, candidate.hex)
            return Phase.RESOLVED, candidate
    return Phase.STILL_COLLIDING, None


def _nudged(stop: GeneratedStop, candidate: Candidate) -> GeneratedStop:
    return replace(
        stop, hex=candidate.hex, color=candidate.color, was_nudged=True, nudge=candidate.nudge
    )


def resolve_duplicates(stops: Iterable[GeneratedStop], background: str) -> ResolutionResult:
    """Make every generated (non-manual) stop's hex unique.

    Stops are processed in ascending stop number; already-resolved stops
    count as taken for later ones.
    """
    result = sorted(stops, key=lambda s: s.number)
    groups: dict[str, list[int]] = defaultdict(list)
    for index, stop in enumerate(result):
        if not stop.is_manual:
            groups[stop.hex].append(index)

    had_duplicates = False
    unresolved = []
    for indices in groups.values():
        if len(indices) <= 1:
            continue
        had_duplicates = True
        # The lowest stop number keeps its color
        for index in indices[1:]:
            stop = result[index]
            taken = {s.hex for i, s in enumerate(result) if i != index}
            phase, candidate = resolve_stop(stop, taken, background)
            if phase is Phase.RESOLVED:
                result[index] = _nudged(stop, candidate)
            else:
                unresolved.append(stop.number)

    if unresolved:
        logger.warning("Could not make stops %s unique", sorted(unresolved))
    return ResolutionResult(tuple(result), had_duplicates, tuple(sorted(unresolved)))
