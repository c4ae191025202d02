"""Advisory check that adjacent stops are visually distinguishable."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Sequence

from octarine import defaults
from octarine.types import GeneratedStop, Oklch, SimilarityWarning


def delta_e(a: Oklch, b: Oklch) -> float:
    """Simplified OKLCH color difference.

    Lightness and chroma differences are scaled by 100; the hue difference
    is weighted by the average chroma (hue is meaningless for grays).
    """
    dl = (a.l - b.l) * 100
    dc = (a.c - b.c) * 100
    dh = a.h - b.h
    if dh > 180:
        dh -= 360
    if dh < -180:
        dh += 360
    chroma_weight = min((a.c + b.c) / 2 / 0.15, 1.0)
    weighted_dh = dh * chroma_weight * 0.5
    return math.sqrt(dl * dl + dc * dc + weighted_dh * weighted_dh)


@dataclass(frozen=True)
class AuditResult:
    stops: tuple[GeneratedStop, ...]
    warnings: tuple[SimilarityWarning, ...]


def audit_distinctness(
    stops: Sequence[GeneratedStop],
    threshold: float = defaults.DELTA_E_THRESHOLD,
) -> AuditResult:
    """Annotate each stop with its difference to the previous one.

    Colors are never changed. Stops closer than threshold to their
    predecessor are marked too_similar and reported as warnings.
    """
    ordered = sorted(stops, key=lambda s: s.number)
    annotated = []
    warnings = []
    previous = None
    for stop in ordered:
        if previous is None:
            annotated.append(replace(stop, delta_e=None, too_similar=False))
        else:
            diff = delta_e(previous.color, stop.color)
            similar = diff < threshold
            annotated.append(replace(stop, delta_e=diff, too_similar=similar))
            if similar:
                warnings.append(SimilarityWarning(previous.number, stop.number, diff))
        previous = stop
    return AuditResult(tuple(annotated), tuple(warnings))
