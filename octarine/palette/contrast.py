"""Contrast solver: lightness for a target WCAG ratio against a background.

Two stages. A coarse bisection over lightness with chroma and hue held
fixed, then a closed-loop refinement that measures the quantized hex and
nudges lightness until the ratio is within tolerance. The refinement
re-clamps chroma at every step, so it tracks the color that will actually
be emitted.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Generic, Optional, TypeVar

import numpy as np

from octarine import defaults
from octarine.colorspace import (
    clamp_chroma_to_gamut,
    contrast_ratio,
    gamut_compress,
    oklch_to_srgb,
    relative_luminance,
    srgb_to_linear,
    to_hex,
    to_perceptual,
)
from octarine.types import NudgeAmount, Oklch

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SolveResult(Generic[T]):
    """Outcome of a bounded search.

    Attributes:
        value: Best candidate found (always usable, even when not converged)
        converged: Whether the candidate is within tolerance
        iterations: Number of evaluations performed
        error: Signed contrast error of value (measured minus target)
        adjustment: Hue, chroma and lightness offsets applied by fine tuning,
            or None when the lightness search alone converged
    """
    value: T
    converged: bool
    iterations: int
    error: float
    adjustment: Optional[NudgeAmount] = None


def find_lightness_for_contrast(
    base: Oklch,
    background: str,
    target: float,
    iterations: int = defaults.CONTRAST_SEARCH_ITERATIONS,
    tolerance: float = defaults.CONTRAST_SEARCH_TOLERANCE,
) -> SolveResult[float]:
    """Bisect lightness in [0, 1] for the target ratio, chroma/hue fixed.

    On a dark background (L < 0.5) more lightness means more contrast;
    otherwise less lightness does.
    """
    go_lighter = to_perceptual(background).l < 0.5
    low, high = 0.0, 1.0
    best_l, best_error = 0.5, math.inf

    for i in range(iterations):
        mid = (low + high) / 2
        candidate = to_hex(Oklch(mid, base.c, base.h))
        error = contrast_ratio(candidate, background) - target
        if abs(error) < abs(best_error):
            best_l, best_error = mid, error
        if abs(error) < tolerance:
            return SolveResult(mid, True, i + 1, error)

        too_little = error < 0
        if too_little == go_lighter:
            low = mid
        else:
            high = mid

    logger.debug("Contrast search for %.2f stopped at L=%.4f (error %.4f)",
                 target, best_l, best_error)
    return SolveResult(best_l, False, iterations, best_error)


def _with_lightness(color: Oklch, l: float, chroma: float) -> Oklch:
    return clamp_chroma_to_gamut(Oklch(l, chroma, color.h))


def _rank(error: float) -> tuple[bool, float]:
    # Candidates that meet the target outrank closer ones that fall short
    return (error < 0, abs(error))


def refine_contrast_to_target(
    color: Oklch,
    target: float,
    background: str,
    tolerance: float = defaults.CONTRAST_REFINE_TOLERANCE,
    iterations: int = defaults.CONTRAST_REFINE_ITERATIONS,
) -> SolveResult[Oklch]:
    """Closed-loop adjustment of lightness until the hex meets the target.

    Each step moves lightness by min(|error| * gain, max_step): towards the
    background when contrast is too high, away when too low. Once the error
    has changed sign, the last too-high and too-low lightness bracket the
    answer and steps that would leave the bracket bisect it instead.

    Chroma is the pre-refinement chroma re-clamped to the gamut at each
    lightness. Hex quantization often makes the tolerance unreachable; the
    result is then the closest candidate that still meets the target, or
    the closest one overall if none does.
    """
    is_light_bg = to_perceptual(background).l > 0.5
    original_c = color.c

    current = color
    best, best_error = color, None
    l_too_high = None  # lightness whose contrast overshoots the target
    l_too_low = None
    evaluations = 0

    for i in range(iterations + 1):
        error = contrast_ratio(to_hex(current), background) - target
        evaluations += 1
        if best_error is None or _rank(error) < _rank(best_error):
            best, best_error = current, error
        if abs(error) <= tolerance:
            return SolveResult(current, True, evaluations, error)
        if i == iterations:
            break

        if error > 0:
            l_too_high = current.l
            direction = 1.0 if is_light_bg else -1.0
        else:
            l_too_low = current.l
            direction = -1.0 if is_light_bg else 1.0

        step = min(abs(error) * defaults.CONTRAST_REFINE_GAIN, defaults.CONTRAST_REFINE_MAX_STEP)
        new_l = min(max(current.l + direction * step, 0.0), 1.0)

        if l_too_high is not None and l_too_low is not None:
            lo, hi = sorted((l_too_high, l_too_low))
            if hi - lo < 1e-9:
                break
            if not lo < new_l < hi:
                new_l = (lo + hi) / 2

        if new_l == current.l:
            # Pinned at black or white
            break
        current = _with_lightness(current, new_l, original_c)

    if best.c >= defaults.ACHROMATIC_CHROMA:
        tuned = fine_tune_contrast(best, target, background, tolerance)
        if tuned is not None:
            return replace(tuned, iterations=evaluations + tuned.iterations)

    logger.debug("Contrast refinement for %.2f did not converge (error %.4f)",
                 target, best_error)
    return SolveResult(best, False, evaluations, best_error)


def _perturbation_grid() -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    n_l, n_h, n_c = defaults.CONTRAST_FINE_STEPS
    dl, dh, dc = np.meshgrid(
        np.arange(-n_l, n_l + 1) * defaults.CONTRAST_FINE_LIGHTNESS_STEP,
        np.arange(-n_h, n_h + 1) * defaults.CONTRAST_FINE_HUE_STEP,
        np.arange(-n_c, n_c + 1) * defaults.CONTRAST_FINE_CHROMA_STEP,
        indexing="ij",
    )
    return dl.ravel(), dh.ravel(), dc.ravel()


def _wcag_luminance(rgb: np.ndarray) -> np.ndarray:
    """Relative luminance of gamma-encoded sRGB (..., 3), quantized to 8 bits."""
    levels = np.floor(np.clip(rgb, 0.0, 1.0) * 255 + 0.5) / 255
    linear = srgb_to_linear(levels)
    return linear @ np.array([0.2126, 0.7152, 0.0722])


def fine_tune_contrast(
    color: Oklch,
    target: float,
    background: str,
    tolerance: float = defaults.CONTRAST_REFINE_TOLERANCE,
) -> Optional[SolveResult[Oklch]]:
    """Search a small hue/chroma/lightness neighbourhood for an exact hit.

    Along a fixed hue, adjacent 8-bit colors can differ by ~0.05 in contrast.
    Tiny hue and chroma moves change the red and blue channels on their own,
    which have much finer luminance steps. Candidates are ranked by their
    perceptual distance from color (all well below a just-noticeable
    difference). Returns None when nothing in the neighbourhood is within
    tolerance.
    """
    dl, dh, dc = _perturbation_grid()
    L = np.clip(color.l + dl, 0.0, 1.0)
    H = color.h + dh
    _, C, _ = gamut_compress(L, np.maximum(color.c + dc, 0.0), H)

    bg_lum = relative_luminance(background)
    lum = _wcag_luminance(oklch_to_srgb(L, C, H))
    ratio = (np.maximum(lum, bg_lum) + 0.05) / (np.minimum(lum, bg_lum) + 0.05)
    hits = np.flatnonzero(np.abs(ratio - target) <= tolerance)
    if hits.size == 0:
        return None

    chroma_weight = np.minimum((color.c + C[hits]) / 2 / 0.15, 1.0)
    distance = np.sqrt(
        ((L[hits] - color.l) * 100) ** 2
        + ((C[hits] - color.c) * 100) ** 2
        + (dh[hits] * chroma_weight * 0.5) ** 2
    )
    # Re-check on the scalar path; vectorised math may differ in the last ulp
    for index in hits[np.argsort(distance, kind="stable")]:
        candidate = Oklch(float(L[index]), float(C[index]), float(H[index]))
        error = contrast_ratio(to_hex(candidate), background) - target
        if abs(error) <= tolerance:
            logger.debug("Contrast %.2f reached by fine tuning (error %.4f)", target, error)
            adjustment = NudgeAmount(
                hue=float(dh[index]),
                chroma=candidate.c - color.c,
                lightness=candidate.l - color.l,
            )
            return SolveResult(candidate, True, int(dl.size), error, adjustment)
    return None
