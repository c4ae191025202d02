"""Hue identity preservation.

Near white the sRGB gamut narrows to a point, so very light stops lose so
much chroma that a blue ramp's 50 becomes indistinguishable from a gray.
Each hue band gets a chroma floor; the lightest lightness that can still
carry that floor is the stop's lightness ceiling.
"""

from __future__ import annotations

import logging

from octarine import defaults
from octarine.colorspace import max_chroma

logger = logging.getLogger(__name__)


def min_chroma_for_hue(h: float) -> float:
    """Smallest chroma at which a hue still reads as that hue."""
    h = h % 360.0
    if 200 <= h < 280:  # blues
        return 0.025
    if 160 <= h < 200 or 280 <= h < 340:  # cyans, magentas
        return 0.02
    if 80 <= h < 160:  # greens
        return 0.015
    if h >= 340 or h < 40:  # reds
        return 0.015
    return 0.012  # yellows


def max_lightness_for_min_chroma(
    h: float,
    min_c: float,
    iterations: int = defaults.IDENTITY_SEARCH_ITERATIONS,
) -> float:
    """Highest lightness in [0.5, 1] whose gamut still allows min_c.

    Returns the low bracket of the bisection, so the result admits min_c
    whenever any lightness above 0.5 does.
    """
    low, high = 0.5, 1.0
    for _ in range(iterations):
        mid = (low + high) / 2
        if max_chroma(mid, h) >= min_c:
            low = mid
        else:
            high = mid
    return low


def identity_lightness_ceiling(h: float) -> float:
    return max_lightness_for_min_chroma(h, min_chroma_for_hue(h))


def cap_lightness_for_identity(target_l: float, h: float) -> float:
    """Cap a light-side target at the hue's identity ceiling.

    Dark targets are never changed.
    """
    ceiling = identity_lightness_ceiling(h)
    if target_l > ceiling:
        logger.debug("Capping lightness %.4f at identity ceiling %.4f (h=%.1f)",
                     target_l, ceiling, h)
        return ceiling
    return target_l
