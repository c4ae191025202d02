"""Artistic hue and chroma variation across a ramp.

These are design features, not perceptual corrections: they deliberately
move hue and chroma as a function of the stop's target lightness.
"""

from __future__ import annotations

import math
from dataclasses import replace

from octarine.types import (
    ChromaCurve,
    ChromaShiftDirection,
    HueShiftCurve,
    HueShiftDirection,
    Oklch,
)
from .presets import CUSTOM, chroma_curve_values, hue_shift_values

# Near-neutral colors are not hue shifted (avoids tinting grays)
MIN_HUE_CURVE_CHROMA = 0.02

# Yellows (70..110 deg) drift towards orange as they darken instead of
# following the light/dark shift, which would push them towards olive
YELLOW_HUE_RANGE = (70.0, 110.0)
YELLOW_CENTER = 90.0
YELLOW_HALF_WIDTH = 20.0
YELLOW_MAX_SHIFT = -45.0
# Typical light and dark stop lightness for slider equivalents
YELLOW_REFERENCE_LIGHT_L = 0.85
YELLOW_REFERENCE_DARK_L = 0.25

# Chroma curve control points
LIGHT_L = 0.85
MID_L = 0.50
DARK_L = 0.15


def normalized_lightness(l: float) -> float:
    """Map lightness [0, 1] to [-1, 1] with 0 at mid-gray."""
    return (l - 0.5) * 2


def _is_yellow(h: float) -> bool:
    h = h % 360.0
    return YELLOW_HUE_RANGE[0] <= h <= YELLOW_HUE_RANGE[1]


def _yellow_factor(h: float) -> float:
    return 1 - abs(h % 360.0 - YELLOW_CENTER) / YELLOW_HALF_WIDTH


def apply_hue_shift(
    color: Oklch,
    target_l: float,
    amount: float,
    direction: HueShiftDirection = HueShiftDirection.WARM_COOL,
) -> Oklch:
    """Linear hue drift across the ramp, none at mid lightness.

    With WARM_COOL, light stops move towards warm (hue decreases) and dark
    stops towards cool; COOL_WARM reverses this.
    """
    if amount == 0:
        return color
    if direction is HueShiftDirection.COOL_WARM:
        amount = -amount
    offset = -normalized_lightness(target_l) * (amount / 2)
    return replace(color, h=color.h + offset)


def apply_chroma_shift(
    color: Oklch,
    target_l: float,
    amount: float,
    direction: ChromaShiftDirection = ChromaShiftDirection.VIVID_MUTED,
) -> Oklch:
    """Reduce chroma on one side of the ramp by up to amount percent."""
    if amount == 0 or color.c == 0:
        return color
    n = normalized_lightness(target_l)
    if direction is ChromaShiftDirection.VIVID_MUTED:
        reduction = max(0.0, -n)
    else:
        reduction = max(0.0, n)
    multiplier = max(0.0, 1 - reduction * (amount / 100))
    return replace(color, c=color.c * multiplier)


def yellow_equivalent_shifts(h: float) -> tuple[int, int] | None:
    """(light, dark) custom-curve values that approximate the yellow handling.

    Returns None for hues outside the yellow band.
    """
    if not _is_yellow(h):
        return None
    factor = _yellow_factor(h)
    light = YELLOW_MAX_SHIFT * (1 - YELLOW_REFERENCE_LIGHT_L) * factor
    dark = YELLOW_MAX_SHIFT * (1 - YELLOW_REFERENCE_DARK_L) * factor
    return _round_half_up(light), _round_half_up(dark)


def _round_half_up(x: float) -> int:
    # Slider values round half towards +inf, unlike round()
    return math.floor(x + 0.5)


def apply_hue_shift_curve(color: Oklch, target_l: float, curve: HueShiftCurve | None) -> Oklch:
    """Asymmetric hue shift: light_shift at L=1, dark_shift at L=0, 0 at mid.

    Presets are yellow-aware; custom curves are applied as given.
    """
    if color.c < MIN_HUE_CURVE_CHROMA:
        return color
    light, dark = hue_shift_values(curve)
    if light == 0 and dark == 0:
        return color

    if curve.preset != CUSTOM and _is_yellow(color.h):
        offset = YELLOW_MAX_SHIFT * (1 - target_l) * _yellow_factor(color.h)
    elif target_l > 0.5:
        offset = light * (target_l - 0.5) / 0.5
    else:
        offset = dark * (0.5 - target_l) / 0.5
    return replace(color, h=color.h + offset)


def _smoothstep(t: float) -> float:
    return t * t * (3 - 2 * t)


def chroma_curve_multiplier(l: float, light_pct: float, mid_pct: float, dark_pct: float) -> float:
    """Percent of base chroma at lightness l, smoothly interpolated."""
    if l >= MID_L:
        t = min(max((l - MID_L) / (LIGHT_L - MID_L), 0.0), 1.0)
        return mid_pct + (light_pct - mid_pct) * _smoothstep(t)
    t = min(max((l - DARK_L) / (MID_L - DARK_L), 0.0), 1.0)
    return dark_pct + (mid_pct - dark_pct) * _smoothstep(t)


def apply_chroma_curve(color: Oklch, target_l: float, curve: ChromaCurve | None) -> Oklch:
    if curve is None or color.c == 0:
        return color
    multiplier = chroma_curve_multiplier(target_l, *chroma_curve_values(curve))
    if multiplier == 100:
        return color
    return replace(color, c=color.c * (multiplier / 100))
