"""Perceptual corrections for saturated colors.

Helmholtz-Kohlrausch: saturated colors look brighter than their lightness
suggests, strongest for blues and weakest for yellows. Compensated by
moving lightness away from the background.

Bezold-Bruecke: hue appears to drift with intensity. Light colors drift
towards yellow/blue, dark ones towards red/green. Compensated by shifting
hue away from whichever attractor is closest.
"""

from __future__ import annotations

import math
from dataclasses import replace

from octarine.types import Oklch

# Below this, hue is too weak for either effect to be visible
MIN_CORRECTION_CHROMA = 0.01

HK_MAX_COMPENSATION = 0.05
HK_CHROMA_SATURATION = 0.2

BB_DEAD_ZONE = 0.1
BB_LIGHT_ATTRACTORS = (90.0, 270.0)  # yellow, blue
BB_DARK_ATTRACTORS = (0.0, 140.0)  # red, green


def _hue_delta(from_h: float, to_h: float) -> float:
    """Signed shortest-path angle from one hue to another, in (-180, 180]."""
    diff = to_h - from_h
    if diff > 180:
        diff -= 360
    if diff < -180:
        diff += 360
    return diff


def hk_compensation(c: float, h: float, l: float = 0.5) -> float:
    """Lightness offset that cancels the HK brightness boost."""
    if c < MIN_CORRECTION_CHROMA:
        return 0.0
    hue_factor = 0.5 + 0.5 * math.cos(math.radians(h - 270))  # 1 at blue, 0 at yellow
    chroma_factor = min(c / HK_CHROMA_SATURATION, 1.0)
    lightness_factor = math.sin(math.pi * l)
    return HK_MAX_COMPENSATION * chroma_factor * hue_factor * lightness_factor


def apply_hk_compensation(color: Oklch, is_light_background: bool) -> Oklch:
    offset = hk_compensation(color.c, color.h, color.l)
    l = color.l - offset if is_light_background else color.l + offset
    return replace(color, l=min(max(l, 0.0), 1.0))


def max_bb_shift_for_hue(h: float) -> float:
    """Peak BB shift (degrees) for a hue region, strongest for blues."""
    h = h % 360.0
    if 200 <= h < 280:
        return 12 + 3 * math.sin((h - 200) / 80 * math.pi)
    if 280 <= h < 340:
        return 10 + 2 * math.sin((h - 280) / 60 * math.pi)
    if 160 <= h < 200:
        return 8 + 2 * math.sin((h - 160) / 40 * math.pi)
    if 40 <= h < 80:
        return 6 + 2 * math.sin((h - 40) / 40 * math.pi)
    if 80 <= h < 160:
        return 5 + 2 * math.sin((h - 80) / 80 * math.pi)
    # Reds wrap through 0: 340..360 continues as -20..0
    wrapped = h - 360 if h >= 340 else h
    return 5 + 2 * math.sin((wrapped + 20) / 60 * math.pi)


def bb_shift_correction(h: float, l: float, c: float = 0.1) -> float:
    """Signed hue offset (degrees) countering the BB drift at lightness l."""
    if c < MIN_CORRECTION_CHROMA:
        return 0.0
    deviation = l - 0.5
    if abs(deviation) < BB_DEAD_ZONE:
        return 0.0

    first, second = BB_LIGHT_ATTRACTORS if deviation > 0 else BB_DARK_ATTRACTORS
    if abs(_hue_delta(h, first)) < abs(_hue_delta(h, second)):
        attractor = first
    else:
        attractor = second

    magnitude = max_bb_shift_for_hue(h) * (abs(deviation) * 2) ** 1.5
    direction = -1.0 if _hue_delta(h, attractor) > 0 else 1.0
    return direction * magnitude


def apply_bb_correction(color: Oklch) -> Oklch:
    return replace(color, h=color.h + bb_shift_correction(color.h, color.l, color.c))


def apply_perceptual_corrections(
    color: Oklch,
    background: Oklch,
    hk: bool = False,
    bb: bool = False,
) -> Oklch:
    """Apply the enabled corrections: hue (BB) first, then brightness (HK).

    HK needs the final hue, so the order matters.
    """
    result = color
    if bb:
        result = apply_bb_correction(result)
    if hk:
        result = apply_hk_compensation(result, background.l > 0.5)
    return result
