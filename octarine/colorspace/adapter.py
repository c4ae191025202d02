"""Scalar color-space contract used by the palette pipeline.

Hex <-> OKLCH conversion, WCAG luminance/contrast, displayability and chroma
clamping for single ``Oklch`` values. Nothing here raises on bad colors:
unparsable input fails closed to a neutral mid-gray.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import replace

import numpy as np

from octarine.types import Oklch
from .gamut import is_in_gamut, max_chroma_for_lh
from .oklch import oklch_to_srgb, srgb_to_oklch

logger = logging.getLogger(__name__)

NEUTRAL = Oklch(0.5, 0.0, 0.0)

# Below this the hue of a converted color is numerical noise
_HUE_NOISE_CHROMA = 1e-7

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex(hex_color: str) -> tuple[int, int, int] | None:
    """Parse ``#rgb`` / ``#rrggbb`` (``#`` optional) into 8-bit channels."""
    if not isinstance(hex_color, str):
        return None
    match = _HEX_RE.match(hex_color.strip())
    if match is None:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _channel_to_byte(value: float) -> int:
    # Round half up, matching CSS serializers
    return int(math.floor(min(max(value, 0.0), 1.0) * 255 + 0.5))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """sRGB channels in [0, 1] (clipped) -> ``#rrggbb``."""
    return "#{:02x}{:02x}{:02x}".format(
        _channel_to_byte(r), _channel_to_byte(g), _channel_to_byte(b)
    )


def to_perceptual(hex_color: str) -> Oklch:
    """Hex -> OKLCH. Returns NEUTRAL (and logs) for unparsable input."""
    channels = parse_hex(hex_color)
    if channels is None:
        logger.warning("Unparsable color %r, using neutral gray", hex_color)
        return NEUTRAL
    rgb = np.array(channels, dtype=np.float64) / 255.0
    L, C, H = srgb_to_oklch(rgb)
    L, C, H = float(L), float(C), float(H)
    if C < _HUE_NOISE_CHROMA:
        C, H = 0.0, 0.0
    return Oklch(L, C, H)


def to_hex(color: Oklch) -> str:
    """OKLCH -> ``#rrggbb``. Out-of-gamut channels are clipped."""
    rgb = oklch_to_srgb(color.l, color.c, color.h)
    if not np.all(np.isfinite(rgb)):
        return to_hex(NEUTRAL)
    return rgb_to_hex(float(rgb[0]), float(rgb[1]), float(rgb[2]))


def _linearize(channel: int) -> float:
    v = channel / 255.0
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str) -> float:
    """WCAG relative luminance in [0, 1]."""
    channels = parse_hex(hex_color)
    if channels is None:
        logger.warning("Unparsable color %r, using neutral gray", hex_color)
        channels = parse_hex(to_hex(NEUTRAL))
    r, g, b = (_linearize(ch) for ch in channels)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(hex_a: str, hex_b: str) -> float:
    """WCAG contrast ratio in [1, 21]."""
    lum_a = relative_luminance(hex_a)
    lum_b = relative_luminance(hex_b)
    return (max(lum_a, lum_b) + 0.05) / (min(lum_a, lum_b) + 0.05)


def is_displayable(color: Oklch) -> bool:
    return bool(is_in_gamut(color.l, color.c, color.h))


def max_chroma(l: float, h: float) -> float:
    """Largest displayable chroma at this lightness and hue."""
    return float(max_chroma_for_lh(l, h))


def clamp_chroma_to_gamut(color: Oklch) -> Oklch:
    """Same L and H with chroma reduced to the gamut boundary.

    Identity (the same object) when the color is already displayable.
    """
    if is_displayable(color):
        return color
    return replace(color, c=min(color.c, max_chroma(color.l, color.h)))
