"""OKLCH color space conversions, gamut checks, and the hex/contrast adapter.

This module provides:
- OKLCH <-> sRGB conversions (vectorised, numpy)
- Gamut checks and chroma reduction
- Scalar adapter used by the palette pipeline: hex parsing/formatting,
  WCAG luminance and contrast, displayability

Example:
    from octarine.colorspace import to_perceptual, to_hex, contrast_ratio

    color = to_perceptual("#0066cc")
    contrast_ratio(to_hex(color), "#ffffff")
"""

from .oklch import (
    oklch_to_oklab,
    oklab_to_oklch,
    oklab_to_linear_rgb,
    linear_rgb_to_oklab,
    linear_to_srgb,
    srgb_to_linear,
    oklch_to_srgb,
    srgb_to_oklch,
)

from .gamut import (
    is_in_gamut,
    gamut_compress,
    max_chroma_for_lh,
)

from .adapter import (
    NEUTRAL,
    parse_hex,
    rgb_to_hex,
    to_perceptual,
    to_hex,
    relative_luminance,
    contrast_ratio,
    is_displayable,
    max_chroma,
    clamp_chroma_to_gamut,
)

__all__ = [
    # OKLCH conversions
    'oklch_to_oklab',
    'oklab_to_oklch',
    'oklab_to_linear_rgb',
    'linear_rgb_to_oklab',
    'linear_to_srgb',
    'srgb_to_linear',
    'oklch_to_srgb',
    'srgb_to_oklch',
    # Gamut
    'is_in_gamut',
    'gamut_compress',
    'max_chroma_for_lh',
    # Adapter
    'NEUTRAL',
    'parse_hex',
    'rgb_to_hex',
    'to_perceptual',
    'to_hex',
    'relative_luminance',
    'contrast_ratio',
    'is_displayable',
    'max_chroma',
    'clamp_chroma_to_gamut',
]
