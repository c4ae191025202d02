"""Octarine - accessible, perceptually coherent color ramps in OKLCH.

Example:
    from octarine import ColorDefinition, GlobalSettings, generate_palette

    blue = ColorDefinition.with_default_stops("#0066cc", id="blue")
    result = generate_palette(blue, GlobalSettings())
    result.stop(500).hex
"""

from octarine.errors import ConfigError, DocumentLoadError, OctarineError, UnknownPresetError
from octarine.types import (
    ChromaCurve,
    ChromaShiftDirection,
    ColorDefinition,
    GeneratedStop,
    GlobalSettings,
    HueShiftCurve,
    HueShiftDirection,
    Method,
    NudgeAmount,
    Oklch,
    PaletteResult,
    SimilarityWarning,
    StopDefinition,
    StopMethod,
)
from octarine.palette import generate_palette, generate_palettes, generate_stop

__all__ = [
    'generate_palette',
    'generate_palettes',
    'generate_stop',
    # Types
    'Oklch',
    'Method',
    'StopMethod',
    'HueShiftDirection',
    'ChromaShiftDirection',
    'HueShiftCurve',
    'ChromaCurve',
    'StopDefinition',
    'ColorDefinition',
    'GlobalSettings',
    'NudgeAmount',
    'GeneratedStop',
    'SimilarityWarning',
    'PaletteResult',
    # Errors
    'OctarineError',
    'ConfigError',
    'UnknownPresetError',
    'DocumentLoadError',
]
