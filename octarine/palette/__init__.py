"""Palette generation: ramps of unique, in-gamut, contrast-aware stops."""

from .contrast import SolveResult, find_lightness_for_contrast, refine_contrast_to_target
from .corrections import (
    apply_bb_correction,
    apply_hk_compensation,
    apply_perceptual_corrections,
    bb_shift_correction,
    hk_compensation,
    max_bb_shift_for_hue,
)
from .curves import (
    apply_chroma_curve,
    apply_chroma_shift,
    apply_hue_shift,
    apply_hue_shift_curve,
    normalized_lightness,
    yellow_equivalent_shifts,
)
from .distinctness import audit_distinctness, delta_e
from .generator import fallback_lightness, generate_palette, generate_palettes, generate_stop
from .identity import (
    cap_lightness_for_identity,
    identity_lightness_ceiling,
    max_lightness_for_min_chroma,
    min_chroma_for_hue,
)
from .presets import (
    CHROMA_CURVE_PRESETS,
    HUE_SHIFT_CURVE_PRESETS,
    list_chroma_curve_presets,
    list_hue_shift_presets,
)
from .uniqueness import resolve_duplicates

__all__ = [
    # Generation
    'generate_palette',
    'generate_palettes',
    'generate_stop',
    'fallback_lightness',
    # Contrast
    'SolveResult',
    'find_lightness_for_contrast',
    'refine_contrast_to_target',
    # Corrections
    'hk_compensation',
    'apply_hk_compensation',
    'max_bb_shift_for_hue',
    'bb_shift_correction',
    'apply_bb_correction',
    'apply_perceptual_corrections',
    # Identity
    'min_chroma_for_hue',
    'max_lightness_for_min_chroma',
    'identity_lightness_ceiling',
    'cap_lightness_for_identity',
    # Curves
    'normalized_lightness',
    'apply_hue_shift',
    'apply_chroma_shift',
    'apply_hue_shift_curve',
    'apply_chroma_curve',
    'yellow_equivalent_shifts',
    'HUE_SHIFT_CURVE_PRESETS',
    'CHROMA_CURVE_PRESETS',
    'list_hue_shift_presets',
    'list_chroma_curve_presets',
    # Uniqueness / distinctness
    'resolve_duplicates',
    'delta_e',
    'audit_distinctness',
]
