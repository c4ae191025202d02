"""Stop generator: turns a color definition into a full ramp.

Each stop runs through a fixed pipeline:

1. Manual override short-circuit
2. Target lightness (contrast search or lightness table), identity cap
3. Chroma clamped to the gamut at the target lightness
4. Artistic shifts: hue amount, hue curve, chroma amount, chroma curve
5. Perceptual corrections (hue first, then brightness)
6. Gamut validation (and identity re-cap in lightness mode)
7. Contrast refinement (contrast mode only)

The ramp then goes through the uniqueness resolver and the distinctness
audit. Every call recomputes everything; there is no cached state.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from octarine import defaults
from octarine.colorspace import clamp_chroma_to_gamut, to_hex, to_perceptual
from octarine.types import (
    ColorDefinition,
    GeneratedStop,
    GlobalSettings,
    Method,
    Oklch,
    PaletteResult,
    StopDefinition,
)
from .contrast import find_lightness_for_contrast, refine_contrast_to_target
from .corrections import apply_perceptual_corrections
from .curves import apply_chroma_curve, apply_chroma_shift, apply_hue_shift, apply_hue_shift_curve
from .distinctness import audit_distinctness
from .identity import cap_lightness_for_identity, identity_lightness_ceiling
from .uniqueness import resolve_duplicates


def fallback_lightness(number: int) -> float:
    """Lightness for a stop number missing from every table.

    Linear from 0.95 at 0 to 0.5 at 500, then to 0.05 at 950.
    """
    if number <= 500:
        return 0.95 - (number / 500) * 0.45
    return 0.5 - ((number - 500) / 450) * 0.45


def stop_lightness(stop: StopDefinition, settings: GlobalSettings) -> float:
    if stop.lightness is not None:
        return stop.lightness
    if stop.number in settings.default_lightness:
        return settings.default_lightness[stop.number]
    return fallback_lightness(stop.number)


def stop_contrast(stop: StopDefinition, settings: GlobalSettings) -> float:
    if stop.contrast is not None:
        return stop.contrast
    return settings.default_contrast.get(stop.number, defaults.DEFAULT_TARGET_CONTRAST)


def _identity_ceiling(color_def: ColorDefinition, base: Oklch) -> Optional[float]:
    if not color_def.preserve_identity or base.c < defaults.ACHROMATIC_CHROMA:
        return None
    return identity_lightness_ceiling(base.h)


def _manual_stop(color_def: ColorDefinition, stop: StopDefinition, background: Oklch) -> GeneratedStop:
    color = stop.manual_override
    if stop.apply_corrections_to_manual:
        color = apply_perceptual_corrections(
            color, background, hk=color_def.hk_correction, bb=color_def.bb_correction
        )
    color = clamp_chroma_to_gamut(color)
    return GeneratedStop(
        number=stop.number,
        hex=to_hex(color),
        color=color,
        original_lightness=color.l,
        is_manual=True,
    )


def generate_stop(
    color_def: ColorDefinition,
    stop: StopDefinition,
    settings: GlobalSettings,
    base: Optional[Oklch] = None,
) -> GeneratedStop:
    """Generate a single stop, before uniqueness resolution.

    Args:
        color_def: The ramp's definition
        stop: Stop to generate (must belong to color_def)
        settings: Global settings (background, default tables, method)
        base: Pre-parsed base color, to avoid re-parsing for every stop
    """
    if base is None:
        base = to_perceptual(color_def.base_color)
    background_hex = settings.background_color
    background = to_perceptual(background_hex)

    if stop.manual_override is not None:
        return _manual_stop(color_def, stop, background)

    method = color_def.effective_method(settings, stop)
    target_contrast = None
    if method is Method.CONTRAST:
        target_contrast = stop_contrast(stop, settings)
        target_l = find_lightness_for_contrast(base, background_hex, target_contrast).value
    else:
        target_l = stop_lightness(stop, settings)

    ceiling = _identity_ceiling(color_def, base)
    if ceiling is not None:
        target_l = cap_lightness_for_identity(target_l, base.h)

    color = clamp_chroma_to_gamut(Oklch(target_l, base.c, base.h))

    hue_amount = color_def.hue_shift_amount if stop.hue_shift is None else stop.hue_shift
    chroma_amount = color_def.chroma_shift_amount if stop.chroma_shift is None else stop.chroma_shift
    color = apply_hue_shift(color, target_l, hue_amount, color_def.hue_shift_direction)
    color = apply_hue_shift_curve(color, target_l, color_def.hue_shift_curve)
    color = apply_chroma_shift(color, target_l, chroma_amount, color_def.chroma_shift_direction)
    color = apply_chroma_curve(color, target_l, color_def.chroma_curve)

    if color_def.hk_correction or color_def.bb_correction:
        color = apply_perceptual_corrections(
            color, background, hk=color_def.hk_correction, bb=color_def.bb_correction
        )

    # Lightness mode keeps the ceiling; in contrast mode the target wins
    enforced_ceiling = ceiling if method is Method.LIGHTNESS else None
    if enforced_ceiling is not None and color.l > enforced_ceiling:
        color = replace(color, l=enforced_ceiling)
    color = clamp_chroma_to_gamut(color)

    converged = adjustment = None
    if method is Method.CONTRAST:
        solved = refine_contrast_to_target(color, target_contrast, background_hex)
        color, converged, adjustment = solved.value, solved.converged, solved.adjustment

    return GeneratedStop(
        number=stop.number,
        hex=to_hex(color),
        color=color,
        original_lightness=color.l,
        target_contrast=target_contrast,
        lightness_ceiling=enforced_ceiling,
        contrast_converged=converged,
        contrast_adjustment=adjustment,
    )


def generate_palette(color_def: ColorDefinition, settings: GlobalSettings) -> PaletteResult:
    """Generate every stop of a ramp, then make hexes unique and audit them.

    Stops in the result are ordered by stop number.
    """
    base = to_perceptual(color_def.base_color)
    generated = [generate_stop(color_def, stop, settings, base=base) for stop in color_def.stops]

    resolved = resolve_duplicates(generated, settings.background_color)
    audited = audit_distinctness(resolved.stops)
    return PaletteResult(
        color_id=color_def.id,
        stops=audited.stops,
        had_duplicates=resolved.had_duplicates,
        unresolved=resolved.unresolved,
        warnings=audited.warnings,
    )


def generate_palettes(
    colors: list[ColorDefinition],
    settings: GlobalSettings,
) -> list[PaletteResult]:
    """Generate independent ramps that share one set of global settings."""
    return [generate_palette(color_def, settings) for color_def in colors]
