"""Built-in hue-shift and chroma curve presets.

Presets are named curve shapes that users can select as starting points;
"custom" uses the values stored on the curve itself.
"""

from dataclasses import dataclass

from octarine.errors import UnknownPresetError
from octarine.types import ChromaCurve, HueShiftCurve

CUSTOM = "custom"


@dataclass(frozen=True)
class HueShiftPreset:
    """Hue offsets (degrees) reached at the light and dark extremes."""
    name: str
    light: float
    dark: float
    description: str = ""


@dataclass(frozen=True)
class ChromaCurvePreset:
    """Percent of base chroma at the light, mid and dark control points."""
    name: str
    light: float
    mid: float
    dark: float
    description: str = ""


# Positive = towards cyan/cool, negative = towards purple/warm
HUE_SHIFT_CURVE_PRESETS: dict[str, HueShiftPreset] = {
    "none": HueShiftPreset("none", 0, 0, "No shift"),
    "subtle": HueShiftPreset("subtle", 4, -5, "Gentle shift"),
    "natural": HueShiftPreset("natural", 8, -10, "Reference palette match"),
    "dramatic": HueShiftPreset("dramatic", 12, -15, "Bold artistic effect"),
}

CHROMA_CURVE_PRESETS: dict[str, ChromaCurvePreset] = {
    "flat": ChromaCurvePreset("flat", 100, 100, 100, "Uniform saturation"),
    "bell": ChromaCurvePreset("bell", 45, 100, 65, "Peak saturation at mids"),
    "pastel": ChromaCurvePreset("pastel", 30, 70, 50, "Soft but visibly colored"),
    "jewel": ChromaCurvePreset("jewel", 55, 100, 85, "Rich at all stops"),
    "linear-fade": ChromaCurvePreset("linear-fade", 25, 60, 100, "Saturated darks fading to light"),
}

# Presets that existed in older documents, mapped to their replacement
RENAMED_HUE_SHIFT_PRESETS = {"vivid": "dramatic"}


def list_hue_shift_presets() -> list[str]:
    """Preset names accepted by HueShiftCurve.preset (plus "custom")."""
    return list(HUE_SHIFT_CURVE_PRESETS.keys())


def list_chroma_curve_presets() -> list[str]:
    return list(CHROMA_CURVE_PRESETS.keys())


def hue_shift_values(curve: HueShiftCurve | None) -> tuple[float, float]:
    """(light, dark) shift in degrees for a curve setting.

    Raises:
        UnknownPresetError: If the preset name is not known
    """
    if curve is None:
        return 0.0, 0.0
    if curve.preset == CUSTOM:
        return float(curve.light_shift or 0.0), float(curve.dark_shift or 0.0)
    preset = HUE_SHIFT_CURVE_PRESETS.get(curve.preset)
    if preset is None:
        raise UnknownPresetError(f"Unknown hue shift preset: {curve.preset!r}")
    return float(preset.light), float(preset.dark)


def chroma_curve_values(curve: ChromaCurve) -> tuple[float, float, float]:
    """(light, mid, dark) chroma percentages for a curve setting.

    Custom curves default missing control points to 100%.

    Raises:
        UnknownPresetError: If the preset name is not known
    """
    if curve.preset == CUSTOM:
        return (
            100.0 if curve.light_chroma is None else float(curve.light_chroma),
            100.0 if curve.mid_chroma is None else float(curve.mid_chroma),
            100.0 if curve.dark_chroma is None else float(curve.dark_chroma),
        )
    preset = CHROMA_CURVE_PRESETS.get(curve.preset)
    if preset is None:
        raise UnknownPresetError(f"Unknown chroma curve preset: {curve.preset!r}")
    return float(preset.light), float(preset.mid), float(preset.dark)


def validate_hue_shift_curve(curve: HueShiftCurve) -> HueShiftCurve:
    hue_shift_values(curve)
    return curve


def validate_chroma_curve(curve: ChromaCurve) -> ChromaCurve:
    chroma_curve_values(curve)
    return curve
