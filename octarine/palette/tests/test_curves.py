"""Tests for artistic hue/chroma shifts, curves and presets."""

import pytest

from octarine.errors import UnknownPresetError
from octarine.palette.curves import (
    apply_chroma_curve,
    apply_chroma_shift,
    apply_hue_shift,
    apply_hue_shift_curve,
    chroma_curve_multiplier,
    normalized_lightness,
    yellow_equivalent_shifts,
)
from octarine.palette.presets import (
    chroma_curve_values,
    hue_shift_values,
    list_chroma_curve_presets,
    list_hue_shift_presets,
)
from octarine.types import (
    ChromaCurve,
    ChromaShiftDirection,
    HueShiftCurve,
    HueShiftDirection,
    Oklch,
)

BLUE = Oklch(0.55, 0.15, 250)


class TestZeroAmounts:
    """Zero settings must return the input unchanged (same object)."""

    @pytest.mark.parametrize("target_l", [0.0, 0.3, 0.5, 0.97])
    def test_hue_shift_zero(self, target_l):
        assert apply_hue_shift(BLUE, target_l, 0) is BLUE
        assert apply_hue_shift(BLUE, target_l, 0, HueShiftDirection.COOL_WARM) is BLUE

    @pytest.mark.parametrize("target_l", [0.0, 0.3, 0.5, 0.97])
    def test_chroma_shift_zero(self, target_l):
        assert apply_chroma_shift(BLUE, target_l, 0) is BLUE
        assert apply_chroma_shift(BLUE, target_l, 0, ChromaShiftDirection.MUTED_VIVID) is BLUE

    def test_chroma_shift_on_gray(self):
        gray = Oklch(0.5, 0.0, 0.0)
        assert apply_chroma_shift(gray, 0.1, 80) is gray

    def test_curves_absent_or_neutral(self):
        assert apply_hue_shift_curve(BLUE, 0.9, None) is BLUE
        assert apply_hue_shift_curve(BLUE, 0.9, HueShiftCurve("none")) is BLUE
        assert apply_chroma_curve(BLUE, 0.9, None) is BLUE
        assert apply_chroma_curve(BLUE, 0.9, ChromaCurve("flat")) is BLUE


class TestHueShift:

    def test_normalized_lightness(self):
        assert normalized_lightness(0.0) == -1.0
        assert normalized_lightness(0.5) == 0.0
        assert normalized_lightness(1.0) == 1.0

    def test_warm_cool_extremes(self):
        """Lights lose half the amount, darks gain it."""
        assert apply_hue_shift(BLUE, 1.0, 20).h == pytest.approx(240.0)
        assert apply_hue_shift(BLUE, 0.0, 20).h == pytest.approx(260.0)
        assert apply_hue_shift(BLUE, 0.5, 20).h == pytest.approx(250.0)

    def test_cool_warm_negates(self):
        shifted = apply_hue_shift(BLUE, 1.0, 20, HueShiftDirection.COOL_WARM)
        assert shifted.h == pytest.approx(260.0)

    def test_wraps(self):
        red = Oklch(0.9, 0.1, 2)
        assert apply_hue_shift(red, 1.0, 20).h == pytest.approx(352.0)


class TestChromaShift:

    def test_vivid_muted(self):
        assert apply_chroma_shift(BLUE, 0.0, 40).c == pytest.approx(0.15 * 0.6)
        assert apply_chroma_shift(BLUE, 1.0, 40).c == pytest.approx(0.15)

    def test_muted_vivid(self):
        direction = ChromaShiftDirection.MUTED_VIVID
        assert apply_chroma_shift(BLUE, 1.0, 40, direction).c == pytest.approx(0.15 * 0.6)
        assert apply_chroma_shift(BLUE, 0.0, 40, direction).c == pytest.approx(0.15)

    def test_never_negative(self):
        assert apply_chroma_shift(BLUE, 0.0, 150).c == 0.0


class TestHueShiftCurve:

    def test_subtle_preset(self):
        curve = HueShiftCurve("subtle")
        assert apply_hue_shift_curve(BLUE, 1.0, curve).h == pytest.approx(254.0)
        assert apply_hue_shift_curve(BLUE, 0.0, curve).h == pytest.approx(245.0)
        assert apply_hue_shift_curve(BLUE, 0.75, curve).h == pytest.approx(252.0)

    def test_custom_values(self):
        curve = HueShiftCurve("custom", light_shift=10, dark_shift=-20)
        assert apply_hue_shift_curve(BLUE, 0.25, curve).h == pytest.approx(240.0)

    def test_near_neutral_skipped(self):
        muted = Oklch(0.5, 0.019, 250)
        assert apply_hue_shift_curve(muted, 0.9, HueShiftCurve("dramatic")) is muted

    def test_yellows_drift_towards_orange(self):
        yellow = Oklch(0.8, 0.15, 90)
        shifted = apply_hue_shift_curve(yellow, 0.5, HueShiftCurve("natural"))
        assert shifted.h == pytest.approx(90 - 22.5)

    def test_custom_curve_skips_yellow_handling(self):
        yellow = Oklch(0.8, 0.15, 90)
        curve = HueShiftCurve("custom", light_shift=8, dark_shift=-10)
        assert apply_hue_shift_curve(yellow, 1.0, curve).h == pytest.approx(98.0)

    def test_yellow_equivalents(self):
        assert yellow_equivalent_shifts(90) == (-7, -34)
        assert yellow_equivalent_shifts(250) is None

    def test_unknown_preset(self):
        with pytest.raises(UnknownPresetError):
            apply_hue_shift_curve(BLUE, 0.9, HueShiftCurve("vivid"))


class TestChromaCurve:

    def test_control_points(self):
        assert chroma_curve_multiplier(0.85, 45, 100, 65) == pytest.approx(45)
        assert chroma_curve_multiplier(0.50, 45, 100, 65) == pytest.approx(100)
        assert chroma_curve_multiplier(0.15, 45, 100, 65) == pytest.approx(65)

    def test_clamped_beyond_control_points(self):
        assert chroma_curve_multiplier(1.0, 45, 100, 65) == pytest.approx(45)
        assert chroma_curve_multiplier(0.0, 45, 100, 65) == pytest.approx(65)

    def test_smoothstep_midway(self):
        """Halfway between control points smoothstep is exactly 0.5."""
        assert chroma_curve_multiplier(0.675, 0, 100, 0) == pytest.approx(50)

    def test_bell_applied(self):
        assert apply_chroma_curve(BLUE, 0.85, ChromaCurve("bell")).c == pytest.approx(0.15 * 0.45)

    def test_custom_defaults_to_full(self):
        curve = ChromaCurve("custom", light_chroma=50)
        assert chroma_curve_values(curve) == (50.0, 100.0, 100.0)

    def test_unknown_preset(self):
        with pytest.raises(UnknownPresetError):
            apply_chroma_curve(BLUE, 0.5, ChromaCurve("neon"))


class TestPresets:

    def test_listed_names(self):
        assert list_hue_shift_presets() == ["none", "subtle", "natural", "dramatic"]
        assert list_chroma_curve_presets() == ["flat", "bell", "pastel", "jewel", "linear-fade"]

    def test_values(self):
        assert hue_shift_values(HueShiftCurve("dramatic")) == (12.0, -15.0)
        assert hue_shift_values(None) == (0.0, 0.0)
        assert chroma_curve_values(ChromaCurve("linear-fade")) == (25.0, 60.0, 100.0)
