"""Tests for the hex/contrast adapter and the Oklch value type."""

import logging
import math

import pytest

from octarine.colorspace import (
    NEUTRAL,
    clamp_chroma_to_gamut,
    contrast_ratio,
    is_displayable,
    parse_hex,
    relative_luminance,
    to_hex,
    to_perceptual,
)
from octarine.types import Oklch


class TestParseHex:

    @pytest.mark.parametrize("text", ["#0066cc", "#0066CC", "0066cc", "#06c", "06C", " #0066cc "])
    def test_accepted_forms(self, text):
        assert parse_hex(text) == (0x00, 0x66, 0xCC)

    @pytest.mark.parametrize("text", ["", "#12", "#12345", "#gggggg", "blue", None, 123])
    def test_rejected_forms(self, text):
        assert parse_hex(text) is None


class TestToPerceptual:

    def test_white_is_achromatic(self):
        white = to_perceptual("#ffffff")
        assert white.l == pytest.approx(1.0, abs=1e-6)
        assert white.c == 0.0
        assert white.h == 0.0

    def test_grays_snap_hue(self):
        """Numerical noise never gives grays a hue."""
        for hex_color in ("#000000", "#777777", "#c0c0c0"):
            gray = to_perceptual(hex_color)
            assert gray.c == 0.0 and gray.h == 0.0

    def test_blue(self):
        blue = to_perceptual("#0066cc")
        assert blue.l == pytest.approx(0.522, abs=1e-3)
        assert blue.c == pytest.approx(0.177, abs=1e-3)
        assert blue.h == pytest.approx(255.83, abs=1e-2)

    def test_unparsable_fails_closed(self, caplog):
        with caplog.at_level(logging.WARNING, logger="octarine.colorspace.adapter"):
            color = to_perceptual("not-a-color")
        assert color == NEUTRAL == Oklch(0.5, 0.0, 0.0)
        assert "not-a-color" in caplog.text


class TestToHex:

    @pytest.mark.parametrize("hex_color", ["#0066cc", "#ff0000", "#00ff00", "#123456", "#fafafa", "#000000"])
    def test_hex_survives_round_trip(self, hex_color):
        assert to_hex(to_perceptual(hex_color)) == hex_color

    def test_lowercase_six_digit(self):
        assert to_hex(to_perceptual("#ABC")) == "#aabbcc"

    def test_neutral_is_mid_gray(self):
        assert to_hex(NEUTRAL) == "#636363"

    def test_out_of_gamut_is_clipped(self):
        """Out-of-gamut colors still produce a valid hex."""
        hex_color = to_hex(Oklch(0.6, 0.4, 140))
        assert parse_hex(hex_color) is not None


class TestContrast:

    def test_black_on_white_is_21(self):
        assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)

    def test_same_color_is_1(self):
        assert contrast_ratio("#0066cc", "#0066cc") == 1.0

    def test_symmetric(self):
        assert contrast_ratio("#0066cc", "#ffffff") == contrast_ratio("#ffffff", "#0066cc")

    def test_luminance_endpoints(self):
        assert relative_luminance("#000000") == 0.0
        assert relative_luminance("#ffffff") == pytest.approx(1.0)

    def test_known_value(self):
        """#767676 is the classic lightest gray passing AA on white."""
        assert contrast_ratio("#767676", "#ffffff") == pytest.approx(4.54, abs=0.01)


class TestGamutHelpers:

    def test_displayable(self):
        assert is_displayable(Oklch(0.5, 0.05, 30))
        assert not is_displayable(Oklch(0.95, 0.3, 250))

    def test_clamp_is_identity_when_displayable(self):
        color = Oklch(0.6, 0.1, 200)
        assert clamp_chroma_to_gamut(color) is color

    def test_clamp_keeps_lightness_and_hue(self):
        color = Oklch(0.95, 0.3, 250)
        clamped = clamp_chroma_to_gamut(color)
        assert clamped.l == color.l
        assert clamped.h == color.h
        assert 0 < clamped.c < color.c
        assert is_displayable(clamped)

    def test_clamp_at_white_removes_chroma(self):
        assert clamp_chroma_to_gamut(Oklch(1.0, 0.1, 90)).c == 0.0


class TestOklch:

    def test_domains_are_clamped(self):
        color = Oklch(1.5, -0.2, -30)
        assert color.as_tuple() == (1.0, 0.0, 330.0)

    def test_hue_wraps(self):
        assert Oklch(0.5, 0.1, 725).h == pytest.approx(5.0)
        assert Oklch(0.5, 0.1, 360).h == 0.0

    def test_tiny_negative_hue_wraps_below_360(self):
        """-1e-20 % 360 rounds to 360.0 in floating point."""
        assert Oklch(0.5, 0.1, -1e-20).h == 0.0

    def test_non_finite_values(self):
        color = Oklch(math.nan, math.inf, math.nan)
        assert color.as_tuple() == (0.5, 0.0, 0.0)

    def test_css(self):
        assert Oklch(0.5, 0.1, 250).to_css() == "oklch(50.0% 0.100 250.0)"
