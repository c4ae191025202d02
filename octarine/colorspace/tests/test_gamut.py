"""Tests for sRGB gamut checks and chroma reduction."""

import numpy as np

from octarine.colorspace import gamut_compress, is_in_gamut, max_chroma_for_lh


class TestGamut:

    def test_in_gamut_grays(self):
        L = np.linspace(0, 1, 11)
        assert np.all(is_in_gamut(L, np.zeros_like(L), np.zeros_like(L)))

    def test_out_of_gamut_high_chroma(self):
        """Chroma 0.4 exceeds sRGB at every hue."""
        H = np.linspace(0, 350, 36)
        assert not np.any(is_in_gamut(np.full_like(H, 0.7), np.full_like(H, 0.4), H))

    def test_scalar_returns_bool_like(self):
        assert bool(is_in_gamut(0.5, 0.05, 120.0))
        assert not bool(is_in_gamut(0.98, 0.2, 250.0))


class TestMaxChroma:

    def test_black_and_white_have_no_chroma(self):
        np.testing.assert_array_equal(max_chroma_for_lh([0.0, 1.0], [250.0, 90.0]), [0.0, 0.0])

    def test_mid_lightness_has_room(self):
        assert max_chroma_for_lh(0.6, 30.0) > 0.1

    def test_result_is_in_gamut(self):
        L = np.linspace(0.05, 0.95, 19)
        H = np.linspace(0, 340, 19)
        C = max_chroma_for_lh(L, H)
        assert np.all(is_in_gamut(L, C, H))

    def test_result_is_near_boundary(self):
        """A little more chroma than the maximum leaves the gamut."""
        L = np.array([0.3, 0.6, 0.9])
        H = np.array([30.0, 140.0, 260.0])
        C = max_chroma_for_lh(L, H)
        assert not np.any(is_in_gamut(L, C + 1e-4, H))

    def test_yellow_reaches_higher_than_blue_when_light(self):
        assert max_chroma_for_lh(0.95, 100.0) > max_chroma_for_lh(0.95, 260.0)


class TestGamutCompress:

    def test_valid_colors_unchanged(self):
        L = np.array([0.5, 0.7])
        C = np.array([0.05, 0.02])
        H = np.array([10.0, 200.0])
        _, C_out, _ = gamut_compress(L, C, H)
        np.testing.assert_array_equal(C_out, C)

    def test_invalid_colors_reduced_into_gamut(self):
        L = np.array([0.5, 0.95, 0.2])
        C = np.array([0.05, 0.3, 0.3])
        H = np.array([10.0, 250.0, 140.0])
        L_out, C_out, H_out = gamut_compress(L, C, H)
        np.testing.assert_array_equal(L_out, L)
        np.testing.assert_array_equal(H_out, H)
        assert C_out[0] == C[0]
        assert np.all(C_out[1:] < C[1:])
        assert np.all(is_in_gamut(L_out, C_out, H_out))
