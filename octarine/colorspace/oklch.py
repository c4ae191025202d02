"""OKLCH <-> sRGB conversions.

Reference: https://bottosson.github.io/posts/oklab/

All functions accept Python floats or numpy arrays and broadcast like numpy
ufuncs. Hue is always in degrees.
"""

import numpy as np

# Linear sRGB -> LMS
_RGB_TO_LMS = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
])

# cbrt(LMS) -> OKLab
_LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])

# OKLab -> cbrt(LMS)
_OKLAB_TO_LMS = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
])

# LMS -> linear sRGB
_LMS_TO_RGB = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
])


def _apply_matrix(m: np.ndarray, x, y, z):
    return (
        m[0, 0] * x + m[0, 1] * y + m[0, 2] * z,
        m[1, 0] * x + m[1, 1] * y + m[1, 2] * z,
        m[2, 0] * x + m[2, 1] * y + m[2, 2] * z,
    )


def oklch_to_oklab(L, C, H):
    """OKLCH -> OKLab."""
    H_rad = np.radians(H)
    return L, C * np.cos(H_rad), C * np.sin(H_rad)


def oklab_to_oklch(L, a, b):
    """OKLab -> OKLCH, hue wrapped to [0, 360)."""
    C = np.hypot(a, b)
    H = np.degrees(np.arctan2(b, a)) % 360.0
    return L, C, H


def oklab_to_linear_rgb(L, a, b):
    """OKLab -> linear sRGB via the LMS cone space."""
    l_, m_, s_ = _apply_matrix(_OKLAB_TO_LMS, L, a, b)
    return _apply_matrix(_LMS_TO_RGB, l_ ** 3, m_ ** 3, s_ ** 3)


def linear_rgb_to_oklab(r, g, b):
    """Linear sRGB -> OKLab via the LMS cone space."""
    l, m, s = _apply_matrix(_RGB_TO_LMS, r, g, b)
    return _apply_matrix(_LMS_TO_OKLAB, np.cbrt(l), np.cbrt(m), np.cbrt(s))


def linear_to_srgb(x):
    """Linear -> gamma-encoded sRGB, per channel. Sign-preserving so that
    out-of-gamut (negative) channels stay visible to gamut checks."""
    x = np.asarray(x, dtype=np.float64)
    mag = np.abs(x)
    encoded = np.where(
        mag <= 0.0031308,
        mag * 12.92,
        1.055 * np.power(np.maximum(mag, 1e-12), 1 / 2.4) - 0.055,
    )
    return np.sign(x) * encoded


def srgb_to_linear(x):
    """Gamma-encoded sRGB -> linear, per channel."""
    x = np.asarray(x, dtype=np.float64)
    return np.where(x <= 0.04045, x / 12.92, np.power((x + 0.055) / 1.055, 2.4))


def oklch_to_srgb(L, C, H) -> np.ndarray:
    """OKLCH -> gamma-encoded sRGB.

    Returns:
        Array of shape (..., 3). Channels fall outside [0, 1] when the
        color is out of gamut.
    """
    r, g, b = oklab_to_linear_rgb(*oklch_to_oklab(L, C, H))
    return np.stack([linear_to_srgb(r), linear_to_srgb(g), linear_to_srgb(b)], axis=-1)


def srgb_to_oklch(rgb) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Gamma-encoded sRGB array (..., 3) in [0, 1] -> (L, C, H)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = (srgb_to_linear(rgb[..., i]) for i in range(3))
    return oklab_to_oklch(*linear_rgb_to_oklab(r, g, b))
