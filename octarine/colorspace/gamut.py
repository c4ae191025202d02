"""sRGB gamut checks and chroma reduction in OKLCH.

Not all (L, C, H) combinations produce valid sRGB. High chroma at
extreme lightness is particularly problematic. Chroma reduction keeps the
lightness and hue intent and only gives up saturation.
"""

import numpy as np

from .oklch import oklch_to_srgb

# Upper search bound; no sRGB color has OKLCH chroma above ~0.37
MAX_SEARCH_CHROMA = 0.5
GAMUT_TOLERANCE = 1e-6


def is_in_gamut(L, C, H, tolerance: float = GAMUT_TOLERANCE):
    """Check if OKLCH values produce valid sRGB (all channels in [0, 1])."""
    rgb = oklch_to_srgb(L, C, H)
    in_range = (rgb >= -tolerance) & (rgb <= 1 + tolerance)
    return np.all(in_range, axis=-1)


def max_chroma_for_lh(L, H, steps: int = 24):
    """Maximum displayable chroma for given L and H via binary search.

    Exact black and white have no chroma. The result is always in gamut.
    """
    L = np.asarray(L, dtype=np.float64)
    H = np.asarray(H, dtype=np.float64)
    lo = np.zeros(np.broadcast(L, H).shape)
    hi = np.full_like(lo, MAX_SEARCH_CHROMA)

    for _ in range(steps):
        mid = (lo + hi) / 2
        valid = is_in_gamut(L, mid, H)
        lo = np.where(valid, mid, lo)
        hi = np.where(valid, hi, mid)

    return np.where((L <= 0.0) | (L >= 1.0), 0.0, lo)


def gamut_compress(L, C, H):
    """Reduce chroma until in gamut, preserving L and H.

    Returns:
        (L, C, H) tuple; C is unchanged where the color is already valid.
    """
    C = np.asarray(C, dtype=np.float64)
    valid = is_in_gamut(L, C, H)
    if np.all(valid):
        return L, C, H
    C_safe = np.where(valid, C, np.minimum(C, max_chroma_for_lh(L, H)))
    return L, C_safe, H
