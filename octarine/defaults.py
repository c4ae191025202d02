"""Central place for Octarine default settings."""

# Stops and reference tables
DEFAULT_STOPS: tuple[int, ...] = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)

DEFAULT_LIGHTNESS: dict[int, float] = {
    50: 0.97,
    100: 0.93,
    200: 0.85,
    300: 0.75,
    400: 0.65,
    500: 0.55,
    600: 0.45,
    700: 0.35,
    800: 0.25,
    900: 0.15,
}

# WCAG ratios against the background
DEFAULT_CONTRAST: dict[int, float] = {
    50: 1.1,
    100: 1.3,
    200: 1.8,
    300: 2.5,
    400: 3.5,
    500: 4.5,
    600: 6.0,
    700: 8.0,
    800: 11.0,
    900: 15.0,
}

DEFAULT_BACKGROUND: str = "#ffffff"
DEFAULT_TARGET_CONTRAST: float = 4.5  # WCAG AA body text

# Below this chroma a color is treated as achromatic
ACHROMATIC_CHROMA: float = 0.01

# Contrast solver
CONTRAST_SEARCH_ITERATIONS: int = 20
CONTRAST_SEARCH_TOLERANCE: float = 0.01
CONTRAST_REFINE_ITERATIONS: int = 20
CONTRAST_REFINE_TOLERANCE: float = 0.005  # Final accuracy contract
CONTRAST_REFINE_GAIN: float = 0.15
CONTRAST_REFINE_MAX_STEP: float = 0.05

# Fine tuning after refinement: small L/H/C grid around the refined color
CONTRAST_FINE_LIGHTNESS_STEP: float = 0.0005
CONTRAST_FINE_HUE_STEP: float = 0.5
CONTRAST_FINE_CHROMA_STEP: float = 0.002
CONTRAST_FINE_STEPS: tuple[int, int, int] = (4, 6, 3)  # per side: L, H, C

# Identity preservation
IDENTITY_SEARCH_ITERATIONS: int = 15

# Uniqueness nudges, tried in this order
HUE_NUDGES: tuple[float, ...] = (1, -1, 2, -2, 3, -3, 4, -4, 5, -5)
CHROMA_NUDGES: tuple[float, ...] = (-0.002, 0.002, -0.004, 0.004, -0.006, 0.006, -0.008, 0.008)
LIGHTNESS_NUDGE_STEP: float = 0.004  # ~one 8-bit level
LIGHTNESS_NUDGE_MAX_STEPS: int = 25

# Distinctness audit
DELTA_E_THRESHOLD: float = 5.0
