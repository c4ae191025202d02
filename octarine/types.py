"""Core data types for octarine - immutable values passed through generation."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from octarine import defaults
from octarine.errors import ConfigError


@dataclass(frozen=True)
class Oklch:
    """A color in OKLCH.

    Attributes:
        l: Lightness, clamped to [0, 1]
        c: Chroma, never negative (sRGB tops out around 0.37)
        h: Hue in degrees, wrapped to [0, 360)
    """
    l: float
    c: float
    h: float

    def __post_init__(self):
        l, c, h = float(self.l), float(self.c), float(self.h)
        l = min(max(l, 0.0), 1.0) if math.isfinite(l) else 0.5
        c = max(c, 0.0) if math.isfinite(c) else 0.0
        if math.isfinite(h):
            h = h % 360.0
            # -1e-20 % 360 rounds to 360.0
            if h >= 360.0:
                h = 0.0
        else:
            h = 0.0
        object.__setattr__(self, "l", l)
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "h", h)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.l, self.c, self.h)

    def to_css(self) -> str:
        """CSS ``oklch()`` notation."""
        return f"oklch({self.l * 100:.1f}% {self.c:.3f} {self.h:.1f})"


class Method(enum.Enum):
    """How a stop's target lightness is determined."""
    LIGHTNESS = "lightness"
    CONTRAST = "contrast"


class StopMethod(enum.Enum):
    """Per-stop method override; GLOBAL inherits from the color/settings."""
    GLOBAL = "global"
    LIGHTNESS = "lightness"
    CONTRAST = "contrast"


class HueShiftDirection(enum.Enum):
    WARM_COOL = "warm-cool"
    COOL_WARM = "cool-warm"


class ChromaShiftDirection(enum.Enum):
    VIVID_MUTED = "vivid-muted"  # light stops keep chroma, darks are muted
    MUTED_VIVID = "muted-vivid"


def parse_enum(enum_cls, value, what: str):
    """Convert a string (or member) to an enum member.

    Raises:
        ConfigError: If the value names no member of enum_cls
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Unknown {what} {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class HueShiftCurve:
    """Asymmetric hue variation across lightness.

    preset is a name from palette.presets.HUE_SHIFT_CURVE_PRESETS or
    "custom", in which case light_shift/dark_shift (degrees) are used.
    """
    preset: str = "none"
    light_shift: Optional[float] = None
    dark_shift: Optional[float] = None


@dataclass(frozen=True)
class ChromaCurve:
    """Chroma distribution across lightness as percentages of base chroma."""
    preset: str = "flat"
    light_chroma: Optional[float] = None
    mid_chroma: Optional[float] = None
    dark_chroma: Optional[float] = None


@dataclass(frozen=True)
class StopDefinition:
    """One named rung of a ramp with optional per-stop overrides."""
    number: int
    lightness: Optional[float] = None
    contrast: Optional[float] = None
    hue_shift: Optional[float] = None
    chroma_shift: Optional[float] = None
    manual_override: Optional[Oklch] = None
    apply_corrections_to_manual: bool = False
    method: StopMethod = StopMethod.GLOBAL


@dataclass(frozen=True)
class ColorDefinition:
    """One ramp: base color, its stops and color-level settings."""
    base_color: str
    stops: tuple[StopDefinition, ...] = ()
    method: Optional[Method] = None  # None inherits GlobalSettings.method
    hk_correction: bool = False
    bb_correction: bool = False
    hue_shift_amount: float = 0.0
    hue_shift_direction: HueShiftDirection = HueShiftDirection.WARM_COOL
    chroma_shift_amount: float = 0.0
    chroma_shift_direction: ChromaShiftDirection = ChromaShiftDirection.VIVID_MUTED
    hue_shift_curve: Optional[HueShiftCurve] = None
    chroma_curve: Optional[ChromaCurve] = None
    preserve_identity: bool = True
    id: str = "color"
    label: str = ""

    def __post_init__(self):
        object.__setattr__(self, "stops", tuple(self.stops))

    @classmethod
    def with_default_stops(cls, base_color: str, **kwargs) -> ColorDefinition:
        """Color using the standard 50..900 stop set."""
        stops = tuple(StopDefinition(number=n) for n in defaults.DEFAULT_STOPS)
        return cls(base_color=base_color, stops=stops, **kwargs)

    def effective_method(self, settings: GlobalSettings, stop: StopDefinition) -> Method:
        if stop.method is not StopMethod.GLOBAL:
            return Method(stop.method.value)
        return self.method if self.method is not None else settings.method


def _frozen_map(values: Mapping) -> Mapping[int, float]:
    return MappingProxyType({int(k): float(v) for k, v in values.items()})


@dataclass(frozen=True)
class GlobalSettings:
    """Settings shared by every ramp in one generation run."""
    background_color: str = defaults.DEFAULT_BACKGROUND
    default_lightness: Mapping[int, float] = field(
        default_factory=lambda: dict(defaults.DEFAULT_LIGHTNESS)
    )
    default_contrast: Mapping[int, float] = field(
        default_factory=lambda: dict(defaults.DEFAULT_CONTRAST)
    )
    method: Method = Method.LIGHTNESS

    def __post_init__(self):
        object.__setattr__(self, "default_lightness", _frozen_map(self.default_lightness))
        object.__setattr__(self, "default_contrast", _frozen_map(self.default_contrast))

    @classmethod
    def default(cls) -> GlobalSettings:
        return cls()


@dataclass(frozen=True)
class NudgeAmount:
    """Signed deltas applied by the uniqueness resolver."""
    hue: float = 0.0
    chroma: float = 0.0
    lightness: float = 0.0


@dataclass(frozen=True)
class GeneratedStop:
    """Result for one stop.

    Attributes:
        number: Stop number (e.g. 500)
        hex: Final ``#rrggbb`` color
        color: Final OKLCH triplet
        original_lightness: Lightness before any uniqueness nudge
        was_nudged: True if the resolver changed this stop
        nudge: Deltas applied when was_nudged
        target_contrast: Contrast target in contrast mode, else None
        lightness_ceiling: Identity ceiling enforced for this stop, if any
        contrast_converged: Refinement outcome in contrast mode, else None
        contrast_adjustment: Hue, chroma and lightness offsets the contrast fine
            tuning applied on top of the lightness search, else None
        is_manual: Stop came from a manual override
        too_similar: Distinctness audit flagged this stop against its predecessor
        delta_e: Difference to the previous stop (None for the first)
    """
    number: int
    hex: str
    color: Oklch
    original_lightness: float
    was_nudged: bool = False
    nudge: Optional[NudgeAmount] = None
    target_contrast: Optional[float] = None
    lightness_ceiling: Optional[float] = None
    contrast_converged: Optional[bool] = None
    contrast_adjustment: Optional[NudgeAmount] = None
    is_manual: bool = False
    too_similar: bool = False
    delta_e: Optional[float] = None


@dataclass(frozen=True)
class SimilarityWarning:
    """Adjacent stops that may look identical."""
    previous: int
    current: int
    delta_e: float


@dataclass(frozen=True)
class PaletteResult:
    """All generated stops for one color, ordered by stop number."""
    color_id: str
    stops: tuple[GeneratedStop, ...]
    had_duplicates: bool = False
    unresolved: tuple[int, ...] = ()
    warnings: tuple[SimilarityWarning, ...] = ()

    @property
    def hexes(self) -> list[str]:
        return [s.hex for s in self.stops]

    @property
    def all_unique(self) -> bool:
        """False when the resolver left at least one collision."""
        return not self.unresolved

    def stop(self, number: int) -> GeneratedStop:
        for s in self.stops:
            if s.number == number:
                return s
        raise KeyError(number)
