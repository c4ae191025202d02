"""Palette documents - save/load color definitions and settings as JSON.

A document holds the global settings plus a list of color definitions. It
is configuration input for generation; generated stops are never stored.

Format (schema version 4):

    {
      "schema_version": 4,
      "settings": {"background_color": "#ffffff", "method": "lightness",
                   "default_lightness": {"50": 0.97, ...},
                   "default_contrast": {"50": 1.1, ...}},
      "colors": [{"id": "blue", "base_color": "#0066cc", "stops": [...], ...}]
    }

Older documents grouped colors, each group carrying its own settings.
They are migrated on load: see _migrate().
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from octarine import defaults
from octarine.colorspace import parse_hex
from octarine.errors import ConfigError, DocumentLoadError
from octarine.palette.presets import (
    RENAMED_HUE_SHIFT_PRESETS,
    validate_chroma_curve,
    validate_hue_shift_curve,
)
from octarine.types import (
    ChromaCurve,
    ChromaShiftDirection,
    ColorDefinition,
    GlobalSettings,
    HueShiftCurve,
    HueShiftDirection,
    Method,
    Oklch,
    StopDefinition,
    StopMethod,
    parse_enum,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 4


@dataclass(frozen=True)
class PaletteDocument:
    settings: GlobalSettings = field(default_factory=GlobalSettings)
    colors: tuple[ColorDefinition, ...] = ()


def save_document(path: str | Path, settings: GlobalSettings, colors: list[ColorDefinition]) -> None:
    """Write settings and colors to a JSON palette document."""
    path = Path(path)
    data = document_to_dict(settings, colors)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def load_document(path: str | Path) -> PaletteDocument:
    """Load a palette document, migrating older schema versions.

    Raises:
        FileNotFoundError: If the file doesn't exist
        DocumentLoadError: If the file is corrupt or of an unsupported version
        ConfigError: If a setting holds an invalid value
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Palette document not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Corrupt palette document {path}: {e}") from e
    return document_from_dict(data)


def document_to_dict(settings: GlobalSettings, colors: list[ColorDefinition]) -> dict[str, Any]:
    return {
        'schema_version': SCHEMA_VERSION,
        'settings': _settings_to_dict(settings),
        'colors': [_color_to_dict(c) for c in colors],
    }


def document_from_dict(data: Any) -> PaletteDocument:
    """Build a document from parsed JSON (any supported schema version)."""
    if not isinstance(data, dict):
        raise DocumentLoadError("Palette document must be a JSON object")
    data = _migrate(data)
    try:
        settings = _dict_to_settings(data.get('settings', {}))
        colors = tuple(_dict_to_color(c) for c in data.get('colors', []))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DocumentLoadError(f"Malformed palette document: {e!r}") from e

    ids = [c.id for c in colors]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate color ids: {', '.join(duplicates)}")
    return PaletteDocument(settings=settings, colors=colors)


# ============================================================================
# Migration
# ============================================================================

def _migrate(data: dict[str, Any]) -> dict[str, Any]:
    """Bring a document of any known version up to SCHEMA_VERSION.

    v1: {"global_settings": {..., "background_color"}, "colors": [...]}
    v2: {"groups": [{"settings": {..., "background_color"}, "colors"}]}
    v3: {"global_config": {"background_color"}, "groups": [...]}, and hue
        shift curves may still name the removed "vivid" preset
    """
    version = data.get('schema_version', data.get('version', 1))
    if not isinstance(version, int) or version < 1:
        raise DocumentLoadError(f"Invalid schema version: {version!r}")
    if version > SCHEMA_VERSION:
        raise DocumentLoadError(
            f"Schema version {version} not supported. Expected {SCHEMA_VERSION} or older."
        )

    migrations = {1: _migrate_v1_to_v2, 2: _migrate_v2_to_v3, 3: _migrate_v3_to_v4}
    while version < SCHEMA_VERSION:
        try:
            data = migrations[version](data)
        except (KeyError, TypeError, AttributeError, IndexError) as e:
            raise DocumentLoadError(f"Cannot migrate version {version} document: {e!r}") from e
        version += 1
        logger.debug("Migrated palette document to schema version %d", version)
    return data


def _migrate_v1_to_v2(data: dict[str, Any]) -> dict[str, Any]:
    return {
        'schema_version': 2,
        'groups': [{
            'id': 'group-default',
            'name': 'Colors',
            'settings': dict(data.get('global_settings', {})),
            'colors': list(data.get('colors', [])),
        }],
    }


def _migrate_v2_to_v3(data: dict[str, Any]) -> dict[str, Any]:
    """Per-group backgrounds become one global background (first group's)."""
    groups = data.get('groups', [])
    background = defaults.DEFAULT_BACKGROUND
    if groups:
        background = groups[0].get('settings', {}).get('background_color', background)

    migrated = []
    for group in groups:
        settings = {k: v for k, v in group.get('settings', {}).items() if k != 'background_color'}
        migrated.append({**group, 'settings': settings})
    return {
        'schema_version': 3,
        'global_config': {'background_color': background},
        'groups': migrated,
    }


def _migrate_v3_to_v4(data: dict[str, Any]) -> dict[str, Any]:
    """Rename removed presets and flatten groups into one color list.

    The first group's settings become the global settings; colors from
    groups with a different method keep it as a per-color method.
    """
    groups = data.get('groups', [])
    first = groups[0].get('settings', {}) if groups else {}
    settings = {
        'background_color': data.get('global_config', {}).get(
            'background_color', defaults.DEFAULT_BACKGROUND),
        **{k: v for k, v in first.items()
           if k in ('method', 'default_lightness', 'default_contrast')},
    }

    colors = []
    for group in groups:
        group_method = group.get('settings', {}).get('method')
        for color in group.get('colors', []):
            color = dict(color)
            curve = color.get('hue_shift_curve')
            if curve and curve.get('preset') in RENAMED_HUE_SHIFT_PRESETS:
                color['hue_shift_curve'] = {
                    **curve, 'preset': RENAMED_HUE_SHIFT_PRESETS[curve['preset']]}
            if color.get('method') is None and group_method not in (None, settings.get('method')):
                color['method'] = group_method
            colors.append(color)
    return {'schema_version': 4, 'settings': settings, 'colors': colors}


# ============================================================================
# Conversion helpers
# ============================================================================

def _validated_hex(value: Any, what: str) -> str:
    if parse_hex(value) is None:
        raise ConfigError(f"Invalid {what}: {value!r}")
    return value


def _stop_table_to_dict(table) -> dict[str, float]:
    return {str(k): v for k, v in sorted(table.items())}


def _dict_to_stop_table(data: dict[str, Any]) -> dict[int, float]:
    return {int(k): float(v) for k, v in data.items()}


def _settings_to_dict(settings: GlobalSettings) -> dict[str, Any]:
    return {
        'background_color': settings.background_color,
        'method': settings.method.value,
        'default_lightness': _stop_table_to_dict(settings.default_lightness),
        'default_contrast': _stop_table_to_dict(settings.default_contrast),
    }


def _dict_to_settings(data: dict[str, Any]) -> GlobalSettings:
    return GlobalSettings(
        background_color=_validated_hex(
            data.get('background_color', defaults.DEFAULT_BACKGROUND), 'background color'),
        default_lightness=_dict_to_stop_table(
            data.get('default_lightness', defaults.DEFAULT_LIGHTNESS)),
        default_contrast=_dict_to_stop_table(
            data.get('default_contrast', defaults.DEFAULT_CONTRAST)),
        method=parse_enum(Method, data.get('method', Method.LIGHTNESS), 'method'),
    )


def _oklch_to_dict(color: Optional[Oklch]) -> Optional[dict[str, float]]:
    if color is None:
        return None
    return {'l': color.l, 'c': color.c, 'h': color.h}


def _dict_to_oklch(data: Optional[dict[str, Any]]) -> Optional[Oklch]:
    if data is None:
        return None
    return Oklch(float(data['l']), float(data['c']), float(data['h']))


def _stop_to_dict(stop: StopDefinition) -> dict[str, Any]:
    return {
        'number': stop.number,
        'lightness': stop.lightness,        # None or float
        'contrast': stop.contrast,          # None or float
        'hue_shift': stop.hue_shift,        # None or float
        'chroma_shift': stop.chroma_shift,  # None or float
        'manual_override': _oklch_to_dict(stop.manual_override),
        'apply_corrections_to_manual': stop.apply_corrections_to_manual,
        'method': stop.method.value,
    }


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _dict_to_stop(data: dict[str, Any]) -> StopDefinition:
    return StopDefinition(
        number=int(data['number']),
        lightness=_optional_float(data.get('lightness')),
        contrast=_optional_float(data.get('contrast')),
        hue_shift=_optional_float(data.get('hue_shift')),
        chroma_shift=_optional_float(data.get('chroma_shift')),
        manual_override=_dict_to_oklch(data.get('manual_override')),
        apply_corrections_to_manual=bool(data.get('apply_corrections_to_manual', False)),
        method=parse_enum(StopMethod, data.get('method', StopMethod.GLOBAL), 'stop method'),
    )


def _hue_curve_to_dict(curve: Optional[HueShiftCurve]) -> Optional[dict[str, Any]]:
    if curve is None:
        return None
    return {'preset': curve.preset, 'light_shift': curve.light_shift, 'dark_shift': curve.dark_shift}


def _dict_to_hue_curve(data: Optional[dict[str, Any]]) -> Optional[HueShiftCurve]:
    if data is None:
        return None
    return validate_hue_shift_curve(HueShiftCurve(
        preset=data.get('preset', 'none'),
        light_shift=_optional_float(data.get('light_shift')),
        dark_shift=_optional_float(data.get('dark_shift')),
    ))


def _chroma_curve_to_dict(curve: Optional[ChromaCurve]) -> Optional[dict[str, Any]]:
    if curve is None:
        return None
    return {
        'preset': curve.preset,
        'light_chroma': curve.light_chroma,
        'mid_chroma': curve.mid_chroma,
        'dark_chroma': curve.dark_chroma,
    }


def _dict_to_chroma_curve(data: Optional[dict[str, Any]]) -> Optional[ChromaCurve]:
    if data is None:
        return None
    return validate_chroma_curve(ChromaCurve(
        preset=data.get('preset', 'flat'),
        light_chroma=_optional_float(data.get('light_chroma')),
        mid_chroma=_optional_float(data.get('mid_chroma')),
        dark_chroma=_optional_float(data.get('dark_chroma')),
    ))


def _color_to_dict(color: ColorDefinition) -> dict[str, Any]:
    return {
        'id': color.id,
        'label': color.label,
        'base_color': color.base_color,
        'method': color.method.value if color.method is not None else None,
        'hk_correction': color.hk_correction,
        'bb_correction': color.bb_correction,
        'preserve_identity': color.preserve_identity,
        'hue_shift_amount': color.hue_shift_amount,
        'hue_shift_direction': color.hue_shift_direction.value,
        'chroma_shift_amount': color.chroma_shift_amount,
        'chroma_shift_direction': color.chroma_shift_direction.value,
        'hue_shift_curve': _hue_curve_to_dict(color.hue_shift_curve),
        'chroma_curve': _chroma_curve_to_dict(color.chroma_curve),
        'stops': [_stop_to_dict(s) for s in color.stops],
    }


def _dict_to_color(data: dict[str, Any]) -> ColorDefinition:
    """Reconstruct a ColorDefinition; a missing stop list means default stops."""
    method = data.get('method')
    if 'stops' in data:
        stops = tuple(_dict_to_stop(s) for s in data['stops'])
    else:
        stops = tuple(StopDefinition(number=n) for n in defaults.DEFAULT_STOPS)

    numbers = [s.number for s in stops]
    if len(set(numbers)) != len(numbers):
        raise ConfigError(f"Duplicate stop numbers in color {data.get('id', '?')!r}")

    return ColorDefinition(
        base_color=_validated_hex(data['base_color'], 'base color'),
        stops=stops,
        method=parse_enum(Method, method, 'method') if method is not None else None,
        hk_correction=bool(data.get('hk_correction', False)),
        bb_correction=bool(data.get('bb_correction', False)),
        hue_shift_amount=float(data.get('hue_shift_amount', 0.0)),
        hue_shift_direction=parse_enum(
            HueShiftDirection, data.get('hue_shift_direction', HueShiftDirection.WARM_COOL),
            'hue shift direction'),
        chroma_shift_amount=float(data.get('chroma_shift_amount', 0.0)),
        chroma_shift_direction=parse_enum(
            ChromaShiftDirection, data.get('chroma_shift_direction', ChromaShiftDirection.VIVID_MUTED),
            'chroma shift direction'),
        hue_shift_curve=_dict_to_hue_curve(data.get('hue_shift_curve')),
        chroma_curve=_dict_to_chroma_curve(data.get('chroma_curve')),
        preserve_identity=bool(data.get('preserve_identity', True)),
        id=str(data.get('id', 'color')),
        label=str(data.get('label', '')),
    )
