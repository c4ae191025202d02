#!/usr/bin/env python3
"""Generate palettes and print them as a JSON report.

Either from a palette document, or from a single base color with the
default stops.

Usage:
    python tools/palette_report.py palettes.json
    python tools/palette_report.py --base "#0066cc" --method contrast --hk --bb
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).parent.parent))

from octarine import defaults
from octarine.colorspace import contrast_ratio, parse_hex
from octarine.errors import ConfigError, DocumentLoadError
from octarine.palette import generate_palettes
from octarine.palette.presets import validate_chroma_curve, validate_hue_shift_curve
from octarine.serialization import load_document
from octarine.types import (
    ChromaCurve,
    ColorDefinition,
    GlobalSettings,
    HueShiftCurve,
    Method,
    PaletteResult,
    parse_enum,
)


def _color_from_args(args: argparse.Namespace) -> ColorDefinition:
    if parse_hex(args.base) is None:
        raise ConfigError(f"Invalid base color: {args.base!r}")
    hue_curve = None
    if args.hue_preset is not None:
        hue_curve = validate_hue_shift_curve(HueShiftCurve(preset=args.hue_preset))
    chroma_curve = None
    if args.chroma_preset is not None:
        chroma_curve = validate_chroma_curve(ChromaCurve(preset=args.chroma_preset))
    return ColorDefinition.with_default_stops(
        args.base,
        hk_correction=args.hk,
        bb_correction=args.bb,
        hue_shift_curve=hue_curve,
        chroma_curve=chroma_curve,
        id="base",
        label=args.base,
    )


def _apply_overrides(settings: GlobalSettings, args: argparse.Namespace) -> GlobalSettings:
    changes: dict[str, Any] = {}
    if args.background is not None:
        if parse_hex(args.background) is None:
            raise ConfigError(f"Invalid background color: {args.background!r}")
        changes["background_color"] = args.background
    if args.method is not None:
        changes["method"] = parse_enum(Method, args.method, "method")
    return dataclasses.replace(settings, **changes) if changes else settings


def build_report(
    colors: list[ColorDefinition],
    settings: GlobalSettings,
    results: list[PaletteResult],
) -> list[dict[str, Any]]:
    report = []
    for color_def, result in zip(colors, results):
        method = color_def.method or settings.method
        report.append({
            "label": color_def.label or color_def.id,
            "base": color_def.base_color,
            "method": method.value,
            "background": settings.background_color,
            "stops": [
                {
                    "number": stop.number,
                    "hex": stop.hex,
                    "oklch": stop.color.to_css(),
                    "contrast": round(contrast_ratio(stop.hex, settings.background_color), 2),
                    "wasNudged": stop.was_nudged,
                    "tooSimilar": stop.too_similar,
                }
                for stop in result.stops
            ],
            "hadDuplicates": result.had_duplicates,
            "unresolved": list(result.unresolved),
        })
    return report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate color ramps and print a JSON report.")
    parser.add_argument(
        "document",
        nargs="?",
        help="Palette document (JSON). Omit to use --base.",
    )
    parser.add_argument(
        "--base",
        default="#0066cc",
        help="Base color when no document is given (default: #0066cc)",
    )
    parser.add_argument("--method", help="lightness or contrast (overrides the document)")
    parser.add_argument(
        "--background",
        help=f"Background color (default: document's, else {defaults.DEFAULT_BACKGROUND})",
    )
    parser.add_argument("--hk", action="store_true", help="Helmholtz-Kohlrausch correction")
    parser.add_argument("--bb", action="store_true", help="Bezold-Bruecke correction")
    parser.add_argument("--hue-preset", help="Hue shift curve preset for --base")
    parser.add_argument("--chroma-preset", help="Chroma curve preset for --base")
    parser.add_argument("--verbose", action="store_true", help="Log solver and resolver details")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.document is not None:
            document = load_document(args.document)
            settings, colors = document.settings, list(document.colors)
        else:
            settings, colors = GlobalSettings(), [_color_from_args(args)]
        settings = _apply_overrides(settings, args)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (DocumentLoadError, ConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    results = generate_palettes(colors, settings)
    print(json.dumps(build_report(colors, settings, results), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
