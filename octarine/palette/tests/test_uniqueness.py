"""Tests for the uniqueness resolver."""

import logging

import pytest

from octarine.colorspace import clamp_chroma_to_gamut, to_hex
from octarine.palette import uniqueness
from octarine.palette.uniqueness import (
    Phase,
    lightness_direction,
    resolve_duplicates,
    resolve_stop,
    try_chroma_nudges,
    try_hue_nudges,
    try_lightness_nudges,
)
from octarine.types import GeneratedStop, NudgeAmount, Oklch

WHITE = "#ffffff"
BLUE = Oklch(0.55, 0.15, 250)


def _stop(number, color, **kwargs):
    return GeneratedStop(
        number=number,
        hex=to_hex(color),
        color=color,
        original_lightness=color.l,
        **kwargs,
    )


class TestNudgePhases:

    def test_hue_nudge_first_step(self):
        taken = {to_hex(BLUE)}
        candidate = try_hue_nudges(BLUE, taken)
        assert candidate.color.h == pytest.approx(251.0)
        assert candidate.hex == "#1674c5"

    def test_hue_ladder_skips_taken(self):
        taken = {to_hex(BLUE), "#1674c5"}
        assert try_hue_nudges(BLUE, taken).hex == "#0575c4"

    def test_hue_nudge_on_gamut_boundary_records_hue_only(self):
        """Clamping lowers chroma, but the nudge reports the hue step alone."""
        red = clamp_chroma_to_gamut(Oklch(0.45, 0.26, 29.234))
        candidate = try_hue_nudges(red, {to_hex(red)})
        assert candidate.nudge == NudgeAmount(hue=1.0)
        assert candidate.color.c < red.c
        assert candidate.color.h == pytest.approx(30.234)

    def test_chroma_nudge_records_floored_offset(self):
        color = Oklch(0.6, 0.001, 250)
        candidate = try_chroma_nudges(color, {to_hex(color)})
        assert candidate.nudge.hue == 0.0 and candidate.nudge.lightness == 0.0
        assert candidate.nudge.chroma == pytest.approx(candidate.color.c - color.c)

    def test_lightness_nudge_records_lightness_only(self):
        color = Oklch(0.9, 0.05, 250)
        candidate = try_lightness_nudges(color, {to_hex(color)}, -1.0)
        assert candidate.nudge == NudgeAmount(lightness=candidate.color.l - color.l)
        assert candidate.nudge.lightness < 0

    def test_hue_cannot_separate_grays(self):
        gray = Oklch(0.5, 0.0, 0.0)
        assert try_hue_nudges(gray, {to_hex(gray)}) is None

    def test_lightness_nudge_respects_ceiling(self):
        color = Oklch(0.9, 0.05, 250)
        taken = {to_hex(color)}
        assert try_lightness_nudges(color, taken, 1.0, ceiling=0.9) is None
        darker = try_lightness_nudges(color, taken, -1.0, ceiling=0.9)
        assert darker.color.l < 0.9

    def test_resolve_stop_reports_phase(self):
        stop = _stop(200, BLUE)
        phase, candidate = resolve_stop(stop, {stop.hex}, WHITE)
        assert phase is Phase.RESOLVED
        assert candidate.hex != stop.hex


class TestLightnessDirection:

    def test_without_target_moves_to_nearer_end(self):
        assert lightness_direction(Oklch(0.7, 0.1, 250), "#000000", WHITE) == 1.0
        assert lightness_direction(Oklch(0.3, 0.1, 250), "#000000", WHITE) == -1.0

    def test_short_contrast_moves_away_from_background(self):
        assert lightness_direction(BLUE, "#eeeeee", WHITE, 4.5) == -1.0
        assert lightness_direction(BLUE, "#111111", "#000000", 4.5) == 1.0

    def test_enough_contrast_moves_towards_background(self):
        assert lightness_direction(BLUE, "#111111", WHITE, 4.5) == 1.0


class TestResolveDuplicates:

    def test_unique_input_untouched(self):
        stops = [_stop(100, Oklch(0.8, 0.1, 250)), _stop(200, BLUE)]
        result = resolve_duplicates(stops, WHITE)
        assert not result.had_duplicates
        assert result.unresolved == ()
        assert [s.hex for s in result.stops] == [s.hex for s in stops]

    def test_lowest_number_keeps_color(self):
        result = resolve_duplicates([_stop(200, BLUE), _stop(100, BLUE)], WHITE)
        first, second = result.stops
        assert first.number == 100 and not first.was_nudged
        assert second.number == 200 and second.was_nudged
        assert second.hex == "#1674c5"
        assert second.nudge.hue == pytest.approx(1.0)
        assert second.nudge.chroma == pytest.approx(0.0)
        assert second.nudge.lightness == 0.0
        assert second.original_lightness == BLUE.l

    def test_three_way_collision(self):
        result = resolve_duplicates([_stop(n, BLUE) for n in (100, 200, 300)], WHITE)
        hexes = [s.hex for s in result.stops]
        assert len(set(hexes)) == 3
        assert result.stops[2].nudge.hue == pytest.approx(-1.0)

    def test_manual_hex_counts_as_taken(self):
        blocker = _stop(300, Oklch(0.55, 0.15, 251), is_manual=True)
        result = resolve_duplicates([_stop(100, BLUE), _stop(200, BLUE), blocker], WHITE)
        assert result.stops[1].hex == "#0575c4"
        assert result.stops[2] == blocker

    def test_manual_stops_are_never_nudged(self):
        manual = _stop(100, BLUE, is_manual=True)
        result = resolve_duplicates([manual, _stop(200, BLUE)], WHITE)
        assert result.stops[0] == manual
        assert not result.had_duplicates

    def test_grays_resolved_by_chroma_or_lightness(self):
        gray = Oklch(0.5, 0.0, 0.0)
        result = resolve_duplicates([_stop(100, gray), _stop(200, gray)], WHITE)
        assert result.stops[0].hex != result.stops[1].hex
        assert result.stops[1].nudge.hue == pytest.approx(0.0)

    def test_unresolved_is_reported(self, monkeypatch, caplog):
        for name in ("try_hue_nudges", "try_chroma_nudges", "try_lightness_nudges"):
            monkeypatch.setattr(uniqueness, name, lambda *args, **kwargs: None)
        with caplog.at_level(logging.WARNING, logger="octarine.palette.uniqueness"):
            result = resolve_duplicates([_stop(100, BLUE), _stop(200, BLUE)], WHITE)
        assert result.had_duplicates
        assert result.unresolved == (200,)
        assert not result.stops[1].was_nudged
        assert "200" in caplog.text
