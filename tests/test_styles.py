"""Tests for yearprogress.core.styles – style enums and lookup tables."""

from __future__ import annotations

import pytest

from yearprogress.core.styles import (
    DEFAULT_DISPLAY_STYLE,
    DEFAULT_ICON_STYLE,
    FRAMES,
    DisplayStyle,
    IconAnimationStyle,
    frame_count,
    frames_for,
    parse_display_style,
    parse_icon_style,
    title_key,
)


class TestDefaults:
    def test_display_style_default(self):
        assert DEFAULT_DISPLAY_STYLE is DisplayStyle.SHOW_PERCENT

    def test_icon_style_default(self):
        assert DEFAULT_ICON_STYLE is IconAnimationStyle.FILLING_PIE


class TestFrames:
    @pytest.mark.parametrize(
        "style, count",
        [
            (IconAnimationStyle.FILLING_PIE, 4),
            (IconAnimationStyle.CLOCK, 2),
            (IconAnimationStyle.BATTERY, 5),
            (IconAnimationStyle.HOURGLASS, 3),
            (IconAnimationStyle.MOON, 8),
        ],
    )
    def test_frame_counts(self, style, count):
        assert frame_count(style) == count
        assert len(frames_for(style)) == count

    def test_every_style_has_frames(self):
        assert set(FRAMES) == set(IconAnimationStyle)

    def test_frames_are_unique_within_style(self):
        for style in IconAnimationStyle:
            frames = frames_for(style)
            assert len(set(frames)) == len(frames)

    def test_battery_order(self):
        assert frames_for(IconAnimationStyle.BATTERY)[0] == "battery.0"
        assert frames_for(IconAnimationStyle.BATTERY)[-1] == "battery.100"


class TestTitleKeys:
    def test_display_styles(self):
        assert title_key(DisplayStyle.SHOW_PERCENT) == "style_show_percent"
        assert title_key(DisplayStyle.SHOW_DDAY) == "style_show_dday"

    def test_icon_styles(self):
        assert title_key(IconAnimationStyle.FILLING_PIE) == "icon_style_pie"
        assert title_key(IconAnimationStyle.MOON) == "icon_style_moon"

    def test_every_variant_has_title(self):
        for style in list(DisplayStyle) + list(IconAnimationStyle):
            assert title_key(style)


class TestParsing:
    def test_display_style_by_value(self):
        assert parse_display_style("showDDay") is DisplayStyle.SHOW_DDAY

    def test_icon_style_by_value(self):
        assert parse_icon_style("hourglass") is IconAnimationStyle.HOURGLASS

    @pytest.mark.parametrize("raw", ["SHOW_DDAY", "", 3, None, ["clock"]])
    def test_unknown_display_style(self, raw):
        assert parse_display_style(raw) is None

    @pytest.mark.parametrize("raw", ["pie", "Moon", 0, {"x": 1}])
    def test_unknown_icon_style(self, raw):
        assert parse_icon_style(raw) is None

    def test_enum_values_are_strings(self):
        assert IconAnimationStyle.CLOCK == "clock"
