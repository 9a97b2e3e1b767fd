"""Display and icon styles with their glyph frame and title tables."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union


class DisplayStyle(str, Enum):
    """What the compact tray label shows."""

    SHOW_PERCENT = "showPercent"
    SHOW_DDAY = "showDDay"


class IconAnimationStyle(str, Enum):
    """Animated tray glyph family."""

    FILLING_PIE = "fillingPie"
    CLOCK = "clock"
    BATTERY = "battery"
    HOURGLASS = "hourglass"
    MOON = "moon"


DEFAULT_DISPLAY_STYLE = DisplayStyle.SHOW_PERCENT
DEFAULT_ICON_STYLE = IconAnimationStyle.FILLING_PIE

FRAMES: Dict[IconAnimationStyle, Tuple[str, ...]] = {
    IconAnimationStyle.FILLING_PIE: (
        "circle.dotted",
        "circle.lefthalf.filled",
        "circle.filled",
        "circle.righthalf.filled",
    ),
    IconAnimationStyle.CLOCK: ("clock", "clock.fill"),
    IconAnimationStyle.BATTERY: (
        "battery.0",
        "battery.25",
        "battery.50",
        "battery.75",
        "battery.100",
    ),
    IconAnimationStyle.HOURGLASS: (
        "hourglass.bottomhalf.filled",
        "hourglass",
        "hourglass.tophalf.filled",
    ),
    IconAnimationStyle.MOON: (
        "moon.new",
        "moon.waxing.crescent",
        "moon.first.quarter",
        "moon.waxing.gibbous",
        "moon.full",
        "moon.waning.gibbous",
        "moon.last.quarter",
        "moon.waning.crescent",
    ),
}

TITLE_KEYS: Dict[Union[DisplayStyle, IconAnimationStyle], str] = {
    DisplayStyle.SHOW_PERCENT: "style_show_percent",
    DisplayStyle.SHOW_DDAY: "style_show_dday",
    IconAnimationStyle.FILLING_PIE: "icon_style_pie",
    IconAnimationStyle.CLOCK: "icon_style_clock",
    IconAnimationStyle.BATTERY: "icon_style_battery",
    IconAnimationStyle.HOURGLASS: "icon_style_hourglass",
    IconAnimationStyle.MOON: "icon_style_moon",
}


def frames_for(style: IconAnimationStyle) -> Tuple[str, ...]:
    return FRAMES[style]


def frame_count(style: IconAnimationStyle) -> int:
    return len(FRAMES[style])


def title_key(style: Union[DisplayStyle, IconAnimationStyle]) -> str:
    """Localization key for the human-readable name of a style."""
    return TITLE_KEYS[style]


def parse_display_style(raw: object) -> Optional[DisplayStyle]:
    try:
        return DisplayStyle(raw)
    except (TypeError, ValueError):
        return None


def parse_icon_style(raw: object) -> Optional[IconAnimationStyle]:
    try:
        return IconAnimationStyle(raw)
    except (TypeError, ValueError):
        return None
