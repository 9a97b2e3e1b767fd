from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from yearprogress.core.calendar import Calendar
from yearprogress.core.strings import StringTable
from yearprogress.core.styles import IconAnimationStyle, frame_count, frames_for


@dataclass(frozen=True)
class ProgressSnapshot:
    """Every derived display value for one clock sample."""

    current_instant: datetime
    year_progress: float
    quarter_progress: float
    quarter: int
    day_of_year_text: str
    week_of_year_text: str
    dday_text: str
    remaining_time_text: str
    quarter_title_text: str
    animation_frame_index: int = 0

    @property
    def year_progress_text(self) -> str:
        return f"{self.year_progress * 100:.0f}%"

    @property
    def quarter_progress_text(self) -> str:
        return f"{self.quarter_progress * 100:.1f}%"


def dday_text(now: datetime, target: datetime, calendar: Calendar, strings: StringTable) -> str:
    """D-Day label counted in calendar days (midnight to midnight)."""
    days = calendar.whole_days_between(calendar.start_of_day(now), calendar.start_of_day(target))
    if days == 0:
        return strings.text("dday_today")
    if days > 0:
        return strings.plural("dday_future", days)
    return strings.plural("dday_past", -days)


def remaining_time_text(
    now: datetime, target: datetime, calendar: Calendar, strings: StringTable
) -> str:
    """Month, day and hour phrases; zero months/days are left out, hours are kept."""
    months, days, hours = calendar.decompose(now, target)
    parts = []
    if months > 0:
        parts.append(strings.plural("time_unit_month", months))
    if days > 0:
        parts.append(strings.plural("time_unit_day", days))
    if hours >= 0:
        parts.append(strings.plural("time_unit_hour", hours))
    return " ".join(parts)


def _fraction(now: datetime, start: datetime, end: datetime) -> float:
    return (now - start).total_seconds() / (end - start).total_seconds()


def compute_snapshot(
    now: datetime,
    target: datetime,
    calendar: Calendar,
    strings: StringTable,
    animation_frame_index: int = 0,
) -> ProgressSnapshot:
    """Derive a full snapshot from a single ``now`` sample.

    Raises ``CalendarError`` when the year or quarter containing ``now`` has
    no representable interval.
    """
    year_start, year_end = calendar.year_interval(now)
    quarter_start, quarter_end = calendar.quarter_interval(now)
    quarter = calendar.quarter_of(now)

    day_of_year = strings.text(
        "stats_day_of_year_format",
        day=calendar.ordinal_day(now),
        total=calendar.whole_days_between(year_start, year_end),
    )
    week_of_year = strings.text("stats_week_of_year_format", week=calendar.week_of_year(now))

    return ProgressSnapshot(
        current_instant=now,
        year_progress=_fraction(now, year_start, year_end),
        quarter_progress=_fraction(now, quarter_start, quarter_end),
        quarter=quarter,
        day_of_year_text=day_of_year,
        week_of_year_text=week_of_year,
        dday_text=dday_text(now, target, calendar, strings),
        remaining_time_text=remaining_time_text(now, target, calendar, strings),
        quarter_title_text=strings.text("stats_quarter_progress_title_format", quarter=quarter),
        animation_frame_index=animation_frame_index,
    )


def advance_animation_frame(style: IconAnimationStyle, current_frame_index: int) -> int:
    return (current_frame_index + 1) % frame_count(style)


def current_icon_frame(
    style: IconAnimationStyle, year_progress: float, animation_frame_index: int
) -> str:
    """Glyph id whose base position follows progress, cycled by the animation index."""
    frames = frames_for(style)
    n = len(frames)
    base = math.floor(year_progress * (n - 1))
    base = max(0, min(base, n - 1))
    return frames[(base + animation_frame_index) % n]
