"""Gregorian calendar arithmetic on naive local datetimes."""

from __future__ import annotations

import calendar as pycalendar
from datetime import date, datetime, timedelta
from typing import Tuple


class CalendarError(Exception):
    """Raised when a calendar boundary cannot be represented."""


class Calendar:
    """Gregorian calendar with configurable week-numbering rules.

    ``first_weekday`` uses Python's numbering (Monday=0 ... Sunday=6).
    ``minimum_days_in_first_week`` is how many days of January a week must
    contain to count as week 1. The defaults match a US calendar (weeks start
    on Sunday and the week containing January 1st is week 1); ``iso()``
    returns the ISO-8601 rules.
    """

    def __init__(self, first_weekday: int = 6, minimum_days_in_first_week: int = 1) -> None:
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be in 0..6, got {first_weekday}")
        if not 1 <= minimum_days_in_first_week <= 7:
            raise ValueError(
                f"minimum_days_in_first_week must be in 1..7, got {minimum_days_in_first_week}"
            )
        self._first_weekday = first_weekday
        self._minimum_days = minimum_days_in_first_week

    @classmethod
    def iso(cls) -> "Calendar":
        return cls(first_weekday=0, minimum_days_in_first_week=4)

    @property
    def first_weekday(self) -> int:
        return self._first_weekday

    @property
    def minimum_days_in_first_week(self) -> int:
        return self._minimum_days

    # ------------------------------------------------------------------
    # Days
    # ------------------------------------------------------------------

    @staticmethod
    def start_of_day(dt: datetime) -> datetime:
        return datetime(dt.year, dt.month, dt.day)

    def whole_days_between(self, start: datetime, end: datetime) -> int:
        """Number of midnights crossed going from ``start`` to ``end`` (signed)."""
        return (end.date() - start.date()).days

    @staticmethod
    def ordinal_day(dt: datetime) -> int:
        """1-based day number within the year."""
        return dt.timetuple().tm_yday

    @staticmethod
    def days_in_year(dt: datetime) -> int:
        return 366 if pycalendar.isleap(dt.year) else 365

    # ------------------------------------------------------------------
    # Intervals
    # ------------------------------------------------------------------

    def year_interval(self, dt: datetime) -> Tuple[datetime, datetime]:
        """Half-open ``(start, end)`` of the year containing ``dt``."""
        try:
            return datetime(dt.year, 1, 1), datetime(dt.year + 1, 1, 1)
        except (ValueError, OverflowError) as e:
            raise CalendarError(f"no year interval for {dt.isoformat()}: {e}") from e

    @staticmethod
    def quarter_of(dt: datetime) -> int:
        return (dt.month - 1) // 3 + 1

    def quarter_interval(self, dt: datetime) -> Tuple[datetime, datetime]:
        """Half-open ``(start, end)`` of the quarter containing ``dt``."""
        quarter = self.quarter_of(dt)
        first_month = 3 * (quarter - 1) + 1
        try:
            start = datetime(dt.year, first_month, 1)
            if quarter == 4:
                end = datetime(dt.year + 1, 1, 1)
            else:
                end = datetime(dt.year, first_month + 3, 1)
        except (ValueError, OverflowError) as e:
            raise CalendarError(f"no quarter interval for {dt.isoformat()}: {e}") from e
        return start, end

    # ------------------------------------------------------------------
    # Weeks
    # ------------------------------------------------------------------

    def _first_week_start(self, year: int) -> date:
        try:
            jan1 = date(year, 1, 1)
            offset = (jan1.weekday() - self._first_weekday) % 7
            week_start = jan1 - timedelta(days=offset)
        except (ValueError, OverflowError) as e:
            raise CalendarError(f"no first week for year {year}: {e}") from e
        if 7 - offset >= self._minimum_days:
            return week_start
        return week_start + timedelta(days=7)

    def week_of_year(self, dt: datetime) -> int:
        d = dt.date() if isinstance(dt, datetime) else dt
        if d.year < 9999 and d >= self._first_week_start(d.year + 1):
            return 1
        week1 = self._first_week_start(d.year)
        if d < week1:
            week1 = self._first_week_start(d.year - 1)
        return (d - week1).days // 7 + 1

    # ------------------------------------------------------------------
    # Months and decomposition
    # ------------------------------------------------------------------

    @staticmethod
    def add_months(dt: datetime, months: int) -> datetime:
        """Shift ``dt`` by whole months, clamping the day to the month length."""
        index = dt.year * 12 + (dt.month - 1) + months
        year, month = divmod(index, 12)
        month += 1
        day = min(dt.day, pycalendar.monthrange(year, month)[1])
        return dt.replace(year=year, month=month, day=day)

    def decompose(self, start: datetime, end: datetime) -> Tuple[int, int, int]:
        """Split ``end - start`` into signed ``(months, days, hours)``.

        Months are taken greedily from ``start`` without overshooting ``end``,
        then whole days, then whole hours. Minutes and seconds are dropped.
        """
        if end == start:
            return 0, 0, 0
        sign = 1 if end > start else -1

        # The calendar-month distance lands in end's month; it can overshoot
        # end by at most one month.
        months = abs((end.year - start.year) * 12 + end.month - start.month)
        cursor = self.add_months(start, sign * months)
        while months > 0 and (cursor - end) * sign > timedelta(0):
            months -= 1
            cursor = self.add_months(start, sign * months)

        remainder = abs(end - cursor)
        days = remainder.days
        hours = remainder.seconds // 3600
        return sign * months, sign * days, sign * hours
