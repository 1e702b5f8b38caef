#!/usr/bin/env python3
"""Month model: calendar systems, month grids and adjacent-month arithmetic."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterator, List, Optional, Sequence, Tuple

from date_ranges import add_months, start_of_month

Week = Tuple[date, ...]

WEEK_LENGTH = 7
DEFAULT_WEEKEND_DAYS: Tuple[int, ...] = (calendar.SATURDAY, calendar.SUNDAY)


class PreconditionError(AssertionError):
    """Raised when a caller breaks a contract of the calendar core.

    These are programming errors (a calendar that cannot place the first of a
    month, an out-of-range page index, a bounds lookup for a date that was
    never reported). They are not meant to be caught.
    """


@dataclass(frozen=True)
class CalendarSystem:
    first_weekday: int = calendar.MONDAY
    locale: Optional[str] = None
    weekend_days: Tuple[int, ...] = DEFAULT_WEEKEND_DAYS

    def __post_init__(self) -> None:
        if not 0 <= self.first_weekday <= 6:
            raise PreconditionError(
                f"first_weekday must be in 0..6, got {self.first_weekday}"
            )

    def as_calendar(self) -> calendar.Calendar:
        return calendar.Calendar(firstweekday=self.first_weekday)

    def text_calendar(self) -> calendar.TextCalendar:
        if self.locale:
            return calendar.LocaleTextCalendar(self.first_weekday, locale=self.locale)
        return calendar.TextCalendar(self.first_weekday)

    def iterweekdays(self) -> Iterator[int]:
        return self.as_calendar().iterweekdays()

    def is_weekend(self, day: date) -> bool:
        return day.weekday() in self.weekend_days


@dataclass(frozen=True)
class Month:
    """One calendar month laid out as complete week rows.

    ``weeks`` holds full rows of ``WEEK_LENGTH`` days, so the first and last
    rows usually carry days of the neighbouring months. ``anchor_date`` is
    always the first day of the represented month.
    """

    calendar_system: CalendarSystem
    anchor_date: date
    weeks: Tuple[Week, ...]

    @property
    def year(self) -> int:
        return self.anchor_date.year

    @property
    def month(self) -> int:
        return self.anchor_date.month

    @property
    def key(self) -> Tuple[int, int]:
        return (self.anchor_date.year, self.anchor_date.month)

    @property
    def row_count(self) -> int:
        return len(self.weeks)

    def contains(self, day: date) -> bool:
        return (day.year, day.month) == self.key

    def days(self) -> List[date]:
        """Return the days of the month itself, without boundary days."""
        return [day for week in self.weeks for day in week if self.contains(day)]

    def surrounding(self) -> Tuple["Month", "Month", "Month"]:
        return (previous_month(self), self, next_month(self))


def month_for(day: date, calendar_system: CalendarSystem) -> Month:
    """Build the month containing ``day`` as every week row it overlaps."""
    first = start_of_month(day)
    weeks = tuple(
        tuple(week)
        for week in calendar_system.as_calendar().monthdatescalendar(first.year, first.month)
    )
    rows_with_first = [week for week in weeks if first in week]
    if len(rows_with_first) != 1:
        raise PreconditionError(
            f"calendar system could not place {first.isoformat()} in a single week row"
        )
    return Month(calendar_system=calendar_system, anchor_date=first, weeks=weeks)


def next_month(month: Month) -> Month:
    return month_for(add_months(month.anchor_date, 1), month.calendar_system)


def previous_month(month: Month) -> Month:
    return month_for(add_months(month.anchor_date, -1), month.calendar_system)


def surrounding_months(
    day: date, calendar_system: CalendarSystem
) -> Tuple[Month, Month, Month]:
    return month_for(day, calendar_system).surrounding()


def month_title(month: Month) -> str:
    """Return a "February 2024" style label in the calendar's locale."""
    text_cal = month.calendar_system.text_calendar()
    title = text_cal.formatmonthname(month.year, month.month, 0, withyear=True).strip()
    return title[:1].upper() + title[1:]


def weekday_symbols(calendar_system: CalendarSystem, width: int = 3) -> List[str]:
    """Weekday names in display order, starting at ``first_weekday``."""
    text_cal = calendar_system.text_calendar()
    return [
        text_cal.formatweekday(weekday, width).strip()
        for weekday in calendar_system.iterweekdays()
    ]


def padded_week(month: Month, week: Sequence[date]) -> List[Optional[date]]:
    """Blank out the days of ``week`` that belong to a neighbouring month."""
    return [day if month.contains(day) else None for day in week]


__all__ = [
    "CalendarSystem",
    "Month",
    "PreconditionError",
    "Week",
    "WEEK_LENGTH",
    "month_for",
    "next_month",
    "previous_month",
    "surrounding_months",
    "month_title",
    "weekday_symbols",
    "padded_week",
]
