#!/usr/bin/env python3
"""Calendar-aware date helpers for month paging."""

from __future__ import annotations

import calendar
from datetime import date


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, delta_months: int) -> date:
    """Shift ``day`` by whole calendar months.

    The day-of-month is clamped to the length of the target month, so
    2024-01-31 + 1 month is 2024-02-29 rather than an overflow into March.
    """
    year = day.year + ((day.month - 1 + delta_months) // 12)
    month = (day.month - 1 + delta_months) % 12 + 1
    _, max_day = calendar.monthrange(year, month)
    return date(year, month, min(day.day, max_day))


__all__ = ["start_of_month", "add_months"]
