#!/usr/bin/env python3
"""Three-month sliding window used to page through months endlessly."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Literal, Optional, Tuple

from models import (
    CalendarSystem,
    Month,
    PreconditionError,
    next_month,
    previous_month,
    surrounding_months,
)

logger = logging.getLogger(__name__)

Direction = Literal["previous", "next"]
DIRECTIONS: Tuple[Direction, ...] = ("previous", "next")

PREVIOUS_SLOT = 0
CENTER_SLOT = 1
NEXT_SLOT = 2


@dataclass(frozen=True)
class Window:
    """``buffer`` is always ``(previous, current, next)`` around ``buffer[1]``."""

    buffer: Tuple[Month, Month, Month]
    page_index: int = CENTER_SLOT

    @property
    def calendar_system(self) -> CalendarSystem:
        return self.buffer[CENTER_SLOT].calendar_system

    @property
    def center(self) -> Month:
        return self.buffer[CENTER_SLOT]

    @property
    def visible_month(self) -> Month:
        return self.buffer[self.page_index]

    def is_adjacent_consistent(self) -> bool:
        center = self.buffer[CENTER_SLOT]
        return (
            self.buffer[PREVIOUS_SLOT] == previous_month(center)
            and self.buffer[NEXT_SLOT] == next_month(center)
        )


def initialize(day: date, calendar_system: CalendarSystem) -> Window:
    return Window(buffer=surrounding_months(day, calendar_system), page_index=CENTER_SLOT)


def page_settled(window: Window, new_index: int) -> Window:
    """Re-center the window after a swipe settles on ``new_index``.

    Paging backward prepends a freshly computed older month, paging forward
    appends a newer one. Either way the visible index snaps back to the
    middle slot. Settling on the middle slot is a cancelled swipe.
    """
    if new_index == CENTER_SLOT:
        return window
    previous, current, following = window.buffer
    if new_index == PREVIOUS_SLOT:
        buffer = (previous_month(previous), previous, current)
    elif new_index == NEXT_SLOT:
        buffer = (current, following, next_month(following))
    else:
        raise PreconditionError(f"page index must be 0, 1 or 2, got {new_index}")
    logger.debug("Paged to %s (slot %d)", buffer[CENTER_SLOT].key, new_index)
    return Window(buffer=buffer, page_index=CENTER_SLOT)


def navigate(window: Window, direction: Direction) -> Window:
    if direction == "previous":
        return page_settled(window, PREVIOUS_SLOT)
    if direction == "next":
        return page_settled(window, NEXT_SLOT)
    raise PreconditionError(f"Unknown navigation direction: {direction!r}")


def jump_to_today(window: Window, *, today: Optional[date] = None) -> Window:
    today = today or date.today()
    logger.debug("Jumping window to %s", today.isoformat())
    return initialize(today, window.calendar_system)


__all__ = [
    "Window",
    "Direction",
    "DIRECTIONS",
    "PREVIOUS_SLOT",
    "CENTER_SLOT",
    "NEXT_SLOT",
    "initialize",
    "page_settled",
    "navigate",
    "jump_to_today",
]
