#!/usr/bin/env python3
"""Orchestrator for monthpager: routes intents into window and selection state."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Tuple

import selection as sel
import window as win
from config import Config, configure_logging
from intents import (
    BoundsReported,
    DayTapped,
    DetailsDismissed,
    DetailsRequested,
    DragBegan,
    Intent,
    JumpToToday,
    ModeChanged,
    Navigate,
    OverlayMeasured,
    PageSettled,
)
from models import Month, month_title
from overlay_anchor import (
    OverlayAnchor,
    OverlayPlacement,
    merge_reported_bounds,
    place_overlay,
    resolve_anchor,
)
from state import AppState

logger = logging.getLogger(__name__)


class Orchestrator:
    """Owns the calendar state and applies one intent at a time.

    The hosting UI feeds every gesture or control event through
    :meth:`dispatch` and reads the window, the selection and the overlay
    anchor back out to draw them.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        today: Optional[date] = None,
    ) -> None:
        self.config = config or Config()
        self._today = today
        start = self.today()
        self.state = AppState(
            window=win.initialize(start, self.config.calendar_system()),
            selection=sel.initial_selection(
                mode=self.config.selection_mode,
                details_enabled=self.config.details_enabled,
                select_today=self.config.select_today_on_start,
                today=start,
            ),
        )

    @classmethod
    def from_config(cls, config: Config, *, today: Optional[date] = None) -> "Orchestrator":
        """Build an orchestrator for a loaded config and apply its log level."""
        configure_logging(config)
        return cls(config, today=today)

    def today(self) -> date:
        return self._today or date.today()

    # Outputs
    @property
    def window(self) -> win.Window:
        return self.state.window

    @property
    def months(self) -> Tuple[Month, Month, Month]:
        return self.state.window.buffer

    @property
    def page_index(self) -> int:
        return self.state.window.page_index

    @property
    def visible_month(self) -> Month:
        return self.state.window.visible_month

    @property
    def title(self) -> str:
        return month_title(self.visible_month)

    @property
    def selection(self) -> sel.SelectionState:
        return self.state.selection

    def anchor(self) -> Optional[OverlayAnchor]:
        return resolve_anchor(self.state.selection)

    def overlay_placement(self, container_width: float) -> Optional[OverlayPlacement]:
        anchor = self.anchor()
        if anchor is None:
            return None
        return place_overlay(anchor.bounds, self.state.overlay_size, container_width)

    # Intent handling
    def dispatch(self, intent: Intent) -> bool:
        """Apply ``intent``; return True when any state changed."""
        before = (
            self.state.window,
            self.state.selection,
            dict(self.state.day_frames),
            self.state.overlay_size,
        )
        self._apply(intent)
        after = (
            self.state.window,
            self.state.selection,
            self.state.day_frames,
            self.state.overlay_size,
        )
        changed = before != after
        logger.debug("Dispatched %r (changed=%s)", intent, changed)
        return changed

    def _apply(self, intent: Intent) -> None:
        state = self.state

        if isinstance(intent, DayTapped):
            if intent.day not in state.day_frames:
                logger.debug("Ignoring tap on %s: no bounds reported", intent.day)
                return
            state.selection = sel.day_tapped(state.selection, intent.day, state.day_frames)
            return

        if isinstance(intent, PageSettled):
            self._commit_window(win.page_settled(state.window, intent.index))
            return

        if isinstance(intent, Navigate):
            self._commit_window(win.navigate(state.window, intent.direction))
            return

        if isinstance(intent, JumpToToday):
            today = intent.today or self.today()
            state.window = win.jump_to_today(state.window, today=today)
            state.selection = sel.today_jumped(state.selection, today=today)
            state.day_frames = {}
            return

        if isinstance(intent, ModeChanged):
            state.selection = sel.mode_changed(state.selection, intent.mode)
            return

        if isinstance(intent, DragBegan):
            state.selection = sel.drag_began(state.selection)
            return

        if isinstance(intent, BoundsReported):
            state.day_frames = merge_reported_bounds(
                state.day_frames, intent.frames, slot=intent.slot
            )
            if intent.slot == win.CENTER_SLOT:
                state.selection = sel.bounds_reported(state.selection, intent.frames)
            return

        if isinstance(intent, OverlayMeasured):
            state.overlay_size = intent.size
            return

        if isinstance(intent, DetailsRequested):
            state.selection = sel.details_requested(state.selection)
            return

        if isinstance(intent, DetailsDismissed):
            state.selection = sel.details_dismissed(state.selection)
            return

        raise TypeError(f"Unsupported intent: {intent!r}")

    def _commit_window(self, new_window: win.Window) -> None:
        if new_window is self.state.window:
            return
        self.state.window = new_window
        self.state.selection = sel.page_committed(self.state.selection)
        # The centered page now shows another month; its cells report afresh.
        self.state.day_frames = {}


__all__ = ["Orchestrator"]
