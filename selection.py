#!/usr/bin/env python3
"""Day selection state machine: single/multi modes and details visibility."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Literal, Mapping, Optional, Sequence, Tuple

from geometry import Rect

SelectionMode = Literal["single", "multi"]
SELECTION_MODES: Tuple[SelectionMode, ...] = ("single", "multi")


@dataclass(frozen=True)
class SelectionState:
    selected_dates: Tuple[date, ...] = ()
    mode: SelectionMode = "single"
    is_details_visible: bool = False
    selected_date_frames: Mapping[date, Rect] = field(default_factory=dict)
    details_enabled: bool = True

    def with_updated(
        self,
        *,
        selected_dates: Optional[Sequence[date]] = None,
        mode: Optional[SelectionMode] = None,
        is_details_visible: Optional[bool] = None,
        selected_date_frames: Optional[Mapping[date, Rect]] = None,
    ) -> "SelectionState":
        dates = (
            tuple(selected_dates) if selected_dates is not None else self.selected_dates
        )
        frames = (
            selected_date_frames
            if selected_date_frames is not None
            else self.selected_date_frames
        )
        return SelectionState(
            selected_dates=dates,
            mode=mode if mode is not None else self.mode,
            is_details_visible=(
                is_details_visible
                if is_details_visible is not None
                else self.is_details_visible
            ),
            # Frames only ever describe currently selected days.
            selected_date_frames={d: frames[d] for d in dates if d in frames},
            details_enabled=self.details_enabled,
        )


def initial_selection(
    *,
    mode: SelectionMode = "single",
    details_enabled: bool = True,
    select_today: bool = True,
    today: Optional[date] = None,
) -> SelectionState:
    if mode not in SELECTION_MODES:
        raise ValueError(f"Unknown selection mode: {mode!r}")
    selected: Tuple[date, ...] = ()
    if select_today:
        selected = (today or date.today(),)
    return SelectionState(
        selected_dates=selected,
        mode=mode,
        details_enabled=details_enabled,
    )


def day_tapped(
    state: SelectionState, day: date, day_frames: Mapping[date, Rect]
) -> SelectionState:
    """Apply a tap on ``day``.

    ``day_frames`` are the bounds most recently reported by the centered page.
    A tap on a day the renderer has not reported yet is ignored.
    """
    frame = day_frames.get(day)
    if frame is None:
        return state

    frames: Dict[date, Rect] = dict(state.selected_date_frames)

    if state.mode == "multi":
        if day in state.selected_dates:
            remaining = tuple(d for d in state.selected_dates if d != day)
            frames.pop(day, None)
            return state.with_updated(
                selected_dates=remaining,
                is_details_visible=state.is_details_visible and bool(remaining),
                selected_date_frames=frames,
            )
        frames[day] = frame
        return state.with_updated(
            selected_dates=state.selected_dates + (day,),
            selected_date_frames=frames,
        )

    if state.is_details_visible and state.selected_dates == (day,):
        return state.with_updated(
            selected_dates=(),
            is_details_visible=False,
            selected_date_frames={},
        )
    return state.with_updated(
        selected_dates=(day,),
        is_details_visible=state.details_enabled,
        selected_date_frames={day: frame},
    )


def mode_changed(state: SelectionState, mode: SelectionMode) -> SelectionState:
    if mode not in SELECTION_MODES:
        raise ValueError(f"Unknown selection mode: {mode!r}")
    if mode == "single" and len(state.selected_dates) > 1:
        # Collapse to the most recently selected day.
        return state.with_updated(selected_dates=state.selected_dates[-1:], mode=mode)
    return state.with_updated(mode=mode)


def page_committed(state: SelectionState) -> SelectionState:
    """Hide details after the page moved; the old frames are off-screen now."""
    return state.with_updated(is_details_visible=False, selected_date_frames={})


def today_jumped(state: SelectionState, *, today: Optional[date] = None) -> SelectionState:
    if state.mode == "multi":
        return state.with_updated(is_details_visible=False, selected_date_frames={})
    today = today or date.today()
    return state.with_updated(
        selected_dates=(today,),
        is_details_visible=False,
        selected_date_frames={},
    )


def drag_began(state: SelectionState) -> SelectionState:
    return state.with_updated(is_details_visible=False)


def bounds_reported(
    state: SelectionState, day_frames: Mapping[date, Rect]
) -> SelectionState:
    """Refresh the stored frames of selected days; the latest report wins."""
    frames = dict(state.selected_date_frames)
    for day in state.selected_dates:
        if day in day_frames:
            frames[day] = day_frames[day]
    return state.with_updated(selected_date_frames=frames)


def anchor_date(state: SelectionState) -> Optional[date]:
    """The day the details overlay is positioned against, if it is shown.

    Single mode has at most one selected day; in multi mode the first day
    selected wins.
    """
    if not state.is_details_visible or not state.selected_dates:
        return None
    return state.selected_dates[0]


def details_requested(state: SelectionState) -> SelectionState:
    if not state.details_enabled or not state.selected_dates:
        return state
    if state.selected_dates[0] not in state.selected_date_frames:
        return state
    return state.with_updated(is_details_visible=True)


def details_dismissed(state: SelectionState) -> SelectionState:
    return state.with_updated(is_details_visible=False)


def is_dimmed(state: SelectionState, day: date) -> bool:
    return state.is_details_visible and day not in state.selected_dates


__all__ = [
    "SelectionMode",
    "SELECTION_MODES",
    "SelectionState",
    "initial_selection",
    "day_tapped",
    "mode_changed",
    "page_committed",
    "today_jumped",
    "drag_began",
    "bounds_reported",
    "anchor_date",
    "details_requested",
    "details_dismissed",
    "is_dimmed",
]
