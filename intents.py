#!/usr/bin/env python3
"""Intent definitions for the gestures and controls a host UI can emit."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from geometry import Rect, Size
from selection import SELECTION_MODES, SelectionMode
from window import DIRECTIONS, Direction

DAY_TAPPED_INTENT = "day_tapped"
PAGE_SETTLED_INTENT = "page_settled"
NAVIGATE_INTENT = "navigate"
JUMP_TO_TODAY_INTENT = "jump_to_today"
MODE_CHANGED_INTENT = "mode_changed"
DRAG_BEGAN_INTENT = "drag_began"
BOUNDS_REPORTED_INTENT = "bounds_reported"
OVERLAY_MEASURED_INTENT = "overlay_measured"
DETAILS_REQUESTED_INTENT = "details_requested"
DETAILS_DISMISSED_INTENT = "details_dismissed"


@dataclass(frozen=True)
class DayTapped:
    day: date


@dataclass(frozen=True)
class PageSettled:
    index: int


@dataclass(frozen=True)
class Navigate:
    direction: Direction


@dataclass(frozen=True)
class JumpToToday:
    today: Optional[date] = None


@dataclass(frozen=True)
class ModeChanged:
    mode: SelectionMode


@dataclass(frozen=True)
class DragBegan:
    pass


@dataclass(frozen=True)
class BoundsReported:
    slot: int
    frames: Mapping[date, Rect] = field(default_factory=dict)


@dataclass(frozen=True)
class OverlayMeasured:
    size: Size


@dataclass(frozen=True)
class DetailsRequested:
    pass


@dataclass(frozen=True)
class DetailsDismissed:
    pass


Intent = Union[
    DayTapped,
    PageSettled,
    Navigate,
    JumpToToday,
    ModeChanged,
    DragBegan,
    BoundsReported,
    OverlayMeasured,
    DetailsRequested,
    DetailsDismissed,
]


class IntentParseError(Exception):
    """Raised when a host payload cannot be parsed into an intent."""


def _parse_date(value: object, label: str) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise IntentParseError(f"{label} must be an ISO date string")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise IntentParseError(
            f"Invalid {label}: '{value}'. Expected YYYY-MM-DD"
        ) from exc


def _parse_number(value: object, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise IntentParseError(f"{label} must be numeric")
    return float(value)


def _parse_rect(value: object, label: str) -> Rect:
    if isinstance(value, (list, tuple)) and len(value) == 4:
        x, y, width, height = value
    elif isinstance(value, dict):
        try:
            x, y = value["x"], value["y"]
            width, height = value["width"], value["height"]
        except KeyError as exc:
            raise IntentParseError(f"{label} is missing '{exc.args[0]}'") from exc
    else:
        raise IntentParseError(f"{label} must be [x, y, width, height] or an object")
    return Rect(
        x=_parse_number(x, f"{label}.x"),
        y=_parse_number(y, f"{label}.y"),
        width=_parse_number(width, f"{label}.width"),
        height=_parse_number(height, f"{label}.height"),
    )


def _parse_frames(value: object) -> Dict[date, Rect]:
    if not isinstance(value, dict):
        raise IntentParseError("frames must be an object keyed by ISO date")
    frames: Dict[date, Rect] = {}
    for raw_day, raw_rect in value.items():
        day = _parse_date(raw_day, "frame date")
        frames[day] = _parse_rect(raw_rect, f"frames[{day.isoformat()}]")
    return frames


def _parse_int(value: object, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise IntentParseError(f"{label} must be an integer")
    return value


def parse_intent_payload(payload: Dict[str, Any]) -> Intent:
    """Convert a ``{"intent": ..., "data": {...}}`` payload into an intent."""
    if not isinstance(payload, dict):
        raise IntentParseError("Intent payload must be an object")

    intent_name = payload.get("intent")
    data = payload.get("data", {})
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise IntentParseError("Intent data must be an object")

    if intent_name == DAY_TAPPED_INTENT:
        return DayTapped(day=_parse_date(data.get("date"), "date"))

    if intent_name == PAGE_SETTLED_INTENT:
        index = _parse_int(data.get("index"), "index")
        if index not in (0, 1, 2):
            raise IntentParseError(f"Invalid page index: {index}")
        return PageSettled(index=index)

    if intent_name == NAVIGATE_INTENT:
        direction = data.get("direction")
        if direction not in DIRECTIONS:
            raise IntentParseError(f"Invalid direction value: {direction}")
        return Navigate(direction=direction)

    if intent_name == JUMP_TO_TODAY_INTENT:
        raw_today = data.get("today")
        today = _parse_date(raw_today, "today") if raw_today is not None else None
        return JumpToToday(today=today)

    if intent_name == MODE_CHANGED_INTENT:
        mode = data.get("mode")
        if mode not in SELECTION_MODES:
            raise IntentParseError(f"Invalid selection mode: {mode}")
        return ModeChanged(mode=mode)

    if intent_name == DRAG_BEGAN_INTENT:
        return DragBegan()

    if intent_name == BOUNDS_REPORTED_INTENT:
        slot = _parse_int(data.get("slot"), "slot")
        return BoundsReported(slot=slot, frames=_parse_frames(data.get("frames")))

    if intent_name == OVERLAY_MEASURED_INTENT:
        return OverlayMeasured(
            size=Size(
                width=_parse_number(data.get("width"), "width"),
                height=_parse_number(data.get("height"), "height"),
            )
        )

    if intent_name == DETAILS_REQUESTED_INTENT:
        return DetailsRequested()

    if intent_name == DETAILS_DISMISSED_INTENT:
        return DetailsDismissed()

    raise IntentParseError(f"Unsupported intent: {intent_name}")


__all__ = [
    "DayTapped",
    "PageSettled",
    "Navigate",
    "JumpToToday",
    "ModeChanged",
    "DragBegan",
    "BoundsReported",
    "OverlayMeasured",
    "DetailsRequested",
    "DetailsDismissed",
    "Intent",
    "IntentParseError",
    "parse_intent_payload",
    "DAY_TAPPED_INTENT",
    "PAGE_SETTLED_INTENT",
    "NAVIGATE_INTENT",
    "JUMP_TO_TODAY_INTENT",
    "MODE_CHANGED_INTENT",
    "DRAG_BEGAN_INTENT",
    "BOUNDS_REPORTED_INTENT",
    "OVERLAY_MEASURED_INTENT",
    "DETAILS_REQUESTED_INTENT",
    "DETAILS_DISMISSED_INTENT",
]
