#!/usr/bin/env python3
"""Contract between the selection state and the details overlay renderer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Mapping, Optional

from geometry import Rect, Size, clamp
from models import PreconditionError
from selection import SelectionState, anchor_date
from window import CENTER_SLOT

logger = logging.getLogger(__name__)

DEFAULT_SPACING = 8.0


@dataclass(frozen=True)
class OverlayAnchor:
    day: date
    bounds: Rect


@dataclass(frozen=True)
class OverlayPlacement:
    x: float
    y: float
    size: Size
    visible: bool

    @property
    def opacity(self) -> float:
        return 1.0 if self.visible else 0.0


def merge_reported_bounds(
    current: Mapping[date, Rect],
    reported: Mapping[date, Rect],
    *,
    slot: int,
) -> Dict[date, Rect]:
    """Fold a renderer bounds report into the known day frames.

    Only the centered page may report; anything else would let an off-screen
    page overwrite the frames the overlay is anchored to.
    """
    if slot != CENTER_SLOT:
        logger.debug("Dropped bounds report from off-center slot %d", slot)
        return dict(current)
    merged = dict(current)
    merged.update(reported)
    return merged


def bounds_for(frames: Mapping[date, Rect], day: date) -> Rect:
    try:
        return frames[day]
    except KeyError:
        raise PreconditionError(
            f"No bounds were reported for {day.isoformat()}"
        ) from None


def resolve_anchor(state: SelectionState) -> Optional[OverlayAnchor]:
    day = anchor_date(state)
    if day is None:
        return None
    return OverlayAnchor(day=day, bounds=bounds_for(state.selected_date_frames, day))


def place_overlay(
    anchor_bounds: Rect,
    overlay_size: Optional[Size],
    container_width: float,
    *,
    spacing: float = DEFAULT_SPACING,
) -> OverlayPlacement:
    """Center the overlay above its anchor, kept inside the container width.

    Until the overlay has been measured its size is unknown, so the placement
    is marked invisible and the host should paint it fully transparent.
    """
    size = overlay_size or Size()
    if size.is_empty:
        return OverlayPlacement(
            x=anchor_bounds.mid_x,
            y=anchor_bounds.min_y,
            size=size,
            visible=False,
        )

    max_x = max(0.0, container_width - size.width)
    x = clamp(anchor_bounds.mid_x - size.width / 2, 0.0, max_x)
    y = anchor_bounds.min_y - spacing - size.height
    return OverlayPlacement(x=x, y=y, size=size, visible=True)


__all__ = [
    "OverlayAnchor",
    "OverlayPlacement",
    "merge_reported_bounds",
    "bounds_for",
    "resolve_anchor",
    "place_overlay",
    "DEFAULT_SPACING",
]
