#!/usr/bin/env python3
"""App state container for monthpager."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from geometry import Rect, Size
from selection import SelectionState
from window import Window


@dataclass
class AppState:
    window: Window
    selection: SelectionState = field(default_factory=SelectionState)

    # Bounds of the centered page's day cells, as last reported by the renderer.
    day_frames: Dict[date, Rect] = field(default_factory=dict)
    overlay_size: Optional[Size] = None


__all__ = ["AppState"]
