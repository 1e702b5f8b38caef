#!/usr/bin/env python3
"""XDG path helpers for monthpager."""

from __future__ import annotations

import os
from pathlib import Path

APP_DIRNAME = "monthpager"


def xdg_config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()


def config_dir() -> Path:
    return xdg_config_home() / APP_DIRNAME


__all__ = ["xdg_config_home", "config_dir", "APP_DIRNAME"]
