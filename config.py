#!/usr/bin/env python3
"""Configuration loading for monthpager."""

from __future__ import annotations

import calendar
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from models import CalendarSystem
from paths import config_dir
from selection import SELECTION_MODES, SelectionMode

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_WEEKDAY_NAMES = {
    name.lower(): idx for idx, name in enumerate(calendar.day_name)
}


class ConfigError(Exception):
    pass


@dataclass
class Config:
    first_weekday: int = calendar.MONDAY
    locale: Optional[str] = None
    selection_mode: SelectionMode = "single"
    details_enabled: bool = True
    select_today_on_start: bool = True
    log_level: str = "WARNING"

    def calendar_system(self) -> CalendarSystem:
        return CalendarSystem(first_weekday=self.first_weekday, locale=self.locale)


def default_config_path() -> Path:
    return config_dir() / CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> Config:
    """Load config from the XDG path, falling back to defaults.

    A missing or unreadable file yields the defaults. Values that are present
    but invalid raise ``ConfigError`` so typos do not silently change
    behaviour.
    """
    config_path = (path or default_config_path()).expanduser()
    raw: Dict[str, Any] = {}

    if config_path.exists():
        try:
            raw_text = config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
            raw_text = "{}"
        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError:
            try:
                raw = json.loads(_strip_trailing_commas(raw_text))
            except json.JSONDecodeError as exc:
                logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
                raw = {}

    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_path)
        raw = {}

    return Config(
        first_weekday=_parse_weekday(raw.get("first_weekday", calendar.MONDAY)),
        locale=_parse_optional_str(raw.get("locale"), "locale"),
        selection_mode=_parse_mode(raw.get("selection_mode", "single")),
        details_enabled=_parse_bool(raw.get("details_enabled", True), "details_enabled"),
        select_today_on_start=_parse_bool(
            raw.get("select_today_on_start", True), "select_today_on_start"
        ),
        log_level=_parse_log_level(raw.get("log_level", "WARNING")),
    )


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _strip_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing braces/brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


def _parse_weekday(value: object) -> int:
    if isinstance(value, bool):
        raise ConfigError("first_weekday must be 0-6 or a weekday name")
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ConfigError(f"first_weekday must be in 0..6, got {value}")
    if isinstance(value, str) and value.strip().lower() in _WEEKDAY_NAMES:
        return _WEEKDAY_NAMES[value.strip().lower()]
    raise ConfigError(f"Invalid first_weekday '{value}'")


def _parse_mode(value: object) -> SelectionMode:
    mode = str(value).strip().lower()
    if mode not in SELECTION_MODES:
        valid = ", ".join(SELECTION_MODES)
        raise ConfigError(f"Invalid selection_mode '{mode}'. Expected one of: {valid}")
    return mode  # type: ignore[return-value]


def _parse_bool(value: object, label: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{label} must be true or false")
    return value


def _parse_optional_str(value: object, label: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{label} must be a string")
    return value.strip() or None


def _parse_log_level(value: object) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log_level '{value}'")
    return level


__all__ = [
    "Config",
    "ConfigError",
    "CONFIG_FILENAME",
    "configure_logging",
    "default_config_path",
    "load_config",
]
