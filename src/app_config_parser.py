"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app_config_schema import (
    DEFAULT_LOG_LEVEL,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    PomodoroSettings,
)

_ALLOWED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    pomodoro = _parse_pomodoro_settings(_section(raw, "pomodoro"))
    logging_settings = _parse_logging_settings(_section(raw, "logging"))

    return AppConfig(
        pomodoro=pomodoro,
        logging=logging_settings,
        source_file=source_file,
    )


def _parse_pomodoro_settings(section: Mapping[str, Any]) -> PomodoroSettings:
    # Durations are type-checked only; zero or negative values pass through.
    defaults = PomodoroSettings()
    return PomodoroSettings(
        work_minutes=_as_int(
            section.get("work_minutes", defaults.work_minutes),
            "pomodoro.work_minutes",
        ),
        short_break_minutes=_as_int(
            section.get("short_break_minutes", defaults.short_break_minutes),
            "pomodoro.short_break_minutes",
        ),
        long_break_minutes=_as_int(
            section.get("long_break_minutes", defaults.long_break_minutes),
            "pomodoro.long_break_minutes",
        ),
        work_intervals_before_long_break=_as_int(
            section.get(
                "work_intervals_before_long_break",
                defaults.work_intervals_before_long_break,
            ),
            "pomodoro.work_intervals_before_long_break",
        ),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    return LoggingSettings(
        level=_as_log_level(section.get("level", DEFAULT_LOG_LEVEL), "logging.level"),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_log_level(value: Any, field: str) -> str:
    name = _as_str(value, field).upper()
    if name not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return name


def log_level_value(settings: LoggingSettings) -> int:
    """Translate a validated level name to the `logging` module constant."""
    return logging.getLevelName(settings.level)
