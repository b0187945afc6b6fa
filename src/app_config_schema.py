"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field

from pomodoro.constants import (
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK,
    DEFAULT_WORK_MINUTES,
)

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV_VAR = "POMODORO_CONFIG_FILE"
DEFAULT_LOG_LEVEL = "INFO"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class PomodoroSettings:
    """Interval lengths in minutes and long-break cadence from `[pomodoro]`."""
    work_minutes: int = DEFAULT_WORK_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    work_intervals_before_long_break: int = DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    pomodoro: PomodoroSettings = field(default_factory=PomodoroSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    source_file: str = ""
