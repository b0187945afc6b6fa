"""Interval configuration consumed by the pomodoro service."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK,
    DEFAULT_WORK_MINUTES,
)


@dataclass(frozen=True)
class TimeConfiguration:
    """Work and break lengths in minutes plus the long-break threshold.

    Values are taken as given; zero or negative durations are passed through
    to the session untouched.
    """
    work_duration: int = DEFAULT_WORK_MINUTES
    short_break_duration: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_duration: int = DEFAULT_LONG_BREAK_MINUTES
    work_intervals_before_long_break: int = DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK

    @classmethod
    def from_settings(cls, settings) -> "TimeConfiguration":
        return cls(
            work_duration=settings.work_minutes,
            short_break_duration=settings.short_break_minutes,
            long_break_duration=settings.long_break_minutes,
            work_intervals_before_long_break=settings.work_intervals_before_long_break,
        )
