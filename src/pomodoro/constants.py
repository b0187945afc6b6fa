"""Default durations and tick settings used by pomodoro runtime logic."""

from __future__ import annotations

DEFAULT_WORK_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK = 4

SECONDS_PER_MINUTE = 60
TICK_INTERVAL_SECONDS = 1.0
TICKER_JOIN_TIMEOUT_SECONDS = 2.0

LOGGER_NAME = "pomodoro"
TICKER_LOGGER_NAME = "pomodoro.ticker"
TICKER_THREAD_NAME = "pomodoro-ticker"
