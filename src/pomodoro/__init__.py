from .config import TimeConfiguration
from .constants import (
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK,
    DEFAULT_WORK_MINUTES,
)
from .contracts import PomodoroController, SnapshotListener, Ticker
from .service import PomodoroService, choose_break_kind
from .session import PomodoroSession, PomodoroSnapshot, SessionKind, TimerState
from .ticker import RecurringTicker

__all__ = [
    "DEFAULT_LONG_BREAK_MINUTES",
    "DEFAULT_SHORT_BREAK_MINUTES",
    "DEFAULT_WORK_INTERVALS_BEFORE_LONG_BREAK",
    "DEFAULT_WORK_MINUTES",
    "PomodoroController",
    "PomodoroService",
    "PomodoroSession",
    "PomodoroSnapshot",
    "RecurringTicker",
    "SessionKind",
    "SnapshotListener",
    "Ticker",
    "TimeConfiguration",
    "TimerState",
    "choose_break_kind",
]
