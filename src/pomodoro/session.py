"""Single-threaded pomodoro session state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import SECONDS_PER_MINUTE


class TimerState(str, Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    BREAK = "break"
    COMPLETED = "completed"


class SessionKind(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


# States in which the countdown advances on tick.
COUNTDOWN_STATES: frozenset[TimerState] = frozenset(
    {TimerState.RUNNING, TimerState.BREAK}
)

PAUSE_TRANSITIONS: dict[TimerState, TimerState] = {
    TimerState.RUNNING: TimerState.PAUSED,
    TimerState.BREAK: TimerState.PAUSED,
}

# State restored by resume(), keyed by the kind of the paused session.
RESUME_TARGETS: dict[SessionKind, TimerState] = {
    SessionKind.WORK: TimerState.RUNNING,
    SessionKind.SHORT_BREAK: TimerState.BREAK,
    SessionKind.LONG_BREAK: TimerState.BREAK,
}


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Immutable session snapshot exposed to subscribers and UI publishers."""
    state: TimerState
    session_kind: SessionKind
    remaining_seconds: int
    completed_work_count: int

    @property
    def is_active(self) -> bool:
        return self.state in COUNTDOWN_STATES or self.state == TimerState.PAUSED

    @property
    def is_break(self) -> bool:
        return self.session_kind != SessionKind.WORK


class PomodoroSession:
    """Holds the current countdown, its kind, and the completed work counter.

    Every operation is defined for every state; inapplicable calls leave the
    session untouched. Nothing here raises or blocks, callers serialize access.
    """

    def __init__(self) -> None:
        self._state = TimerState.READY
        self._session_kind = SessionKind.WORK
        self._remaining_seconds = 0
        self._completed_work_count = 0

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def session_kind(self) -> SessionKind:
        return self._session_kind

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def completed_work_count(self) -> int:
        return self._completed_work_count

    def snapshot(self) -> PomodoroSnapshot:
        return PomodoroSnapshot(
            state=self._state,
            session_kind=self._session_kind,
            remaining_seconds=self._remaining_seconds,
            completed_work_count=self._completed_work_count,
        )

    def start(self, duration_minutes: int) -> None:
        """Start a countdown of ``duration_minutes``.

        The kind switches to work unless a break is currently counting down,
        in which case the break keeps its identity.
        """
        if self._state != TimerState.BREAK:
            self._session_kind = SessionKind.WORK
        self._remaining_seconds = _to_seconds(duration_minutes)
        self._state = TimerState.RUNNING

    def pause(self) -> None:
        self._state = PAUSE_TRANSITIONS.get(self._state, self._state)

    def resume(self) -> None:
        if self._state == TimerState.PAUSED:
            self._state = RESUME_TARGETS[self._session_kind]

    def tick(self) -> None:
        if self._state not in COUNTDOWN_STATES:
            return
        if self._remaining_seconds > 0:
            self._remaining_seconds -= 1
        if self._remaining_seconds == 0:
            self._state = TimerState.COMPLETED

    def complete_work(self) -> None:
        """Credit a finished work interval and return to ready.

        Also used to force-complete a break, which is not credited.
        """
        if self._session_kind == SessionKind.WORK:
            self._completed_work_count += 1
        self._state = TimerState.READY

    def complete_break(self) -> None:
        self._state = TimerState.READY

    def cancel(self) -> None:
        self._state = TimerState.READY
        self._remaining_seconds = 0

    def start_break(self, kind: SessionKind, duration_minutes: int) -> None:
        self._session_kind = kind
        self._state = TimerState.BREAK
        self._remaining_seconds = _to_seconds(duration_minutes)

    def reset_after_long_break(self) -> None:
        self._completed_work_count = 0
        self._session_kind = SessionKind.WORK


def _to_seconds(duration_minutes: int) -> int:
    # Negative durations pass through configuration unchecked; the countdown
    # itself never goes below zero.
    return max(0, int(duration_minutes) * SECONDS_PER_MINUTE)
