"""Protocols shared by the pomodoro service, its tick source, and UI layers."""

from __future__ import annotations

from typing import Callable, Protocol

from .session import PomodoroSnapshot, SessionKind, TimerState

SnapshotListener = Callable[[PomodoroSnapshot], None]
Unsubscribe = Callable[[], None]


class Ticker(Protocol):
    """Recurring tick source owned by the service."""

    @property
    def is_running(self) -> bool: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def close(self) -> None: ...


TickerFactory = Callable[[Callable[[], None]], Ticker]


class PomodoroController(Protocol):
    """Surface consumed by UI layers driving a single pomodoro timer."""

    @property
    def current_state(self) -> TimerState: ...

    @property
    def current_session_kind(self) -> SessionKind: ...

    @property
    def remaining_seconds(self) -> int: ...

    @property
    def completed_work_count(self) -> int: ...

    def snapshot(self) -> PomodoroSnapshot: ...

    def subscribe_tick(self, listener: SnapshotListener) -> Unsubscribe: ...

    def subscribe_session_complete(self, listener: SnapshotListener) -> Unsubscribe: ...

    def start_work(self) -> None: ...

    def start_break(self) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def cancel_as_completed(self) -> None: ...

    def cancel_as_incomplete(self) -> None: ...
