"""Thread-safe pomodoro service driving a session from a one-second ticker."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .config import TimeConfiguration
from .constants import LOGGER_NAME
from .contracts import SnapshotListener, Ticker, TickerFactory, Unsubscribe
from .session import (
    COUNTDOWN_STATES,
    PomodoroSession,
    PomodoroSnapshot,
    SessionKind,
    TimerState,
)
from .ticker import RecurringTicker


def choose_break_kind(completed_work_count: int, threshold: int) -> SessionKind:
    """Return the break earned after ``completed_work_count`` work intervals.

    A long break is due on every positive multiple of ``threshold``. A
    threshold of zero never yields a long break.
    """
    if threshold == 0 or completed_work_count <= 0:
        return SessionKind.SHORT_BREAK
    if completed_work_count % threshold == 0:
        return SessionKind.LONG_BREAK
    return SessionKind.SHORT_BREAK


class _ListenerRegistry:
    """Ordered subscriber list invoked synchronously with a snapshot."""

    def __init__(self, event_name: str, logger: logging.Logger):
        self._event_name = event_name
        self._logger = logger
        self._listeners: list[SnapshotListener] = []
        self._lock = threading.Lock()

    def add(self, listener: SnapshotListener) -> Unsubscribe:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def emit(self, snapshot: PomodoroSnapshot) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                self._logger.exception("Pomodoro %s listener failed", self._event_name)


class PomodoroService:
    """Orchestrates a pomodoro session against wall-clock ticks.

    Commands never raise; ones that do not apply to the current state leave
    the session unchanged. Session mutation from commands and from the
    ticker thread is serialized, and listeners are called outside the lock
    so they may issue further commands.
    """

    def __init__(
        self,
        config: Optional[TimeConfiguration] = None,
        *,
        ticker_factory: Optional[TickerFactory] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config or TimeConfiguration()
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._lock = threading.RLock()
        self._session = PomodoroSession()
        self._tick_listeners = _ListenerRegistry("tick", self._logger)
        self._complete_listeners = _ListenerRegistry("session-complete", self._logger)
        self._closed = False

        if ticker_factory is None:
            self._ticker: Ticker = RecurringTicker(
                self._on_tick,
                logger=self._logger.getChild("ticker"),
            )
        else:
            self._ticker = ticker_factory(self._on_tick)

    def __enter__(self) -> "PomodoroService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def config(self) -> TimeConfiguration:
        return self._config

    @property
    def current_state(self) -> TimerState:
        with self._lock:
            return self._session.state

    @property
    def current_session_kind(self) -> SessionKind:
        with self._lock:
            return self._session.session_kind

    @property
    def remaining_seconds(self) -> int:
        with self._lock:
            return self._session.remaining_seconds

    @property
    def completed_work_count(self) -> int:
        with self._lock:
            return self._session.completed_work_count

    @property
    def is_ticking(self) -> bool:
        return self._ticker.is_running

    def snapshot(self) -> PomodoroSnapshot:
        with self._lock:
            return self._session.snapshot()

    def subscribe_tick(self, listener: SnapshotListener) -> Unsubscribe:
        return self._tick_listeners.add(listener)

    def subscribe_session_complete(self, listener: SnapshotListener) -> Unsubscribe:
        return self._complete_listeners.add(listener)

    def start_work(self) -> None:
        with self._lock:
            self._session.start(self._config.work_duration)
            self._start_ticker_locked()
            self._logger.info(
                "Work interval started: kind=%s remaining=%ss",
                self._session.session_kind.value,
                self._session.remaining_seconds,
            )

    def start_break(self) -> None:
        with self._lock:
            kind = choose_break_kind(
                self._session.completed_work_count,
                self._config.work_intervals_before_long_break,
            )
            if kind == SessionKind.LONG_BREAK:
                duration = self._config.long_break_duration
                # The counter restarts as the long break begins; resetting
                # first keeps the running break reported as a long break.
                self._session.reset_after_long_break()
            else:
                duration = self._config.short_break_duration

            self._session.start_break(kind, duration)
            self._start_ticker_locked()
            self._logger.info(
                "Break started: kind=%s remaining=%ss",
                kind.value,
                self._session.remaining_seconds,
            )

    def pause(self) -> None:
        with self._lock:
            before = self._session.state
            self._session.pause()
            self._ticker.stop()
            if self._session.state == before:
                self._logger.debug("Pause ignored: state=%s", before.value)
                return
            self._logger.info(
                "Pomodoro paused: kind=%s remaining=%ss",
                self._session.session_kind.value,
                self._session.remaining_seconds,
            )

    def resume(self) -> None:
        with self._lock:
            before = self._session.state
            self._session.resume()
            if self._session.state not in COUNTDOWN_STATES:
                self._logger.debug("Resume ignored: state=%s", before.value)
                return
            self._start_ticker_locked()
            if before == TimerState.PAUSED:
                self._logger.info(
                    "Pomodoro resumed: kind=%s remaining=%ss",
                    self._session.session_kind.value,
                    self._session.remaining_seconds,
                )

    def cancel_as_completed(self) -> None:
        with self._lock:
            self._ticker.stop()
            kind = self._session.session_kind
            if kind == SessionKind.WORK:
                self._session.complete_work()
                self._logger.info(
                    "Work interval marked completed: completed=%s",
                    self._session.completed_work_count,
                )
            else:
                self._session.complete_break()
                self._logger.info("Break marked completed: kind=%s", kind.value)
            snapshot = self._session.snapshot()

        # Breaks notify too so observers can refresh after a skipped break.
        self._complete_listeners.emit(snapshot)

    def cancel_as_incomplete(self) -> None:
        with self._lock:
            self._ticker.stop()
            kind = self._session.session_kind
            if kind == SessionKind.WORK:
                self._session.cancel()
                self._logger.info("Work interval cancelled")
            else:
                self._session.complete_break()
                self._logger.info("Break cancelled: kind=%s", kind.value)

    def close(self) -> None:
        """Release the ticker thread. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._ticker.close()
        self._logger.debug("Pomodoro service closed")

    def _start_ticker_locked(self) -> None:
        if self._closed:
            self._logger.warning("Pomodoro service is closed; ticker not started")
            return
        self._ticker.start()

    def _on_tick(self) -> None:
        with self._lock:
            if self._session.state not in COUNTDOWN_STATES:
                # Late tick delivered after pause, cancel, or completion.
                return
            self._session.tick()
            snapshot = self._session.snapshot()
            completed = snapshot.state == TimerState.COMPLETED
            if completed:
                self._ticker.stop()
                self._logger.info(
                    "Pomodoro completed: kind=%s completed=%s",
                    snapshot.session_kind.value,
                    snapshot.completed_work_count,
                )

        self._tick_listeners.emit(snapshot)
        if completed:
            self._complete_listeners.emit(snapshot)
