"""Recurring background tick source driving the pomodoro countdown."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .constants import (
    TICK_INTERVAL_SECONDS,
    TICKER_JOIN_TIMEOUT_SECONDS,
    TICKER_LOGGER_NAME,
    TICKER_THREAD_NAME,
)


class RecurringTicker:
    """Invokes ``callback`` every ``interval_seconds`` on a daemon thread.

    ``start()`` and ``stop()`` are idempotent. Stopping only prevents future
    callbacks; one that is already executing runs to completion. ``stop()``
    may be called from inside the callback itself.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        *,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        name: str = TICKER_THREAD_NAME,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")

        self._callback = callback
        self._interval_seconds = float(interval_seconds)
        self._name = name
        self._logger = logger or logging.getLogger(TICKER_LOGGER_NAME)
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self._closed = False

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        with self._lock:
            if self._closed:
                self._logger.warning("Ticker is closed; start ignored")
                return
            if self._stop_event is not None and not self._stop_event.is_set():
                return

            # Each run gets its own stop event so a thread that is still
            # finishing a callback cannot be revived by a later start().
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                daemon=True,
                name=self._name,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()
            self._logger.debug("Ticker started (interval=%.3fs)", self._interval_seconds)

    def stop(self) -> None:
        with self._lock:
            if self._stop_event is None or self._stop_event.is_set():
                return
            self._stop_event.set()
            self._logger.debug("Ticker stopped")

    def close(self, timeout_seconds: float = TICKER_JOIN_TIMEOUT_SECONDS) -> None:
        """Stop ticking and wait for the worker thread to exit."""
        self.stop()
        with self._lock:
            self._closed = True
            thread = self._thread
            self._thread = None

        if thread is None or thread is threading.current_thread():
            return

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error(
                "Ticker thread did not stop within %.1fs",
                timeout_seconds,
            )

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_seconds):
            try:
                self._callback()
            except Exception:
                self._logger.exception("Tick callback failed")
