import logging
import signal
import sys
import threading
from queue import Empty, Queue
from typing import Optional

from app_config import (
    AppConfigurationError,
    load_app_config,
    log_level_value,
)
from pomodoro import (
    PomodoroController,
    PomodoroService,
    PomodoroSnapshot,
    SessionKind,
    TimeConfiguration,
    TimerState,
)

EVENT_TICK = "tick"
EVENT_SESSION_COMPLETE = "session_complete"

_KIND_LABELS = {
    SessionKind.WORK: "Work",
    SessionKind.SHORT_BREAK: "Short break",
    SessionKind.LONG_BREAK: "Long break",
}


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(stop_event: threading.Event, logger: logging.Logger) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
        stop_event.set()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def format_duration(seconds: int) -> str:
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def status_message(snapshot: PomodoroSnapshot) -> str:
    label = _KIND_LABELS[snapshot.session_kind]
    remaining = format_duration(snapshot.remaining_seconds)
    if snapshot.state in (TimerState.RUNNING, TimerState.BREAK):
        return f"{label} running ({remaining} remaining)"
    if snapshot.state == TimerState.PAUSED:
        return f"{label} paused ({remaining} remaining)"
    if snapshot.state == TimerState.COMPLETED:
        return f"{label} completed"
    return f"Ready ({snapshot.completed_work_count} work intervals completed)"


def should_report_tick(snapshot: PomodoroSnapshot) -> bool:
    """Report once a minute, and every second of the final ten."""
    remaining = snapshot.remaining_seconds
    return remaining <= 10 or remaining % 60 == 0


def advance_cycle(service: PomodoroController, snapshot: PomodoroSnapshot) -> bool:
    """Move to the next interval after a countdown ran out.

    Only snapshots in the completed state trigger a transition; the
    acknowledgement raised by ``cancel_as_completed`` carries the ready state
    and is ignored. Returns True when a new interval was started.
    """
    if snapshot.state != TimerState.COMPLETED:
        return False

    if snapshot.session_kind == SessionKind.WORK:
        service.cancel_as_completed()
        service.start_break()
    else:
        service.cancel_as_incomplete()
        service.start_work()
    return True


def run(
    service: PomodoroController,
    *,
    stop_event: threading.Event,
    logger: logging.Logger,
    poll_timeout_seconds: float = 0.25,
) -> int:
    """Drive work and break intervals until ``stop_event`` is set."""
    event_queue: Queue = Queue()
    unsubscribe_tick = service.subscribe_tick(
        lambda snapshot: event_queue.put((EVENT_TICK, snapshot))
    )
    unsubscribe_complete = service.subscribe_session_complete(
        lambda snapshot: event_queue.put((EVENT_SESSION_COMPLETE, snapshot))
    )

    try:
        service.start_work()
        logger.info(status_message(service.snapshot()))

        while not stop_event.is_set():
            try:
                event_type, snapshot = event_queue.get(timeout=poll_timeout_seconds)
            except Empty:
                continue

            if event_type == EVENT_TICK:
                if should_report_tick(snapshot):
                    logger.info(status_message(snapshot))
                continue

            if advance_cycle(service, snapshot):
                logger.info(status_message(snapshot))
                logger.info(status_message(service.snapshot()))
    finally:
        unsubscribe_tick()
        unsubscribe_complete()

    return 0


def main() -> int:
    """Run pomodoro work and break intervals in the terminal."""
    logger = setup_logging(level=logging.INFO)

    try:
        app_config = load_app_config()
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(log_level_value(app_config.logging))
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    else:
        logger.info("No config file found; using defaults")

    stop_event = threading.Event()
    setup_signal_handlers(stop_event, logger)

    service: Optional[PomodoroService] = None
    try:
        service = PomodoroService(
            TimeConfiguration.from_settings(app_config.pomodoro),
            logger=logging.getLogger("pomodoro"),
        )
        return run(service, stop_event=stop_event, logger=logger)
    except KeyboardInterrupt:
        logger.info("Stopping by user request.")
        return 0
    finally:
        if service is not None:
            service.close()


if __name__ == "__main__":
    sys.exit(main())
