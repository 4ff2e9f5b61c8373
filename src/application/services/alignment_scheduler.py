"""Periodic driver for the upcoming-match alignment sweep."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, ContextManager, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60.0


class _SweepProto(Protocol):
    def sweep(self, now: Optional[datetime] = None) -> int: ...


ScopeFactory = Callable[[], ContextManager[_SweepProto]]


class SchedulerState(str, Enum):
    STOPPED = "STOPPED"
    RUNNING = "RUNNING"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AlignmentScheduler:
    """Run one sweep per tick until :meth:`stop` is called.

    Every tick opens a fresh scope from ``scope_factory`` (a callable
    returning a context manager that yields something with ``sweep``), so
    storage and HTTP resources never outlive the tick. Errors raised by a
    tick are logged and the loop carries on.

    Cancellation is checked at the top of the loop and during the wait
    between ticks; a tick already running is allowed to finish.
    """

    def __init__(
        self,
        scope_factory: ScopeFactory,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._scope_factory = scope_factory
        self._interval = float(interval_seconds)
        self._clock = clock
        self._stop = stop_event or threading.Event()
        self._state = SchedulerState.STOPPED
        self._state_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self.ticks_completed = 0
        self.ticks_failed = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    def run(self) -> None:
        """Block and run ticks until stopped."""
        with self._state_lock:
            if self._state is SchedulerState.RUNNING:
                raise RuntimeError("Alignment scheduler is already running")
            self._state = SchedulerState.RUNNING

        logger.info("Background alignment service starting")
        try:
            while not self._stop.is_set():
                self.tick()
                if self._stop.wait(self._interval):
                    break
        finally:
            self._state = SchedulerState.STOPPED
            logger.info("Background alignment service stopped")

    def tick(self) -> Optional[int]:
        """Run a single sweep inside its own scope.

        Returns the notification count, or ``None`` if the tick failed.
        """
        try:
            with self._scope_factory() as run:
                count = run.sweep(self._clock())
        except Exception as exc:
            self.ticks_failed += 1
            logger.error("Error performing background alignment check: %s", exc, exc_info=True)
            return None

        self.ticks_completed += 1
        logger.info(
            "Found %d matches with incorrect alignments", count, extra={"notifications": count}
        )
        return count

    def start(self) -> threading.Thread:
        """Run the loop on a daemon thread and return it."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Alignment scheduler is already running")
        self._thread = threading.Thread(
            target=self.run, name="alignment-scheduler", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the background thread; return ``True`` once it has exited."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()
