from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

import pytest

from src.application.services.alignment_scheduler import AlignmentScheduler, SchedulerState
from src.repositories.errors import StorageError

NOW = datetime(2025, 3, 10, 17, 58, tzinfo=timezone.utc)
STARTING = "Background alignment service starting"


class _FakeRun:
    def __init__(self, behaviour: Callable[[int], int]) -> None:
        self.behaviour = behaviour
        self.calls: list[Optional[datetime]] = []

    def sweep(self, now: Optional[datetime] = None) -> int:
        self.calls.append(now)
        return self.behaviour(len(self.calls))


class _ScopeFactory:
    """Counts scope openings/closings around a shared fake run."""

    def __init__(self, run: _FakeRun) -> None:
        self.run = run
        self.opened = 0
        self.closed = 0

    @contextmanager
    def __call__(self) -> Iterator[_FakeRun]:
        self.opened += 1
        try:
            yield self.run
        finally:
            self.closed += 1


def _starting_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.getMessage() == STARTING]


def test_tick_runs_sweep_inside_scope_and_logs_count(caplog: pytest.LogCaptureFixture) -> None:
    factory = _ScopeFactory(_FakeRun(lambda n: 3))
    scheduler = AlignmentScheduler(factory, clock=lambda: NOW)

    with caplog.at_level(logging.INFO):
        assert scheduler.tick() == 3

    assert factory.run.calls == [NOW]
    assert factory.opened == factory.closed == 1
    assert scheduler.ticks_completed == 1
    assert any(
        r.getMessage() == "Found 3 matches with incorrect alignments" for r in caplog.records
    )


def test_tick_failure_is_logged_and_scope_released(caplog: pytest.LogCaptureFixture) -> None:
    def boom(n: int) -> int:
        raise StorageError("no such table: matches", table="matches")

    factory = _ScopeFactory(_FakeRun(boom))
    scheduler = AlignmentScheduler(factory)

    with caplog.at_level(logging.ERROR):
        assert scheduler.tick() is None

    assert factory.opened == factory.closed == 1
    assert scheduler.ticks_failed == 1
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors and "no such table" in errors[0].getMessage()


def test_scope_acquisition_failure_is_contained(caplog: pytest.LogCaptureFixture) -> None:
    @contextmanager
    def broken_scope() -> Iterator[_FakeRun]:
        raise StorageError("unable to open database file", table="connection")
        yield  # pragma: no cover

    scheduler = AlignmentScheduler(broken_scope)
    with caplog.at_level(logging.ERROR):
        assert scheduler.tick() is None
    assert scheduler.ticks_failed == 1


def test_loop_survives_failed_tick_and_runs_next(caplog: pytest.LogCaptureFixture) -> None:
    scheduler: AlignmentScheduler

    def behaviour(n: int) -> int:
        if n == 1:
            raise StorageError("database is locked", table="matches")
        scheduler.stop()
        return 2

    factory = _ScopeFactory(_FakeRun(behaviour))
    scheduler = AlignmentScheduler(factory, interval_seconds=0.01)

    with caplog.at_level(logging.INFO):
        scheduler.run()

    assert len(factory.run.calls) == 2
    assert factory.opened == factory.closed == 2
    assert scheduler.ticks_failed == 1 and scheduler.ticks_completed == 1
    assert len(_starting_records(caplog)) == 1
    assert scheduler.state is SchedulerState.STOPPED


def test_stop_before_run_emits_starting_once_and_skips_ticks(
    caplog: pytest.LogCaptureFixture,
) -> None:
    factory = _ScopeFactory(_FakeRun(lambda n: 0))
    scheduler = AlignmentScheduler(factory)
    scheduler.stop()

    with caplog.at_level(logging.INFO):
        scheduler.run()

    assert factory.opened == 0
    assert len(_starting_records(caplog)) == 1


def test_stop_lets_in_flight_tick_finish(caplog: pytest.LogCaptureFixture) -> None:
    entered = threading.Event()
    release = threading.Event()

    def slow(n: int) -> int:
        entered.set()
        assert release.wait(5)
        return 1

    factory = _ScopeFactory(_FakeRun(slow))
    scheduler = AlignmentScheduler(factory, interval_seconds=60)

    with caplog.at_level(logging.INFO):
        scheduler.start()
        assert entered.wait(5)
        assert scheduler.state is SchedulerState.RUNNING
        scheduler.stop()
        release.set()
        assert scheduler.join(timeout=5)

    assert scheduler.ticks_completed == 1
    assert len(factory.run.calls) == 1
    assert factory.opened == factory.closed == 1
    assert len(_starting_records(caplog)) == 1
    assert scheduler.state is SchedulerState.STOPPED


def test_stop_interrupts_wait_between_ticks() -> None:
    swept = threading.Event()

    def once(n: int) -> int:
        swept.set()
        return 0

    scheduler = AlignmentScheduler(_ScopeFactory(_FakeRun(once)), interval_seconds=3600)
    scheduler.start()
    assert swept.wait(5)
    scheduler.stop()
    # The hour-long wait must end right away
    assert scheduler.join(timeout=5)


def test_start_twice_raises() -> None:
    release = threading.Event()
    scheduler = AlignmentScheduler(
        _ScopeFactory(_FakeRun(lambda n: int(release.wait(5)))), interval_seconds=60
    )
    scheduler.start()
    try:
        with pytest.raises(RuntimeError):
            scheduler.start()
    finally:
        scheduler.stop()
        release.set()
        assert scheduler.join(timeout=5)


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        AlignmentScheduler(_ScopeFactory(_FakeRun(lambda n: 0)), interval_seconds=0)
