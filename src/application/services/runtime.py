"""Explicit wiring of the alignment checker's collaborators.

Nothing here is global: a :class:`AlignmentRuntime` is built once at process
start from :class:`src.config.settings.Settings` and hands out per-tick
scopes to the scheduler.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Iterator

from src.application.services.alignment_scheduler import AlignmentScheduler
from src.application.services.alignment_service import AlignmentCheckRun
from src.infrastructure.alignment_api_client import AlignmentAPIClient
from src.infrastructure.ttl_cache import TTLCache
from src.repositories.sqlite.base import storage_errors
from src.repositories.sqlite.matches_sqlite import MatchesRepoSqlite

if TYPE_CHECKING:  # pragma: no cover
    from src.config.settings import Settings


class AlignmentRuntime:
    """Build alignment check runs with freshly opened resources.

    The notification ledger is created once here and shared by every scope,
    so renotification suppression survives across ticks.
    """

    def __init__(self, cfg: "Settings") -> None:
        self._cfg = cfg
        self.ledger: TTLCache[int, datetime] = TTLCache(cfg.notify_cooldown_seconds)

    @contextmanager
    def scope(self) -> Iterator[AlignmentCheckRun]:
        """Open a database connection and HTTP session, released on exit.

        Expired ledger entries are purged before anything is opened.
        """
        self.ledger.purge()
        with storage_errors("connection"):
            conn = sqlite3.connect(self._cfg.db_path)
        try:
            with AlignmentAPIClient(
                base_url=self._cfg.base_url,
                headers=self._cfg.headers,
                timeout=self._cfg.timeout,
            ) as client:
                yield AlignmentCheckRun(
                    MatchesRepoSqlite(conn),
                    client,
                    lookahead=timedelta(minutes=self._cfg.lookahead_minutes),
                    ledger=self.ledger,
                )
        finally:
            conn.close()

    def scheduler(self) -> AlignmentScheduler:
        return AlignmentScheduler(
            self.scope, interval_seconds=self._cfg.check_interval_seconds
        )
