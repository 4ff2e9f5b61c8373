from __future__ import annotations

import sqlite3
from typing import Optional

from ..referees import Referee, RefereesRepo
from .base import checked_rowid, storage_errors


class RefereesRepoSqlite(RefereesRepo):
    """SQLite implementation of :class:`RefereesRepo`."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        with storage_errors("referees"):
            self._conn.execute("PRAGMA foreign_keys = ON;")
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS referees (
                    referee_id INTEGER PRIMARY KEY,
                    name TEXT,
                    minutes_played INTEGER NOT NULL DEFAULT 0 CHECK(minutes_played >= 0)
                )
                """
            )
            self._conn.commit()

    def get_by_id(self, referee_id: int) -> Optional[Referee]:
        with storage_errors("referees"):
            row = self._conn.execute(
                "SELECT referee_id, name, minutes_played FROM referees WHERE referee_id = ?",
                (referee_id,),
            ).fetchone()
        if row:
            return Referee(*row)
        return None

    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Referee]:
        with storage_errors("referees"):
            rows = self._conn.execute(
                """
                SELECT referee_id, name, minutes_played FROM referees
                ORDER BY referee_id LIMIT ? OFFSET ?
                """,
                (limit, offset),
            ).fetchall()
        return [Referee(*row) for row in rows]

    def insert(self, referee: Referee) -> int:
        with storage_errors("referees"):
            if referee.id is None:
                cur = self._conn.execute(
                    "INSERT INTO referees (name, minutes_played) VALUES (?, ?)",
                    (referee.name, referee.minutes_played),
                )
            else:
                cur = self._conn.execute(
                    "INSERT INTO referees (referee_id, name, minutes_played) VALUES (?, ?, ?)",
                    (referee.id, referee.name, referee.minutes_played),
                )
            self._conn.commit()
        return checked_rowid(cur, "referees")

    def update(self, referee: Referee) -> None:
        with storage_errors("referees"):
            self._conn.execute(
                "UPDATE referees SET name = ?, minutes_played = ? WHERE referee_id = ?",
                (referee.name, referee.minutes_played, referee.id),
            )
            self._conn.commit()

    def delete(self, referee_id: int) -> None:
        with storage_errors("referees"):
            self._conn.execute("DELETE FROM referees WHERE referee_id = ?", (referee_id,))
            self._conn.commit()
