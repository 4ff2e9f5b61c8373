from __future__ import annotations

import sqlite3
from typing import Optional

from ..managers import Manager, ManagersRepo
from .base import checked_rowid, storage_errors

_COLUMNS = "manager_id, name, yellow_card, red_card"


class ManagersRepoSqlite(ManagersRepo):
    """SQLite implementation of :class:`ManagersRepo`."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        with storage_errors("managers"):
            self._conn.execute("PRAGMA foreign_keys = ON;")
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS managers (
                    manager_id INTEGER PRIMARY KEY,
                    name TEXT,
                    yellow_card INTEGER NOT NULL DEFAULT 0 CHECK(yellow_card >= 0),
                    red_card INTEGER NOT NULL DEFAULT 0 CHECK(red_card >= 0)
                )
                """
            )
            self._conn.commit()

    def get_by_id(self, manager_id: int) -> Optional[Manager]:
        with storage_errors("managers"):
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM managers WHERE manager_id = ?",
                (manager_id,),
            ).fetchone()
        if row:
            return Manager(*row)
        return None

    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Manager]:
        with storage_errors("managers"):
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM managers ORDER BY manager_id LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [Manager(*row) for row in rows]

    def insert(self, manager: Manager) -> int:
        with storage_errors("managers"):
            if manager.id is None:
                cur = self._conn.execute(
                    "INSERT INTO managers (name, yellow_card, red_card) VALUES (?, ?, ?)",
                    (manager.name, manager.yellow_card, manager.red_card),
                )
            else:
                cur = self._conn.execute(
                    f"INSERT INTO managers ({_COLUMNS}) VALUES (?, ?, ?, ?)",
                    (manager.id, manager.name, manager.yellow_card, manager.red_card),
                )
            self._conn.commit()
        return checked_rowid(cur, "managers")

    def update(self, manager: Manager) -> None:
        with storage_errors("managers"):
            self._conn.execute(
                "UPDATE managers SET name = ?, yellow_card = ?, red_card = ? WHERE manager_id = ?",
                (manager.name, manager.yellow_card, manager.red_card, manager.id),
            )
            self._conn.commit()

    def delete(self, manager_id: int) -> None:
        with storage_errors("managers"):
            self._conn.execute("DELETE FROM managers WHERE manager_id = ?", (manager_id,))
            self._conn.commit()

    def top_card_holders(self, *, yellow: bool, limit: int = 10) -> list[Manager]:
        column = "yellow_card" if yellow else "red_card"
        with storage_errors("managers"):
            rows = self._conn.execute(
                f"""
                SELECT {_COLUMNS} FROM managers
                WHERE {column} > 0
                ORDER BY {column} DESC, manager_id
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [Manager(*row) for row in rows]
