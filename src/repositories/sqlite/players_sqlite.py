from __future__ import annotations

import sqlite3
from typing import Optional

from ..players import Player, PlayersRepo
from .base import checked_rowid, storage_errors

_COLUMNS = (
    "player_id, name, yellow_card, red_card, minutes_played, house_match_id, away_match_id"
)


class PlayersRepoSqlite(PlayersRepo):
    """SQLite implementation of :class:`PlayersRepo`.

    A player sits in at most one lineup slot per side, recorded through the
    ``house_match_id`` and ``away_match_id`` foreign keys.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        with storage_errors("players"):
            self._conn.execute("PRAGMA foreign_keys = ON;")
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    player_id INTEGER PRIMARY KEY,
                    name TEXT,
                    yellow_card INTEGER NOT NULL DEFAULT 0 CHECK(yellow_card >= 0),
                    red_card INTEGER NOT NULL DEFAULT 0 CHECK(red_card >= 0),
                    minutes_played INTEGER NOT NULL DEFAULT 0 CHECK(minutes_played >= 0),
                    house_match_id INTEGER REFERENCES matches(match_id) ON DELETE SET NULL,
                    away_match_id INTEGER REFERENCES matches(match_id) ON DELETE SET NULL
                )
                """
            )
            self._conn.commit()

    def get_by_id(self, player_id: int) -> Optional[Player]:
        with storage_errors("players"):
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM players WHERE player_id = ?",
                (player_id,),
            ).fetchone()
        if row:
            return Player(*row)
        return None

    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Player]:
        with storage_errors("players"):
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM players ORDER BY player_id LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [Player(*row) for row in rows]

    def insert(self, player: Player) -> int:
        values = (
            player.name,
            player.yellow_card,
            player.red_card,
            player.minutes_played,
            player.house_match_id,
            player.away_match_id,
        )
        with storage_errors("players"):
            if player.id is None:
                cur = self._conn.execute(
                    """
                    INSERT INTO players
                        (name, yellow_card, red_card, minutes_played, house_match_id, away_match_id)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    values,
                )
            else:
                cur = self._conn.execute(
                    f"INSERT INTO players ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (player.id, *values),
                )
            self._conn.commit()
        return checked_rowid(cur, "players")

    def update(self, player: Player) -> None:
        with storage_errors("players"):
            self._conn.execute(
                """
                UPDATE players
                SET name = ?, yellow_card = ?, red_card = ?, minutes_played = ?,
                    house_match_id = ?, away_match_id = ?
                WHERE player_id = ?
                """,
                (
                    player.name,
                    player.yellow_card,
                    player.red_card,
                    player.minutes_played,
                    player.house_match_id,
                    player.away_match_id,
                    player.id,
                ),
            )
            self._conn.commit()

    def delete(self, player_id: int) -> None:
        with storage_errors("players"):
            self._conn.execute("DELETE FROM players WHERE player_id = ?", (player_id,))
            self._conn.commit()

    def top_card_holders(self, *, yellow: bool, limit: int = 10) -> list[Player]:
        column = "yellow_card" if yellow else "red_card"
        with storage_errors("players"):
            rows = self._conn.execute(
                f"""
                SELECT {_COLUMNS} FROM players
                WHERE {column} > 0
                ORDER BY {column} DESC, player_id
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [Player(*row) for row in rows]

    def top_by_minutes_played(self, *, limit: int = 10) -> list[Player]:
        with storage_errors("players"):
            rows = self._conn.execute(
                f"""
                SELECT {_COLUMNS} FROM players
                WHERE minutes_played > 0
                ORDER BY minutes_played DESC, player_id
                LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [Player(*row) for row in rows]
