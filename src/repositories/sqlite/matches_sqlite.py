from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any, Optional, Sequence

from src.domain.entities import Manager, MatchSnapshot, Player, Referee
from src.domain.value_objects.enums import MatchStatus
from src.domain.value_objects.ids import ManagerId, MatchId, PlayerId, RefereeId

from ..errors import StorageError
from ..matches import Match, MatchesRepo
from .base import checked_rowid, from_db_timestamp, storage_errors, to_db_timestamp

_COLUMNS = "match_id, scheduled_start, status, house_manager_id, away_manager_id, referee_id"


class MatchesRepoSqlite(MatchesRepo):
    """SQLite implementation of :class:`MatchesRepo`.

    Snapshots are resolved eagerly: managers, referee and both lineups are
    loaded for every returned match. The ``managers``, ``referees`` and
    ``players`` tables must exist (see :mod:`src.db.migrate`).

    Example:
        >>> import sqlite3
        >>> from datetime import datetime, timezone
        >>> conn = sqlite3.connect(":memory:")
        >>> repo = MatchesRepoSqlite(conn)
        >>> match_id = repo.insert(Match(None, datetime(2025, 1, 1, tzinfo=timezone.utc)))
        >>> repo.get_by_id(match_id).status
        <MatchStatus.SCHEDULED: 'SCHEDULED'>
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        with storage_errors("matches"):
            self._conn.execute("PRAGMA foreign_keys = ON;")
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS matches (
                    match_id INTEGER PRIMARY KEY,
                    scheduled_start TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'SCHEDULED'
                        CHECK(status IN ('SCHEDULED','IN_PROGRESS','COMPLETED','CANCELLED')),
                    house_manager_id INTEGER REFERENCES managers(manager_id) ON DELETE SET NULL,
                    away_manager_id INTEGER REFERENCES managers(manager_id) ON DELETE SET NULL,
                    referee_id INTEGER REFERENCES referees(referee_id) ON DELETE SET NULL
                )
                """
            )
            self._conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_matches_status_start "
                "ON matches(status, scheduled_start)"
            )
            self._conn.commit()

    # -- snapshot queries -------------------------------------------------

    def find_upcoming(self, window_start: datetime, window_end: datetime) -> list[MatchSnapshot]:
        with storage_errors("matches"):
            rows = self._conn.execute(
                f"""
                SELECT {_COLUMNS}
                FROM matches
                WHERE status = ? AND scheduled_start >= ? AND scheduled_start <= ?
                ORDER BY scheduled_start, match_id
                """,
                (
                    MatchStatus.SCHEDULED.value,
                    to_db_timestamp(window_start),
                    to_db_timestamp(window_end),
                ),
            ).fetchall()
            return [self._resolve(self._row_to_match(r)) for r in rows]

    def find_by_id(self, match_id: int) -> Optional[MatchSnapshot]:
        with storage_errors("matches"):
            match = self.get_by_id(match_id)
            if match is None:
                return None
            return self._resolve(match)

    # -- plain rows -------------------------------------------------------

    def get_by_id(self, match_id: int) -> Optional[Match]:
        with storage_errors("matches"):
            row = self._conn.execute(
                f"SELECT {_COLUMNS} FROM matches WHERE match_id = ?",
                (match_id,),
            ).fetchone()
        if row:
            return self._row_to_match(row)
        return None

    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Match]:
        with storage_errors("matches"):
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM matches ORDER BY match_id LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
        return [self._row_to_match(r) for r in rows]

    def insert(self, match: Match) -> int:
        values = (
            to_db_timestamp(match.scheduled_start),
            MatchStatus(match.status).value,
            match.house_manager_id,
            match.away_manager_id,
            match.referee_id,
        )
        with storage_errors("matches"):
            if match.id is None:
                cur = self._conn.execute(
                    """
                    INSERT INTO matches
                        (scheduled_start, status, house_manager_id, away_manager_id, referee_id)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    values,
                )
            else:
                cur = self._conn.execute(
                    f"INSERT INTO matches ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    (match.id, *values),
                )
            self._conn.commit()
        return checked_rowid(cur, "matches")

    def update_status(self, match_id: int, status: MatchStatus) -> None:
        with storage_errors("matches"):
            self._conn.execute(
                "UPDATE matches SET status = ? WHERE match_id = ?",
                (MatchStatus(status).value, match_id),
            )
            self._conn.commit()

    def assign_players(
        self,
        match_id: int,
        *,
        house: Sequence[int] = (),
        away: Sequence[int] = (),
    ) -> None:
        with storage_errors("players"):
            self._conn.executemany(
                "UPDATE players SET house_match_id = ? WHERE player_id = ?",
                [(match_id, pid) for pid in house],
            )
            self._conn.executemany(
                "UPDATE players SET away_match_id = ? WHERE player_id = ?",
                [(match_id, pid) for pid in away],
            )
            self._conn.commit()

    def delete(self, match_id: int) -> None:
        with storage_errors("matches"):
            self._conn.execute("DELETE FROM matches WHERE match_id = ?", (match_id,))
            self._conn.commit()

    # -- helpers ----------------------------------------------------------

    def _row_to_match(self, row: Sequence[Any]) -> Match:
        # row: (match_id, scheduled_start, status, house_manager_id, away_manager_id, referee_id)
        return Match(
            id=int(row[0]),
            scheduled_start=from_db_timestamp(row[1], "matches"),
            status=MatchStatus(row[2]),
            house_manager_id=row[3],
            away_manager_id=row[4],
            referee_id=row[5],
        )

    def _resolve(self, match: Match) -> MatchSnapshot:
        if match.id is None:
            raise StorageError("Cannot resolve a match without an identifier", table="matches")
        return MatchSnapshot(
            id=MatchId(match.id),
            scheduled_start=match.scheduled_start,
            status=match.status,
            house_manager=self._load_manager(match.house_manager_id),
            away_manager=self._load_manager(match.away_manager_id),
            referee=self._load_referee(match.referee_id),
            house_players=self._load_lineup("house_match_id", match.id),
            away_players=self._load_lineup("away_match_id", match.id),
        )

    def _load_manager(self, manager_id: int | None) -> Manager | None:
        if manager_id is None:
            return None
        row = self._conn.execute(
            "SELECT manager_id, name, yellow_card, red_card FROM managers WHERE manager_id = ?",
            (manager_id,),
        ).fetchone()
        if row is None:
            return None
        return Manager(id=ManagerId(row[0]), name=row[1], yellow_card=row[2], red_card=row[3])

    def _load_referee(self, referee_id: int | None) -> Referee | None:
        if referee_id is None:
            return None
        row = self._conn.execute(
            "SELECT referee_id, name, minutes_played FROM referees WHERE referee_id = ?",
            (referee_id,),
        ).fetchone()
        if row is None:
            return None
        return Referee(id=RefereeId(row[0]), name=row[1], minutes_played=row[2])

    def _load_lineup(self, column: str, match_id: int) -> tuple[Player, ...]:
        rows = self._conn.execute(
            f"""
            SELECT player_id, name, yellow_card, red_card, minutes_played
            FROM players
            WHERE {column} = ?
            ORDER BY player_id
            """,
            (match_id,),
        ).fetchall()
        return tuple(
            Player(
                id=PlayerId(r[0]),
                name=r[1],
                yellow_card=r[2],
                red_card=r[3],
                minutes_played=r[4],
            )
            for r in rows
        )
