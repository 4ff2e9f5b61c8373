from __future__ import annotations

import argparse
import os
import sqlite3
from typing import Iterable, Sequence

from src.application.services.statistics_service import StatisticsService
from src.domain.entities import CardStatistic, MinutesPlayedStatistic
from src.repositories.errors import StorageError
from src.repositories.sqlite.managers_sqlite import ManagersRepoSqlite
from src.repositories.sqlite.players_sqlite import PlayersRepoSqlite


def _format_cards(rows: Iterable[CardStatistic]) -> str:
    return "\n".join(
        f"{r.card_count:>3} | {r.name or '?'} [{r.type.value}, id={r.id}]" for r in rows
    )


def _format_minutes(rows: Iterable[MinutesPlayedStatistic]) -> str:
    return "\n".join(f"{r.minutes_played:>5} min | {r.name or '?'} [id={r.id}]" for r in rows)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Show card and playing-time leaderboards")
    p.add_argument(
        "--kind",
        choices=("yellow", "red", "minutes"),
        default="yellow",
        help="Leaderboard to show (default: yellow)",
    )
    p.add_argument("--limit", type=int, default=10, help="Number of rows (default: 10)")
    p.add_argument(
        "--db",
        default=os.getenv("DB_PATH") or os.path.join("data", "football.sqlite3"),
        help="Path to SQLite DB file",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.limit <= 0:
        parser.error("--limit must be positive")

    conn = sqlite3.connect(args.db)
    try:
        svc = StatisticsService(PlayersRepoSqlite(conn), ManagersRepoSqlite(conn))
        if args.kind == "minutes":
            minutes = svc.minutes_played(args.limit)
            out = _format_minutes(minutes)
        else:
            cards = svc.yellow_cards(args.limit) if args.kind == "yellow" else svc.red_cards(args.limit)
            out = _format_cards(cards)
    except StorageError as exc:
        print(f"Storage error: {exc}")
        return 2
    finally:
        conn.close()

    print(out if out else "No statistics found.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
