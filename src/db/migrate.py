"""Simple SQLite migration runner."""

from __future__ import annotations

import re
import sqlite3
from pathlib import Path
from typing import Iterable

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def applied_versions(cursor: sqlite3.Cursor) -> set[str]:
    cursor.execute("CREATE TABLE IF NOT EXISTS schema_migrations (version TEXT PRIMARY KEY)")
    rows = cursor.execute("SELECT version FROM schema_migrations").fetchall()
    return {row[0] for row in rows}


def available_migrations(directory: Path = MIGRATIONS_DIR) -> Iterable[tuple[str, Path]]:
    pattern = re.compile(r"V(\d+)__.+\.sql$")
    found: list[tuple[int, str, Path]] = []
    for path in directory.glob("V*__*.sql"):
        match = pattern.match(path.name)
        if match:
            found.append((int(match.group(1)), match.group(1), path))
    for _, version, path in sorted(found):
        yield version, path


def apply_migrations(conn: sqlite3.Connection, directory: Path = MIGRATIONS_DIR) -> list[str]:
    """Apply pending migrations on ``conn`` and return the versions applied."""
    cursor = conn.cursor()
    done = applied_versions(cursor)
    applied: list[str] = []
    for version, path in available_migrations(directory):
        if version in done:
            continue
        cursor.executescript(path.read_text(encoding="utf-8"))
        cursor.execute("INSERT INTO schema_migrations (version) VALUES (?)", (version,))
        conn.commit()
        applied.append(version)
    return applied


def run_migrations(db_path: Path | str) -> list[str]:
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        return apply_migrations(conn)
    finally:
        conn.close()


if __name__ == "__main__":
    from src.config.settings import settings

    run_migrations(settings.db_path)
