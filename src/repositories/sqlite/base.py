from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from ..errors import StorageError


@contextmanager
def storage_errors(table: str) -> Iterator[None]:
    """Translate ``sqlite3`` failures into :class:`StorageError`."""
    try:
        yield
    except sqlite3.Error as exc:
        raise StorageError(f"SQLite error on table {table}: {exc}", table=table) from exc


def to_db_timestamp(value: datetime) -> str:
    # Fixed-width UTC text so that string comparison in SQL orders correctly
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_db_timestamp(value: str | datetime, table: str) -> datetime:
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(value)
        except ValueError as exc:
            raise StorageError(f"Invalid timestamp {value!r} in table {table}", table=table) from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def checked_rowid(cur: sqlite3.Cursor, table: str) -> int:
    rowid = cur.lastrowid
    if rowid is None:
        raise StorageError(f"SQLite insert failed: no lastrowid (table: {table})", table=table)
    return int(rowid)
