from __future__ import annotations


class StorageError(RuntimeError):
    """Raised when a repository query or the database connection fails.

    The underlying driver exception is chained as ``__cause__``; callers are
    not expected to interpret it.
    """

    def __init__(self, message: str, table: str | None = None) -> None:
        super().__init__(message)
        self.table = table
