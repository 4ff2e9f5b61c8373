"""Repository interfaces and implementations.

This package defines abstract repository interfaces for managers, referees,
players and matches, and the SQLite adapters under
:mod:`repositories.sqlite`. Every adapter raises
:class:`repositories.errors.StorageError` on database failures.
"""
