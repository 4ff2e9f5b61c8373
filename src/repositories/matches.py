from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from src.domain.entities import MatchSnapshot
from src.domain.value_objects.enums import MatchStatus


@dataclass
class Match:
    """Stored match row. Relations are kept as plain foreign keys."""

    id: int | None
    scheduled_start: datetime
    status: MatchStatus = MatchStatus.SCHEDULED
    house_manager_id: int | None = None
    away_manager_id: int | None = None
    referee_id: int | None = None


class MatchesRepo(ABC):
    """Abstract repository interface for matches.

    ``find_upcoming`` and ``find_by_id`` return fully resolved
    :class:`MatchSnapshot` objects, built fresh on every call. Storage
    failures surface as :class:`src.repositories.errors.StorageError`.
    """

    @abstractmethod
    def find_upcoming(self, window_start: datetime, window_end: datetime) -> list[MatchSnapshot]:
        """Return scheduled matches starting within the inclusive window."""

    @abstractmethod
    def find_by_id(self, match_id: int) -> Optional[MatchSnapshot]:
        """Return a resolved match snapshot if the match exists."""

    @abstractmethod
    def get_by_id(self, match_id: int) -> Optional[Match]:
        """Return the stored match row if present."""

    @abstractmethod
    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Match]:
        """List stored matches ordered by identifier with pagination."""

    @abstractmethod
    def insert(self, match: Match) -> int:
        """Persist a new match and return the assigned identifier."""

    @abstractmethod
    def update_status(self, match_id: int, status: MatchStatus) -> None:
        """Change the lifecycle status of a match."""

    @abstractmethod
    def assign_players(
        self,
        match_id: int,
        *,
        house: Sequence[int] = (),
        away: Sequence[int] = (),
    ) -> None:
        """Place players in the home and away lineups of a match."""

    @abstractmethod
    def delete(self, match_id: int) -> None:
        """Remove a match by its identifier."""
