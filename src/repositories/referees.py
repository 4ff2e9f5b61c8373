from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class Referee:
    id: int | None
    name: str | None
    minutes_played: int = 0


class RefereesRepo(ABC):
    """Repository interface for referees."""

    @abstractmethod
    def get_by_id(self, referee_id: int) -> Optional[Referee]:
        """Retrieve a referee by identifier."""

    @abstractmethod
    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Referee]:
        """List referees ordered by identifier with pagination."""

    @abstractmethod
    def insert(self, referee: Referee) -> int:
        """Persist a new referee and return the assigned identifier."""

    @abstractmethod
    def update(self, referee: Referee) -> None:
        """Update an existing referee."""

    @abstractmethod
    def delete(self, referee_id: int) -> None:
        """Remove a referee by identifier."""
