from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class Player:
    """A player row; ``house_match_id``/``away_match_id`` place them in a lineup."""

    id: int | None
    name: str | None
    yellow_card: int = 0
    red_card: int = 0
    minutes_played: int = 0
    house_match_id: int | None = None
    away_match_id: int | None = None


class PlayersRepo(ABC):
    """Repository interface for players."""

    @abstractmethod
    def get_by_id(self, player_id: int) -> Optional[Player]:
        """Retrieve a player by identifier."""

    @abstractmethod
    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Player]:
        """List players ordered by identifier with pagination."""

    @abstractmethod
    def insert(self, player: Player) -> int:
        """Persist a new player and return the assigned identifier."""

    @abstractmethod
    def update(self, player: Player) -> None:
        """Update an existing player, including lineup placement."""

    @abstractmethod
    def delete(self, player_id: int) -> None:
        """Remove a player by identifier."""

    @abstractmethod
    def top_card_holders(self, *, yellow: bool, limit: int = 10) -> list[Player]:
        """Return players with the most yellow (or red) cards, highest first."""

    @abstractmethod
    def top_by_minutes_played(self, *, limit: int = 10) -> list[Player]:
        """Return players who have played, most minutes first."""
