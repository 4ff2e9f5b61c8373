from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class Manager:
    id: int | None
    name: str | None
    yellow_card: int = 0
    red_card: int = 0


class ManagersRepo(ABC):
    """Repository interface for team managers."""

    @abstractmethod
    def get_by_id(self, manager_id: int) -> Optional[Manager]:
        """Retrieve a manager by identifier."""

    @abstractmethod
    def list_paginated(self, *, limit: int = 100, offset: int = 0) -> list[Manager]:
        """List managers ordered by identifier with pagination."""

    @abstractmethod
    def insert(self, manager: Manager) -> int:
        """Persist a new manager and return the assigned identifier."""

    @abstractmethod
    def update(self, manager: Manager) -> None:
        """Update an existing manager."""

    @abstractmethod
    def delete(self, manager_id: int) -> None:
        """Remove a manager by identifier."""

    @abstractmethod
    def top_card_holders(self, *, yellow: bool, limit: int = 10) -> list[Manager]:
        """Return managers with the most yellow (or red) cards, highest first."""
