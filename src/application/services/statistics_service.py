from __future__ import annotations

from src.domain.entities import CardStatistic, MinutesPlayedStatistic
from src.domain.value_objects.enums import PersonKind
from src.repositories.managers import ManagersRepo
from src.repositories.players import PlayersRepo


class StatisticsService:
    """Card and playing-time leaderboards across players and managers.

    - Card leaderboards merge players and managers, highest count first.
    - On equal counts players come before managers.
    """

    def __init__(self, players: PlayersRepo, managers: ManagersRepo) -> None:
        self._players = players
        self._managers = managers

    def yellow_cards(self, limit: int = 10) -> list[CardStatistic]:
        return self._card_leaders(yellow=True, limit=limit)

    def red_cards(self, limit: int = 10) -> list[CardStatistic]:
        return self._card_leaders(yellow=False, limit=limit)

    def minutes_played(self, limit: int = 10) -> list[MinutesPlayedStatistic]:
        _check_limit(limit)
        return [
            MinutesPlayedStatistic(id=p.id or 0, name=p.name, minutes_played=p.minutes_played)
            for p in self._players.top_by_minutes_played(limit=limit)
        ]

    def _card_leaders(self, *, yellow: bool, limit: int) -> list[CardStatistic]:
        _check_limit(limit)
        stats: list[CardStatistic] = []
        for p in self._players.top_card_holders(yellow=yellow, limit=limit):
            stats.append(
                CardStatistic(
                    id=p.id or 0,
                    name=p.name,
                    card_count=p.yellow_card if yellow else p.red_card,
                    type=PersonKind.PLAYER,
                )
            )
        for m in self._managers.top_card_holders(yellow=yellow, limit=limit):
            stats.append(
                CardStatistic(
                    id=m.id or 0,
                    name=m.name,
                    card_count=m.yellow_card if yellow else m.red_card,
                    type=PersonKind.MANAGER,
                )
            )
        # sorted() is stable: players stay ahead of managers on equal counts
        stats = sorted(stats, key=lambda s: s.card_count, reverse=True)
        return stats[:limit]


def _check_limit(limit: int) -> None:
    if limit <= 0:
        raise ValueError("limit must be positive")
