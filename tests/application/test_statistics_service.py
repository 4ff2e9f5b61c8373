from __future__ import annotations

import sqlite3

import pytest

from src.application.services.statistics_service import StatisticsService
from src.db.migrate import apply_migrations
from src.domain.value_objects.enums import PersonKind
from src.repositories.managers import Manager
from src.repositories.players import Player
from src.repositories.sqlite.managers_sqlite import ManagersRepoSqlite
from src.repositories.sqlite.players_sqlite import PlayersRepoSqlite


def _service() -> StatisticsService:
    conn = sqlite3.connect(":memory:")
    apply_migrations(conn)
    players = PlayersRepoSqlite(conn)
    managers = ManagersRepoSqlite(conn)
    players.insert(Player(1, "Striker", yellow_card=5, red_card=1, minutes_played=900))
    players.insert(Player(2, "Keeper", yellow_card=0, red_card=0, minutes_played=1200))
    players.insert(Player(3, "Defender", yellow_card=3, red_card=2, minutes_played=450))
    players.insert(Player(4, "Bench"))
    managers.insert(Manager(10, "Coach", yellow_card=4, red_card=2))
    managers.insert(Manager(11, "Calm", yellow_card=0, red_card=0))
    return StatisticsService(players, managers)


def test_yellow_cards_merge_players_and_managers() -> None:
    stats = _service().yellow_cards(limit=10)
    assert [(s.id, s.card_count, s.type) for s in stats] == [
        (1, 5, PersonKind.PLAYER),
        (10, 4, PersonKind.MANAGER),
        (3, 3, PersonKind.PLAYER),
    ]


def test_red_cards_limit_and_tie_order() -> None:
    stats = _service().red_cards(limit=2)
    assert [(s.id, s.type) for s in stats] == [(3, PersonKind.PLAYER), (10, PersonKind.MANAGER)]


def test_minutes_played_ordering() -> None:
    stats = _service().minutes_played(limit=2)
    assert [(s.name, s.minutes_played) for s in stats] == [("Keeper", 1200), ("Striker", 900)]


def test_minutes_played_skips_players_who_never_played() -> None:
    stats = _service().minutes_played(limit=10)
    assert [s.name for s in stats] == ["Keeper", "Striker", "Defender"]

    conn = sqlite3.connect(":memory:")
    apply_migrations(conn)
    players = PlayersRepoSqlite(conn)
    players.insert(Player(1, "Bench"))
    assert StatisticsService(players, ManagersRepoSqlite(conn)).minutes_played(10) == []


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        _service().yellow_cards(limit=0)
