from __future__ import annotations

import logging
import os
from collections.abc import Generator
from datetime import datetime, timezone
from typing import Callable

import pytest

# Settings are built on import; give the required variable a harmless default
os.environ.setdefault("ALIGNMENT_API_BASE_URL", "http://alignment.test")

from src.domain.entities import Manager, MatchSnapshot, Player, Referee
from src.domain.value_objects.enums import MatchStatus
from src.domain.value_objects.ids import ManagerId, MatchId, PlayerId, RefereeId
from src.logging_config import LOG_NAME, PACKAGE_LOGGER

KICKOFF = datetime(2025, 3, 10, 18, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_logger_handlers() -> Generator[None, None, None]:
    """Keep project loggers free of handlers so caplog sees every record."""
    yield
    for name in (LOG_NAME, PACKAGE_LOGGER):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def _players(start: int, count: int) -> tuple[Player, ...]:
    return tuple(Player(id=PlayerId(start + i), name=f"P{start + i}") for i in range(count))


@pytest.fixture
def make_match() -> Callable[..., MatchSnapshot]:
    """Build a snapshot that is correctly aligned unless told otherwise."""

    def _make(
        match_id: int = 1,
        *,
        house: int = 11,
        away: int = 11,
        house_manager: bool = True,
        away_manager: bool = True,
        referee: bool = True,
        scheduled_start: datetime = KICKOFF,
        status: MatchStatus = MatchStatus.SCHEDULED,
    ) -> MatchSnapshot:
        return MatchSnapshot(
            id=MatchId(match_id),
            scheduled_start=scheduled_start,
            status=status,
            house_manager=Manager(id=ManagerId(1), name="Home Boss") if house_manager else None,
            away_manager=Manager(id=ManagerId(2), name="Away Boss") if away_manager else None,
            referee=Referee(id=RefereeId(1), name="Ref") if referee else None,
            house_players=_players(100, house),
            away_players=_players(200, away),
        )

    return _make
