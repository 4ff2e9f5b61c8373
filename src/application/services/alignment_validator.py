"""Lineup and officiating rules for a match about to start.

A match is correctly aligned when both teams field exactly ``TEAM_SIZE``
players and both managers and the referee are assigned. Storage accepts
incomplete matches; the judgement is made only here.
"""

from __future__ import annotations

from src.domain.entities import MatchSnapshot, ViolationReport
from src.domain.value_objects.enums import ViolationKind

TEAM_SIZE = 11


def validate(match: MatchSnapshot) -> ViolationReport:
    """Return every alignment violation of ``match``, in rule order.

    Rules are evaluated independently, so a match missing its referee and
    one player reports both problems.
    """

    found: list[tuple[ViolationKind, str]] = []

    house_count = len(match.house_players)
    if house_count != TEAM_SIZE:
        found.append(
            (
                ViolationKind.HOUSE_PLAYER_COUNT,
                f"Home team has {house_count} players instead of {TEAM_SIZE}",
            )
        )

    away_count = len(match.away_players)
    if away_count != TEAM_SIZE:
        found.append(
            (
                ViolationKind.AWAY_PLAYER_COUNT,
                f"Away team has {away_count} players instead of {TEAM_SIZE}",
            )
        )

    if match.house_manager is None:
        found.append((ViolationKind.HOUSE_MANAGER_MISSING, "Home team has no manager assigned"))
    if match.away_manager is None:
        found.append((ViolationKind.AWAY_MANAGER_MISSING, "Away team has no manager assigned"))
    if match.referee is None:
        found.append((ViolationKind.REFEREE_MISSING, "Match has no referee assigned"))

    return ViolationReport(
        match_id=match.id,
        violations=tuple(message for _, message in found),
        kinds=tuple(kind for kind, _ in found),
    )
