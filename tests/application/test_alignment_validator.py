from __future__ import annotations

from typing import Callable

import pytest

from src.application.services.alignment_validator import TEAM_SIZE, validate
from src.domain.entities import MatchSnapshot
from src.domain.value_objects.enums import ViolationKind

MakeMatch = Callable[..., MatchSnapshot]


def test_complete_match_has_no_violations(make_match: MakeMatch) -> None:
    report = validate(make_match())
    assert report.violations == ()
    assert report.kinds == ()
    assert report.has_violation is False
    assert report.match_id == 1


@pytest.mark.parametrize("house", [10, 12])
def test_house_count_off_by_one_is_single_violation(make_match: MakeMatch, house: int) -> None:
    report = validate(make_match(house=house))
    assert report.kinds == (ViolationKind.HOUSE_PLAYER_COUNT,)
    assert report.violations == (f"Home team has {house} players instead of {TEAM_SIZE}",)
    assert report.has_violation


def test_empty_away_lineup_cites_zero(make_match: MakeMatch) -> None:
    report = validate(make_match(away=0))
    assert report.violations == ("Away team has 0 players instead of 11",)


def test_missing_officials_are_reported_separately(make_match: MakeMatch) -> None:
    report = validate(make_match(house_manager=False, away_manager=False, referee=False))
    assert report.kinds == (
        ViolationKind.HOUSE_MANAGER_MISSING,
        ViolationKind.AWAY_MANAGER_MISSING,
        ViolationKind.REFEREE_MISSING,
    )
    assert report.violations == (
        "Home team has no manager assigned",
        "Away team has no manager assigned",
        "Match has no referee assigned",
    )


def test_all_rules_collected_in_order(make_match: MakeMatch) -> None:
    report = validate(
        make_match(house=3, away=15, house_manager=False, away_manager=False, referee=False)
    )
    assert report.kinds == tuple(ViolationKind)
    assert len(report.violations) == 5


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({"house": 9}, {ViolationKind.HOUSE_PLAYER_COUNT}),
        ({"away": 12}, {ViolationKind.AWAY_PLAYER_COUNT}),
        ({"house_manager": False}, {ViolationKind.HOUSE_MANAGER_MISSING}),
        ({"away_manager": False}, {ViolationKind.AWAY_MANAGER_MISSING}),
        ({"referee": False}, {ViolationKind.REFEREE_MISSING}),
        (
            {"house": 0, "referee": False},
            {ViolationKind.HOUSE_PLAYER_COUNT, ViolationKind.REFEREE_MISSING},
        ),
        (
            {"away": 10, "away_manager": False},
            {ViolationKind.AWAY_PLAYER_COUNT, ViolationKind.AWAY_MANAGER_MISSING},
        ),
    ],
)
def test_each_broken_rule_yields_its_own_kind(
    make_match: MakeMatch, kwargs: dict, expected: set[ViolationKind]
) -> None:
    report = validate(make_match(**kwargs))
    assert set(report.kinds) == expected
    assert len(report.kinds) == len(expected)


def test_validate_does_not_mutate_input(make_match: MakeMatch) -> None:
    match = make_match(house=4, referee=False)
    before = match.model_dump()
    validate(match)
    validate(match)
    assert match.model_dump() == before


def test_validate_is_deterministic(make_match: MakeMatch) -> None:
    match = make_match(away=7, house_manager=False)
    assert validate(match) == validate(match)
