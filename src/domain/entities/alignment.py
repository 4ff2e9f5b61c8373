from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from ..value_objects.enums import AlignmentOutcome, ViolationKind
from ..value_objects.ids import MatchId


class ViolationReport(BaseModel):
    """Ordered alignment violations found for one match.

    >>> ViolationReport(match_id=MatchId(1)).has_violation
    False
    """

    match_id: MatchId
    violations: tuple[str, ...] = ()
    kinds: tuple[ViolationKind, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _kinds_match_messages(self) -> "ViolationReport":
        if len(self.kinds) != len(self.violations):
            raise ValueError("Each violation message needs exactly one kind")
        return self

    @property
    def has_violation(self) -> bool:
        return len(self.violations) > 0


class AlignmentCheck(BaseModel):
    """Result of an on-demand alignment check for a single match."""

    match_id: MatchId
    outcome: AlignmentOutcome
    report: ViolationReport | None = None
    notified: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def is_correct(self) -> bool:
        return self.outcome is AlignmentOutcome.CORRECT
