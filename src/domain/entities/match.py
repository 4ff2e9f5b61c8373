from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..value_objects.enums import MatchStatus
from ..value_objects.ids import MatchId
from .people import Manager, Player, Referee


class MatchSnapshot(BaseModel):
    """Read-only view of a match with every relation resolved.

    Built fresh by the storage layer on each query; nothing holds on to it
    after one validation pass.
    """

    id: MatchId = Field(..., description="Unique identifier for the match")
    scheduled_start: datetime = Field(..., description="Kickoff time in UTC")
    status: MatchStatus = Field(..., description="Current match status")
    house_manager: Manager | None = Field(default=None, description="Home team manager")
    away_manager: Manager | None = Field(default=None, description="Away team manager")
    referee: Referee | None = Field(default=None, description="Assigned referee")
    house_players: tuple[Player, ...] = Field(default=(), description="Home team lineup")
    away_players: tuple[Player, ...] = Field(default=(), description="Away team lineup")

    model_config = ConfigDict(frozen=True)

    @field_validator("scheduled_start")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("scheduled_start must be timezone-aware")
        return v.astimezone(timezone.utc)
