from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.enums import PersonKind


class CardStatistic(BaseModel):
    id: int
    name: str | None = None
    card_count: int = Field(..., ge=0)
    type: PersonKind

    model_config = ConfigDict(frozen=True)


class MinutesPlayedStatistic(BaseModel):
    id: int
    name: str | None = None
    minutes_played: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)
