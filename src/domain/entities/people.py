from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..value_objects.ids import ManagerId, PlayerId, RefereeId


class Manager(BaseModel):
    id: ManagerId = Field(..., description="Unique identifier for the manager")
    name: str | None = Field(default=None, description="Display name")
    yellow_card: int = Field(default=0, ge=0, description="Yellow cards received")
    red_card: int = Field(default=0, ge=0, description="Red cards received")

    model_config = ConfigDict(frozen=True)


class Referee(BaseModel):
    id: RefereeId = Field(..., description="Unique identifier for the referee")
    name: str | None = Field(default=None, description="Display name")
    minutes_played: int = Field(default=0, ge=0, description="Minutes officiated")

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    id: PlayerId = Field(..., description="Unique identifier for the player")
    name: str | None = Field(default=None, description="Display name")
    yellow_card: int = Field(default=0, ge=0, description="Yellow cards received")
    red_card: int = Field(default=0, ge=0, description="Red cards received")
    minutes_played: int = Field(default=0, ge=0, description="Minutes on the pitch")

    model_config = ConfigDict(frozen=True)
