from typing import Optional

from pydantic import BaseModel, Field


class TeamOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    coach_id: int | None = None
    is_active: bool

    games_played: int
    wins: int
    losses: int
    draws: int
    points_for: int
    points_against: int

    class Config:
        from_attributes = True


class TeamCreate(BaseModel):
    name: str = Field(min_length=2, max_length=80)
    description: str | None = Field(default=None, max_length=500)
    coach_id: int | None = None


class TeamUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=80)
    description: str | None = Field(default=None, max_length=500)
    coach_id: int | None = None
    is_active: bool | None = None


class RosterAdd(BaseModel):
    player_id: int


class MembershipUpdate(BaseModel):
    is_active: bool


class RosterPlayerOut(BaseModel):
    player_id: int
    name: str
    position: str
    jersey_number: Optional[int] = None
    is_active_in_team: bool
    global_is_active: bool
