from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class PlayerStatLineIn(BaseModel):
    points: Optional[int] = Field(default=None, ge=0)
    rebounds: Optional[int] = Field(default=None, ge=0)
    assists: Optional[int] = Field(default=None, ge=0)
    steals: Optional[int] = Field(default=None, ge=0)
    blocks: Optional[int] = Field(default=None, ge=0)
    turnovers: Optional[int] = Field(default=None, ge=0)
    minutes_played: Optional[int] = Field(default=None, ge=0, le=80)
    field_goals_made: Optional[int] = Field(default=None, ge=0)
    field_goals_attempted: Optional[int] = Field(default=None, ge=0)
    three_pointers_made: Optional[int] = Field(default=None, ge=0)
    three_pointers_attempted: Optional[int] = Field(default=None, ge=0)
    free_throws_made: Optional[int] = Field(default=None, ge=0)
    free_throws_attempted: Optional[int] = Field(default=None, ge=0)


class TeamTotalsOut(BaseModel):
    id: int
    name: str
    games_played: int
    wins: int
    losses: int
    draws: int
    points_for: int
    points_against: int


class TeamStatsRow(TeamTotalsOut):
    coach: Optional[str] = None
    players_count: int
    win_percentage: float


class PlayerTotalsOut(BaseModel):
    id: int
    name: str
    games_played: int

    points: int
    rebounds: int
    assists: int
    steals: int
    blocks: int
    turnovers: int
    minutes_played: int

    points_per_game: float
    rebounds_per_game: float
    assists_per_game: float
    steals_per_game: float
    blocks_per_game: float
    turnovers_per_game: float
    minutes_per_game: float

    field_goal_pct: float
    three_point_pct: float
    free_throw_pct: float


class PlayerStatsRow(PlayerTotalsOut):
    team: Optional[str] = None
    position: Optional[str] = None


class StatsSyncOut(BaseModel):
    success: bool = True
    results: list[dict]
