from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

EventType = Literal["TRAINING", "MATCH", "MEETING", "OTHER"]
EventStatus = Literal["SCHEDULED", "IN_PROGRESS", "COMPLETED", "CANCELLED", "POSTPONED"]
Attendance = Literal["PLANNED", "ATTENDED", "ABSENT", "EXCUSED"]


class MatchPayload(BaseModel):
    home_team_id: int
    away_team_id: Optional[int] = None
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    # External opponent not registered as a team (stored in the event description)
    away_team_name: Optional[str] = Field(default=None, max_length=120)


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    event_type: EventType
    start_time: str
    end_time: str
    location: Optional[str] = None
    status: EventStatus = "SCHEDULED"
    team_ids: list[int] = []
    match: Optional[MatchPayload] = None
    sync_data: bool = False


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    # Raw strings: parsed leniently (ISO, then DD.MM.YYYY HH:mm)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    status: Optional[EventStatus] = None
    team_ids: Optional[list[int]] = None
    match: Optional[MatchPayload] = None
    sync_data: bool = False


class AttendanceUpdate(BaseModel):
    attendance: Attendance


class PlayerStatOut(BaseModel):
    id: int
    match_id: int
    player_id: int
    points: int
    rebounds: int
    assists: int
    steals: int
    blocks: int
    turnovers: int
    minutes_played: int
    field_goals_made: int
    field_goals_attempted: int
    three_pointers_made: int
    three_pointers_attempted: int
    free_throws_made: int
    free_throws_attempted: int

    model_config = {"from_attributes": True}


class MatchOut(BaseModel):
    id: int
    event_id: int
    home_team_id: int
    away_team_id: int
    status: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    player_stats: list[PlayerStatOut] = []

    model_config = {"from_attributes": True}


class EventPlayerOut(BaseModel):
    player_id: int
    attendance: str

    model_config = {"from_attributes": True}


class EventOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    event_type: str
    status: str
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    team_ids: list[int] = []
    event_players: list[EventPlayerOut] = []
    match: Optional[MatchOut] = None

    model_config = {"from_attributes": True}
