from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

RoleName = Literal["ADMIN", "COACH", "PLAYER"]
Position = Literal["POINT_GUARD", "SHOOTING_GUARD", "SMALL_FORWARD", "POWER_FORWARD", "CENTER"]


class ProfileIn(BaseModel):
    first_name: str = Field(min_length=1, max_length=60)
    last_name: str = Field(min_length=1, max_length=60)
    phone: Optional[str] = Field(default=None, max_length=40)
    address: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = None


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=60)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=60)
    phone: Optional[str] = Field(default=None, max_length=40)
    address: Optional[str] = Field(default=None, max_length=200)
    avatar_url: Optional[str] = None


class CoachIn(BaseModel):
    specialization: Optional[str] = Field(default=None, max_length=120)
    experience: Optional[int] = Field(default=None, ge=0, le=80)


class PlayerIn(BaseModel):
    position: Position
    jersey_number: Optional[int] = Field(default=None, ge=0, le=99)
    birth_date: Optional[date] = None
    height: Optional[int] = Field(default=None, ge=100, le=260)
    weight: Optional[int] = Field(default=None, ge=30, le=200)


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=200)
    role: RoleName
    profile: ProfileIn
    coach: Optional[CoachIn] = None
    player: Optional[PlayerIn] = None


class UserUpdate(BaseModel):
    is_active: Optional[bool] = None
    profile: Optional[ProfileUpdate] = None
    coach: Optional[CoachIn] = None
    player: Optional[PlayerIn] = None


class RoleUpdate(BaseModel):
    role: RoleName


class UserOut(BaseModel):
    id: int
    email: str
    role: str
    is_active: bool
    full_name: str
    coach_id: Optional[int] = None
    player_id: Optional[int] = None

    model_config = {"from_attributes": True}


class RoleOut(BaseModel):
    name: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}
