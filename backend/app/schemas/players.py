from datetime import date
from typing import Optional

from pydantic import BaseModel, StrictBool


class PlayerOut(BaseModel):
    id: int
    user_id: int
    name: str
    position: str
    jersey_number: Optional[int] = None
    birth_date: Optional[date] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    team_id: Optional[int] = None

    class Config:
        from_attributes = True


class PlayerStatusUpdate(BaseModel):
    is_active: StrictBool
