from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    coach_id = Column(Integer, ForeignKey("coaches.id"), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Derived from COMPLETED matches; only written by the stats aggregator
    games_played = Column(Integer, nullable=False, default=0)
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)
    draws = Column(Integer, nullable=False, default=0)
    points_for = Column(Integer, nullable=False, default=0)
    points_against = Column(Integer, nullable=False, default=0)

    coach = relationship("Coach", back_populates="teams")
    memberships = relationship("TeamPlayer", back_populates="team", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_team_active_name", "is_active", "name"),
    )

    @property
    def active_player_ids(self) -> list[int]:
        return [m.player_id for m in self.memberships if m.is_active]
