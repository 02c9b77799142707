from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.club_config import ATTENDANCE_PLANNED, STATUS_SCHEDULED
from app.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(String, nullable=False, index=True)   # TRAINING / MATCH / MEETING / OTHER
    status = Column(String, nullable=False, default=STATUS_SCHEDULED)

    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    location = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # ORM-level cascades: deleting an event removes its links and its match
    event_teams = relationship("EventTeam", back_populates="event", cascade="all, delete-orphan")
    event_players = relationship("EventPlayer", back_populates="event", cascade="all, delete-orphan")
    match = relationship("Match", back_populates="event", uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_events_start_time", "start_time"),
    )

    @property
    def team_ids(self) -> list[int]:
        return sorted(et.team_id for et in self.event_teams)


class EventTeam(Base):
    __tablename__ = "event_teams"

    id = Column(Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)

    event = relationship("Event", back_populates="event_teams")
    team = relationship("Team")

    __table_args__ = (UniqueConstraint("event_id", "team_id", name="uq_event_team"),)


class EventPlayer(Base):
    __tablename__ = "event_players"

    id = Column(Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)

    attendance = Column(String, nullable=False, default=ATTENDANCE_PLANNED)

    event = relationship("Event", back_populates="event_players")
    player = relationship("Player")

    __table_args__ = (UniqueConstraint("event_id", "player_id", name="uq_event_player"),)
