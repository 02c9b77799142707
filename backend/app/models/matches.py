from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.core.club_config import STATUS_SCHEDULED
from app.db.base import Base


class Match(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), unique=True, nullable=False)

    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    # Same as home_team_id when the opponent is external (free text on the event)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)

    status = Column(String, nullable=False, default=STATUS_SCHEDULED)
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)

    event = relationship("Event", back_populates="match")
    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])
    player_stats = relationship("PlayerStat", back_populates="match", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_matches_home_status", "home_team_id", "status"),
        Index("ix_matches_away_status", "away_team_id", "status"),
    )

    @property
    def has_score(self) -> bool:
        return self.home_score is not None and self.away_score is not None
