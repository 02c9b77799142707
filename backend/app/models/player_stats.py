from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base

# Boxscore columns, in display order. All default to 0.
BOXSCORE_FIELDS = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "turnovers",
    "minutes_played",
    "field_goals_made",
    "field_goals_attempted",
    "three_pointers_made",
    "three_pointers_attempted",
    "free_throws_made",
    "free_throws_attempted",
)


class PlayerStat(Base):
    __tablename__ = "player_stats"

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("matches.id"), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)

    points = Column(Integer, nullable=False, default=0)
    rebounds = Column(Integer, nullable=False, default=0)
    assists = Column(Integer, nullable=False, default=0)
    steals = Column(Integer, nullable=False, default=0)
    blocks = Column(Integer, nullable=False, default=0)
    turnovers = Column(Integer, nullable=False, default=0)
    minutes_played = Column(Integer, nullable=False, default=0)

    field_goals_made = Column(Integer, nullable=False, default=0)
    field_goals_attempted = Column(Integer, nullable=False, default=0)
    three_pointers_made = Column(Integer, nullable=False, default=0)
    three_pointers_attempted = Column(Integer, nullable=False, default=0)
    free_throws_made = Column(Integer, nullable=False, default=0)
    free_throws_attempted = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    match = relationship("Match", back_populates="player_stats")
    player = relationship("Player", back_populates="stats")

    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uq_player_stat_match_player"),
    )
