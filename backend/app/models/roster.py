from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


class TeamPlayer(Base):
    """Roster membership. is_active=False means the player is a reserve."""

    __tablename__ = "team_players"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), index=True, nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), index=True, nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    team = relationship("Team", back_populates="memberships")
    player = relationship("Player", back_populates="memberships")

    __table_args__ = (UniqueConstraint("team_id", "player_id", name="uq_team_player"),)
