from sqlalchemy import Column, Date, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    position = Column(String, nullable=False)       # POINT_GUARD ... CENTER
    jersey_number = Column(Integer, nullable=True)
    birth_date = Column(Date, nullable=True)
    height = Column(Integer, nullable=True)         # cm
    weight = Column(Integer, nullable=True)         # kg

    user = relationship("User", back_populates="player", lazy="joined")
    memberships = relationship("TeamPlayer", back_populates="player", cascade="all, delete-orphan")
    stats = relationship("PlayerStat", back_populates="player")

    @property
    def name(self) -> str:
        return self.user.full_name if self.user else f"Player {self.id}"

    @property
    def active_team(self):
        # At most one active membership is expected; the first one wins
        for m in self.memberships:
            if m.is_active:
                return m.team
        return None

    @property
    def team_id(self):
        team = self.active_team
        return team.id if team is not None else None
