from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Coach(Base):
    __tablename__ = "coaches"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    specialization = Column(String, nullable=True)   # e.g. "Youth basketball"
    experience = Column(Integer, nullable=True)      # years

    user = relationship("User", back_populates="coach", lazy="joined")
    teams = relationship("Team", back_populates="coach")
