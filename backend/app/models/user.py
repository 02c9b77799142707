from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class Role(Base):
    __tablename__ = "roles"

    name = Column(String, primary_key=True)  # ADMIN / COACH / PLAYER
    description = Column(String, nullable=True)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    role = Column(String, ForeignKey("roles.name"), nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
    coach = relationship("Coach", back_populates="user", uselist=False)
    player = relationship("Player", back_populates="user", uselist=False)

    @property
    def full_name(self) -> str:
        if self.profile is None:
            return self.email
        return f"{self.profile.first_name or ''} {self.profile.last_name or ''}".strip() or self.email

    @property
    def coach_id(self):
        return self.coach.id if self.coach is not None else None

    @property
    def player_id(self):
        return self.player.id if self.player is not None else None


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    user = relationship("User", back_populates="profile")
