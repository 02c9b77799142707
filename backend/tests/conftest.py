"""Shared pytest fixtures for the club backend tests."""
from datetime import datetime, timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.club_config import EVENT_MATCH, STATUS_COMPLETED
from app.core.roles import ROLE_ADMIN, ROLE_COACH, ROLE_PLAYER
from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.init_db import seed_roles
from app.models.coaches import Coach
from app.models.events import Event, EventTeam
from app.models.matches import Match
from app.models.player_stats import PlayerStat
from app.models.players import Player
from app.models.roster import TeamPlayer
from app.models.teams import Team
from app.models.user import Profile, User

KICKOFF = datetime(2025, 3, 1, 18, 0)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Fresh in-memory database per test."""
    # StaticPool keeps one connection so the TestClient threads see the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestSessionLocal()
    seed_roles(session)

    yield session

    session.close()
    engine.dispose()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    from app.main import app
    from app.db.session import get_db

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _user(db: Session, email: str, role: str, first: str = "Test", last: str = "User") -> User:
    u = User(email=email, password_hash=hash_password("secret123"), role=role, is_active=True)
    u.profile = Profile(first_name=first, last_name=last)
    db.add(u)
    return u


@pytest.fixture
def make_admin(db_session: Session):
    def _make(email: str = "admin@basketclub.org") -> User:
        u = _user(db_session, email, ROLE_ADMIN, "Club", "Admin")
        db_session.commit()
        return u

    return _make


@pytest.fixture
def make_coach(db_session: Session):
    def _make(email: str = "coach@basketclub.org", first: str = "Carla", last: str = "Coach") -> User:
        u = _user(db_session, email, ROLE_COACH, first, last)
        u.coach = Coach(specialization="Youth", experience=5)
        db_session.commit()
        return u

    return _make


@pytest.fixture
def make_team(db_session: Session):
    def _make(name: str, coach_user: User = None) -> Team:
        t = Team(name=name, coach_id=coach_user.coach.id if coach_user else None, is_active=True)
        db_session.add(t)
        db_session.commit()
        return t

    return _make


@pytest.fixture
def make_player(db_session: Session):
    counter = {"n": 0}

    def _make(team: Team = None, position: str = "CENTER", email: str = None, active: bool = True) -> Player:
        counter["n"] += 1
        n = counter["n"]
        u = _user(db_session, email or f"player{n}@basketclub.org", ROLE_PLAYER, "Player", str(n))
        u.is_active = active
        u.player = Player(position=position, jersey_number=n)
        db_session.flush()
        if team is not None:
            db_session.add(TeamPlayer(team_id=team.id, player_id=u.player.id, is_active=True))
        db_session.commit()
        return u.player

    return _make


@pytest.fixture
def make_match(db_session: Session):
    """Insert a MATCH event with its match row directly, bypassing the synchronizer."""
    counter = {"n": 0}

    def _make(home: Team, away: Team, home_score=None, away_score=None, status: str = STATUS_COMPLETED) -> Match:
        counter["n"] += 1
        start = KICKOFF + timedelta(days=counter["n"])
        ev = Event(
            title=f"{home.name} vs {away.name}",
            event_type=EVENT_MATCH,
            status=status,
            start_time=start,
            end_time=start + timedelta(hours=2),
        )
        ev.event_teams.append(EventTeam(team_id=home.id))
        if away.id != home.id:
            ev.event_teams.append(EventTeam(team_id=away.id))
        ev.match = Match(
            home_team_id=home.id,
            away_team_id=away.id,
            status=status,
            home_score=home_score,
            away_score=away_score,
        )
        db_session.add(ev)
        db_session.commit()
        return ev.match

    return _make


@pytest.fixture
def make_stat_line(db_session: Session):
    def _make(match: Match, player: Player, **values) -> PlayerStat:
        row = PlayerStat(match_id=match.id, player_id=player.id, **values)
        db_session.add(row)
        db_session.commit()
        return row

    return _make


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth():
    return auth_headers
