"""
Landing-page summaries, one per role. Counts are read live; team results come
from the stored totals the stats aggregator keeps up to date.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.core.club_config import EVENT_MATCH, EVENT_MEETING, EVENT_TRAINING
from app.core.errors import NotFoundError
from app.core.roles import ROLE_ADMIN, ROLE_COACH, ROLE_PLAYER
from app.models.coaches import Coach
from app.models.events import Event, EventPlayer, EventTeam
from app.models.players import Player
from app.models.teams import Team
from app.models.user import User
from app.services.stats_aggregator import recompute_player_stats

logger = logging.getLogger(__name__)

COACH_HORIZON_DAYS = 30
PLAYER_UPCOMING_LIMIT = 5


def _event_row(e: Event) -> dict:
    return {
        "id": e.id,
        "title": e.title,
        "event_type": e.event_type,
        "status": e.status,
        "start_time": e.start_time,
        "end_time": e.end_time,
        "location": e.location,
        "team_ids": e.team_ids,
    }


def admin_summary(db: Session, now: datetime) -> dict:
    return {
        "total_teams": db.query(Team).filter(Team.is_active == True).count(),  # noqa: E712
        "total_players": db.query(Player).count(),
        "total_coaches": db.query(Coach).count(),
        "upcoming_events": db.query(Event).filter(Event.start_time >= now).count(),
    }


def coach_summary(db: Session, coach: Coach, now: datetime) -> dict:
    teams = (
        db.query(Team)
        .filter(Team.coach_id == coach.id, Team.is_active == True)  # noqa: E712
        .order_by(Team.name.asc())
        .all()
    )
    team_ids = [t.id for t in teams]

    # A player on two of the coach's teams counts once
    player_ids: set[int] = set()
    for t in teams:
        player_ids.update(t.active_player_ids)

    upcoming = []
    if team_ids:
        upcoming = (
            db.query(Event)
            .join(EventTeam, EventTeam.event_id == Event.id)
            .filter(
                EventTeam.team_id.in_(team_ids),
                Event.start_time >= now,
                Event.start_time <= now + timedelta(days=COACH_HORIZON_DAYS),
            )
            .distinct()
            .order_by(Event.start_time.asc())
            .all()
        )
    by_type = Counter(e.event_type for e in upcoming)

    games = sum(t.games_played for t in teams)
    wins = sum(t.wins for t in teams)
    return {
        "total_teams": len(teams),
        "total_players": len(player_ids),
        "upcoming_events": len(upcoming),
        "upcoming_events_by_type": {
            "trainings": by_type[EVENT_TRAINING],
            "matches": by_type[EVENT_MATCH],
            "meetings": by_type[EVENT_MEETING],
        },
        "matches_stats": {
            "games_played": games,
            "wins": wins,
            "losses": sum(t.losses for t in teams),
            "draws": sum(t.draws for t in teams),
            "win_rate": round(wins / games * 100, 1) if games else 0.0,
        },
        "teams": [
            {
                "id": t.id,
                "name": t.name,
                "players_count": len(t.active_player_ids),
                "games_played": t.games_played,
                "wins": t.wins,
                "losses": t.losses,
                "draws": t.draws,
            }
            for t in teams
        ],
    }


def player_summary(db: Session, player: Player, now: datetime) -> dict:
    team = player.active_team
    team_row = None
    if team is not None:
        team_row = {
            "id": team.id,
            "name": team.name,
            "coach": team.coach.user.full_name if team.coach and team.coach.user else None,
        }

    upcoming = (
        db.query(Event)
        .join(EventPlayer, EventPlayer.event_id == Event.id)
        .filter(EventPlayer.player_id == player.id, Event.start_time >= now)
        .order_by(Event.start_time.asc())
        .limit(PLAYER_UPCOMING_LIMIT)
        .all()
    )

    return {
        "player": {
            "id": player.id,
            "name": player.name,
            "position": player.position,
            "jersey_number": player.jersey_number,
        },
        "team": team_row,
        "upcoming_events": [_event_row(e) for e in upcoming],
        "stats": recompute_player_stats(db, player.id).as_dict(),
    }


def dashboard_for(db: Session, user: User, now: datetime) -> dict:
    if user.role == ROLE_ADMIN:
        summary = admin_summary(db, now)
    elif user.role == ROLE_COACH:
        if user.coach is None:
            raise NotFoundError("No coach record for this user")
        summary = coach_summary(db, user.coach, now)
    elif user.role == ROLE_PLAYER:
        if user.player is None:
            raise NotFoundError("No player record for this user")
        summary = player_summary(db, user.player, now)
    else:
        raise NotFoundError(f"No dashboard for role {user.role}")

    logger.debug("Dashboard built for user %s (%s)", user.id, user.role)
    return {"role": user.role, **summary}
