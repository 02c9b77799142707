import logging
from typing import Tuple

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PermissionDeniedError
from app.core.roles import ROLE_ADMIN, ROLE_COACH
from app.models.players import Player
from app.models.roster import TeamPlayer
from app.models.teams import Team
from app.models.user import User

logger = logging.getLogger(__name__)


def get_team_or_404(db: Session, team_id: int) -> Team:
    team = db.query(Team).filter(Team.id == team_id).first()
    if team is None:
        raise NotFoundError(f"Team {team_id} not found")
    return team


def get_player_or_404(db: Session, player_id: int) -> Player:
    player = db.query(Player).filter(Player.id == player_id).first()
    if player is None:
        raise NotFoundError(f"Player {player_id} not found")
    return player


def add_player_to_team(db: Session, team_id: int, player_id: int, acting_role: str) -> Tuple[TeamPlayer, bool]:
    """
    Put a player on a team's active roster. Returns (membership, created).

    An inactive membership on the same team is reactivated instead of
    duplicated. A coach may only sign players who are free or inactive; an
    admin moving a player ends the other active membership.
    """
    get_team_or_404(db, team_id)
    player = get_player_or_404(db, player_id)

    other_active = (
        db.query(TeamPlayer)
        .filter(
            TeamPlayer.player_id == player_id,
            TeamPlayer.is_active == True,  # noqa: E712
            TeamPlayer.team_id != team_id,
        )
        .all()
    )
    if other_active and acting_role == ROLE_COACH and player.user.is_active:
        raise PermissionDeniedError(
            f"Player already plays for {other_active[0].team.name}; coaches can only add free or inactive players"
        )

    for m in other_active:
        m.is_active = False

    membership = db.query(TeamPlayer).filter_by(team_id=team_id, player_id=player_id).first()
    created = False
    if membership is None:
        membership = TeamPlayer(team_id=team_id, player_id=player_id, is_active=True)
        db.add(membership)
        created = True
    else:
        membership.is_active = True

    db.commit()
    db.refresh(membership)
    return membership, created


def set_membership_active(db: Session, team_id: int, player_id: int, is_active: bool) -> TeamPlayer:
    membership = db.query(TeamPlayer).filter_by(team_id=team_id, player_id=player_id).first()
    if membership is None:
        raise NotFoundError(f"Player {player_id} is not on team {team_id}")

    membership.is_active = bool(is_active)
    db.commit()
    db.refresh(membership)
    return membership


def remove_player_from_team(db: Session, team_id: int, player_id: int) -> None:
    membership = db.query(TeamPlayer).filter_by(team_id=team_id, player_id=player_id).first()
    if membership is None:
        raise NotFoundError(f"Player {player_id} is not on team {team_id}")

    db.delete(membership)
    db.commit()


def ensure_can_manage_team(user: User, team: Team) -> None:
    """Admins manage every team; a coach only the teams they coach."""
    if user.role == ROLE_ADMIN:
        return
    if user.role == ROLE_COACH and user.coach is not None and team.coach_id == user.coach.id:
        return
    raise PermissionDeniedError(f"Not allowed to manage team {team.id}")


def roster_rows(db: Session, team_id: int, active_only: bool = False) -> list[dict]:
    q = db.query(TeamPlayer).filter(TeamPlayer.team_id == team_id)
    if active_only:
        q = q.filter(TeamPlayer.is_active == True)  # noqa: E712

    rows = []
    for m in q.all():
        p = m.player
        rows.append(
            {
                "player_id": p.id,
                "name": p.name,
                "position": p.position,
                "jersey_number": p.jersey_number,
                "is_active_in_team": bool(m.is_active),
                "global_is_active": bool(p.user.is_active) if p.user else False,
            }
        )
    rows.sort(key=lambda r: (r["jersey_number"] is None, r["jersey_number"] or 0, r["name"]))
    return rows


def set_player_active(db: Session, user: User, player_id: int, is_active: bool) -> Player:
    """
    Enable or disable a player's account. Admins act on anyone; a coach only on
    players who have a membership (active or reserve) on one of their teams.
    """
    player = get_player_or_404(db, player_id)

    if user.role != ROLE_ADMIN:
        coach_id = user.coach.id if user.coach is not None else None
        on_my_team = (
            db.query(TeamPlayer)
            .join(Team, Team.id == TeamPlayer.team_id)
            .filter(TeamPlayer.player_id == player_id, Team.coach_id == coach_id)
            .first()
        )
        if coach_id is None or on_my_team is None:
            raise PermissionDeniedError("Player must be on one of your teams")

    player.user.is_active = bool(is_active)
    db.commit()
    db.refresh(player)
    logger.info("Player %s account set to is_active=%s by user %s", player.id, player.user.is_active, user.id)
    return player
