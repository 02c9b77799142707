import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.core.roles import ROLE_ADMIN
from app.core.security import get_current_user, require_admin, require_staff
from app.db.session import get_db
from app.models.coaches import Coach
from app.models.teams import Team
from app.models.user import User
from app.schemas.teams import MembershipUpdate, RosterAdd, RosterPlayerOut, TeamCreate, TeamOut, TeamUpdate
from app.services import rosters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["teams"])


def _check_coach(db: Session, coach_id):
    if coach_id is not None and db.query(Coach).filter(Coach.id == coach_id).first() is None:
        raise NotFoundError(f"Coach {coach_id} not found")


@router.get("/teams", response_model=list[TeamOut])
def list_teams(
    active_only: bool = True,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    q = db.query(Team)
    if active_only:
        q = q.filter(Team.is_active == True)  # noqa: E712
    return q.order_by(Team.name.asc()).all()


@router.get("/teams/{team_id}", response_model=TeamOut)
def get_team(team_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return rosters.get_team_or_404(db, team_id)


@router.post("/teams", response_model=TeamOut, status_code=201)
def create_team(data: TeamCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    _check_coach(db, data.coach_id)

    team = Team(name=data.name.strip(), description=data.description, coach_id=data.coach_id, is_active=True)
    db.add(team)
    db.commit()
    db.refresh(team)
    logger.info("Created team %s (%s)", team.id, team.name)
    return team


@router.patch("/teams/{team_id}", response_model=TeamOut)
def update_team(
    team_id: int,
    data: TeamUpdate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db),
):
    team = rosters.get_team_or_404(db, team_id)
    rosters.ensure_can_manage_team(user, team)

    values = data.model_dump(exclude_unset=True)
    if user.role != ROLE_ADMIN:
        # coaches edit the presentation only
        values.pop("coach_id", None)
        values.pop("is_active", None)
    if "coach_id" in values:
        _check_coach(db, values["coach_id"])

    for k, v in values.items():
        setattr(team, k, v)

    db.commit()
    db.refresh(team)
    return team


@router.delete("/teams/{team_id}", status_code=204)
def delete_team(team_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    # Soft delete: matches and stats keep pointing at the team
    team = rosters.get_team_or_404(db, team_id)
    team.is_active = False
    db.commit()
    logger.info("Deactivated team %s", team_id)
    return Response(status_code=204)


@router.get("/teams/{team_id}/players", response_model=list[RosterPlayerOut])
def list_team_players(
    team_id: int,
    active_only: bool = False,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rosters.get_team_or_404(db, team_id)
    return rosters.roster_rows(db, team_id, active_only=active_only)


@router.post("/teams/{team_id}/players")
def add_team_player(
    team_id: int,
    data: RosterAdd,
    response: Response,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db),
):
    team = rosters.get_team_or_404(db, team_id)
    rosters.ensure_can_manage_team(user, team)

    membership, created = rosters.add_player_to_team(db, team_id, data.player_id, user.role)
    response.status_code = 201 if created else 200
    return {
        "team_id": membership.team_id,
        "player_id": membership.player_id,
        "is_active": membership.is_active,
        "created": created,
    }


@router.patch("/teams/{team_id}/players/{player_id}")
def update_team_player(
    team_id: int,
    player_id: int,
    data: MembershipUpdate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db),
):
    team = rosters.get_team_or_404(db, team_id)
    rosters.ensure_can_manage_team(user, team)

    membership = rosters.set_membership_active(db, team_id, player_id, data.is_active)
    return {"team_id": team_id, "player_id": player_id, "is_active": membership.is_active}


@router.delete("/teams/{team_id}/players/{player_id}")
def remove_team_player(
    team_id: int,
    player_id: int,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db),
):
    team = rosters.get_team_or_404(db, team_id)
    rosters.ensure_can_manage_team(user, team)

    rosters.remove_player_from_team(db, team_id, player_id)
    return {"success": True}
