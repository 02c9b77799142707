from datetime import date, datetime, time
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.errors import PermissionDeniedError
from app.core.roles import ROLE_ADMIN, ROLE_COACH, ROLE_PLAYER
from app.core.security import get_current_user, require_admin, require_player, require_staff
from app.db.session import get_db
from app.models.events import Event, EventPlayer, EventTeam
from app.models.matches import Match
from app.models.teams import Team
from app.models.user import User
from app.schemas.events import AttendanceUpdate, EventCreate, EventOut, EventPlayerOut, EventUpdate
from app.services import event_sync

router = APIRouter(prefix="/api/v1", tags=["events"])


def _coached_team_ids(db: Session, user: User) -> list[int]:
    if user.coach is None:
        return []
    return [tid for (tid,) in db.query(Team.id).filter(Team.coach_id == user.coach.id).all()]


def _ensure_can_edit(db: Session, user: User, event: Event) -> None:
    if user.role == ROLE_ADMIN:
        return
    if user.role == ROLE_COACH:
        linked = set(event.team_ids)
        if event.match is not None:
            linked.update({event.match.home_team_id, event.match.away_team_id})
        if linked & set(_coached_team_ids(db, user)):
            return
    raise PermissionDeniedError(f"Not allowed to edit event {event.id}")


@router.get("/events", response_model=list[EventOut])
def list_events(
    event_type: Optional[str] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    team_id: Optional[int] = None,
    search: Optional[str] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    q = db.query(Event)

    if event_type:
        q = q.filter(Event.event_type == event_type.strip().upper())
    if from_date:
        q = q.filter(Event.start_time >= datetime.combine(from_date, time.min))
    if to_date:
        q = q.filter(Event.start_time <= datetime.combine(to_date, time.max))
    if team_id is not None:
        q = q.filter(Event.event_teams.any(EventTeam.team_id == team_id))
    if search:
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                Event.title.ilike(term),
                Event.description.ilike(term),
                Event.location.ilike(term),
            )
        )

    # Non-admins only see what concerns them
    if user.role == ROLE_COACH:
        team_ids = _coached_team_ids(db, user)
        q = q.filter(
            or_(
                Event.event_teams.any(EventTeam.team_id.in_(team_ids)),
                Event.match.has(
                    or_(Match.home_team_id.in_(team_ids), Match.away_team_id.in_(team_ids))
                ),
            )
        )
    elif user.role == ROLE_PLAYER:
        player_id = user.player.id if user.player is not None else -1
        q = q.filter(Event.event_players.any(EventPlayer.player_id == player_id))

    return q.order_by(Event.start_time.asc(), Event.id.asc()).all()


@router.get("/events/{event_id}", response_model=EventOut)
def get_event(event_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return event_sync.get_event_or_404(db, event_id)


@router.post("/events", response_model=EventOut, status_code=201)
def create_event(data: EventCreate, user: User = Depends(require_staff), db: Session = Depends(get_db)):
    return event_sync.create_event(db, data)


@router.put("/events/{event_id}", response_model=EventOut)
def update_event(
    event_id: int,
    data: EventUpdate,
    user: User = Depends(require_staff),
    db: Session = Depends(get_db),
):
    event = event_sync.get_event_or_404(db, event_id)
    _ensure_can_edit(db, user, event)
    return event_sync.update_event(db, event_id, data)


@router.delete("/events/{event_id}")
def delete_event(event_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    event_sync.delete_event(db, event_id)
    return {"success": True}


@router.put("/events/{event_id}/attendance", response_model=EventPlayerOut)
def set_attendance(
    event_id: int,
    data: AttendanceUpdate,
    user: User = Depends(require_player),
    db: Session = Depends(get_db),
):
    return event_sync.set_attendance(db, event_id, user.player.id, data.attendance)
