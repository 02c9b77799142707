from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_user, require_staff
from app.db.session import get_db
from app.models.players import Player
from app.models.roster import TeamPlayer
from app.schemas.players import PlayerOut, PlayerStatusUpdate
from app.services.rosters import get_player_or_404, set_player_active

router = APIRouter(prefix="/api/v1", tags=["players"])


@router.get("/players", response_model=list[PlayerOut])
def list_players(
    position: Optional[str] = None,
    free_only: bool = False,
    user=Depends(require_staff),
    db: Session = Depends(get_db),
):
    q = db.query(Player)
    if position:
        q = q.filter(Player.position == position.strip().upper())
    if free_only:
        # no active membership anywhere
        q = q.filter(~Player.memberships.any(TeamPlayer.is_active == True))  # noqa: E712
    return q.order_by(Player.id.asc()).all()


@router.get("/players/{player_id}", response_model=PlayerOut)
def get_player(player_id: int, user=Depends(get_current_user), db: Session = Depends(get_db)):
    return get_player_or_404(db, player_id)


@router.patch("/players/{player_id}/status")
def set_player_status(
    player_id: int,
    body: PlayerStatusUpdate,
    user=Depends(require_staff),
    db: Session = Depends(get_db),
):
    player = set_player_active(db, user, player_id, body.is_active)
    return {"success": True, "is_active": player.user.is_active}
