from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import require_staff
from app.db.session import get_db
from app.schemas.events import PlayerStatOut
from app.schemas.stats import PlayerStatLineIn
from app.services.boxscores import record_player_stat_line

router = APIRouter(prefix="/api/v1", tags=["matches"])


@router.put("/matches/{match_id}/player-stats/{player_id}", response_model=PlayerStatOut)
def put_player_stat_line(
    match_id: int,
    player_id: int,
    data: PlayerStatLineIn,
    user=Depends(require_staff),
    db: Session = Depends(get_db),
):
    return record_player_stat_line(db, match_id, player_id, data.model_dump(exclude_unset=True))
