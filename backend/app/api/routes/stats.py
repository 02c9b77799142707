from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_user, require_admin, require_staff
from app.db.session import get_db
from app.models.players import Player
from app.models.teams import Team
from app.schemas.stats import PlayerStatsRow, PlayerTotalsOut, StatsSyncOut, TeamStatsRow
from app.services.rosters import get_player_or_404
from app.services.stats_aggregator import recompute_player_stats, sync_all_team_stats

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])


@router.get("/teams", response_model=list[TeamStatsRow])
def team_stats(
    active_only: bool = True,
    user=Depends(require_staff),
    db: Session = Depends(get_db),
):
    q = db.query(Team)
    if active_only:
        q = q.filter(Team.is_active == True)  # noqa: E712

    out = []
    for t in q.order_by(Team.name.asc()).all():
        gp = t.games_played or 0
        out.append(
            {
                "id": t.id,
                "name": t.name,
                "coach": t.coach.user.full_name if t.coach and t.coach.user else None,
                "players_count": len(t.active_player_ids),
                "games_played": gp,
                "wins": t.wins,
                "losses": t.losses,
                "draws": t.draws,
                "points_for": t.points_for,
                "points_against": t.points_against,
                "win_percentage": (t.wins / gp * 100) if gp > 0 else 0.0,
            }
        )
    return out


@router.get("/players", response_model=list[PlayerStatsRow])
def player_stats(
    team_id: Optional[int] = None,
    user=Depends(require_staff),
    db: Session = Depends(get_db),
):
    # Player totals are not stored; computed per request
    players = db.query(Player).order_by(Player.id.asc()).all()

    out = []
    for p in players:
        team = p.active_team
        if team_id is not None and (team is None or team.id != team_id):
            continue
        row = recompute_player_stats(db, p.id).as_dict()
        row["team"] = team.name if team is not None else None
        row["position"] = p.position
        out.append(row)
    return out


@router.get("/players/{player_id}", response_model=PlayerTotalsOut)
def single_player_stats(player_id: int, user=Depends(get_current_user), db: Session = Depends(get_db)):
    get_player_or_404(db, player_id)
    return recompute_player_stats(db, player_id).as_dict()


@router.post("/sync", response_model=StatsSyncOut)
def sync_stats(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return {"success": True, "results": sync_all_team_stats(db)}
