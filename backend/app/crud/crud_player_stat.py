from sqlalchemy.orm import Session

from app.models.player_stats import BOXSCORE_FIELDS, PlayerStat
from app.models.roster import TeamPlayer


def active_roster_ids(db: Session, team_id: int) -> list[int]:
    rows = (
        db.query(TeamPlayer.player_id)
        .filter(TeamPlayer.team_id == team_id, TeamPlayer.is_active == True)  # noqa: E712
        .order_by(TeamPlayer.player_id.asc())
        .all()
    )
    return [pid for (pid,) in rows]


def is_zero_line(row: PlayerStat) -> bool:
    return all(not getattr(row, f) for f in BOXSCORE_FIELDS)


def seed_zero_player_stats(db: Session, match_id: int, player_ids: list[int]) -> int:
    """Create a zeroed line for each player missing one. Existing lines are left alone."""
    existing = {
        pid
        for (pid,) in db.query(PlayerStat.player_id).filter(PlayerStat.match_id == match_id).all()
    }

    created = 0
    for pid in player_ids:
        if pid in existing:
            continue
        db.add(PlayerStat(match_id=match_id, player_id=pid, **{f: 0 for f in BOXSCORE_FIELDS}))
        existing.add(pid)
        created += 1

    db.flush()
    return created


def upsert_player_stat(db: Session, match_id: int, player_id: int, values: dict) -> tuple[PlayerStat, bool]:
    row = (
        db.query(PlayerStat)
        .filter(PlayerStat.match_id == match_id, PlayerStat.player_id == player_id)
        .one_or_none()
    )

    created = False
    if row is None:
        row = PlayerStat(match_id=match_id, player_id=player_id, **{f: 0 for f in BOXSCORE_FIELDS})
        db.add(row)
        created = True

    # Only fields the caller sent; missing ones keep their value
    for f in BOXSCORE_FIELDS:
        if values.get(f) is not None:
            setattr(row, f, values[f])

    db.flush()
    return row, created
