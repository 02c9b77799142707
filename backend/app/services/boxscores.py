from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.errors import MalformedInputError, NotFoundError
from app.crud.crud_player_stat import upsert_player_stat
from app.models.matches import Match
from app.models.player_stats import PlayerStat
from app.models.players import Player
from app.services.stats_aggregator import update_match_stats

logger = logging.getLogger(__name__)

# (made, attempted) column pairs
SHOT_SPLITS = (
    ("field_goals_made", "field_goals_attempted"),
    ("three_pointers_made", "three_pointers_attempted"),
    ("free_throws_made", "free_throws_attempted"),
)


def _validate_shot_splits(row: PlayerStat) -> None:
    for made, attempted in SHOT_SPLITS:
        if getattr(row, made) > getattr(row, attempted):
            raise MalformedInputError(f"{made} cannot exceed {attempted}")
    if row.three_pointers_made > row.field_goals_made:
        raise MalformedInputError("three_pointers_made cannot exceed field_goals_made")


def record_player_stat_line(db: Session, match_id: int, player_id: int, values: dict) -> PlayerStat:
    """
    Enter or correct one boxscore line, then refresh the aggregates of the
    match (only has an effect once the match is COMPLETED).
    """
    match = db.query(Match).filter(Match.id == match_id).first()
    if match is None:
        raise NotFoundError(f"Match {match_id} not found")
    if db.query(Player.id).filter(Player.id == player_id).first() is None:
        raise NotFoundError(f"Player {player_id} not found")

    try:
        row, created = upsert_player_stat(db, match_id, player_id, values)
        _validate_shot_splits(row)
        update_match_stats(db, match_id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(row)
    logger.info("%s stat line match=%s player=%s", "Created" if created else "Updated", match_id, player_id)
    return row
