"""
Team and player statistics derived from COMPLETED matches.

Team totals are stored on the Team row but always recomputed from scratch and
assigned, never incremented, so any call is idempotent. Player totals have no
columns of their own: they are computed and returned to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from app.core.club_config import STATUS_COMPLETED
from app.core.errors import NotFoundError
from app.models.matches import Match
from app.models.player_stats import PlayerStat
from app.models.players import Player
from app.models.teams import Team

logger = logging.getLogger(__name__)


@dataclass
class TeamTotals:
    id: int
    name: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    points_for: int = 0
    points_against: int = 0

    def add_result(self, own_score: int, opponent_score: int) -> None:
        self.points_for += own_score
        self.points_against += opponent_score
        if own_score > opponent_score:
            self.wins += 1
        elif own_score < opponent_score:
            self.losses += 1
        else:
            self.draws += 1

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class PlayerTotals:
    id: int
    name: str
    games_played: int = 0

    points: int = 0
    rebounds: int = 0
    assists: int = 0
    steals: int = 0
    blocks: int = 0
    turnovers: int = 0
    minutes_played: int = 0

    points_per_game: float = 0.0
    rebounds_per_game: float = 0.0
    assists_per_game: float = 0.0
    steals_per_game: float = 0.0
    blocks_per_game: float = 0.0
    turnovers_per_game: float = 0.0
    minutes_per_game: float = 0.0

    field_goal_pct: float = 0.0
    three_point_pct: float = 0.0
    free_throw_pct: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class MatchRecompute:
    match_id: int
    teams: list[TeamTotals] = field(default_factory=list)
    players: list[PlayerTotals] = field(default_factory=list)


# (sum attribute on PlayerTotals, per-game attribute) pairs
_PER_GAME = (
    ("points", "points_per_game"),
    ("rebounds", "rebounds_per_game"),
    ("assists", "assists_per_game"),
    ("steals", "steals_per_game"),
    ("blocks", "blocks_per_game"),
    ("turnovers", "turnovers_per_game"),
    ("minutes_played", "minutes_per_game"),
)


def _pct(made: int, attempted: int) -> float:
    if not attempted:
        return 0.0
    return made / attempted * 100


def _completed_matches(db: Session, *criteria) -> list[Match]:
    return (
        db.query(Match)
        .filter(Match.status == STATUS_COMPLETED, *criteria)
        .order_by(Match.id.asc())
        .all()
    )


def recompute_team_stats(db: Session, team_id: int) -> TeamTotals:
    team = db.query(Team).filter(Team.id == team_id).first()
    if team is None:
        raise NotFoundError(f"Team {team_id} not found")

    totals = TeamTotals(id=team.id, name=team.name)
    seen: set[int] = set()

    home_matches = _completed_matches(db, Match.home_team_id == team_id)
    away_matches = _completed_matches(db, Match.away_team_id == team_id)

    for is_home, matches in ((True, home_matches), (False, away_matches)):
        for m in matches:
            if m.id in seen:
                continue
            if not m.has_score:
                logger.warning("Match %s is COMPLETED without a score; skipped for team %s", m.id, team_id)
                continue
            seen.add(m.id)
            if is_home:
                totals.add_result(m.home_score, m.away_score)
            else:
                totals.add_result(m.away_score, m.home_score)

    totals.games_played = len(seen)

    team.games_played = totals.games_played
    team.wins = totals.wins
    team.losses = totals.losses
    team.draws = totals.draws
    team.points_for = totals.points_for
    team.points_against = totals.points_against
    db.flush()

    logger.info(
        "Team %s stats: gp=%s w=%s l=%s d=%s pf=%s pa=%s",
        team_id, totals.games_played, totals.wins, totals.losses, totals.draws,
        totals.points_for, totals.points_against,
    )
    return totals


def recompute_player_stats(db: Session, player_id: int) -> PlayerTotals:
    player = db.query(Player).filter(Player.id == player_id).first()
    if player is None:
        raise NotFoundError(f"Player {player_id} not found")

    pairs = (
        db.query(PlayerStat, Match)
        .join(Match, Match.id == PlayerStat.match_id)
        .filter(PlayerStat.player_id == player_id, Match.status == STATUS_COMPLETED)
        .order_by(Match.id.asc())
        .all()
    )

    # Same rule as the team totals: a result without a score does not count
    rows = []
    for row, m in pairs:
        if not m.has_score:
            logger.warning("Match %s is COMPLETED without a score; skipped for player %s", m.id, player_id)
            continue
        rows.append(row)

    totals = PlayerTotals(id=player.id, name=player.name)
    if not rows:
        return totals

    games = len(rows)
    totals.games_played = games

    fgm = fga = tpm = tpa = ftm = fta = 0
    for r in rows:
        for total_attr, _ in _PER_GAME:
            setattr(totals, total_attr, getattr(totals, total_attr) + (getattr(r, total_attr) or 0))
        fgm += r.field_goals_made or 0
        fga += r.field_goals_attempted or 0
        tpm += r.three_pointers_made or 0
        tpa += r.three_pointers_attempted or 0
        ftm += r.free_throws_made or 0
        fta += r.free_throws_attempted or 0

    for total_attr, per_game_attr in _PER_GAME:
        setattr(totals, per_game_attr, getattr(totals, total_attr) / games)

    totals.field_goal_pct = _pct(fgm, fga)
    totals.three_point_pct = _pct(tpm, tpa)
    totals.free_throw_pct = _pct(ftm, fta)
    return totals


def update_match_stats(db: Session, match_id: int) -> Optional[MatchRecompute]:
    """Recompute both teams and every player of one match. No-op unless COMPLETED."""
    match = db.query(Match).filter(Match.id == match_id).first()
    if match is None:
        raise NotFoundError(f"Match {match_id} not found")

    if match.status != STATUS_COMPLETED:
        return None

    result = MatchRecompute(match_id=match.id)
    result.teams.append(recompute_team_stats(db, match.home_team_id))
    if match.away_team_id != match.home_team_id:
        result.teams.append(recompute_team_stats(db, match.away_team_id))

    # Queried rather than read from match.player_stats: rows seeded in this
    # transaction may not be in an already-loaded collection
    player_ids = [
        pid
        for (pid,) in db.query(PlayerStat.player_id)
        .filter(PlayerStat.match_id == match.id)
        .distinct()
        .order_by(PlayerStat.player_id.asc())
        .all()
    ]
    for pid in player_ids:
        result.players.append(recompute_player_stats(db, pid))

    return result


def sync_all_team_stats(db: Session) -> list[dict]:
    """
    Recompute every team. Each team is committed on its own so one failure
    only loses that team; failures are reported as {"id", "error"}.
    """
    team_ids = [tid for (tid,) in db.query(Team.id).order_by(Team.id.asc()).all()]

    results: list[dict] = []
    for team_id in team_ids:
        try:
            totals = recompute_team_stats(db, team_id)
            db.commit()
            results.append(totals.as_dict())
        except Exception as exc:
            db.rollback()
            logger.exception("Stats sync failed for team %s", team_id)
            results.append({"id": team_id, "error": str(exc) or exc.__class__.__name__})

    return results
