"""
Keeps an Event, its companion Match and the Match's PlayerStat rows consistent,
and re-runs the stats aggregator for everything an edit or delete touched.

Every public function here owns its transaction: writes are flushed as they go,
committed once at the end, and rolled back if anything raises.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from app.core.club_config import (
    ATTENDANCE_PLANNED,
    AWAY_TEAM_LABEL,
    EVENT_MATCH,
    STATUS_COMPLETED,
)
from app.core.config import settings
from app.core.errors import MalformedInputError, NotFoundError, PermissionDeniedError
from app.crud.crud_player_stat import active_roster_ids, is_zero_line, seed_zero_player_stats
from app.models.events import Event, EventPlayer, EventTeam
from app.models.matches import Match
from app.models.teams import Team
from app.schemas.events import EventCreate, EventUpdate, MatchPayload
from app.services.event_dates import require_event_datetime, resolve_event_datetime
from app.services.stats_aggregator import (
    recompute_player_stats,
    recompute_team_stats,
    update_match_stats,
)

logger = logging.getLogger(__name__)


@dataclass
class AffectedIds:
    team_ids: set[int] = field(default_factory=set)
    player_ids: set[int] = field(default_factory=set)


def get_event_or_404(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if event is None:
        raise NotFoundError(f"Event {event_id} not found")
    return event


def _ensure_teams_exist(db: Session, team_ids) -> list[int]:
    wanted = list(dict.fromkeys(team_ids))  # dedupe, keep order
    if not wanted:
        return []
    found = {tid for (tid,) in db.query(Team.id).filter(Team.id.in_(wanted)).all()}
    missing = [tid for tid in wanted if tid not in found]
    if missing:
        raise NotFoundError(f"Team(s) not found: {missing}")
    return wanted


def _with_away_team_name(description: Optional[str], away_team_name: str) -> str:
    line = f"{AWAY_TEAM_LABEL}: {away_team_name.strip()}"
    return f"{description}\n{line}" if description else line


def _drop_untouched_lines(db: Session, match: Match) -> int:
    """Remove all-zero stat lines of players on neither side of the match any more."""
    keep = set(active_roster_ids(db, match.home_team_id)) | set(active_roster_ids(db, match.away_team_id))
    dropped = 0
    for row in list(match.player_stats):
        if row.player_id in keep or not is_zero_line(row):
            continue
        match.player_stats.remove(row)  # delete-orphan
        dropped += 1
    if dropped:
        logger.info("Dropped %s untouched stat lines from match %s", dropped, match.id)
    return dropped


def _upsert_match(db: Session, event: Event, payload: MatchPayload) -> Match:
    away_team_id = payload.away_team_id or payload.home_team_id
    _ensure_teams_exist(db, [payload.home_team_id, away_team_id])

    match = event.match
    previous_home = match.home_team_id if match is not None else None
    if match is None:
        match = Match(home_team_id=payload.home_team_id, away_team_id=away_team_id)
        event.match = match

    match.home_team_id = payload.home_team_id
    # External opponents have no team row: the away side reuses the home team id
    match.away_team_id = away_team_id

    # Scores only change when sent, so a status-only edit keeps the result
    if "home_score" in payload.model_fields_set:
        match.home_score = payload.home_score
    if "away_score" in payload.model_fields_set:
        match.away_score = payload.away_score

    # Lines seeded for the old home roster go, entered values stay
    if previous_home is not None and previous_home != match.home_team_id:
        _drop_untouched_lines(db, match)
    return match


def _replace_event_teams(db: Session, event: Event, team_ids: list[int]) -> None:
    wanted = _ensure_teams_exist(db, team_ids)
    event.event_teams.clear()
    db.flush()  # old links gone before re-inserting the same (event, team) pairs
    for tid in wanted:
        event.event_teams.append(EventTeam(team_id=tid))


def _affected_by_match(match: Optional[Match]) -> AffectedIds:
    affected = AffectedIds()
    if match is None:
        return affected
    affected.team_ids.update({match.home_team_id, match.away_team_id})
    affected.player_ids.update(s.player_id for s in match.player_stats)
    return affected


def _seed_home_roster(db: Session, match: Match) -> int:
    created = seed_zero_player_stats(db, match.id, active_roster_ids(db, match.home_team_id))
    if created:
        logger.info("Seeded %s zero stat lines for match %s", created, match.id)
    return created


def create_event(db: Session, payload: EventCreate) -> Event:
    start_time = require_event_datetime(payload.start_time, field="start_time")
    end_time = require_event_datetime(payload.end_time, field="end_time")
    if end_time < start_time:
        raise MalformedInputError("end_time must not be before start_time")

    description = payload.description
    if payload.event_type == EVENT_MATCH and payload.match and payload.match.away_team_name:
        description = _with_away_team_name(description, payload.match.away_team_name)

    try:
        event = Event(
            title=payload.title.strip(),
            description=description,
            event_type=payload.event_type,
            status=payload.status,
            start_time=start_time,
            end_time=end_time,
            location=payload.location,
        )
        db.add(event)

        team_ids = _ensure_teams_exist(db, payload.team_ids)
        seen_players: set[int] = set()
        for tid in team_ids:
            event.event_teams.append(EventTeam(team_id=tid))
            for pid in active_roster_ids(db, tid):
                if pid in seen_players:
                    continue
                seen_players.add(pid)
                event.event_players.append(EventPlayer(player_id=pid, attendance=ATTENDANCE_PLANNED))

        if payload.event_type == EVENT_MATCH and payload.match is not None:
            match = _upsert_match(db, event, payload.match)
            match.status = event.status

        db.flush()

        if event.match is not None:
            if payload.sync_data or event.status == STATUS_COMPLETED:
                _seed_home_roster(db, event.match)
            if event.match.status == STATUS_COMPLETED:
                update_match_stats(db, event.match.id)

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(event)
    logger.info("Created event %s (%s)", event.id, event.event_type)
    return event


def update_event(db: Session, event_id: int, patch: EventUpdate) -> Event:
    event = get_event_or_404(db, event_id)
    data = patch.model_dump(exclude_unset=True)

    previous_match = event.match
    was_completed = previous_match is not None and previous_match.status == STATUS_COMPLETED
    previous = _affected_by_match(previous_match) if was_completed else AffectedIds()

    try:
        for attr in ("description", "location"):
            if attr in data:
                setattr(event, attr, data[attr])
        for attr in ("title", "event_type", "status"):
            if data.get(attr) is not None:
                setattr(event, attr, data[attr])

        strict = settings.STRICT_EVENT_DATES
        if "start_time" in data:
            event.start_time = resolve_event_datetime(data["start_time"], event.start_time, field="start_time", strict=strict)
        if "end_time" in data:
            event.end_time = resolve_event_datetime(data["end_time"], event.end_time, field="end_time", strict=strict)

        if patch.team_ids is not None:
            _replace_event_teams(db, event, patch.team_ids)

        if event.event_type == EVENT_MATCH and patch.match is not None:
            _upsert_match(db, event, patch.match)
        elif event.event_type != EVENT_MATCH and event.match is not None:
            logger.info("Event %s is no longer a match; deleting match %s", event.id, event.match.id)
            event.match = None  # delete-orphan removes the match and its stat lines

        # Event status is authoritative for the companion match
        match = event.match
        if match is not None:
            match.status = event.status

        db.flush()

        completed = match is not None and match.status == STATUS_COMPLETED
        if match is not None and (completed or patch.sync_data):
            _seed_home_roster(db, match)

        refreshed = AffectedIds()
        if completed:
            result = update_match_stats(db, match.id)
            refreshed.team_ids.update(t.id for t in result.teams)
            refreshed.player_ids.update(p.id for p in result.players)

        # A match that used to count (reverted, removed, teams swapped) must be
        # taken back out of the totals it contributed to
        for tid in sorted(previous.team_ids - refreshed.team_ids):
            recompute_team_stats(db, tid)
        for pid in sorted(previous.player_ids - refreshed.player_ids):
            recompute_player_stats(db, pid)

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(event)
    return event


def collect_affected(event: Event) -> AffectedIds:
    affected = AffectedIds()
    affected.team_ids.update(et.team_id for et in event.event_teams)
    affected.player_ids.update(ep.player_id for ep in event.event_players)
    if event.match is not None:
        affected.team_ids.update({event.match.home_team_id, event.match.away_team_id})
        affected.player_ids.update(s.player_id for s in event.match.player_stats)
    return affected


def delete_event(db: Session, event_id: int) -> None:
    event = get_event_or_404(db, event_id)

    # Collected before the cascade wipes the match and its stat lines
    affected = collect_affected(event)

    try:
        db.delete(event)
        db.flush()

        logger.info(
            "Deleted event %s; recomputing teams=%s players=%s",
            event_id, sorted(affected.team_ids), sorted(affected.player_ids),
        )
        for tid in sorted(affected.team_ids):
            recompute_team_stats(db, tid)
        for pid in sorted(affected.player_ids):
            recompute_player_stats(db, pid)

        db.commit()
    except Exception:
        db.rollback()
        raise


def set_attendance(db: Session, event_id: int, player_id: int, attendance: str) -> EventPlayer:
    get_event_or_404(db, event_id)

    link = (
        db.query(EventPlayer)
        .filter(EventPlayer.event_id == event_id, EventPlayer.player_id == player_id)
        .first()
    )
    if link is None:
        raise PermissionDeniedError("You are not linked to this event")

    link.attendance = attendance
    db.commit()
    db.refresh(link)
    return link
