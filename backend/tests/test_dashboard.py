from datetime import datetime, timedelta

import pytest

from app.core.errors import NotFoundError
from app.models.events import Event, EventPlayer, EventTeam
from app.models.roster import TeamPlayer
from app.services.dashboard import admin_summary, coach_summary, dashboard_for, player_summary
from app.services.stats_aggregator import recompute_team_stats

NOW = datetime(2025, 6, 1, 12, 0)


@pytest.fixture
def make_event(db_session):
    def _make(title, event_type="TRAINING", days=1, team_ids=(), player_ids=()):
        start = NOW + timedelta(days=days)
        ev = Event(title=title, event_type=event_type, start_time=start, end_time=start + timedelta(hours=1))
        for tid in team_ids:
            ev.event_teams.append(EventTeam(team_id=tid))
        for pid in player_ids:
            ev.event_players.append(EventPlayer(player_id=pid))
        db_session.add(ev)
        db_session.commit()
        return ev

    return _make


def test_admin_counts(db_session, make_admin, make_coach, make_team, make_player, make_event):
    make_admin()
    make_coach()
    t1 = make_team("Lions")
    retired = make_team("Old Lions")
    retired.is_active = False
    db_session.commit()
    make_player(t1)
    make_player()
    make_event("Past practice", days=-3)
    make_event("Next practice", days=2)

    summary = admin_summary(db_session, NOW)

    assert summary == {"total_teams": 1, "total_players": 2, "total_coaches": 1, "upcoming_events": 1}


def test_coach_summary_scopes_to_own_teams(
    db_session, make_coach, make_team, make_player, make_match, make_event
):
    coach = make_coach()
    lions = make_team("Lions", coach)
    bears = make_team("Bears", coach)
    hawks = make_team("Hawks")
    p1 = make_player(lions)
    make_player(lions)
    db_session.add(TeamPlayer(team_id=bears.id, player_id=p1.id, is_active=True))
    db_session.commit()
    make_player(hawks)

    make_match(lions, hawks, 80, 70)
    make_match(hawks, lions, 75, 60)
    make_match(bears, hawks, 50, 50)
    for team in (lions, bears, hawks):
        recompute_team_stats(db_session, team.id)
    db_session.commit()

    make_event("Shooting drills", days=2, team_ids=[lions.id])
    make_event("Derby", event_type="MATCH", days=5, team_ids=[lions.id, bears.id])
    make_event("Season review", event_type="MEETING", days=40, team_ids=[lions.id])
    make_event("Yesterday", days=-1, team_ids=[lions.id])
    make_event("Not mine", days=3, team_ids=[hawks.id])

    summary = coach_summary(db_session, coach.coach, NOW)

    assert summary["total_teams"] == 2
    assert summary["total_players"] == 2
    assert summary["upcoming_events"] == 2
    assert summary["upcoming_events_by_type"] == {"trainings": 1, "matches": 1, "meetings": 0}
    assert summary["matches_stats"] == {
        "games_played": 3, "wins": 1, "losses": 1, "draws": 1, "win_rate": pytest.approx(33.3),
    }
    assert [t["name"] for t in summary["teams"]] == ["Bears", "Lions"]
    assert summary["teams"][1]["players_count"] == 2


def test_coach_without_teams_has_zero_win_rate(db_session, make_coach):
    coach = make_coach()

    summary = coach_summary(db_session, coach.coach, NOW)

    assert summary["total_teams"] == 0
    assert summary["upcoming_events"] == 0
    assert summary["matches_stats"]["win_rate"] == 0.0


def test_player_summary(db_session, make_coach, make_team, make_player, make_match, make_stat_line, make_event):
    coach = make_coach(first="Marta", last="Ruiz")
    lions = make_team("Lions", coach)
    hawks = make_team("Hawks")
    p = make_player(lions)
    m = make_match(lions, hawks, 80, 70)
    make_stat_line(m, p, points=18, rebounds=4)

    make_event("Old session", days=-2, player_ids=[p.id])
    for day in range(7, 0, -1):
        make_event(f"Session {day}", days=day, player_ids=[p.id])

    summary = player_summary(db_session, p, NOW)

    assert summary["team"] == {"id": lions.id, "name": "Lions", "coach": "Marta Ruiz"}
    assert [e["title"] for e in summary["upcoming_events"]] == [f"Session {d}" for d in range(1, 6)]
    assert summary["stats"]["games_played"] == 1
    assert summary["stats"]["points_per_game"] == 18.0
    assert summary["player"]["position"] == "CENTER"


def test_free_player_has_no_team(db_session, make_player):
    p = make_player()

    summary = player_summary(db_session, p, NOW)

    assert summary["team"] is None
    assert summary["upcoming_events"] == []
    assert summary["stats"]["games_played"] == 0


def test_coach_user_without_coach_row(db_session, make_admin):
    user = make_admin()
    user.role = "COACH"
    db_session.commit()

    with pytest.raises(NotFoundError):
        dashboard_for(db_session, user, NOW)


def test_dashboard_endpoint_per_role(client, auth, make_admin, make_coach, make_team, make_player):
    admin = make_admin()
    coach = make_coach()
    lions = make_team("Lions", coach)
    p = make_player(lions)

    body = client.get("/api/v1/dashboard", headers=auth(admin)).json()
    assert body["role"] == "ADMIN"
    assert body["total_teams"] == 1

    body = client.get("/api/v1/dashboard", headers=auth(coach)).json()
    assert body["role"] == "COACH"
    assert body["teams"][0]["name"] == "Lions"

    body = client.get("/api/v1/dashboard", headers=auth(p.user)).json()
    assert body["role"] == "PLAYER"
    assert body["team"]["name"] == "Lions"
    assert body["stats"]["games_played"] == 0


def test_dashboard_requires_auth(client):
    assert client.get("/api/v1/dashboard").status_code == 401
