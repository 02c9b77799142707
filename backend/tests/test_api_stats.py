import pytest

from app.services import stats_aggregator


def test_sync_recomputes_all_teams(client, auth, make_admin, make_team, make_match):
    admin = make_admin()
    t1 = make_team("Lions")
    t2 = make_team("Hawks")
    make_match(t1, t2, 80, 70)
    make_match(t2, t1, 65, 60)

    r = client.post("/api/v1/stats/sync", headers=auth(admin))

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    lions = next(row for row in body["results"] if row["id"] == t1.id)
    assert lions == {
        "id": t1.id, "name": "Lions", "games_played": 2, "wins": 1, "losses": 1, "draws": 0,
        "points_for": 140, "points_against": 135,
    }


def test_sync_reports_failures_per_team(client, auth, make_admin, make_team, monkeypatch):
    admin = make_admin()
    t1 = make_team("Lions")
    t2 = make_team("Hawks")
    real = stats_aggregator.recompute_team_stats

    def flaky(db, team_id):
        if team_id == t2.id:
            raise RuntimeError("db hiccup")
        return real(db, team_id)

    monkeypatch.setattr(stats_aggregator, "recompute_team_stats", flaky)

    results = client.post("/api/v1/stats/sync", headers=auth(admin)).json()["results"]
    assert results[0]["id"] == t1.id and "error" not in results[0]
    assert results[1] == {"id": t2.id, "error": "db hiccup"}


def test_sync_requires_admin(client, auth, make_coach):
    assert client.post("/api/v1/stats/sync").status_code == 401
    assert client.post("/api/v1/stats/sync", headers=auth(make_coach())).status_code == 403


def test_team_stats_win_percentage(client, auth, make_admin, make_coach, make_team, make_player, make_match):
    admin = make_admin()
    coach = make_coach(first="Marta", last="Ruiz")
    t1 = make_team("Lions", coach)
    t2 = make_team("Hawks")
    make_player(t1)
    for score in ((80, 70), (70, 80), (90, 60), (50, 51)):
        make_match(t1, t2, *score)

    # Directly inserted matches only count after a sync
    lions = next(r for r in client.get("/api/v1/stats/teams", headers=auth(coach)).json() if r["id"] == t1.id)
    assert lions["games_played"] == 0
    assert lions["win_percentage"] == 0.0

    client.post("/api/v1/stats/sync", headers=auth(admin))

    lions = next(r for r in client.get("/api/v1/stats/teams", headers=auth(coach)).json() if r["id"] == t1.id)
    assert lions["coach"] == "Marta Ruiz"
    assert lions["players_count"] == 1
    assert lions["games_played"] == 4
    assert lions["win_percentage"] == 50.0


def test_stat_line_entry_updates_player_and_team(client, auth, make_coach, make_team, make_player, make_match):
    coach = make_coach()
    t1 = make_team("Lions", coach)
    t2 = make_team("Hawks")
    p = make_player(t1)
    m = make_match(t1, t2, 80, 70)

    r = client.put(
        f"/api/v1/matches/{m.id}/player-stats/{p.id}",
        json={"points": 21, "rebounds": 9, "field_goals_made": 9, "field_goals_attempted": 15,
              "three_pointers_made": 1, "three_pointers_attempted": 3},
        headers=auth(coach),
    )
    assert r.status_code == 200
    assert r.json()["points"] == 21
    assert r.json()["assists"] == 0

    # Partial correction keeps the other fields
    r = client.put(f"/api/v1/matches/{m.id}/player-stats/{p.id}", json={"assists": 4}, headers=auth(coach))
    assert (r.json()["points"], r.json()["assists"]) == (21, 4)

    player = client.get(f"/api/v1/stats/players/{p.id}", headers=auth(p.user)).json()
    assert player["games_played"] == 1
    assert player["points_per_game"] == 21.0
    assert player["field_goal_pct"] == pytest.approx(60.0)

    rows = client.get("/api/v1/stats/players", headers=auth(coach)).json()
    assert rows[0]["team"] == "Lions"
    assert rows[0]["position"] == "CENTER"

    lions = next(t for t in client.get("/api/v1/stats/teams", headers=auth(coach)).json() if t["id"] == t1.id)
    assert lions["wins"] == 1


def test_inconsistent_stat_line_is_rejected(client, auth, make_admin, make_team, make_player, make_match):
    admin = make_admin()
    t1 = make_team("Lions")
    p = make_player(t1)
    m = make_match(t1, t1, 60, 50)

    r = client.put(
        f"/api/v1/matches/{m.id}/player-stats/{p.id}",
        json={"free_throws_made": 5, "free_throws_attempted": 4},
        headers=auth(admin),
    )
    assert r.status_code == 422

    r = client.put(f"/api/v1/matches/999/player-stats/{p.id}", json={"points": 1}, headers=auth(admin))
    assert r.status_code == 404


def test_player_stats_unknown_player(client, auth, make_admin):
    assert client.get("/api/v1/stats/players/404", headers=auth(make_admin())).status_code == 404
