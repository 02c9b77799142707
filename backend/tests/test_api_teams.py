from app.models.roster import TeamPlayer
from app.models.teams import Team


def test_admin_creates_and_soft_deletes_team(client, auth, make_admin, make_coach, db_session):
    admin = make_admin()
    coach = make_coach()

    r = client.post(
        "/api/v1/teams",
        json={"name": "Lions U16", "description": "Youth", "coach_id": coach.coach.id},
        headers=auth(admin),
    )
    assert r.status_code == 201
    team = r.json()
    assert team["games_played"] == 0
    assert team["coach_id"] == coach.coach.id

    assert client.delete(f"/api/v1/teams/{team['id']}", headers=auth(admin)).status_code == 204

    db_session.expire_all()
    assert db_session.query(Team).filter(Team.id == team["id"]).one().is_active is False
    assert client.get("/api/v1/teams", headers=auth(admin)).json() == []
    assert len(client.get("/api/v1/teams?active_only=false", headers=auth(admin)).json()) == 1


def test_create_team_unknown_coach(client, auth, make_admin):
    r = client.post("/api/v1/teams", json={"name": "Lions", "coach_id": 77}, headers=auth(make_admin()))
    assert r.status_code == 404


def test_coach_edits_only_own_team(client, auth, make_coach, make_team):
    coach = make_coach()
    mine = make_team("Lions", coach)
    other = make_team("Hawks")

    r = client.patch(f"/api/v1/teams/{mine.id}", json={"description": "New look", "is_active": False},
                     headers=auth(coach))
    assert r.status_code == 200
    assert r.json()["description"] == "New look"
    assert r.json()["is_active"] is True

    r = client.patch(f"/api/v1/teams/{other.id}", json={"description": "Nope"}, headers=auth(coach))
    assert r.status_code == 403


def test_roster_add_list_patch_remove(client, auth, make_admin, make_team, make_player, db_session):
    admin = make_admin()
    team = make_team("Lions")
    p = make_player()

    r = client.post(f"/api/v1/teams/{team.id}/players", json={"player_id": p.id}, headers=auth(admin))
    assert r.status_code == 201
    assert r.json()["created"] is True

    roster = client.get(f"/api/v1/teams/{team.id}/players", headers=auth(admin)).json()
    assert [row["player_id"] for row in roster] == [p.id]
    assert roster[0]["is_active_in_team"] is True

    r = client.patch(f"/api/v1/teams/{team.id}/players/{p.id}", json={"is_active": False}, headers=auth(admin))
    assert r.json()["is_active"] is False

    # Re-adding reactivates instead of duplicating
    r = client.post(f"/api/v1/teams/{team.id}/players", json={"player_id": p.id}, headers=auth(admin))
    assert r.status_code == 200
    assert db_session.query(TeamPlayer).count() == 1

    r = client.delete(f"/api/v1/teams/{team.id}/players/{p.id}", headers=auth(admin))
    assert r.json() == {"success": True}
    assert db_session.query(TeamPlayer).count() == 0

    assert client.delete(f"/api/v1/teams/{team.id}/players/{p.id}", headers=auth(admin)).status_code == 404


def test_admin_move_ends_previous_membership(client, auth, make_admin, make_team, make_player, db_session):
    admin = make_admin()
    old = make_team("Lions")
    new = make_team("Hawks")
    p = make_player(old)

    r = client.post(f"/api/v1/teams/{new.id}/players", json={"player_id": p.id}, headers=auth(admin))
    assert r.status_code == 201

    db_session.expire_all()
    active = db_session.query(TeamPlayer).filter(TeamPlayer.is_active == True).all()  # noqa: E712
    assert [(m.team_id, m.player_id) for m in active] == [(new.id, p.id)]


def test_coach_cannot_poach_active_player(client, auth, make_coach, make_team, make_player):
    coach = make_coach()
    mine = make_team("Lions", coach)
    other = make_team("Hawks")
    busy = make_player(other)
    retired = make_player(other, active=False)

    r = client.post(f"/api/v1/teams/{mine.id}/players", json={"player_id": busy.id}, headers=auth(coach))
    assert r.status_code == 403

    r = client.post(f"/api/v1/teams/{mine.id}/players", json={"player_id": retired.id}, headers=auth(coach))
    assert r.status_code == 201


def test_player_cannot_manage_rosters(client, auth, make_team, make_player):
    team = make_team("Lions")
    p = make_player(team)

    r = client.post(f"/api/v1/teams/{team.id}/players", json={"player_id": p.id}, headers=auth(p.user))
    assert r.status_code == 403


def test_list_free_players(client, auth, make_coach, make_team, make_player):
    coach = make_coach()
    team = make_team("Lions", coach)
    signed = make_player(team)
    free = make_player(position="POINT_GUARD")

    rows = client.get("/api/v1/players", headers=auth(coach)).json()
    assert [r["id"] for r in rows] == [signed.id, free.id]
    assert rows[0]["team_id"] == team.id

    rows = client.get("/api/v1/players?free_only=true", headers=auth(coach)).json()
    assert [r["id"] for r in rows] == [free.id]
    assert rows[0]["team_id"] is None

    rows = client.get("/api/v1/players?position=point_guard", headers=auth(coach)).json()
    assert [r["id"] for r in rows] == [free.id]

    assert client.get("/api/v1/players", headers=auth(free.user)).status_code == 403
    assert client.get(f"/api/v1/players/{free.id}", headers=auth(free.user)).json()["name"] == free.name


def test_coach_toggles_own_player_status(client, auth, make_coach, make_team, make_player, db_session):
    coach = make_coach()
    team = make_team("Lions", coach)
    p = make_player(team)
    reserve = make_player()
    db_session.add(TeamPlayer(team_id=team.id, player_id=reserve.id, is_active=False))
    db_session.commit()

    r = client.patch(f"/api/v1/players/{p.id}/status", json={"is_active": False}, headers=auth(coach))
    assert r.status_code == 200
    assert r.json() == {"success": True, "is_active": False}
    db_session.expire_all()
    assert p.user.is_active is False
    assert client.get("/api/v1/me", headers=auth(p.user)).status_code == 401

    # Reserves count as the coach's players too
    r = client.patch(f"/api/v1/players/{reserve.id}/status", json={"is_active": False}, headers=auth(coach))
    assert r.status_code == 200


def test_player_status_scope(client, auth, make_admin, make_coach, make_team, make_player):
    admin = make_admin()
    coach = make_coach()
    make_team("Lions", coach)
    other = make_player(make_team("Hawks"))

    assert client.patch(f"/api/v1/players/{other.id}/status", json={"is_active": False},
                        headers=auth(coach)).status_code == 403
    assert client.patch(f"/api/v1/players/{other.id}/status", json={"is_active": "no"},
                        headers=auth(admin)).status_code == 422
    assert client.patch("/api/v1/players/999/status", json={"is_active": True},
                        headers=auth(admin)).status_code == 404
    assert client.patch(f"/api/v1/players/{other.id}/status", json={"is_active": False},
                        headers=auth(other.user)).status_code == 403

    r = client.patch(f"/api/v1/players/{other.id}/status", json={"is_active": False}, headers=auth(admin))
    assert r.json()["is_active"] is False
