from datetime import date

from app.db.session import session_scope
from app.db.init_db import init_db
from app.core.roles import ROLE_ADMIN, ROLE_COACH, ROLE_PLAYER
from app.core.security import hash_password
from app.models.coaches import Coach
from app.models.players import Player
from app.models.roster import TeamPlayer
from app.models.teams import Team
from app.models.user import Profile, User

DEMO_PASSWORD = "basket123"

COACHES = [
    ("coach.lions@basketclub.org", "Marta", "Ruiz", "Youth basketball", 8),
    ("coach.hawks@basketclub.org", "Iván", "Soler", "Senior team", 12),
]

TEAMS = [
    ("Lions U16", "Under-16 squad", 0),
    ("Hawks Senior", "First team", 1),
]

# (email, first, last, position, jersey, team index)
PLAYERS = [
    ("p.garcia@basketclub.org", "Pau", "García", "POINT_GUARD", 4, 0),
    ("l.mora@basketclub.org", "Leo", "Mora", "SHOOTING_GUARD", 7, 0),
    ("a.vidal@basketclub.org", "Álex", "Vidal", "SMALL_FORWARD", 9, 0),
    ("n.pons@basketclub.org", "Nil", "Pons", "POWER_FORWARD", 12, 0),
    ("j.roca@basketclub.org", "Jan", "Roca", "CENTER", 15, 0),
    ("d.ferrer@basketclub.org", "Dani", "Ferrer", "POINT_GUARD", 3, 1),
    ("m.serra@basketclub.org", "Marc", "Serra", "SHOOTING_GUARD", 8, 1),
    ("o.costa@basketclub.org", "Oriol", "Costa", "SMALL_FORWARD", 10, 1),
    ("b.riera@basketclub.org", "Biel", "Riera", "POWER_FORWARD", 14, 1),
    ("t.puig@basketclub.org", "Toni", "Puig", "CENTER", 21, 1),
]


def _user(email, first, last, role):
    u = User(email=email, password_hash=hash_password(DEMO_PASSWORD), role=role, is_active=True)
    u.profile = Profile(first_name=first, last_name=last)
    return u


def run():
    init_db()
    with session_scope() as db:
        existing = db.query(Team).count()
        if existing > 0:
            print(f"Club already seeded. ({existing} teams)")
            return
        _seed(db)

    print(f"Seed CLUB OK ({len(TEAMS)} teams, {len(PLAYERS)} players). Password: {DEMO_PASSWORD}")


def _seed(db):
    db.add(_user("admin@basketclub.org", "Club", "Admin", ROLE_ADMIN))

    coaches = []
    for email, first, last, specialization, experience in COACHES:
        u = _user(email, first, last, ROLE_COACH)
        u.coach = Coach(specialization=specialization, experience=experience)
        db.add(u)
        coaches.append(u.coach)
    db.flush()

    teams = []
    for name, description, coach_idx in TEAMS:
        t = Team(name=name, description=description, coach_id=coaches[coach_idx].id, is_active=True)
        db.add(t)
        teams.append(t)
    db.flush()

    for email, first, last, position, jersey, team_idx in PLAYERS:
        u = _user(email, first, last, ROLE_PLAYER)
        u.player = Player(position=position, jersey_number=jersey, birth_date=date(2008, 1, 1))
        db.add(u)
        db.flush()
        db.add(TeamPlayer(team_id=teams[team_idx].id, player_id=u.player.id, is_active=True))


if __name__ == "__main__":
    run()
