# Import every model here so SQLAlchemy "sees" them before create_all
from app.models.user import Role, User, Profile  # noqa: F401
from app.models.coaches import Coach  # noqa: F401
from app.models.players import Player  # noqa: F401
from app.models.teams import Team  # noqa: F401
from app.models.roster import TeamPlayer  # noqa: F401
from app.models.events import Event, EventTeam, EventPlayer  # noqa: F401
from app.models.matches import Match  # noqa: F401
from app.models.player_stats import PlayerStat  # noqa: F401
