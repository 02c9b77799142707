import logging

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, MalformedInputError, NotFoundError
from app.core.roles import ROLE_COACH, ROLE_PLAYER
from app.core.security import hash_password
from app.models.coaches import Coach
from app.models.players import Player
from app.models.user import Profile, Role, User
from app.schemas.users import ProfileUpdate, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.lower().strip()


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def _ensure_role_row(db: Session, user: User, data) -> None:
    # Coach/Player rows follow the role; an existing row is updated in place
    if user.role == ROLE_COACH:
        values = data.coach.model_dump(exclude_unset=True) if data.coach else {}
        if user.coach is None:
            user.coach = Coach(**values)
        else:
            for k, v in values.items():
                setattr(user.coach, k, v)

    elif user.role == ROLE_PLAYER:
        if user.player is None:
            if data.player is None:
                raise MalformedInputError("Player details (position) are required for the PLAYER role")
            user.player = Player(**data.player.model_dump())
        elif data.player is not None:
            for k, v in data.player.model_dump(exclude_unset=True).items():
                setattr(user.player, k, v)


def _apply_profile(user: User, data: ProfileUpdate) -> None:
    values = data.model_dump(exclude_unset=True)
    if user.profile is None:
        user.profile = Profile(
            first_name=values.pop("first_name", "") or "",
            last_name=values.pop("last_name", "") or "",
        )
    for k, v in values.items():
        setattr(user.profile, k, v)


def create_user(db: Session, data: UserCreate) -> User:
    email = normalize_email(data.email)
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        role=data.role,
        is_active=True,
    )
    user.profile = Profile(**data.profile.model_dump())
    db.add(user)

    try:
        _ensure_role_row(db, user, data)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("Created user %s (%s) with role %s", user.id, user.email, user.role)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    user = get_user_or_404(db, user_id)

    if data.is_active is not None:
        user.is_active = data.is_active

    if data.profile is not None:
        _apply_profile(user, data.profile)

    try:
        if data.coach is not None or data.player is not None:
            _ensure_role_row(db, user, data)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    return user


def set_role(db: Session, user_id: int, role: str) -> User:
    """Change a user's role. The matching Coach/Player row must exist or be creatable."""
    user = get_user_or_404(db, user_id)
    user.role = role

    try:
        if role == ROLE_COACH and user.coach is None:
            user.coach = Coach()
        elif role == ROLE_PLAYER and user.player is None:
            raise MalformedInputError("User has no player record; create it with a position first")
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("User %s role set to %s", user.id, user.role)
    return user


def update_own_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    """Self-service edit: contact and name fields only, never role or status."""
    _apply_profile(user, data)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info("User %s updated their profile", user.id)
    return user


def profile_view(user: User) -> dict:
    profile = user.profile
    view = {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "is_active": user.is_active,
        "full_name": user.full_name,
        "profile": {
            "first_name": profile.first_name if profile else None,
            "last_name": profile.last_name if profile else None,
            "phone": profile.phone if profile else None,
            "address": profile.address if profile else None,
            "avatar_url": profile.avatar_url if profile else None,
        },
        "player": None,
        "coach": None,
    }

    if user.player is not None:
        p = user.player
        team = p.active_team
        view["player"] = {
            "id": p.id,
            "position": p.position,
            "jersey_number": p.jersey_number,
            "height": p.height,
            "weight": p.weight,
            "team": {"id": team.id, "name": team.name} if team is not None else None,
        }
    if user.coach is not None:
        c = user.coach
        view["coach"] = {
            "id": c.id,
            "specialization": c.specialization,
            "experience": c.experience,
            "teams": [{"id": t.id, "name": t.name} for t in sorted(c.teams, key=lambda t: t.name)],
        }
    return view


def list_roles(db: Session) -> list[Role]:
    return db.query(Role).order_by(Role.name.asc()).all()
