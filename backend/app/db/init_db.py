import logging

from sqlalchemy.orm import Session

from app.core.roles import ROLE_DESCRIPTIONS
from app.db.base import Base
from app.db.session import engine, session_scope

# Registers every model on Base.metadata before create_all
import app.models  # noqa: F401
from app.models.user import Role

logger = logging.getLogger(__name__)


def seed_roles(db: Session) -> int:
    """Insert the ADMIN / COACH / PLAYER rows that users.role points to."""
    created = 0
    for name, description in ROLE_DESCRIPTIONS.items():
        if db.query(Role).filter_by(name=name).first() is None:
            db.add(Role(name=name, description=description))
            created += 1
    db.commit()
    return created


def init_db():
    Base.metadata.create_all(bind=engine)
    with session_scope() as db:
        created = seed_roles(db)
    if created:
        logger.info("Seeded %s roles", created)
