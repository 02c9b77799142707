import sys

from app.db.session import session_scope
from app.models.user import User
from app.core.roles import ROLE_ADMIN


def run(email: str) -> bool:
    with session_scope() as db:
        u = db.query(User).filter_by(email=email.lower().strip()).first()
        if not u:
            print(f"User not found: {email}")
            return False
        u.role = ROLE_ADMIN
        print(f"OK: {u.email} is now ADMIN")
        return True


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python -m Scripts.make_admin <email>")
        sys.exit(1)
    sys.exit(0 if run(sys.argv[1]) else 1)
