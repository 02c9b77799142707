from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import require_admin
from app.db.session import get_db
from app.models.user import User
from app.schemas.users import RoleUpdate, UserCreate, UserOut, UserUpdate
from app.services import users as users_service

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/users", response_model=list[UserOut])
def list_users(
    role: Optional[str] = None,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    q = db.query(User)
    if role:
        q = q.filter(User.role == role.strip().upper())
    return q.order_by(User.id.asc()).all()


@router.post("/users", response_model=UserOut, status_code=201)
def create_user(data: UserCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    return users_service.create_user(db, data)


@router.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    return users_service.get_user_or_404(db, user_id)


@router.patch("/users/{user_id}", response_model=UserOut)
def update_user(user_id: int, data: UserUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    return users_service.update_user(db, user_id, data)


@router.post("/users/{user_id}/role", response_model=UserOut)
def set_role(user_id: int, data: RoleUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    return users_service.set_role(db, user_id, data.role)
