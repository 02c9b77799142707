from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.users import ProfileUpdate, RoleOut
from app.services.users import get_user_or_404, list_roles, profile_view, update_own_profile

router = APIRouter(prefix="/api/v1", tags=["me"])


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    profile = user.profile
    return {
        "id": user.id,
        "email": user.email,
        "role": user.role,
        "full_name": user.full_name,
        "phone": profile.phone if profile else None,
        "avatar_url": profile.avatar_url if profile else None,
        "coach_id": user.coach_id,
        "player_id": user.player_id,
    }


@router.get("/me/profile")
def my_profile(user: User = Depends(get_current_user)):
    return profile_view(user)


@router.patch("/me/profile")
def edit_my_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return profile_view(update_own_profile(db, user, body))


@router.get("/profiles/{user_id}")
def public_profile(user_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return profile_view(get_user_or_404(db, user_id))


@router.get("/roles", response_model=list[RoleOut])
def roles(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return list_roles(db)
