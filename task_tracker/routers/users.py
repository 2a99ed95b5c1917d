from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.user import MessageResponse, PasswordUpdate, ProfileUpdate, User as UserSchema
from ..services import ProfileService
from ..stores import UserStore
from .auth import get_current_user

router = APIRouter()


@router.get("/profile", response_model=UserSchema)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserSchema)
def update_profile(
    changes: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update name, bio and/or avatar. Omitted fields keep their values."""
    return ProfileService(UserStore(db)).update_profile(current_user, changes)


@router.put("/password", response_model=MessageResponse)
def update_password(
    payload: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ProfileService(UserStore(db)).update_password(
        current_user, payload.current_password, payload.new_password
    )
    return {"success": True, "message": "Password updated successfully"}
