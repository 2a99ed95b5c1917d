from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas.user import AuthResponse, LoginRequest, MessageResponse, User as UserSchema, UserCreate
from ..services import AuthService, SessionGuard
from ..stores import UserStore

router = APIRouter()


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to the current user.

    The resolved user is also attached to ``request.state.user``; handlers
    must take identity from here and never from the request body.
    """
    user = SessionGuard(UserStore(db)).resolve(authorization)
    request.state.user = user
    return user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    """Create a new user account."""
    return AuthService(UserStore(db)).register(user.email, user.password, user.name)


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Sign in and get JWT token."""
    return AuthService(UserStore(db)).login(credentials.email, credentials.password)


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy."""
    return {"success": True, "message": "Logged out"}


@router.get("/me", response_model=UserSchema)
def read_users_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user
