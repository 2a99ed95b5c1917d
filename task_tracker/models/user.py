from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime
from typing import Optional, List
from uuid import uuid4

from ..time_utils import utc_now
import enum


class UserRole(str, enum.Enum):
    STANDARD = "standard"
    ADMIN = "admin"


class User(SQLModel, table=True):
    """User model for authentication and profile data.

    ``email`` is stored lower-cased so the unique index is case-insensitive.
    """
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str = Field(sa_column_kwargs={"nullable": False})
    name: str = Field(max_length=50)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[str] = None
    role: UserRole = Field(default=UserRole.STANDARD)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationship to tasks
    tasks: List["Task"] = Relationship(back_populates="user")
