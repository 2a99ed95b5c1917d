from pydantic import AliasChoices, BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, field_validator
from typing import Optional
from datetime import datetime

from ..config import BIO_MAX_LENGTH, NAME_MAX_LENGTH, PASSWORD_MAX_BYTES, PASSWORD_MIN_LENGTH
from ..models import UserRole

_http_url = TypeAdapter(HttpUrl)


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes")
    return value


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        # Passwords are taken verbatim; only the display name is trimmed.
        return value.strip() if isinstance(value, str) else value


class LoginRequest(UserBase):
    password: str = Field(..., min_length=1)


class User(BaseModel):
    """Public view of an identity. Never carries the password hash."""
    id: str
    email: str
    name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Partial profile update: only fields present in the body are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)
    avatar: Optional[str] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("Name cannot be empty")
        return value

    @field_validator("avatar")
    @classmethod
    def avatar_is_url(cls, value):
        # Validated as a URL but stored exactly as sent.
        if value is not None:
            try:
                _http_url.validate_python(value)
            except ValueError:
                raise ValueError("Avatar must be a valid URL") from None
        return value


class PasswordUpdate(BaseModel):
    current_password: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("currentPassword", "current_password")
    )
    new_password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, validation_alias=AliasChoices("newPassword", "new_password")
    )

    @field_validator("new_password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


class MessageResponse(BaseModel):
    success: bool = True
    message: str
