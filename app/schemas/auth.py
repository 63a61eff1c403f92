"""Request/response schemas for auth endpoints."""

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.entities.user import User

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_RE.match(value):
        raise ValueError("Invalid email format")
    return value


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=3, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class RegisterRequest(BaseModel):
    """New account; password strength is checked by the service."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=256)
    full_name: str = Field(..., min_length=2, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    occupation_id: str | None = Field(default=None, max_length=36)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        if len(v.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v.strip()


class UserSummary(BaseModel):
    """Non-sensitive user fields returned by login/register."""

    id: str
    email: str
    full_name: str
    role: str | None = None
    is_active: bool

    @classmethod
    def from_entity(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            is_active=user.is_active,
        )


class LoginResponse(BaseModel):
    """Logged-in user. The token is also set as an HttpOnly cookie."""

    user: UserSummary
    token: str = Field(..., description="Session token (also sent as cookie)")


class RegisterResponse(BaseModel):
    user: UserSummary
    message: str = "Registration successful. Please login."


class MessageResponse(BaseModel):
    message: str


class AuthenticatedIdentity(BaseModel):
    """Who is logged in: the only channel through which pages learn the current user."""

    id: str
    email: str
    full_name: str
    phone: str | None = None
    profile_photo_url: str | None = None
    occupation_id: str | None = None
    role: str | None = None
    role_level: int | None = None
    is_active: bool
    is_admin: bool
    is_super_admin: bool
    last_login_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "AuthenticatedIdentity":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            phone=user.phone,
            profile_photo_url=user.profile_photo_url,
            occupation_id=user.occupation_id,
            role=user.role,
            role_level=user.role_level,
            is_active=user.is_active,
            is_admin=user.is_admin(),
            is_super_admin=user.is_super_admin(),
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1, max_length=256)
    new_password: str = Field(..., min_length=1, max_length=256)


class PasswordResetRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class PasswordResetConfirm(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1, max_length=256)
