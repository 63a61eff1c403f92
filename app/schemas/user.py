"""Schemas for user profile and administration endpoints."""

from pydantic import BaseModel, Field

from app.entities.user import User


class ProfileUpdate(BaseModel):
    """Profile fields a user may change; omitted fields are left unchanged."""

    full_name: str | None = Field(default=None, min_length=2, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    occupation_id: str | None = Field(default=None, max_length=36)
    profile_photo_url: str | None = Field(default=None, max_length=2048, pattern=r"^https?://")


class UsersListResponse(BaseModel):
    users: list[User]


class UserCountResponse(BaseModel):
    count: int


class TemporaryPasswordResponse(BaseModel):
    """Generated password for an administrator-initiated reset. Shown once."""

    user_id: str
    temporary_password: str
