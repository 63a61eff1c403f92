"""Schemas for role listing and assignment."""

from datetime import datetime

from pydantic import BaseModel, Field


class RoleItem(BaseModel):
    id: str
    name: str
    description: str | None = None
    level: int
    is_active: bool
    user_count: int = 0


class RolesListResponse(BaseModel):
    roles: list[RoleItem]


class RoleAssignmentRequest(BaseModel):
    role_id: str = Field(..., min_length=1, max_length=36)


class RoleAssignmentResponse(BaseModel):
    user_id: str
    role_id: str
    assigned_by: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class RoleCleanupResponse(BaseModel):
    """Changes applied by the canonical role cleanup, one line per change."""

    report: list[str]
