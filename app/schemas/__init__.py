"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthenticatedIdentity,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from app.schemas.health import HealthResponse
from app.schemas.photo import CaptionUpdate, PhotoItem, PhotosListResponse
from app.schemas.role import (
    RoleAssignmentRequest,
    RoleAssignmentResponse,
    RoleCleanupResponse,
    RoleItem,
    RolesListResponse,
)
from app.schemas.user import (
    ProfileUpdate,
    TemporaryPasswordResponse,
    UserCountResponse,
    UsersListResponse,
)

__all__ = [
    "AuthenticatedIdentity",
    "CaptionUpdate",
    "ChangePasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "PhotoItem",
    "PhotosListResponse",
    "ProfileUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "RoleAssignmentRequest",
    "RoleAssignmentResponse",
    "RoleCleanupResponse",
    "RoleItem",
    "RolesListResponse",
    "TemporaryPasswordResponse",
    "UserCountResponse",
    "UserSummary",
    "UsersListResponse",
]
