"""Immutable domain entities built from store rows."""

from app.entities.photo import Photo
from app.entities.role import (
    ADMIN_LEVEL,
    CANONICAL_ROLES,
    DEFAULT_ROLE,
    SUPER_ADMIN_LEVEL,
    USER_LEVEL,
    ResolvedRole,
)
from app.entities.user import User

__all__ = [
    "ADMIN_LEVEL",
    "CANONICAL_ROLES",
    "DEFAULT_ROLE",
    "Photo",
    "ResolvedRole",
    "SUPER_ADMIN_LEVEL",
    "USER_LEVEL",
    "User",
]
