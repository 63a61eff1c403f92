"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.photo import Photo
from app.models.user import Role, User, UserRole

__all__ = ["Base", "Photo", "Role", "User", "UserRole"]
