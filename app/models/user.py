"""ORM models for users, roles and role assignments (auth and RBAC)."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    User account. Role is not stored here; it is resolved through user_roles.

    email is unique and compared exactly as stored.
    """

    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=True)
    profile_photo_url = Column(String(2048), nullable=True)
    occupation_id = Column(String(36), nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)


class Role(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Named privilege tier. level is the only value used for access decisions."""

    __tablename__ = "roles"

    name = Column(String(64), nullable=False, index=True)
    description = Column(Text, nullable=True)
    level = Column(Integer, nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)


class UserRole(UUIDPrimaryKeyMixin, Base):
    """Assignment of one role to one user, with audit trail."""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_id", name="uq_user_roles_user_role"),)

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_id = Column(
        String(36), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_by = Column(String(36), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
