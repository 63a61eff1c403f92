"""
User repository containing all data-access operations for the users table.

Repository rules:
- Pure data-access logic only
- Every function receives Session explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import store_operation
from app.entities.user import User as UserEntity
from app.models.user import User

# Fields copied from an entity back onto its row by save_user.
_MUTABLE_FIELDS = (
    "full_name",
    "phone",
    "profile_photo_url",
    "occupation_id",
    "is_active",
    "last_login_at",
    "updated_at",
)


def clamp_limit(limit: int | None) -> int:
    """Apply the default page size and cap every query at MAX_PAGE_SIZE rows."""
    if limit is None:
        return settings.DEFAULT_PAGE_SIZE
    return max(1, min(limit, settings.MAX_PAGE_SIZE))


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def get_by_id(db: Session, user_id: str) -> User | None:
    """Fetch a user by primary key."""
    with store_operation("users.get_by_id"):
        return db.query(User).filter(User.id == user_id).first()


def get_by_email(db: Session, email: str) -> User | None:
    """Fetch a user by email, compared exactly as stored."""
    with store_operation("users.get_by_email"):
        return db.query(User).filter(User.email == email).first()


def list_users(
    db: Session,
    *,
    email: str | None = None,
    is_active: bool | None = None,
    occupation_id: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[User]:
    """List users, newest first, with optional equality filters and a name/email search."""
    query = db.query(User)
    if email:
        query = query.filter(User.email == email)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)
    if occupation_id:
        query = query.filter(User.occupation_id == occupation_id)
    if search and search.strip():
        pattern = _like_pattern(search.strip())
        query = query.filter(
            or_(
                User.full_name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
            )
        )
    query = query.order_by(User.created_at.desc(), User.id).offset(max(offset, 0)).limit(clamp_limit(limit))
    with store_operation("users.list"):
        return query.all()


def count_users(
    db: Session,
    *,
    is_active: bool | None = None,
    occupation_id: str | None = None,
) -> int:
    query = db.query(User)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)
    if occupation_id:
        query = query.filter(User.occupation_id == occupation_id)
    with store_operation("users.count"):
        return query.count()


def create_user(
    db: Session,
    *,
    email: str,
    password_hash: str,
    full_name: str,
    phone: str | None = None,
    occupation_id: str | None = None,
    profile_photo_url: str | None = None,
) -> User:
    """Insert an active user with an already-hashed password."""
    now = datetime.now(UTC)
    user = User(
        email=email,
        password_hash=password_hash,
        full_name=full_name,
        phone=phone,
        occupation_id=occupation_id,
        profile_photo_url=profile_photo_url,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    with store_operation("users.create"):
        db.add(user)
        db.flush()
    return user


def save_user(db: Session, entity: UserEntity) -> User | None:
    """Persist the mutable fields of an updated entity onto its row."""
    user = get_by_id(db, entity.id)
    if user is None:
        return None
    for field in _MUTABLE_FIELDS:
        setattr(user, field, getattr(entity, field))
    with store_operation("users.save"):
        db.flush()
    return user


def update_password(db: Session, user_id: str, password_hash: str) -> bool:
    """Replace a user's password hash. Returns True when the user exists."""
    user = get_by_id(db, user_id)
    if user is None:
        return False
    user.password_hash = password_hash
    user.updated_at = datetime.now(UTC)
    with store_operation("users.update_password"):
        db.flush()
    return True
