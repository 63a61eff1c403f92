"""User profile and administration operations built on the copy-on-write User entity."""

import logging

from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import NotFoundError
from app.entities.user import User
from app.repositories import users as user_repository
from app.services import roles as role_service

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    user = role_service.get_user_with_role(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def update_profile(
    db: Session,
    user: User,
    *,
    full_name: str | None = None,
    phone: str | None = None,
    profile_photo_url: str | None = None,
    occupation_id: str | None = None,
) -> User:
    updated = user.update_profile(
        full_name=full_name,
        phone=phone,
        profile_photo_url=profile_photo_url,
        occupation_id=occupation_id,
    )
    if user_repository.save_user(db, updated) is None:
        raise NotFoundError("User not found")
    commit(db)
    return updated


def set_active(db: Session, user_id: str, active: bool, actor: User) -> User:
    """
    Activate or deactivate an account. Deactivated users fail authentication on their next request.

    Accounts holding a higher role than the actor are off limits (AuthorizationError).
    """
    user = get_user(db, user_id)
    role_service.ensure_can_manage(actor, user)
    updated = user.activate() if active else user.deactivate()
    user_repository.save_user(db, updated)
    commit(db)
    logger.info(
        "User %s", "activated" if active else "deactivated",
        extra={"user_id": user_id, "changed_by": actor.id},
    )
    return updated


def list_users(
    db: Session,
    *,
    search: str | None = None,
    is_active: bool | None = None,
    occupation_id: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[User]:
    rows = user_repository.list_users(
        db,
        search=search,
        is_active=is_active,
        occupation_id=occupation_id,
        limit=limit,
        offset=offset,
    )
    return [User.from_row(row) for row in rows]


def count_users(db: Session, *, is_active: bool | None = None) -> int:
    return user_repository.count_users(db, is_active=is_active)
