"""User profile (self) and user administration (admin only)."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import AdminUser, CurrentUser, DbSession
from app.core.config import settings
from app.core.errors import AuthorizationError, NotFoundError
from app.entities.user import User
from app.schemas.auth import MessageResponse
from app.schemas.user import (
    ProfileUpdate,
    TemporaryPasswordResponse,
    UserCountResponse,
    UsersListResponse,
)
from app.services import auth as auth_service
from app.services import users as user_service

router = APIRouter()


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _forbidden(e: AuthorizationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)


@router.get("/me", response_model=User)
def get_profile(current_user: CurrentUser) -> User:
    return current_user


@router.patch("/me", response_model=User)
def update_profile(body: ProfileUpdate, current_user: CurrentUser, db: DbSession) -> User:
    try:
        return user_service.update_profile(db, current_user, **body.model_dump(exclude_none=True))
    except NotFoundError as e:
        raise _not_found(e) from e


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: AdminUser,
    db: DbSession,
    search: str | None = None,
    is_active: bool | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = settings.DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> UsersListResponse:
    """List users (admin only), newest first. At most 100 per page."""
    users = user_service.list_users(
        db, search=search, is_active=is_active, limit=limit, offset=offset
    )
    return UsersListResponse(users=users)


@router.get("/count", response_model=UserCountResponse)
def count_users(
    _admin: AdminUser,
    db: DbSession,
    is_active: bool | None = None,
) -> UserCountResponse:
    return UserCountResponse(count=user_service.count_users(db, is_active=is_active))


@router.get("/{user_id}", response_model=User)
def get_user(user_id: str, _admin: AdminUser, db: DbSession) -> User:
    try:
        return user_service.get_user(db, user_id)
    except NotFoundError as e:
        raise _not_found(e) from e


@router.post("/{user_id}/activate", response_model=MessageResponse)
def activate_user(user_id: str, admin: AdminUser, db: DbSession) -> MessageResponse:
    try:
        user_service.set_active(db, user_id, True, actor=admin)
    except NotFoundError as e:
        raise _not_found(e) from e
    except AuthorizationError as e:
        raise _forbidden(e) from e
    return MessageResponse(message="User activated successfully")


@router.post("/{user_id}/deactivate", response_model=MessageResponse)
def deactivate_user(user_id: str, admin: AdminUser, db: DbSession) -> MessageResponse:
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot deactivate your own account",
        )
    try:
        user_service.set_active(db, user_id, False, actor=admin)
    except NotFoundError as e:
        raise _not_found(e) from e
    except AuthorizationError as e:
        raise _forbidden(e) from e
    return MessageResponse(message="User deactivated successfully")


@router.post("/{user_id}/reset-password", response_model=TemporaryPasswordResponse)
def reset_user_password(user_id: str, admin: AdminUser, db: DbSession) -> TemporaryPasswordResponse:
    """Generate a temporary password for the user. It is returned once and never logged."""
    try:
        temporary = auth_service.admin_reset_password(db, user_id, actor=admin)
    except NotFoundError as e:
        raise _not_found(e) from e
    except AuthorizationError as e:
        raise _forbidden(e) from e
    return TemporaryPasswordResponse(user_id=user_id, temporary_password=temporary)
