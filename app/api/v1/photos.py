"""Photo metadata: listing by inspection/location, captions, soft delete and restore."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from app.api.deps import AdminUser, CurrentUser, DbSession
from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.schemas.photo import CaptionUpdate, PhotoItem, PhotosListResponse
from app.services import photos as photo_service

router = APIRouter()


@router.get("", response_model=PhotosListResponse)
def list_photos(
    _user: CurrentUser,
    db: DbSession,
    inspection_id: str | None = None,
    location_id: str | None = None,
    limit: Annotated[int, Query(ge=1, le=100)] = settings.DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> PhotosListResponse:
    """Non-deleted photos of an inspection and/or a location (one of them is required)."""
    try:
        photos = photo_service.list_photos(
            db,
            inspection_id=inspection_id,
            location_id=location_id,
            limit=limit,
            offset=offset,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message) from e
    return PhotosListResponse(photos=[PhotoItem.from_entity(p) for p in photos])


@router.get("/{photo_id}", response_model=PhotoItem)
def get_photo(photo_id: str, _user: CurrentUser, db: DbSession) -> PhotoItem:
    try:
        return PhotoItem.from_entity(photo_service.get_photo(db, photo_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.patch("/{photo_id}/caption", response_model=PhotoItem)
def update_caption(
    photo_id: str,
    body: CaptionUpdate,
    user: CurrentUser,
    db: DbSession,
) -> PhotoItem:
    try:
        photo = photo_service.update_caption(db, photo_id, body.caption, updated_by=user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return PhotoItem.from_entity(photo)


@router.post("/{photo_id}/delete", response_model=PhotoItem)
def delete_photo(photo_id: str, admin: AdminUser, db: DbSession) -> PhotoItem:
    """Soft delete: the row is kept and can be restored."""
    try:
        photo = photo_service.soft_delete(db, photo_id, deleted_by=admin.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return PhotoItem.from_entity(photo)


@router.post("/{photo_id}/restore", response_model=PhotoItem)
def restore_photo(photo_id: str, admin: AdminUser, db: DbSession) -> PhotoItem:
    try:
        photo = photo_service.restore(db, photo_id, updated_by=admin.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return PhotoItem.from_entity(photo)
