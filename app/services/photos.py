"""Photo metadata maintenance: captions and soft delete/restore."""

import logging

from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import NotFoundError, ValidationError
from app.entities.photo import Photo
from app.repositories import photos as photo_repository

logger = logging.getLogger(__name__)


def get_photo(db: Session, photo_id: str, *, include_deleted: bool = False) -> Photo:
    row = photo_repository.get_photo(db, photo_id)
    if row is None or (row.is_deleted and not include_deleted):
        raise NotFoundError("Photo not found")
    return Photo.from_row(row)


def list_photos(
    db: Session,
    *,
    inspection_id: str | None = None,
    location_id: str | None = None,
    include_deleted: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> list[Photo]:
    if not inspection_id and not location_id:
        raise ValidationError("inspection_id or location_id is required")
    rows = photo_repository.list_photos(
        db,
        inspection_id=inspection_id,
        location_id=location_id,
        include_deleted=include_deleted,
        limit=limit,
        offset=offset,
    )
    return [Photo.from_row(row) for row in rows]


def _save(db: Session, photo: Photo) -> Photo:
    photo_repository.save_photo(db, photo)
    commit(db)
    return photo


def update_caption(db: Session, photo_id: str, caption: str, updated_by: str) -> Photo:
    return _save(db, get_photo(db, photo_id).update_caption(caption, updated_by))


def soft_delete(db: Session, photo_id: str, deleted_by: str) -> Photo:
    photo = get_photo(db, photo_id).soft_delete(deleted_by)
    logger.info("Photo deleted", extra={"photo_id": photo_id, "deleted_by": deleted_by})
    return _save(db, photo)


def restore(db: Session, photo_id: str, updated_by: str) -> Photo:
    photo = get_photo(db, photo_id, include_deleted=True)
    if not photo.is_deleted:
        return photo
    logger.info("Photo restored", extra={"photo_id": photo_id, "updated_by": updated_by})
    return _save(db, photo.restore(updated_by))
