"""Photo repository: metadata rows for inspection and location photos."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.core.database import store_operation
from app.entities.photo import Photo as PhotoEntity
from app.models.photo import Photo
from app.repositories.users import clamp_limit

# Fields copied from an entity back onto its row by save_photo.
_MUTABLE_FIELDS = (
    "caption",
    "updated_by",
    "deleted_by",
    "is_deleted",
    "updated_at",
    "deleted_at",
)


def get_photo(db: Session, photo_id: str) -> Photo | None:
    with store_operation("photos.get"):
        return db.query(Photo).filter(Photo.id == photo_id).first()


def list_photos(
    db: Session,
    *,
    inspection_id: str | None = None,
    location_id: str | None = None,
    include_deleted: bool = False,
    limit: int | None = None,
    offset: int = 0,
) -> list[Photo]:
    """Photos for an inspection and/or location, oldest first."""
    query = db.query(Photo)
    if inspection_id:
        query = query.filter(Photo.inspection_id == inspection_id)
    if location_id:
        query = query.filter(Photo.location_id == location_id)
    if not include_deleted:
        query = query.filter(Photo.is_deleted.is_(False))
    query = query.order_by(Photo.created_at, Photo.id).offset(max(offset, 0)).limit(clamp_limit(limit))
    with store_operation("photos.list"):
        return query.all()


def create_photo(
    db: Session,
    *,
    file_url: str,
    created_by: str | None = None,
    file_name: str | None = None,
    file_size: int | None = None,
    mime_type: str | None = None,
    caption: str | None = None,
    field_reference: str | None = None,
    inspection_id: str | None = None,
    location_id: str | None = None,
) -> Photo:
    now = datetime.now(UTC)
    photo = Photo(
        file_url=file_url,
        file_name=file_name,
        file_size=file_size,
        mime_type=mime_type,
        caption=caption,
        field_reference=field_reference,
        inspection_id=inspection_id,
        location_id=location_id,
        created_by=created_by,
        is_deleted=False,
        created_at=now,
        updated_at=now,
    )
    with store_operation("photos.create"):
        db.add(photo)
        db.flush()
    return photo


def save_photo(db: Session, entity: PhotoEntity) -> Photo | None:
    """Persist the mutable fields of an updated entity onto its row."""
    row = get_photo(db, entity.id)
    if row is None:
        return None
    for field in _MUTABLE_FIELDS:
        setattr(row, field, getattr(entity, field))
    with store_operation("photos.save"):
        db.flush()
    return row
