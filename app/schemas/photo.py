"""Schemas for photo metadata endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.entities.photo import Photo


class PhotoItem(BaseModel):
    """Photo plus derived display fields."""

    id: str
    file_url: str
    file_name: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    caption: str | None = None
    field_reference: str | None = None
    inspection_id: str | None = None
    location_id: str | None = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    is_image: bool = False
    file_extension: str = ""
    file_size_kb: int = 0

    @classmethod
    def from_entity(cls, photo: Photo) -> "PhotoItem":
        return cls(
            **photo.model_dump(exclude={"created_by", "updated_by", "deleted_by"}),
            is_image=photo.is_image(),
            file_extension=photo.file_extension(),
            file_size_kb=photo.file_size_kb(),
        )


class PhotosListResponse(BaseModel):
    photos: list[PhotoItem]


class CaptionUpdate(BaseModel):
    caption: str = Field(..., max_length=2000)
