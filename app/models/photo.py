"""ORM model for photo metadata attached to inspections or locations."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Photo(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Stored file reference with optional caption and dimensions.

    Rows are soft-deleted (is_deleted, deleted_by, deleted_at), never removed.
    """

    __tablename__ = "photos"

    file_url = Column(String(2048), nullable=False)
    file_name = Column(String(512), nullable=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String(128), nullable=True)
    caption = Column(Text, nullable=True)
    field_reference = Column(String(255), nullable=True)
    inspection_id = Column(String(36), nullable=True, index=True)
    location_id = Column(String(36), nullable=True, index=True)
    created_by = Column(String(36), nullable=True)
    updated_by = Column(String(36), nullable=True)
    deleted_by = Column(String(36), nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
