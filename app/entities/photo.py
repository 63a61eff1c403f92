"""Photo entity: file reference owned by an inspection or a location."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from app.models.photo import Photo as PhotoRow


class Photo(BaseModel):
    """Immutable photo metadata. Deletion is soft and reversible."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    file_url: str
    file_name: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    caption: str | None = None
    field_reference: str | None = None
    inspection_id: str | None = None
    location_id: str | None = None
    created_by: str | None = None
    updated_by: str | None = None
    deleted_by: str | None = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @classmethod
    def from_row(cls, row: "PhotoRow") -> "Photo":
        return cls.model_validate(row)

    def file_size_kb(self) -> int:
        # Rounds half up.
        return int((self.file_size or 0) / 1024 + 0.5)

    def file_size_mb(self) -> float:
        return round((self.file_size or 0) / (1024 * 1024), 2)

    def is_image(self) -> bool:
        return bool(self.mime_type) and self.mime_type.startswith("image/")

    def file_extension(self) -> str:
        """Lower-cased text after the last dot of file_name; empty when there is no name."""
        if not self.file_name:
            return ""
        return self.file_name.rsplit(".", 1)[-1].lower()

    def belongs_to_inspection(self) -> bool:
        return bool(self.inspection_id)

    def belongs_to_location(self) -> bool:
        return bool(self.location_id)

    def update_caption(self, caption: str, updated_by: str) -> "Photo":
        return self.model_copy(
            update={
                "caption": caption,
                "updated_by": updated_by,
                "updated_at": datetime.now(UTC),
            }
        )

    def soft_delete(self, deleted_by: str) -> "Photo":
        now = datetime.now(UTC)
        return self.model_copy(
            update={
                "is_deleted": True,
                "deleted_by": deleted_by,
                "deleted_at": now,
                "updated_at": now,
            }
        )

    def restore(self, updated_by: str) -> "Photo":
        return self.model_copy(
            update={
                "is_deleted": False,
                "deleted_by": None,
                "deleted_at": None,
                "updated_by": updated_by,
                "updated_at": datetime.now(UTC),
            }
        )
