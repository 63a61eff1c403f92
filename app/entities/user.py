"""User entity: identity plus resolved role, with pure authorization predicates."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from app.entities.role import ADMIN_LEVEL, SUPER_ADMIN_LEVEL, ResolvedRole

if TYPE_CHECKING:
    from app.models.user import User as UserRow


class User(BaseModel):
    """
    Immutable view of a user row. Update methods return a new instance.

    role and role_level are resolved at read time and are None when the user
    was loaded without its role. Predicates compare levels only, never names.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    email: str
    full_name: str
    phone: str | None = None
    profile_photo_url: str | None = None
    occupation_id: str | None = None
    is_active: bool = True
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    role: str | None = None
    role_level: int | None = None

    @classmethod
    def from_row(cls, row: "UserRow", role: ResolvedRole | None = None) -> "User":
        user = cls.model_validate(row)
        if role is None:
            return user
        return user.model_copy(update={"role": role.name, "role_level": role.level})

    def has_role_level(self, min_level: int) -> bool:
        return (self.role_level or 0) >= min_level

    def is_admin(self) -> bool:
        return self.has_role_level(ADMIN_LEVEL)

    def is_super_admin(self) -> bool:
        return self.has_role_level(SUPER_ADMIN_LEVEL)

    def can_manage_users(self) -> bool:
        return self.is_admin()

    def can_verify_inspections(self) -> bool:
        return self.is_admin()

    def can_manage_organizations(self) -> bool:
        return self.is_super_admin()

    def update_profile(
        self,
        *,
        full_name: str | None = None,
        phone: str | None = None,
        profile_photo_url: str | None = None,
        occupation_id: str | None = None,
    ) -> "User":
        """Return a copy with the given (non-None) profile fields replaced."""
        changes: dict[str, Any] = {
            key: value
            for key, value in {
                "full_name": full_name,
                "phone": phone,
                "profile_photo_url": profile_photo_url,
                "occupation_id": occupation_id,
            }.items()
            if value is not None
        }
        changes["updated_at"] = datetime.now(UTC)
        return self.model_copy(update=changes)

    def update_last_login(self) -> "User":
        return self.model_copy(update={"last_login_at": datetime.now(UTC)})

    def activate(self) -> "User":
        return self.model_copy(update={"is_active": True, "updated_at": datetime.now(UTC)})

    def deactivate(self) -> "User":
        return self.model_copy(update={"is_active": False, "updated_at": datetime.now(UTC)})

    def to_safe_dict(self) -> dict[str, Any]:
        """Plain JSON-ready dict. The entity never carries a password hash."""
        return self.model_dump(mode="json")
