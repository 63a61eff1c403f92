"""Role tiers and the resolved (name, level) pair attached to a user."""

from pydantic import BaseModel, ConfigDict, Field

SUPER_ADMIN_LEVEL = 100
ADMIN_LEVEL = 80
USER_LEVEL = 40


class ResolvedRole(BaseModel):
    """Effective role of a user after joining through user_roles."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    level: int


class CanonicalRole(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    level: int
    description: str


# Applied to identities with no role assignment.
DEFAULT_ROLE = ResolvedRole(name="user", level=USER_LEVEL)

CANONICAL_ROLES: tuple[CanonicalRole, ...] = (
    CanonicalRole(name="super_admin", level=SUPER_ADMIN_LEVEL, description="Full system access"),
    CanonicalRole(
        name="admin",
        level=ADMIN_LEVEL,
        description="Can manage organizations and locations",
    ),
    CanonicalRole(
        name="user",
        level=USER_LEVEL,
        description="Standard user can perform inspections",
    ),
)
