"""Role resolution (user -> user_roles -> roles) and role administration."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.core.database import commit
from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.entities.role import CANONICAL_ROLES, DEFAULT_ROLE, ResolvedRole
from app.entities.user import User
from app.models.user import Role, UserRole
from app.repositories import roles as role_repository
from app.repositories import users as user_repository

logger = logging.getLogger(__name__)


def pick_effective_role(roles: Iterable[Role]) -> ResolvedRole:
    """
    Choose the effective role among a user's assignments.

    No assignment resolves to the default user role. Several assignments
    resolve to the highest level; equal levels are ordered by name so the
    result never depends on join order.
    """
    candidates = sorted(roles, key=lambda r: (-r.level, r.name))
    if not candidates:
        return DEFAULT_ROLE
    best = candidates[0]
    return ResolvedRole(name=best.name, level=best.level)


def resolve_role(db: Session, user_id: str) -> ResolvedRole:
    """Effective role of a user; never fails for a user without assignments."""
    roles = role_repository.roles_for_user(db, user_id)
    if len(roles) > 1:
        logger.warning(
            "User has multiple role assignments; using highest level",
            extra={"user_id": user_id, "role_count": len(roles)},
        )
    return pick_effective_role(roles)


def get_user_with_role(db: Session, user_id: str) -> User | None:
    """Load a user and attach its freshly resolved role, or None if the user does not exist."""
    row = user_repository.get_by_id(db, user_id)
    if row is None:
        return None
    return User.from_row(row, resolve_role(db, user_id))


def assign_default_role(db: Session, user_id: str) -> None:
    """Give a new user the canonical 'user' role when it exists (no commit)."""
    role = role_repository.get_role_by_name_level(db, DEFAULT_ROLE.name, DEFAULT_ROLE.level)
    if role is None:
        logger.warning("Default role missing; user left without assignment", extra={"user_id": user_id})
        return
    role_repository.replace_user_assignments(db, user_id, role.id)


def assign_role(
    db: Session,
    user_id: str,
    role_id: str,
    assigned_by: str | None = None,
) -> UserRole:
    """
    Make role_id the only role of user_id.

    Existing assignments are removed first so a user never holds more than one.
    """
    if user_repository.get_by_id(db, user_id) is None:
        raise NotFoundError("User not found")
    role = role_repository.get_role(db, role_id)
    if role is None:
        raise NotFoundError("Role not found")
    if not role.is_active:
        raise ValidationError("Role is inactive")
    assignment = role_repository.replace_user_assignments(db, user_id, role_id, assigned_by)
    commit(db)
    logger.info(
        "Role assigned",
        extra={"user_id": user_id, "role_level": role.level, "assigned_by": assigned_by},
    )
    return assignment


def ensure_can_manage(actor: User, target: User) -> None:
    """Administrators may act on users at their own level or below, never above."""
    if (target.role_level or 0) > (actor.role_level or 0):
        logger.warning(
            "Refused action on higher-level user",
            extra={"user_id": target.id, "actor_id": actor.id},
        )
        raise AuthorizationError("You cannot manage a user with a higher role than your own")


def list_roles_with_counts(db: Session) -> list[tuple[Role, int]]:
    return [(role, role_repository.count_assignments(db, role.id)) for role in role_repository.list_roles(db)]


def _merge_role(
    db: Session, source: Role, target: Role, report: list[str], merged: set[str]
) -> None:
    moved = role_repository.move_assignments(db, source.id, target.id)
    role_repository.delete_role(db, source.id)
    merged.add(source.id)
    report.append(
        f"Merged role '{source.name}' (level {source.level}) into "
        f"'{target.name}' (level {target.level}); {moved} assignment(s) moved"
    )


def ensure_default_roles(db: Session) -> list[str]:
    """
    Bring the roles table to the canonical super_admin/admin/user tiers.

    - a role with another name at a canonical level is renamed (when the
      canonical role is missing) or merged into the canonical role
    - a role with a canonical name at a wrong level is merged into the
      canonical role of that name
    - missing canonical roles are created

    Roles at other levels are left untouched. Returns a human-readable report.
    """
    report: list[str] = []
    existing = role_repository.list_roles(db, include_inactive=True)
    merged: set[str] = set()
    canonical_by_name: dict[str, Role] = {}

    for canonical in CANONICAL_ROLES:
        same_level = [r for r in existing if r.level == canonical.level]
        exact = [r for r in same_level if r.name == canonical.name]
        keeper = exact[0] if exact else (same_level[0] if same_level else None)
        if keeper is None:
            keeper = role_repository.create_role(
                db, name=canonical.name, level=canonical.level, description=canonical.description
            )
            report.append(f"Created role '{canonical.name}' (level {canonical.level})")
        elif keeper.name != canonical.name:
            report.append(f"Renamed role '{keeper.name}' to '{canonical.name}' (level {canonical.level})")
            keeper.name = canonical.name
            keeper.description = canonical.description
            keeper.updated_at = datetime.now(UTC)
        if not keeper.is_active:
            keeper.is_active = True
            keeper.updated_at = datetime.now(UTC)
            report.append(f"Reactivated role '{canonical.name}'")
        for other in same_level:
            if other.id != keeper.id:
                _merge_role(db, other, keeper, report, merged)
        canonical_by_name[canonical.name] = keeper

    for role in existing:
        keeper = canonical_by_name.get(role.name)
        if keeper is None or role.id in merged or role.level == keeper.level:
            continue
        _merge_role(db, role, keeper, report, merged)

    commit(db)
    if not report:
        report.append("Roles already canonical")
    logger.info("Role cleanup completed", extra={"changes": len(report)})
    return report
