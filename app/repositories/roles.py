"""
Role repository: roles table and user_roles assignments.

Functions flush, but never commit; multi-step callers commit once at the end.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.core.database import store_operation
from app.models.user import Role, UserRole


def list_roles(db: Session, *, include_inactive: bool = False) -> list[Role]:
    """All roles, highest level first."""
    query = db.query(Role)
    if not include_inactive:
        query = query.filter(Role.is_active.is_(True))
    with store_operation("roles.list"):
        return query.order_by(Role.level.desc(), Role.name).all()


def get_role(db: Session, role_id: str) -> Role | None:
    with store_operation("roles.get"):
        return db.query(Role).filter(Role.id == role_id).first()


def get_role_by_name_level(db: Session, name: str, level: int) -> Role | None:
    with store_operation("roles.get_by_name_level"):
        return (
            db.query(Role)
            .filter(Role.name == name, Role.level == level)
            .order_by(Role.created_at, Role.id)
            .first()
        )


def create_role(db: Session, *, name: str, level: int, description: str | None = None) -> Role:
    now = datetime.now(UTC)
    role = Role(
        name=name,
        level=level,
        description=description,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    with store_operation("roles.create"):
        db.add(role)
        db.flush()
    return role


def delete_role(db: Session, role_id: str) -> bool:
    with store_operation("roles.delete"):
        deleted = db.query(Role).filter(Role.id == role_id).delete(synchronize_session=False)
        db.flush()
    return deleted > 0


def roles_for_user(db: Session, user_id: str) -> list[Role]:
    """Active roles assigned to a user (join user_roles -> roles). Order is not meaningful."""
    with store_operation("roles.for_user"):
        return (
            db.query(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .filter(UserRole.user_id == user_id, Role.is_active.is_(True))
            .all()
        )


def count_assignments(db: Session, role_id: str) -> int:
    with store_operation("roles.count_assignments"):
        return db.query(UserRole).filter(UserRole.role_id == role_id).count()


def replace_user_assignments(
    db: Session,
    user_id: str,
    role_id: str,
    assigned_by: str | None = None,
) -> UserRole:
    """Delete every assignment of the user, then assign exactly one role."""
    assignment = UserRole(
        user_id=user_id,
        role_id=role_id,
        assigned_by=assigned_by,
        created_at=datetime.now(UTC),
    )
    with store_operation("roles.replace_user_assignments"):
        db.query(UserRole).filter(UserRole.user_id == user_id).delete(synchronize_session=False)
        db.add(assignment)
        db.flush()
    return assignment


def move_assignments(db: Session, from_role_id: str, to_role_id: str) -> int:
    """
    Re-point assignments from one role to another.

    Users that already hold the target role just lose the old assignment.
    Returns the number of users whose assignment was moved or merged.
    """
    moved = 0
    with store_operation("roles.move_assignments"):
        old = db.query(UserRole).filter(UserRole.role_id == from_role_id).all()
        for assignment in old:
            already = (
                db.query(UserRole)
                .filter(UserRole.user_id == assignment.user_id, UserRole.role_id == to_role_id)
                .first()
            )
            if already is None:
                assignment.role_id = to_role_id
            else:
                db.delete(assignment)
            moved += 1
        db.flush()
    return moved
