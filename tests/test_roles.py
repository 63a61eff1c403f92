"""Tests for role resolution and the canonical role cleanup."""

import unittest
from types import SimpleNamespace

from app.core.errors import NotFoundError
from app.entities.role import DEFAULT_ROLE
from app.models import Role, UserRole
from app.repositories import roles as role_repository
from app.services import roles as role_service
from tests.support import DatabaseTestCase, create_account


def _role(name: str, level: int) -> SimpleNamespace:
    return SimpleNamespace(name=name, level=level)


class TestPickEffectiveRole(unittest.TestCase):
    """Highest level wins; ties break on name; nothing resolves to the default user role."""

    def test_no_assignment_is_default_user(self) -> None:
        self.assertEqual(role_service.pick_effective_role([]), DEFAULT_ROLE)

    def test_single_assignment(self) -> None:
        resolved = role_service.pick_effective_role([_role("super_admin", 100)])
        self.assertEqual((resolved.name, resolved.level), ("super_admin", 100))

    def test_highest_level_wins(self) -> None:
        resolved = role_service.pick_effective_role(
            [_role("user", 40), _role("admin", 80), _role("viewer", 10)]
        )
        self.assertEqual(resolved.name, "admin")

    def test_tie_is_order_independent(self) -> None:
        a = role_service.pick_effective_role([_role("manager", 80), _role("admin", 80)])
        b = role_service.pick_effective_role([_role("admin", 80), _role("manager", 80)])
        self.assertEqual(a, b)
        self.assertEqual(a.name, "admin")


class TestResolveRole(DatabaseTestCase):
    def test_user_without_assignment(self) -> None:
        user = create_account(self.db, "plain@test.com")
        resolved = role_service.resolve_role(self.db, user.id)
        self.assertEqual((resolved.name, resolved.level), ("user", 40))

    def test_super_admin_assignment(self) -> None:
        user = create_account(self.db, "root@test.com", role=self.roles["super_admin"])
        entity = role_service.get_user_with_role(self.db, user.id)
        self.assertEqual(entity.role, "super_admin")
        self.assertEqual(entity.role_level, 100)
        self.assertTrue(entity.is_super_admin())

    def test_multiple_assignments_use_highest(self) -> None:
        user = create_account(self.db, "multi@test.com", role=self.roles["user"])
        self.db.add(UserRole(user_id=user.id, role_id=self.roles["admin"].id))
        self.db.commit()
        self.assertEqual(role_service.resolve_role(self.db, user.id).name, "admin")

    def test_inactive_role_is_ignored(self) -> None:
        user = create_account(self.db, "inactive-role@test.com", role=self.roles["admin"])
        self.roles["admin"].is_active = False
        self.db.commit()
        self.assertEqual(role_service.resolve_role(self.db, user.id), DEFAULT_ROLE)

    def test_unknown_user(self) -> None:
        self.assertIsNone(role_service.get_user_with_role(self.db, "missing"))


class TestAssignRole(DatabaseTestCase):
    def test_assignment_replaces_existing(self) -> None:
        user = create_account(self.db, "promote@test.com", role=self.roles["user"])
        role_service.assign_role(self.db, user.id, self.roles["admin"].id, assigned_by="root")
        roles = role_repository.roles_for_user(self.db, user.id)
        self.assertEqual([r.name for r in roles], ["admin"])

    def test_unknown_role(self) -> None:
        user = create_account(self.db, "nobody@test.com")
        with self.assertRaises(NotFoundError):
            role_service.assign_role(self.db, user.id, "missing")

    def test_default_role_on_registration(self) -> None:
        user = create_account(self.db, "fresh@test.com")
        role_service.assign_default_role(self.db, user.id)
        self.db.commit()
        self.assertEqual(self.db.query(UserRole).filter(UserRole.user_id == user.id).count(), 1)


class TestEnsureDefaultRoles(DatabaseTestCase):
    """ensure_default_roles renames, merges and creates roles until the tiers are canonical."""

    def setUp(self) -> None:
        super().setUp()
        self.db.query(UserRole).delete()
        self.db.query(Role).delete()
        self.db.commit()

    def test_creates_missing_roles(self) -> None:
        report = role_service.ensure_default_roles(self.db)
        names = sorted((r.name, r.level) for r in role_repository.list_roles(self.db))
        self.assertEqual(names, [("admin", 80), ("super_admin", 100), ("user", 40)])
        self.assertEqual(len(report), 3)

    def test_renames_and_merges(self) -> None:
        superadmin = Role(name="superadmin", level=100)
        admin = Role(name="admin", level=80)
        stray_admin = Role(name="admin", level=50)
        self.db.add_all([superadmin, admin, stray_admin])
        self.db.flush()
        user = create_account(self.db, "stray@test.com", role=stray_admin)
        self.db.commit()

        role_service.ensure_default_roles(self.db)

        roles = {(r.name, r.level) for r in role_repository.list_roles(self.db, include_inactive=True)}
        self.assertEqual(roles, {("super_admin", 100), ("admin", 80), ("user", 40)})
        self.assertEqual(role_service.resolve_role(self.db, user.id).level, 80)

    def test_second_run_changes_nothing(self) -> None:
        role_service.ensure_default_roles(self.db)
        self.assertEqual(role_service.ensure_default_roles(self.db), ["Roles already canonical"])
