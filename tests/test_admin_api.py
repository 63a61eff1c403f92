"""Tests for user, role, photo and health endpoints: role-level checks and admin operations."""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from app.core.database import get_db
from app.main import app
from app.models import Photo, User
from app.repositories import photos as photo_repository
from tests.support import ApiTestCase, create_account


class AdminApiTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = create_account(self.db, "admin@test.com", role=self.roles["admin"])
        self.member = create_account(self.db, "member@test.com", role=self.roles["user"])


class TestUsersApi(AdminApiTestCase):
    def test_list_requires_admin(self) -> None:
        self.assertEqual(self.client.get("/api/v1/users").status_code, 401)
        self.login("member@test.com")
        self.assertEqual(self.client.get("/api/v1/users").status_code, 403)

    def test_list_and_search(self) -> None:
        self.login("admin@test.com")
        response = self.client.get("/api/v1/users")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["users"]), 2)

        response = self.client.get("/api/v1/users", params={"search": "member"})
        self.assertEqual([u["email"] for u in response.json()["users"]], ["member@test.com"])

    def test_limit_is_capped(self) -> None:
        self.login("admin@test.com")
        self.assertEqual(self.client.get("/api/v1/users", params={"limit": 500}).status_code, 422)

    def test_count(self) -> None:
        self.login("admin@test.com")
        self.assertEqual(self.client.get("/api/v1/users/count").json()["count"], 2)

    def test_deactivate_and_activate(self) -> None:
        self.login("admin@test.com")
        response = self.client.post(f"/api/v1/users/{self.member.id}/deactivate")
        self.assertEqual(response.status_code, 200)
        self.db.expire_all()
        self.assertFalse(self.db.get(User, self.member.id).is_active)

        self.client.post(f"/api/v1/users/{self.member.id}/activate")
        self.db.expire_all()
        self.assertTrue(self.db.get(User, self.member.id).is_active)

    def test_cannot_deactivate_self(self) -> None:
        self.login("admin@test.com")
        response = self.client.post(f"/api/v1/users/{self.admin.id}/deactivate")
        self.assertEqual(response.status_code, 400)

    def test_unknown_user(self) -> None:
        self.login("admin@test.com")
        self.assertEqual(self.client.get("/api/v1/users/missing").status_code, 404)

    def test_admin_password_reset(self) -> None:
        self.login("admin@test.com")
        response = self.client.post(f"/api/v1/users/{self.member.id}/reset-password")
        self.assertEqual(response.status_code, 200)
        temporary = response.json()["temporary_password"]
        self.client.cookies.clear()
        self.assertEqual(self.login("member@test.com", temporary).status_code, 200)

    def test_update_own_profile(self) -> None:
        self.login("member@test.com")
        response = self.client.patch("/api/v1/users/me", json={"full_name": "Renamed Member"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["full_name"], "Renamed Member")
        self.assertEqual(response.json()["role"], "user")


class TestAdminCannotManageHigherRoles(AdminApiTestCase):
    """An admin acts on users at its own level or below, never on a super admin."""

    def setUp(self) -> None:
        super().setUp()
        self.root = create_account(self.db, "root@test.com", role=self.roles["super_admin"])

    def test_admin_cannot_reset_super_admin_password(self) -> None:
        self.login("admin@test.com")
        response = self.client.post(f"/api/v1/users/{self.root.id}/reset-password")
        self.assertEqual(response.status_code, 403)
        self.client.cookies.clear()
        self.assertEqual(self.login("root@test.com").status_code, 200)

    def test_admin_cannot_deactivate_super_admin(self) -> None:
        self.login("admin@test.com")
        response = self.client.post(f"/api/v1/users/{self.root.id}/deactivate")
        self.assertEqual(response.status_code, 403)
        self.db.expire_all()
        self.assertTrue(self.db.get(User, self.root.id).is_active)

    def test_super_admin_can_reset_admin_password(self) -> None:
        self.login("root@test.com")
        response = self.client.post(f"/api/v1/users/{self.admin.id}/reset-password")
        self.assertEqual(response.status_code, 200)

    def test_admin_can_manage_peer_admin(self) -> None:
        peer = create_account(self.db, "peer@test.com", role=self.roles["admin"])
        self.login("admin@test.com")
        self.assertEqual(
            self.client.post(f"/api/v1/users/{peer.id}/deactivate").status_code, 200
        )


class TestRolesApi(AdminApiTestCase):
    def test_list_roles_with_counts(self) -> None:
        self.login("admin@test.com")
        roles = self.client.get("/api/v1/roles").json()["roles"]
        self.assertEqual([r["name"] for r in roles], ["super_admin", "admin", "user"])
        self.assertEqual({r["name"]: r["user_count"] for r in roles}["admin"], 1)

    def test_assignment_requires_super_admin(self) -> None:
        self.login("admin@test.com")
        response = self.client.put(
            f"/api/v1/roles/assignments/{self.member.id}",
            json={"role_id": self.roles["admin"].id},
        )
        self.assertEqual(response.status_code, 403)

    def test_super_admin_assigns_role(self) -> None:
        create_account(self.db, "root@test.com", role=self.roles["super_admin"])
        self.login("root@test.com")
        response = self.client.put(
            f"/api/v1/roles/assignments/{self.member.id}",
            json={"role_id": self.roles["admin"].id},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role_id"], self.roles["admin"].id)

        self.client.cookies.clear()
        self.login("member@test.com")
        self.assertEqual(self.client.get("/admin").status_code, 200)

    def test_ensure_defaults(self) -> None:
        create_account(self.db, "root@test.com", role=self.roles["super_admin"])
        self.login("root@test.com")
        response = self.client.post("/api/v1/roles/ensure-defaults")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["report"], ["Roles already canonical"])


class TestPhotosApi(AdminApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        photo = photo_repository.create_photo(
            self.db,
            file_url="https://cdn.example/p/front.jpg",
            created_by=self.member.id,
            file_name="front.jpg",
            file_size=4096,
            mime_type="image/jpeg",
            inspection_id="insp-1",
        )
        self.db.commit()
        self.photo_id = photo.id

    def test_created_photo_is_stored_with_its_owner(self) -> None:
        row = self.db.get(Photo, self.photo_id)
        self.assertEqual(row.created_by, self.member.id)
        self.assertFalse(row.is_deleted)
        self.assertIsNotNone(row.created_at)

    def test_list_requires_owner_filter(self) -> None:
        self.login("member@test.com")
        self.assertEqual(self.client.get("/api/v1/photos").status_code, 422)

    def test_list_by_inspection(self) -> None:
        self.login("member@test.com")
        photos = self.client.get("/api/v1/photos", params={"inspection_id": "insp-1"}).json()["photos"]
        self.assertEqual(len(photos), 1)
        self.assertTrue(photos[0]["is_image"])
        self.assertEqual(photos[0]["file_extension"], "jpg")
        self.assertEqual(photos[0]["file_size_kb"], 4)

    def test_caption(self) -> None:
        self.login("member@test.com")
        response = self.client.patch(
            f"/api/v1/photos/{self.photo_id}/caption", json={"caption": "Front view"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["caption"], "Front view")

    def test_soft_delete_and_restore(self) -> None:
        self.login("member@test.com")
        self.assertEqual(self.client.post(f"/api/v1/photos/{self.photo_id}/delete").status_code, 403)

        self.client.cookies.clear()
        self.login("admin@test.com")
        self.assertTrue(self.client.post(f"/api/v1/photos/{self.photo_id}/delete").json()["is_deleted"])
        self.assertEqual(self.client.get(f"/api/v1/photos/{self.photo_id}").status_code, 404)

        response = self.client.post(f"/api/v1/photos/{self.photo_id}/restore")
        self.assertFalse(response.json()["is_deleted"])
        self.assertEqual(self.client.get(f"/api/v1/photos/{self.photo_id}").status_code, 200)


class TestHealth(ApiTestCase):
    def test_health(self) -> None:
        response = self.client.get("/api/v1/health/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertTrue(body["default_role_present"])


class TestStoreUnavailable(ApiTestCase):
    """A failing credential store answers 503 with a generic message."""

    def setUp(self) -> None:
        super().setUp()
        failing = MagicMock()
        failing.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        failing.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        def override_get_db():
            yield failing

        app.dependency_overrides[get_db] = override_get_db

    def test_login_returns_503(self) -> None:
        response = self.login("user@test.com")
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {"detail": "Service temporarily unavailable"})

    def test_health_reports_degraded(self) -> None:
        response = self.client.get("/api/v1/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["database"], "disconnected")
