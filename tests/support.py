"""Shared fixtures: in-memory SQLite credential store and a TestClient bound to it."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.passwords import hash_password
from app.entities.role import CANONICAL_ROLES
from app.main import app
from app.models import Base, Role, User, UserRole

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def reset_schema() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_canonical_roles(db: Session) -> dict[str, Role]:
    roles = {}
    for canonical in CANONICAL_ROLES:
        role = Role(
            name=canonical.name,
            level=canonical.level,
            description=canonical.description,
            is_active=True,
        )
        db.add(role)
        roles[canonical.name] = role
    db.commit()
    return roles


def create_account(
    db: Session,
    email: str,
    password: str = "User1234",
    *,
    full_name: str = "Test User",
    role: Role | None = None,
    is_active: bool = True,
) -> User:
    """Insert a user row directly, optionally with one role assignment."""
    user = User(
        email=email,
        password_hash=hash_password(password, rounds=4),
        full_name=full_name,
        is_active=is_active,
    )
    db.add(user)
    db.flush()
    if role is not None:
        db.add(UserRole(user_id=user.id, role_id=role.id))
    db.commit()
    return user


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema with the canonical roles for every test."""

    def setUp(self) -> None:
        reset_schema()
        self.db = TestingSessionLocal()
        self.roles = seed_canonical_roles(self.db)

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(bind=engine)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db uses the test store."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = TestingSessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app, follow_redirects=False)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()
        super().tearDown()

    def login(self, email: str, password: str = "User1234"):
        return self.client.post(
            "/api/v1/auth/login", json={"email": email, "password": password}
        )
