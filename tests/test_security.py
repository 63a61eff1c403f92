"""Unit tests for app.core.security: session tokens and the session cookie."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from starlette.responses import Response

from app.core.config import settings
from app.core.security import (
    clear_session_cookie,
    issue_password_reset_token,
    issue_session_token,
    reset_token_matches,
    session_ttl,
    set_session_cookie,
    verify_password_reset_token,
    verify_session_token,
)


class TestSessionTokens(unittest.TestCase):
    """Issued tokens verify to their subject; anything altered or expired verifies to None."""

    def test_issue_then_verify(self) -> None:
        claims = verify_session_token(issue_session_token("user-1"))
        self.assertIsNotNone(claims)
        self.assertEqual(claims.subject, "user-1")
        self.assertEqual(claims.token_type, "session")
        self.assertEqual(claims.expires_at - claims.issued_at, session_ttl())

    def test_ttl_is_seven_days(self) -> None:
        self.assertEqual(session_ttl(), timedelta(days=7))

    def test_tampered_signature_rejected(self) -> None:
        token = issue_session_token("user-1")
        head, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        self.assertIsNone(verify_session_token(f"{head}.{payload}.{flipped}"))

    def test_other_secret_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "user-1", "iat": now, "exp": now + timedelta(hours=1), "typ": "session"},
            "another-secret-that-is-long-enough-000",
            algorithm="HS256",
        )
        self.assertIsNone(verify_session_token(token))

    def test_expired_rejected(self) -> None:
        issued = datetime.now(UTC) - session_ttl() - timedelta(minutes=1)
        self.assertIsNone(verify_session_token(issue_session_token("user-1", now=issued)))

    def test_missing_and_garbage_rejected(self) -> None:
        self.assertIsNone(verify_session_token(None))
        self.assertIsNone(verify_session_token(""))
        self.assertIsNone(verify_session_token("not.a.token"))

    def test_missing_subject_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(hours=1), "typ": "session"},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertIsNone(verify_session_token(token))

    def test_token_carries_no_role(self) -> None:
        payload = jwt.decode(
            issue_session_token("user-1"),
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
        self.assertEqual(set(payload), {"sub", "iat", "exp", "typ"})


class TestPasswordResetTokens(unittest.TestCase):
    def test_reset_token_is_not_a_session(self) -> None:
        token = issue_password_reset_token("user-1", "stored-hash")
        self.assertIsNone(verify_session_token(token))
        self.assertEqual(verify_password_reset_token(token).subject, "user-1")

    def test_session_token_cannot_reset_password(self) -> None:
        self.assertIsNone(verify_password_reset_token(issue_session_token("user-1")))

    def test_reset_token_bound_to_password_hash(self) -> None:
        claims = verify_password_reset_token(issue_password_reset_token("user-1", "stored-hash"))
        self.assertTrue(reset_token_matches(claims, "stored-hash"))
        self.assertFalse(reset_token_matches(claims, "changed-hash"))

    def test_session_claims_never_match_a_password(self) -> None:
        claims = verify_session_token(issue_session_token("user-1"))
        self.assertFalse(reset_token_matches(claims, "stored-hash"))


class TestSessionCookie(unittest.TestCase):
    def test_set_cookie_attributes(self) -> None:
        response = Response()
        set_session_cookie(response, "tok")
        header = response.headers["set-cookie"]
        self.assertIn(f"{settings.AUTH_COOKIE_NAME}=tok", header)
        self.assertIn("HttpOnly", header)
        self.assertIn("Path=/", header)
        self.assertIn("SameSite=lax", header)
        self.assertIn(f"Max-Age={7 * 24 * 60 * 60}", header)
        self.assertNotIn("Secure", header)

    def test_clear_cookie_expires_it(self) -> None:
        response = Response()
        clear_session_cookie(response)
        header = response.headers["set-cookie"]
        self.assertIn(f"{settings.AUTH_COOKIE_NAME}=", header)
        self.assertIn("Max-Age=0", header)
