"""Session token issuance/verification and the session cookie that carries it."""

import hashlib
import hmac
import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import jwt
from pydantic import BaseModel, ConfigDict
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import settings

logger = logging.getLogger(__name__)

TokenType = Literal["session", "password_reset"]

SESSION_TOKEN_TYPE: TokenType = "session"
PASSWORD_RESET_TOKEN_TYPE: TokenType = "password_reset"

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class SessionClaims(BaseModel):
    """Verified claims of a token: who it identifies and when it was valid."""

    model_config = ConfigDict(frozen=True)

    subject: str
    issued_at: datetime
    expires_at: datetime
    token_type: TokenType = SESSION_TOKEN_TYPE
    # Reset tokens only: fingerprint of the password hash they were issued against.
    credential: str | None = None


def _issue(
    sub: str,
    token_type: TokenType,
    ttl: timedelta,
    now: datetime | None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    issued = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "iat": issued,
        "exp": issued + ttl,
        "typ": token_type,
        **(extra_claims or {}),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _verify(token: str | None, token_type: TokenType) -> SessionClaims | None:
    """
    Decode and validate a token of the given type.

    Every failure returns None; the specific cause is only logged.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Token rejected: expired", extra={"token_type": token_type})
        return None
    except jwt.InvalidSignatureError:
        logger.warning("Token rejected: bad signature", extra={"token_type": token_type})
        return None
    except jwt.PyJWTError as e:
        logger.info(
            "Token rejected: %s", type(e).__name__, extra={"token_type": token_type}
        )
        return None

    if payload.get("typ") != token_type:
        logger.warning(
            "Token rejected: wrong type %r", payload.get("typ"),
            extra={"token_type": token_type},
        )
        return None
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        logger.info("Token rejected: empty subject", extra={"token_type": token_type})
        return None
    return SessionClaims(
        subject=sub,
        issued_at=datetime.fromtimestamp(payload["iat"], UTC),
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        token_type=token_type,
        credential=payload.get("pwh"),
    )


def session_ttl() -> timedelta:
    return timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def issue_session_token(user_id: str, now: datetime | None = None) -> str:
    """Create a session token {sub, iat, exp} with a fixed TTL from issuance."""
    return _issue(user_id, SESSION_TOKEN_TYPE, session_ttl(), now)


def verify_session_token(token: str | None) -> SessionClaims | None:
    """Return the claims of a valid, unexpired session token, else None."""
    return _verify(token, SESSION_TOKEN_TYPE)


def credential_fingerprint(password_hash: str) -> str:
    """Keyed digest of a stored password hash; changes whenever the password does."""
    digest = hmac.new(
        settings.JWT_SECRET.get_secret_value().encode("utf-8"),
        password_hash.encode("utf-8"),
        hashlib.sha256,
    )
    return digest.hexdigest()[:32]


def issue_password_reset_token(
    user_id: str, password_hash: str, now: datetime | None = None
) -> str:
    """
    Create a short-lived token that can only be used to reset a password.

    The token is bound to the current password hash, so it stops working
    once any password change (including its own use) has happened.
    """
    ttl = timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    return _issue(
        user_id,
        PASSWORD_RESET_TOKEN_TYPE,
        ttl,
        now,
        {"pwh": credential_fingerprint(password_hash)},
    )


def reset_token_matches(claims: SessionClaims, password_hash: str) -> bool:
    """True when the reset token was issued against this exact password hash."""
    if not claims.credential:
        return False
    return hmac.compare_digest(claims.credential, credential_fingerprint(password_hash))


def verify_password_reset_token(token: str | None) -> SessionClaims | None:
    """Return the claims of a valid password reset token, else None."""
    return _verify(token, PASSWORD_RESET_TOKEN_TYPE)


def read_session_cookie(request: Request) -> str | None:
    """Session token from the request cookie; empty values count as absent."""
    value = request.cookies.get(settings.AUTH_COOKIE_NAME)
    return value or None


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HttpOnly, SameSite=Lax cookie with the token's TTL."""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(session_ttl().total_seconds()),
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie. Safe to call when no cookie is set."""
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
