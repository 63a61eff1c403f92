"""Authentication service: registration, login, token authentication and password flows."""

import logging
from functools import lru_cache

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import commit
from app.core.errors import (
    AccountInactiveError,
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.core.passwords import (
    generate_random_password,
    hash_password,
    validate_password_strength,
    verify_password,
)
from app.core.security import (
    issue_password_reset_token,
    issue_session_token,
    reset_token_matches,
    verify_password_reset_token,
    verify_session_token,
)
from app.entities.user import User
from app.repositories import users as user_repository
from app.services import roles as role_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
INVALID_RESET_TOKEN = "Invalid or expired reset token"


class LoginResult(BaseModel):
    """Authenticated user (with role) and the session token issued for it."""

    user: User
    token: str


@lru_cache
def _dummy_hash() -> str:
    # Compared against for unknown emails so both failure paths cost one bcrypt check.
    return hash_password("wc-check-dummy-password-0")


def _require_strong(password: str) -> None:
    problem = validate_password_strength(password)
    if problem is not None:
        raise ValidationError(problem)


def register(
    db: Session,
    *,
    email: str,
    password: str,
    full_name: str,
    phone: str | None = None,
    occupation_id: str | None = None,
) -> User:
    """
    Create an active account with the default user role.

    Raises ValidationError for a weak password and DuplicateEmailError when
    the email is already registered.
    """
    _require_strong(password)
    if user_repository.get_by_email(db, email) is not None:
        raise DuplicateEmailError()

    try:
        row = user_repository.create_user(
            db,
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            phone=phone,
            occupation_id=occupation_id,
        )
        role_service.assign_default_role(db, row.id)
        commit(db)
    except StoreError as e:
        db.rollback()
        if isinstance(e.__cause__, IntegrityError):
            raise DuplicateEmailError() from e
        raise

    logger.info("User registered", extra={"user_id": row.id})
    user = role_service.get_user_with_role(db, row.id)
    if user is None:
        raise StoreError(operation="register.reload")
    return user


def login(db: Session, email: str, password: str) -> LoginResult:
    """
    Check credentials and issue a session token.

    Unknown email and wrong password produce the same AuthenticationError.
    A correct password on a deactivated account raises AccountInactiveError.
    """
    row = user_repository.get_by_email(db, email)
    if row is None:
        verify_password(password, _dummy_hash())
        logger.info("Login failed: unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not verify_password(password, row.password_hash):
        logger.info("Login failed: wrong password", extra={"user_id": row.id})
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not row.is_active:
        logger.info("Login refused: account inactive", extra={"user_id": row.id})
        raise AccountInactiveError()

    user = User.from_row(row, role_service.resolve_role(db, row.id)).update_last_login()
    user_repository.save_user(db, user)
    commit(db)

    logger.info("User logged in", extra={"user_id": user.id})
    return LoginResult(user=user, token=issue_session_token(user.id))


def authenticate_token(db: Session, token: str | None) -> User:
    """Resolve a session token to an active user with a freshly joined role."""
    claims = verify_session_token(token)
    if claims is None:
        raise AuthenticationError()
    user = role_service.get_user_with_role(db, claims.subject)
    if user is None:
        logger.info("Token subject not found", extra={"user_id": claims.subject})
        raise AuthenticationError()
    if not user.is_active:
        logger.info("Token subject inactive", extra={"user_id": user.id})
        raise AuthenticationError()
    return user


def change_password(db: Session, user_id: str, old_password: str, new_password: str) -> None:
    _require_strong(new_password)
    row = user_repository.get_by_id(db, user_id)
    if row is None:
        raise NotFoundError("User not found")
    if not verify_password(old_password, row.password_hash):
        raise ValidationError("Current password is incorrect")
    user_repository.update_password(db, user_id, hash_password(new_password))
    commit(db)
    logger.info("Password changed", extra={"user_id": user_id})


def request_password_reset(db: Session, email: str) -> str | None:
    """
    Issue a password reset token for the account with this email.

    Returns None, without any other signal, when no account matches. There is
    no mail delivery; in dev the token is written to the log.
    """
    row = user_repository.get_by_email(db, email)
    if row is None or not row.is_active:
        return None
    token = issue_password_reset_token(row.id, row.password_hash)
    if settings.APP_ENV == "dev":
        logger.info("Password reset token for user %s: %s", row.id, token)
    else:
        logger.info("Password reset requested", extra={"user_id": row.id})
    return token


def reset_password(db: Session, token: str, new_password: str) -> None:
    _require_strong(new_password)
    claims = verify_password_reset_token(token)
    if claims is None:
        raise ValidationError(INVALID_RESET_TOKEN)
    row = user_repository.get_by_id(db, claims.subject)
    if row is None or not row.is_active:
        raise ValidationError(INVALID_RESET_TOKEN)
    if not reset_token_matches(claims, row.password_hash):
        logger.info("Reset token rejected: password changed since issue", extra={"user_id": row.id})
        raise ValidationError(INVALID_RESET_TOKEN)
    user_repository.update_password(db, row.id, hash_password(new_password))
    commit(db)
    logger.info("Password reset completed", extra={"user_id": claims.subject})


def admin_reset_password(db: Session, user_id: str, actor: User) -> str:
    """
    Replace a user's password with a generated one and return it to the caller only.

    Raises AuthorizationError when the target holds a higher role than the actor.
    """
    target = role_service.get_user_with_role(db, user_id)
    if target is None:
        raise NotFoundError("User not found")
    role_service.ensure_can_manage(actor, target)
    temporary = generate_random_password()
    user_repository.update_password(db, user_id, hash_password(temporary))
    commit(db)
    logger.info("Password reset by administrator", extra={"user_id": user_id, "reset_by": actor.id})
    return temporary
