"""Password hashing, strength validation and temporary password generation."""

import logging
import re
import secrets
import string

import bcrypt

from app.core.config import settings

logger = logging.getLogger(__name__)

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# bcrypt only uses the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

RANDOM_PASSWORD_DEFAULT_LEN = 12
RANDOM_PASSWORD_SYMBOLS = "!@#$%^&*"

_LETTER_RE = re.compile(r"[A-Za-z]")
_DIGIT_RE = re.compile(r"[0-9]")


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(_encode(plain_password), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning("Password hash comparison failed: %s", type(e).__name__)
        return False


def validate_password_strength(password: str) -> str | None:
    """
    Return the first violated rule as a user-facing message, or None if acceptable.

    Rules: 8-128 characters, at least one letter, at least one digit.
    """
    if len(password) < PASSWORD_MIN_LEN:
        return f"Password must be at least {PASSWORD_MIN_LEN} characters long"
    if len(password) > PASSWORD_MAX_LEN:
        return f"Password must be less than {PASSWORD_MAX_LEN} characters"
    if not _LETTER_RE.search(password):
        return "Password must contain at least one letter"
    if not _DIGIT_RE.search(password):
        return "Password must contain at least one number"
    return None


def generate_random_password(length: int = RANDOM_PASSWORD_DEFAULT_LEN) -> str:
    """
    Generate a temporary password for administrator-initiated resets.

    Always contains an uppercase letter, a lowercase letter, a digit and a symbol.
    """
    if length < 4:
        raise ValueError("length must be at least 4")
    charset = string.ascii_letters + string.digits + RANDOM_PASSWORD_SYMBOLS
    chars = [
        secrets.choice(string.ascii_uppercase),
        secrets.choice(string.ascii_lowercase),
        secrets.choice(string.digits),
        secrets.choice(RANDOM_PASSWORD_SYMBOLS),
    ]
    chars.extend(secrets.choice(charset) for _ in range(length - 4))
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
