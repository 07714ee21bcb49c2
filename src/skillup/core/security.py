"""Password hashing and session tokens.

Passwords are stored as salted PBKDF2-SHA256 hashes (passlib). A
successful login issues a signed JWT whose subject is the user id; the
web layer resolves the acting user from that token instead of trusting
ids sent in request bodies.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import structlog
from passlib.hash import pbkdf2_sha256

from skillup.config.app_config import AppConfig, load_app_config

logger = structlog.get_logger(__name__)


class TokenError(Exception):
    """Raised when a session token is missing, malformed, or expired."""

    pass


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored hash.

    Returns False for accounts without a usable hash.
    """
    if not password_hash:
        return False
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        # Not a pbkdf2_sha256 hash string
        logger.warning("auth.unrecognized_hash_format")
        return False


def _signing_key(config: AppConfig) -> str:
    # Dev fallback only in dev mode
    return config.auth.get_secret_key(allow_dev_fallback=config.server.dev_mode)


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Issue a signed session token for a user.

    Args:
        user_id: Authenticated user id (stored as the ``sub`` claim)
        expires_minutes: Override the configured token lifetime

    Returns:
        Encoded JWT string
    """
    config = load_app_config()
    ttl = config.auth.token_ttl_minutes if expires_minutes is None else expires_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=ttl),
    }
    return jwt.encode(payload, _signing_key(config), algorithm=config.auth.algorithm)


def decode_access_token(token: str) -> int:
    """Validate a session token and return the user id it was issued for.

    Raises:
        TokenError: If the token is expired, tampered with, or malformed
        MissingSecretKeyError: If dev mode is off and no secret is set
    """
    config = load_app_config()
    try:
        payload = jwt.decode(
            token,
            _signing_key(config),
            algorithms=[config.auth.algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as e:
        raise TokenError("Invalid token subject") from e
