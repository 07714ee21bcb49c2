"""Request dependencies for Web API.

Resolves the acting user from an ``Authorization: Bearer <token>`` header.
Handlers never take a user id from the request body.
"""

from fastapi import Header, HTTPException, status

from skillup.core.security import TokenError, decode_access_token
from skillup.db.users_repository import UserRecord, get_user_by_id


def _extract_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(authorization: str | None = Header(default=None)) -> UserRecord:
    """Resolve the authenticated user or fail with 401."""
    token = _extract_token(authorization)
    if token is None:
        raise _unauthorized("Not authenticated")

    try:
        user_id = decode_access_token(token)
    except TokenError as e:
        raise _unauthorized(str(e)) from e

    user = get_user_by_id(user_id)
    if user is None:
        raise _unauthorized("User no longer exists")
    return user


async def get_optional_user(
    authorization: str | None = Header(default=None),
) -> UserRecord | None:
    """Resolve the user when a valid token is sent, otherwise None."""
    token = _extract_token(authorization)
    if token is None:
        return None

    try:
        user_id = decode_access_token(token)
    except TokenError:
        return None
    return get_user_by_id(user_id)

