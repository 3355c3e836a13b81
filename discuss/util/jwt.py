"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from discuss.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload.

    ``display_name`` and ``username`` mirror the author's profile so that a
    client can label its own provisional replies without another lookup.
    """

    user_id: str
    username: str | None = None
    display_name: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    settings: AuthSettings,
    username: str | None = None,
    display_name: str | None = None,
) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        settings: Authentication settings
        username: Profile username, if any
        display_name: Profile display name, if any

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "username": username,
        "display_name": display_name,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
