"""JWT token domain service."""

import logfire

from discuss.config import AuthSettings
from discuss.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self,
        user_id: str,
        username: str | None = None,
        display_name: str | None = None,
    ) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            username: Profile username
            display_name: Profile display name

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(
                user_id,
                self.auth_settings,
                username=username,
                display_name=display_name,
            )
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Decode a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Payload if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except Exception as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.warn("Ignoring invalid auth token", error=str(e))
            return None

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from JWT token without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        payload = self.get_payload_from_token(token)
        return payload.user_id if payload else None
