"""Identity collaborators.

The reply coordinator asks an ``IdentityProvider`` who is posting. Session
management itself (login, refresh, logout) happens elsewhere.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from discuss.domain.value import AuthorProfile, SessionIdentity, UserId

from .jwt_service import JWTService


class IdentityProvider(ABC):
    """Source of the current session's author."""

    @abstractmethod
    def current_identity(self) -> SessionIdentity | None:
        """Return the signed-in author, or None when there is no session."""
        pass


class StaticIdentityProvider(IdentityProvider):
    """Identity held in memory and swapped explicitly on sign in/out."""

    def __init__(self, identity: SessionIdentity | None = None) -> None:
        self._identity = identity

    def current_identity(self) -> SessionIdentity | None:
        return self._identity

    def sign_in(self, identity: SessionIdentity) -> None:
        self._identity = identity

    def sign_out(self) -> None:
        self._identity = None


class TokenIdentityProvider(IdentityProvider):
    """Identity decoded from a session JWT.

    An expired or malformed token counts as no session.
    """

    def __init__(self, jwt_service: JWTService, token: str | None) -> None:
        self.jwt_service = jwt_service
        self.token = token

    def current_identity(self) -> SessionIdentity | None:
        payload = self.jwt_service.get_payload_from_token(self.token)
        if payload is None:
            return None
        try:
            author_id = UserId(UUID(payload.user_id))
        except ValueError:
            return None
        return SessionIdentity(
            author_id=author_id,
            profile=AuthorProfile(
                display_name=payload.display_name,
                username=payload.username,
            ),
        )
