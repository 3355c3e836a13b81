"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings, ThreadSettings
from discuss.domain.repository import CommentRepository
from discuss.domain.service import CommentService, JWTService, ThreadService
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, thread_settings: ThreadSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            max_body_length=thread_settings.max_body_length,
        )

    @provide
    def get_thread_service(
        self, comment_repository: CommentRepository, thread_settings: ThreadSettings
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            comment_repository=comment_repository,
            anonymous_label=thread_settings.anonymous_label,
        )
