"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    GetThreadUseCase,
    ListCommentsUseCase,
)
from discuss.domain.service import CommentService, ThreadService
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_get_thread_use_case(
        self, thread_service: ThreadService
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(thread_service=thread_service)

    @provide
    def get_list_comments_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsUseCase:
        """Provide list comment rows use case."""
        return ListCommentsUseCase(comment_service=comment_service)

    @provide
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)
