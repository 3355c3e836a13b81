"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str  # UUID string
    body: str
    author_id: str  # User ID from authenticated user
    parent_id: str | None = None  # Parent comment ID for replies


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    post_id: str
    parent_id: str | None
    created_at: datetime


class CreateCommentUseCase(BaseUseCase[CreateCommentRequest, CreateCommentResponse]):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Store-assigned id and creation time

        Raises:
            ValidationError: If the body is empty or too long
            NotFoundError: If the parent comment is not part of the post
        """
        post_id = PostId(UUID(request.post_id))
        parent_id = CommentId(UUID(request.parent_id)) if request.parent_id else None

        receipt = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=UserId(UUID(request.author_id)),
            body=request.body,
            parent_id=parent_id,
        )

        return CreateCommentResponse(
            comment_id=str(receipt.id),
            post_id=request.post_id,
            parent_id=request.parent_id,
            created_at=receipt.created_at,
        )
