"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    user_id: str  # Current user ID (must be author)


class DeleteCommentUseCase(BaseUseCase[DeleteCommentRequest, None]):
    """Use case for deleting a comment together with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the user did not write the comment
        """
        await self.comment_service.delete_comment(
            comment_id=CommentId(UUID(request.comment_id)),
            user_id=UserId(UUID(request.user_id)),
        )
