"""Flat comment row use cases.

These expose the stored rows exactly as a thread client needs them to build
its own tree: one record per comment with the author relation attached.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.error import NotFoundError
from discuss.domain.model import Comment
from discuss.domain.service import CommentService
from discuss.domain.value import AuthorProfile, CommentId, PostId


class CommentRowResponse(BaseModel):
    """One stored comment."""

    comment_id: str
    post_id: str
    author_id: str
    parent_id: str | None
    body: str
    created_at: datetime
    author: AuthorProfile | None

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentRowResponse":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            body=comment.body,
            created_at=comment.created_at,
            author=comment.author,
        )


class ListCommentsRequest(BaseModel):
    """List comment rows request."""

    post_id: str  # UUID string


class ListCommentsResponse(BaseModel):
    """List comment rows response."""

    post_id: str
    rows: list[CommentRowResponse]


class ListCommentsUseCase(BaseUseCase[ListCommentsRequest, ListCommentsResponse]):
    """Use case for listing the flat comment rows of a post."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        comments = await self.comment_service.get_comments_for_post(
            PostId(UUID(request.post_id))
        )
        return ListCommentsResponse(
            post_id=request.post_id,
            rows=[CommentRowResponse.from_domain(c) for c in comments],
        )


class GetCommentUseCase(BaseUseCase[str, CommentRowResponse]):
    """Use case for fetching a single comment row."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, comment_id: str) -> CommentRowResponse:
        """Execute get comment flow.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_service.get_comment_by_id(
            CommentId(UUID(comment_id))
        )
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return CommentRowResponse.from_domain(comment)
