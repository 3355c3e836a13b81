"""Comment domain service."""

import logfire

from discuss.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from discuss.domain.model import Comment, CommentReceipt, NewComment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, PostId, UserId

from .base import Service


def validate_body(body: str, max_length: int | None = None) -> None:
    """Reject bodies that are empty, blank or too long.

    Raises:
        ValidationError: If the body cannot be posted
    """
    if not body or not body.strip():
        raise ValidationError("Comment body must not be empty")
    if max_length is not None and len(body) > max_length:
        raise ValidationError(f"Comment body must be at most {max_length} characters")


class CommentService(Service):
    """Domain service for comment writes."""

    def __init__(
        self, comment_repository: CommentRepository, max_body_length: int = 10000
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            max_body_length: Longest body accepted
        """
        self.comment_repository = comment_repository
        self.max_body_length = max_body_length

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        body: str,
        parent_id: CommentId | None = None,
    ) -> CommentReceipt:
        """Create a comment on a post or reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            body: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Store-assigned id and creation time

        Raises:
            ValidationError: If the body is empty or too long
            NotFoundError: If the parent is unknown or belongs to another post
            PersistenceError: If the store rejects the write
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            validate_body(body, self.max_body_length)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None or parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment not found in post",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Parent comment", str(parent_id))

            receipt = await self.comment_repository.create(
                NewComment(
                    post_id=post_id,
                    parent_id=parent_id,
                    body=body,
                    author_id=author_id,
                )
            )
            logfire.info(
                "Comment created",
                comment_id=str(receipt.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return receipt

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get the flat comment rows of a post.

        Args:
            post_id: Post ID

        Returns:
            Comment rows in no guaranteed order
        """
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comment rows retrieved", post_id=str(post_id), count=len(comments)
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def delete_comment(self, comment_id: CommentId, user_id: UserId) -> None:
        """Delete one of the user's own comments, replies included.

        Raises:
            NotFoundError: If the comment is unknown
            NotAuthorizedError: If the user did not write the comment
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))
            if comment.author_id != user_id:
                raise NotAuthorizedError("comment", str(comment_id), str(user_id))

            await self.comment_repository.delete(comment_id)
            logfire.info("Comment deleted", comment_id=str(comment_id))
