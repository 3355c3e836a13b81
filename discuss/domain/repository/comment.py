"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from discuss.domain.model import Comment, CommentReceipt, NewComment
from discuss.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for comments.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence and adapter layers and must
    raise ``PersistenceError`` when the store cannot be reached or rejects
    a write.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post.

        Rows come back flat and in no particular order, each with its
        author profile attached when one exists.

        Args:
            post_id: The post ID

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def create(self, new_comment: NewComment) -> CommentReceipt:
        """Persist a new comment.

        Args:
            new_comment: Post, optional parent, body and author

        Returns:
            Store-assigned id and creation time

        Raises:
            PersistenceError: If the write is rejected or fails
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and every reply beneath it.

        Args:
            comment_id: The comment ID to delete
        """
        pass
