"""In-memory comment repository for testing."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from discuss.domain.error import PersistenceError
from discuss.domain.model import Comment, CommentReceipt, NewComment
from discuss.domain.repository.comment import CommentRepository
from discuss.domain.value import AuthorProfile, CommentId, PostId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Set ``fail_writes`` to make ``create`` and ``delete`` raise
    ``PersistenceError``, as a rejected write would.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._profiles: dict[UserId, AuthorProfile] = {}
        self.fail_writes = False

    def add_profile(self, user_id: UserId, profile: AuthorProfile) -> None:
        """Register the profile joined onto this user's comments."""
        self._profiles[user_id] = profile

    async def save(self, comment: Comment) -> Comment:
        """Store a comment as-is (test setup helper)."""
        self._comments[comment.id] = comment
        return comment

    def _with_author(self, comment: Comment) -> Comment:
        profile = self._profiles.get(comment.author_id)
        if profile is None or comment.author is not None:
            return comment
        return comment.model_copy(update={"author": profile})

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        comment = self._comments.get(comment_id)
        return self._with_author(comment) if comment else None

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post."""
        return [
            self._with_author(c)
            for c in self._comments.values()
            if c.post_id == post_id
        ]

    async def create(self, new_comment: NewComment) -> CommentReceipt:
        """Store a new comment under a generated id."""
        if self.fail_writes:
            raise PersistenceError("Write rejected")

        comment = Comment(
            id=CommentId(uuid4()),
            post_id=new_comment.post_id,
            author_id=new_comment.author_id,
            parent_id=new_comment.parent_id,
            body=new_comment.body,
            created_at=datetime.now(timezone.utc),
        )
        self._comments[comment.id] = comment
        return CommentReceipt(id=comment.id, created_at=comment.created_at)

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and, like ON DELETE CASCADE, all its replies."""
        if self.fail_writes:
            raise PersistenceError("Write rejected")

        doomed = {comment_id}
        frontier = [comment_id]
        while frontier:
            parent_id = frontier.pop()
            for c in self._comments.values():
                if c.parent_id == parent_id and c.id not in doomed:
                    doomed.add(c.id)
                    frontier.append(c.id)
        for cid in doomed:
            self._comments.pop(cid, None)
