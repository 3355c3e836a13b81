"""Thread tree nodes.

A ``CommentNode`` is a working copy of a ``Comment`` with its resolved author
label and its ordered replies. Nodes are mutable: the reply coordinator
appends provisional replies and confirms them in place.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from discuss.domain.model.comment import Comment, CommentReceipt
from discuss.domain.value import (
    CommentId,
    Confirmed,
    NodeState,
    Pending,
    PostId,
    UserId,
)


@dataclass(eq=False)
class CommentNode:
    """Node in a discussion thread.

    Identity is by object, not by value: two pending replies with the same
    body are still two nodes.
    """

    state: NodeState
    post_id: PostId
    author_id: UserId
    parent_id: Optional[CommentId]
    body: str
    created_at: datetime
    author_label: str
    children: list["CommentNode"] = field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment, author_label: str) -> "CommentNode":
        """Shallow copy of a stored row with no children yet."""
        return cls(
            state=Confirmed(comment_id=comment.id),
            post_id=comment.post_id,
            author_id=comment.author_id,
            parent_id=comment.parent_id,
            body=comment.body,
            created_at=comment.created_at,
            author_label=author_label,
        )

    @property
    def id(self) -> UUID:
        """Store id once confirmed, temporary id while pending."""
        if isinstance(self.state, Pending):
            return self.state.temp_id
        return self.state.comment_id

    @property
    def comment_id(self) -> CommentId | None:
        """Store id, or None while the node is still pending."""
        if isinstance(self.state, Confirmed):
            return self.state.comment_id
        return None

    @property
    def is_pending(self) -> bool:
        return isinstance(self.state, Pending)

    def confirm(self, receipt: CommentReceipt) -> None:
        """Swap the temporary id for the store's id.

        The server timestamp replaces the local one; the node is not moved.
        """
        self.state = Confirmed(comment_id=receipt.id)
        self.created_at = receipt.created_at

    def sort_key(self) -> tuple[datetime, str]:
        return (self.created_at, str(self.id))
