"""Domain value objects for discussion threads."""

from discuss.domain.value.identifiers import CommentId, PostId, TempCommentId, UserId
from discuss.domain.value.types import (
    AuthorProfile,
    Confirmed,
    NodeState,
    Pending,
    SessionIdentity,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "TempCommentId",
    # Types
    "AuthorProfile",
    "SessionIdentity",
    "Pending",
    "Confirmed",
    "NodeState",
]
