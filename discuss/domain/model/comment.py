"""Comment records.

A comment belongs to one post and optionally replies to another comment of
the same post. The store keeps comments flat; nesting is rebuilt on read.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import AuthorProfile, CommentId, PostId, UserId


class Comment(DomainModel):
    """One stored comment row.

    ``author`` is the joined profile of ``author_id`` and may be missing when
    the profile row is gone or was never created.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    parent_id: Optional[CommentId] = None
    body: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    author: Optional[AuthorProfile] = None


class NewComment(DomainModel):
    """Write request for a new comment."""

    post_id: PostId
    parent_id: Optional[CommentId] = None
    body: str = Field(min_length=1)
    author_id: UserId


class CommentReceipt(DomainModel):
    """What the store hands back after a successful write."""

    id: CommentId
    created_at: datetime
