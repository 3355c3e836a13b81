"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from discuss.domain.model import Comment
from discuss.domain.value import AuthorProfile, CommentId, PostId, UserId

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after T0."""
    return T0 + timedelta(minutes=minutes)


def cid(n: int) -> CommentId:
    """Deterministic comment id; ids sort in the same order as ``n``."""
    return CommentId(UUID(int=n))


def make_comment(
    comment_id: CommentId | None = None,
    parent_id: CommentId | None = None,
    created_at: datetime | None = None,
    post_id: PostId | None = None,
    author_id: UserId | None = None,
    body: str = "A comment",
    author: AuthorProfile | None = None,
) -> Comment:
    """Helper for building comment rows in tests."""
    return Comment(
        id=comment_id or CommentId(uuid4()),
        post_id=post_id or PostId(UUID(int=999)),
        author_id=author_id or UserId(uuid4()),
        parent_id=parent_id,
        body=body,
        created_at=created_at or T0,
        author=author,
    )
