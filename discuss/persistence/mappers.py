"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from discuss.domain.model import Comment, CommentReceipt, NewComment
from discuss.domain.service import normalize_author_relation
from discuss.domain.value import CommentId, PostId, UserId


def _as_uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert a joined comment/profile row to a Comment domain model.

    The author relation is read from ``author`` when the row already nests
    it (a list or a mapping), otherwise from the flat
    ``author_display_name`` / ``author_username`` columns of the join.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    if "author" in row:
        author = normalize_author_relation(row["author"])
    elif row.get("author_display_name") is None and row.get("author_username") is None:
        author = None
    else:
        author = normalize_author_relation(
            {
                "display_name": row.get("author_display_name"),
                "username": row.get("author_username"),
            }
        )

    return Comment(
        id=CommentId(_as_uuid(row["id"])),
        post_id=PostId(_as_uuid(row["post_id"])),
        author_id=UserId(_as_uuid(row["author_id"])),
        parent_id=CommentId(_as_uuid(row["parent_id"]))
        if row.get("parent_id")
        else None,
        body=row["body"],
        created_at=row["created_at"],
        author=author,
    )


def new_comment_to_dict(new_comment: NewComment) -> Dict[str, Any]:
    """Convert a write request to a database insert dict.

    Args:
        new_comment: NewComment domain model

    Returns:
        Dict suitable for database insertion
    """
    return new_comment.model_dump()


def row_to_receipt(row: Dict[str, Any]) -> CommentReceipt:
    """Convert an ``INSERT ... RETURNING id, created_at`` row to a receipt."""
    return CommentReceipt(
        id=CommentId(_as_uuid(row["id"])),
        created_at=row["created_at"],
    )
