"""Domain model entities for discussion threads."""

from discuss.domain.model.comment import Comment, CommentReceipt, NewComment
from discuss.domain.model.thread import CommentNode

__all__ = [
    "Comment",
    "CommentNode",
    "CommentReceipt",
    "NewComment",
]
