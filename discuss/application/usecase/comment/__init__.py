"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_thread import (
    CommentNodeResponse,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)
from .list_comments import (
    CommentRowResponse,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)

__all__ = [
    "CommentNodeResponse",
    "CommentRowResponse",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetCommentUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
]
