"""Domain services."""

from .author_label import (
    ANONYMOUS_LABEL,
    normalize_author_relation,
    resolve_author_label,
)
from .base import Service
from .comment_service import CommentService, validate_body
from .identity import IdentityProvider, StaticIdentityProvider, TokenIdentityProvider
from .jwt_service import JWTService
from .renderer import ReplyCallback, ThreadRenderer, render_forest
from .thread_service import (
    ThreadService,
    build_forest,
    count_nodes,
    find_node,
    iter_nodes,
    iter_with_depth,
    locate,
    remove_subtree,
)

__all__ = [
    "ANONYMOUS_LABEL",
    "CommentService",
    "IdentityProvider",
    "JWTService",
    "ReplyCallback",
    "Service",
    "StaticIdentityProvider",
    "ThreadRenderer",
    "ThreadService",
    "TokenIdentityProvider",
    "build_forest",
    "count_nodes",
    "find_node",
    "iter_nodes",
    "iter_with_depth",
    "locate",
    "normalize_author_relation",
    "remove_subtree",
    "render_forest",
    "resolve_author_label",
    "validate_body",
]
