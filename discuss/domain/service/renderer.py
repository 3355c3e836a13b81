"""Display-layer contract for comment threads.

A renderer draws one comment at a time. ``render_forest`` walks the forest
and hands every node, at every depth, the same ``on_reply`` callback, so a
reply request always reaches the coordinator carrying the id of the node
that raised it.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from uuid import UUID

from discuss.domain.model import CommentNode

from .thread_service import iter_with_depth

ReplyCallback = Callable[[UUID], None]


class ThreadRenderer(ABC):
    """Draws a single comment of a thread."""

    @abstractmethod
    def render_comment(
        self, node: CommentNode, depth: int, on_reply: ReplyCallback
    ) -> None:
        """Show the node's body and metadata and offer a reply action.

        Args:
            node: Comment to draw (its ``author_label`` is already resolved)
            depth: Nesting level, 0 for roots
            on_reply: Call with ``node.id`` when the user asks to reply
        """
        pass


def render_forest(
    forest: list[CommentNode], renderer: ThreadRenderer, on_reply: ReplyCallback
) -> None:
    """Render every node, each followed by its replies in order."""
    for node, depth in iter_with_depth(forest):
        renderer.render_comment(node, depth, on_reply)
