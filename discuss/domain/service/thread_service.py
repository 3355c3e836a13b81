"""Thread building domain service.

Turns the flat comment rows of one post into an ordered forest of replies.
Nothing here recurses: threads can be arbitrarily deep, so every traversal
keeps its own stack.
"""

from collections.abc import Callable, Iterable, Iterator
from uuid import UUID

import logfire

from discuss.domain.model import Comment, CommentNode
from discuss.domain.repository import CommentRepository
from discuss.domain.value import PostId

from .author_label import ANONYMOUS_LABEL, resolve_author_label
from .base import Service


def build_forest(
    rows: Iterable[Comment], anonymous_label: str = ANONYMOUS_LABEL
) -> list[CommentNode]:
    """Build the reply forest for one post.

    Algorithm:
    1. Build a lookup of id -> working node (no children yet, label resolved)
    2. Attach each node to its parent, or to the root list when the parent
       is not among the rows (deleted, filtered out, not loaded yet)
    3. Sort the root list and every children list by (created_at, id)

    When two rows share an id the later one wins. Rows whose parent chain
    loops back on itself never reach a root; they are left out and logged.

    Args:
        rows: Comment rows of a single post, in any order
        anonymous_label: Label for authors with no usable name

    Returns:
        Root nodes, each with its replies nested under ``children``
    """
    rows = list(rows)
    with logfire.span("thread_service.build_forest", row_count=len(rows)):
        lookup: dict[UUID, CommentNode] = {}
        for row in rows:
            if row.id in lookup:
                logfire.info("Duplicate comment id in rows", comment_id=str(row.id))
            lookup[row.id] = CommentNode.from_comment(
                row, resolve_author_label(row.author, anonymous_label)
            )

        roots: list[CommentNode] = []
        for node in lookup.values():
            parent = lookup.get(node.parent_id) if node.parent_id else None
            if parent is None or parent is node:
                if node.parent_id is not None:
                    logfire.info(
                        "Parent comment missing, showing reply at root",
                        comment_id=str(node.id),
                        parent_id=str(node.parent_id),
                    )
                roots.append(node)
            else:
                parent.children.append(node)

        roots.sort(key=CommentNode.sort_key)
        for node in lookup.values():
            node.children.sort(key=CommentNode.sort_key)

        reachable = count_nodes(roots)
        if reachable != len(lookup):
            logfire.info(
                "Comments in a parent cycle left out of forest",
                dropped=len(lookup) - reachable,
            )

        logfire.info(
            "Built comment forest", node_count=len(lookup), root_count=len(roots)
        )
        return roots


def iter_nodes(forest: list[CommentNode]) -> Iterator[CommentNode]:
    """Yield every node in display order (pre-order, siblings in order)."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_with_depth(forest: list[CommentNode]) -> Iterator[tuple[CommentNode, int]]:
    """Like ``iter_nodes``, paired with each node's nesting level (0 for roots)."""
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def count_nodes(forest: list[CommentNode]) -> int:
    """Count all nodes in the forest."""
    return sum(1 for _ in iter_nodes(forest))


def locate(
    forest: list[CommentNode], predicate: Callable[[CommentNode], bool]
) -> tuple[list[CommentNode], CommentNode] | None:
    """Find the first node matching ``predicate`` and the list that holds it.

    Returns:
        (sibling list, node), or None when nothing matches
    """
    stack: list[tuple[list[CommentNode], CommentNode]] = [
        (forest, node) for node in reversed(forest)
    ]
    while stack:
        siblings, node = stack.pop()
        if predicate(node):
            return siblings, node
        stack.extend((node.children, child) for child in reversed(node.children))
    return None


def find_node(forest: list[CommentNode], node_id: UUID) -> CommentNode | None:
    """Find a node by its store id or, while pending, its temporary id."""
    found = locate(forest, lambda node: node.id == node_id)
    return found[1] if found else None


def remove_subtree(forest: list[CommentNode], node_id: UUID) -> CommentNode | None:
    """Detach a node, and with it all of its replies, from the forest.

    Returns:
        The removed node, or None if no node has that id
    """
    found = locate(forest, lambda node: node.id == node_id)
    if found is None:
        return None
    siblings, node = found
    siblings.remove(node)
    return node


class ThreadService(Service):
    """Domain service for reading discussion threads."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        anonymous_label: str = ANONYMOUS_LABEL,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            anonymous_label: Label for authors with no usable name
        """
        self.comment_repository = comment_repository
        self.anonymous_label = anonymous_label

    async def load_thread(self, post_id: PostId) -> list[CommentNode]:
        """Fetch all comments of a post and build the reply forest.

        Args:
            post_id: Post ID

        Returns:
            Ordered root nodes with nested replies
        """
        with logfire.span("thread_service.load_thread", post_id=str(post_id)):
            rows = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post", post_id=str(post_id), count=len(rows)
            )
            return build_forest(rows, self.anonymous_label)
