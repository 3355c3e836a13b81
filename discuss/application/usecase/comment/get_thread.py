"""Get comment thread use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.model import CommentNode
from discuss.domain.service import ThreadService, iter_with_depth
from discuss.domain.value import PostId


class CommentNodeResponse(BaseModel):
    """Comment node for API response.

    Nodes are listed flat in display order: every comment is followed by its
    replies, oldest first. ``depth`` and ``parent_id`` are enough for a
    client to indent or rebuild the tree; nesting the JSON instead would cap
    how deep a thread can be serialized.
    """

    comment_id: str
    post_id: str
    author_id: str
    author_label: str
    parent_id: str | None
    body: str
    created_at: datetime
    depth: int
    reply_count: int

    @classmethod
    def from_node(cls, node: CommentNode, depth: int = 0) -> "CommentNodeResponse":
        """Convert a single domain node."""
        return cls(
            comment_id=str(node.id),
            post_id=str(node.post_id),
            author_id=str(node.author_id),
            author_label=node.author_label,
            parent_id=str(node.parent_id) if node.parent_id else None,
            body=node.body,
            created_at=node.created_at,
            depth=depth,
            reply_count=len(node.children),
        )

    @classmethod
    def from_forest(cls, forest: list[CommentNode]) -> list["CommentNodeResponse"]:
        """Flatten a forest into display order.

        Args:
            forest: Domain root nodes

        Returns:
            One response per node, each followed by its replies
        """
        return [cls.from_node(node, depth) for node, depth in iter_with_depth(forest)]


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: str  # UUID string


class GetThreadResponse(BaseModel):
    """Get thread response."""

    post_id: str
    comments: list[CommentNodeResponse]
    total: int


class GetThreadUseCase(BaseUseCase[GetThreadRequest, GetThreadResponse]):
    """Use case for getting the reply thread of a post."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize get thread use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Load the post's comment rows and build the forest
        2. Flatten it into display order with depths
        3. Return the list with the total comment count

        Args:
            request: Get thread request

        Returns:
            Comments in display order
        """
        post_id = PostId(UUID(request.post_id))

        forest = await self.thread_service.load_thread(post_id)
        comments = CommentNodeResponse.from_forest(forest)

        return GetThreadResponse(
            post_id=request.post_id,
            comments=comments,
            total=len(comments),
        )
