"""Reply coordinator.

Owns the loaded thread of one post, the reply box target, and the lifecycle
of replies the user submits: insert locally at once, persist, then confirm
or roll back.

The coordinator does not guard against the same reply being submitted twice
while a request is in flight; the calling layer disables its submit control
until ``submit_reply`` returns.
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import logfire

from discuss.domain.error import PersistenceError, ValidationError
from discuss.domain.model import CommentNode, NewComment
from discuss.domain.repository import CommentRepository
from discuss.domain.service import (
    ANONYMOUS_LABEL,
    IdentityProvider,
    ThreadService,
    count_nodes,
    find_node,
    iter_nodes,
    locate,
    remove_subtree,
    resolve_author_label,
    validate_body,
)
from discuss.domain.value import CommentId, Pending, PostId, TempCommentId


class ReplyCoordinator:
    """Interactive state for one post's discussion thread."""

    def __init__(
        self,
        post_id: PostId,
        thread_service: ThreadService,
        comment_repository: CommentRepository,
        identity_provider: IdentityProvider,
        anonymous_label: str = ANONYMOUS_LABEL,
        max_body_length: int = 10000,
    ) -> None:
        """Initialize reply coordinator.

        Args:
            post_id: Post whose thread is shown
            thread_service: Loads and builds the thread
            comment_repository: Store that new replies are written to
            identity_provider: Source of the posting author
            anonymous_label: Label for authors with no usable name
            max_body_length: Longest reply body accepted
        """
        self.post_id = post_id
        self.thread_service = thread_service
        self.comment_repository = comment_repository
        self.identity_provider = identity_provider
        self.anonymous_label = anonymous_label
        self.max_body_length = max_body_length

        self.forest: list[CommentNode] = []
        self.active_target: CommentId | None = None
        self._pending: list[CommentNode] = []
        # Confirmed here but not yet seen in rows returned by a refresh
        self._unsynced: list[CommentNode] = []

    @property
    def node_count(self) -> int:
        return count_nodes(self.forest)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def load(self) -> list[CommentNode]:
        """Load the thread from the store, replacing whatever is shown."""
        return await self.refresh()

    async def refresh(self) -> list[CommentNode]:
        """Rebuild the thread from fresh rows.

        Replies still waiting for the store are put back under their target
        (or at the root if the target is gone) so they stay visible. So are
        replies confirmed after the rows were read, until a refresh returns
        their stored row.
        """
        with logfire.span("reply_coordinator.refresh", post_id=str(self.post_id)):
            forest = await self.thread_service.load_thread(self.post_id)
            for node in list(self._unsynced):
                if find_node(forest, node.id) is not None:
                    self._unsynced.remove(node)
                    continue
                node.children = []
                self._siblings_for(forest, node.parent_id).append(node)
            for node in self._pending:
                node.children = []
                self._siblings_for(forest, node.parent_id).append(node)
            self.forest = forest
            logfire.info(
                "Thread refreshed",
                post_id=str(self.post_id),
                pending=len(self._pending),
                unsynced=len(self._unsynced),
            )
            return forest

    def start_reply(self, comment_id: CommentId) -> None:
        """Open the reply box under a comment."""
        self.active_target = comment_id

    def cancel_reply(self) -> None:
        """Close the reply box; the next reply goes to the root."""
        self.active_target = None

    async def submit_reply(
        self, body: str, target: CommentId | None = None
    ) -> CommentNode:
        """Post a reply, showing it before the store answers.

        The reply is appended as the last child of ``target`` (or of the
        root list) without re-sorting. On success it keeps that position
        and only its id and timestamp change.

        Args:
            body: Reply text
            target: Comment being replied to, None for a root comment

        Returns:
            The confirmed node

        Raises:
            ValidationError: If the body is empty or too long, nobody is signed in, or
                the target is itself still being posted
            PersistenceError: If the store fails; the reply is removed again
        """
        with logfire.span(
            "reply_coordinator.submit_reply",
            post_id=str(self.post_id),
            target=str(target) if target else None,
        ):
            validate_body(body, self.max_body_length)

            identity = self.identity_provider.current_identity()
            if identity is None:
                raise ValidationError("Sign in to reply")

            parent = find_node(self.forest, target) if target else None
            if parent is not None and parent.is_pending:
                raise ValidationError(
                    "Cannot reply to a comment that is still being posted"
                )

            node = CommentNode(
                state=Pending(temp_id=TempCommentId(uuid4())),
                post_id=self.post_id,
                author_id=identity.author_id,
                parent_id=target,
                body=body,
                created_at=datetime.now(timezone.utc),
                author_label=resolve_author_label(
                    identity.profile, self.anonymous_label
                ),
            )
            self._siblings_for(self.forest, target).append(node)
            self._pending.append(node)

            try:
                receipt = await self.comment_repository.create(
                    NewComment(
                        post_id=self.post_id,
                        parent_id=target,
                        body=body,
                        author_id=identity.author_id,
                    )
                )
            except PersistenceError as e:
                self._discard(node)
                logfire.warn("Reply rejected, removed from thread", error=str(e))
                raise
            except Exception as e:
                self._discard(node)
                logfire.error("Reply failed, removed from thread", error=str(e))
                raise PersistenceError(f"Could not save reply: {e}") from e

            self._pending.remove(node)
            node.confirm(receipt)
            confirmed = self._drop_duplicate(node)
            if confirmed is node:
                self._unsynced.append(node)
            node = confirmed
            if self.active_target == target:
                self.active_target = None

            logfire.info(
                "Reply confirmed",
                comment_id=str(receipt.id),
                post_id=str(self.post_id),
            )
            return node

    async def delete_comment(self, comment_id: CommentId) -> CommentNode | None:
        """Delete a comment in the store and drop its subtree from the thread.

        Raises:
            PersistenceError: If the store fails; the thread is unchanged
        """
        with logfire.span(
            "reply_coordinator.delete_comment", comment_id=str(comment_id)
        ):
            await self.comment_repository.delete(comment_id)
            removed = remove_subtree(self.forest, comment_id)
            if removed is not None:
                gone = list(iter_nodes([removed]))
                self._unsynced = [n for n in self._unsynced if n not in gone]
                if any(n.id == self.active_target for n in gone):
                    self.active_target = None
            return removed

    @staticmethod
    def _siblings_for(
        forest: list[CommentNode], parent_id: UUID | None
    ) -> list[CommentNode]:
        parent = find_node(forest, parent_id) if parent_id else None
        return parent.children if parent is not None else forest

    def _discard(self, node: CommentNode) -> None:
        if node in self._pending:
            self._pending.remove(node)
        found = locate(self.forest, lambda candidate: candidate is node)
        if found is not None:
            siblings, _ = found
            siblings.remove(node)

    def _drop_duplicate(self, node: CommentNode) -> CommentNode:
        # A refresh may already have loaded the stored row for this reply
        found = locate(
            self.forest,
            lambda candidate: candidate is not node and candidate.id == node.id,
        )
        if found is None:
            return node
        self._discard(node)
        return found[1]
