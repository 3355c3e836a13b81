"""Unit tests for CommentNode."""

from uuid import uuid4

from discuss.domain.model import CommentNode, CommentReceipt
from discuss.domain.value import Pending, PostId, TempCommentId, UserId
from tests.conftest import at, cid, make_comment


def pending_node() -> CommentNode:
    return CommentNode(
        state=Pending(temp_id=TempCommentId(uuid4())),
        post_id=PostId(uuid4()),
        author_id=UserId(uuid4()),
        parent_id=cid(1),
        body="Hi",
        created_at=at(0),
        author_label="Ada",
    )


class TestCommentNode:
    """Tests for node state handling."""

    def test_from_comment_is_confirmed(self):
        comment = make_comment(cid(5), parent_id=cid(1))

        node = CommentNode.from_comment(comment, "Ada")

        assert node.id == cid(5)
        assert node.comment_id == cid(5)
        assert node.is_pending is False
        assert node.children == []

    def test_pending_node_uses_temp_id(self):
        node = pending_node()

        assert node.id == node.state.temp_id
        assert node.comment_id is None
        assert node.is_pending is True

    def test_confirm_swaps_id_and_timestamp(self):
        node = pending_node()

        node.confirm(CommentReceipt(id=cid(9), created_at=at(3)))

        assert node.id == cid(9)
        assert node.is_pending is False
        assert node.created_at == at(3)
        assert node.parent_id == cid(1)

    def test_identity_equality(self):
        """Two nodes with the same content are still different nodes."""
        first, second = pending_node(), pending_node()
        second.state = first.state

        assert first != second
        assert first == first
