"""Unit tests for thread building and traversal."""

from unittest.mock import patch
from uuid import UUID, uuid4

import pytest

from discuss.domain.service import (
    ThreadService,
    build_forest,
    count_nodes,
    find_node,
    iter_nodes,
    iter_with_depth,
    remove_subtree,
)
from discuss.domain.value import AuthorProfile, PostId
from discuss.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import at, cid, make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def ids(forest):
    return [node.id for node in forest]


class TestBuildForest:
    """Tests for build_forest."""

    def test_empty_rows_give_empty_forest(self):
        assert build_forest([]) == []

    def test_replies_nest_under_parent_oldest_first(self):
        """Comment 1 with replies 2 (later) and 3 (earlier) gives 1:[3, 2]."""
        # Arrange
        rows = [
            make_comment(cid(1), created_at=at(0)),
            make_comment(cid(2), parent_id=cid(1), created_at=at(2)),
            make_comment(cid(3), parent_id=cid(1), created_at=at(1)),
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        assert ids(forest) == [cid(1)]
        assert ids(forest[0].children) == [cid(3), cid(2)]
        assert forest[0].children[0].children == []

    def test_roots_sorted_by_created_at(self):
        rows = [
            make_comment(cid(1), created_at=at(5)),
            make_comment(cid(2), created_at=at(1)),
            make_comment(cid(3), created_at=at(3)),
        ]

        assert ids(build_forest(rows)) == [cid(2), cid(3), cid(1)]

    def test_equal_timestamps_ordered_by_id(self):
        rows = [
            make_comment(cid(9), created_at=at(0)),
            make_comment(cid(4), created_at=at(0)),
            make_comment(cid(7), created_at=at(0)),
        ]

        assert ids(build_forest(rows)) == [cid(4), cid(7), cid(9)]

    def test_input_order_does_not_matter(self):
        """Replies listed before their parent are still attached to it."""
        rows = [
            make_comment(cid(3), parent_id=cid(2), created_at=at(2)),
            make_comment(cid(2), parent_id=cid(1), created_at=at(1)),
            make_comment(cid(1), created_at=at(0)),
        ]

        forest = build_forest(rows)

        assert ids(forest) == [cid(1)]
        assert ids(forest[0].children) == [cid(2)]
        assert ids(forest[0].children[0].children) == [cid(3)]

    def test_missing_parent_becomes_root(self):
        """A reply whose parent is not among the rows is shown at root."""
        rows = [
            make_comment(cid(1), created_at=at(0)),
            make_comment(cid(2), parent_id=cid(50), created_at=at(1)),
        ]

        forest = build_forest(rows)

        assert ids(forest) == [cid(1), cid(2)]
        # The parent reference itself is kept
        assert forest[1].parent_id == cid(50)

    def test_self_parent_becomes_root(self):
        rows = [make_comment(cid(1), parent_id=cid(1))]

        forest = build_forest(rows)

        assert ids(forest) == [cid(1)]
        assert forest[0].children == []

    def test_parent_cycle_left_out_and_logged(self):
        rows = [
            make_comment(cid(1), created_at=at(0)),
            make_comment(cid(2), parent_id=cid(3), created_at=at(1)),
            make_comment(cid(3), parent_id=cid(2), created_at=at(2)),
        ]

        with patch("discuss.domain.service.thread_service.logfire") as mock_logfire:
            forest = build_forest(rows)

        assert ids(forest) == [cid(1)]
        assert count_nodes(forest) == 1
        mock_logfire.info.assert_any_call(
            "Comments in a parent cycle left out of forest", dropped=2
        )

    def test_iter_with_depth_follows_display_order(self):
        rows = [
            make_comment(cid(1), created_at=at(0)),
            make_comment(cid(2), parent_id=cid(1), created_at=at(1)),
            make_comment(cid(3), parent_id=cid(2), created_at=at(2)),
            make_comment(cid(4), created_at=at(3)),
        ]

        pairs = [(n.id, d) for n, d in iter_with_depth(build_forest(rows))]

        assert pairs == [(cid(1), 0), (cid(2), 1), (cid(3), 2), (cid(4), 0)]

    def test_duplicate_ids_keep_last_row(self):
        rows = [
            make_comment(cid(1), body="first"),
            make_comment(cid(1), body="second"),
        ]

        forest = build_forest(rows)

        assert len(forest) == 1
        assert forest[0].body == "second"

    def test_every_row_appears_exactly_once(self):
        rows = [
            make_comment(cid(1), created_at=at(0)),
            make_comment(cid(2), parent_id=cid(1), created_at=at(1)),
            make_comment(cid(3), parent_id=cid(2), created_at=at(2)),
            make_comment(cid(4), parent_id=cid(60), created_at=at(3)),
            make_comment(cid(5), created_at=at(4)),
        ]

        forest = build_forest(rows)

        assert count_nodes(forest) == 5
        assert sorted(ids(iter_nodes(forest))) == sorted(r.id for r in rows)

    def test_author_labels_resolved(self):
        rows = [
            make_comment(cid(1), author=AuthorProfile(display_name="Ada")),
            make_comment(cid(2), author=AuthorProfile(username="grace")),
            make_comment(cid(3), author=None),
        ]

        labels = {node.id: node.author_label for node in build_forest(rows)}

        assert labels == {cid(1): "Ada", cid(2): "grace", cid(3): "Anonymous"}

    def test_custom_anonymous_label(self):
        forest = build_forest([make_comment(cid(1))], anonymous_label="Guest")

        assert forest[0].author_label == "Guest"

    def test_nodes_are_confirmed(self):
        forest = build_forest([make_comment(cid(1))])

        assert forest[0].is_pending is False
        assert forest[0].comment_id == cid(1)

    def test_very_deep_thread(self):
        """A chain far deeper than the recursion limit still builds."""
        # Arrange
        depth = 5000
        rows = [make_comment(cid(1), created_at=at(0))]
        rows += [
            make_comment(cid(n), parent_id=cid(n - 1), created_at=at(n))
            for n in range(2, depth + 1)
        ]

        # Act
        forest = build_forest(rows)

        # Assert
        assert len(forest) == 1
        assert count_nodes(forest) == depth
        assert list(iter_nodes(forest))[-1].id == cid(depth)


class TestTraversal:
    """Tests for iter_nodes, find_node and remove_subtree."""

    @pytest.fixture
    def forest(self):
        return build_forest(
            [
                make_comment(cid(1), created_at=at(0)),
                make_comment(cid(2), parent_id=cid(1), created_at=at(1)),
                make_comment(cid(3), parent_id=cid(2), created_at=at(2)),
                make_comment(cid(4), parent_id=cid(1), created_at=at(3)),
                make_comment(cid(5), created_at=at(4)),
            ]
        )

    def test_iter_nodes_is_display_order(self, forest):
        assert ids(iter_nodes(forest)) == [cid(1), cid(2), cid(3), cid(4), cid(5)]

    def test_find_nested_node(self, forest):
        node = find_node(forest, cid(3))

        assert node is not None
        assert node.body == "A comment"
        assert node.parent_id == cid(2)

    def test_find_unknown_node(self, forest):
        assert find_node(forest, uuid4()) is None

    def test_remove_subtree_drops_descendants(self, forest):
        removed = remove_subtree(forest, cid(2))

        assert removed is not None
        assert removed.id == cid(2)
        assert ids(iter_nodes(forest)) == [cid(1), cid(4), cid(5)]

    def test_remove_root(self, forest):
        remove_subtree(forest, cid(1))

        assert ids(forest) == [cid(5)]

    def test_remove_unknown_node_is_noop(self, forest):
        assert remove_subtree(forest, UUID(int=404)) is None
        assert count_nodes(forest) == 5


class TestThreadService:
    """Tests for ThreadService.load_thread."""

    @pytest.mark.asyncio
    async def test_load_thread_builds_forest_for_post(self, unit_env):
        # Arrange
        thread_service = await unit_env.get(ThreadService)
        repo = await unit_env.get(InMemoryCommentRepository)
        post_id = PostId(uuid4())
        other_post = PostId(uuid4())

        await repo.save(make_comment(cid(1), post_id=post_id, created_at=at(0)))
        await repo.save(
            make_comment(cid(2), parent_id=cid(1), post_id=post_id, created_at=at(1))
        )
        await repo.save(make_comment(cid(3), post_id=other_post))

        # Act
        forest = await thread_service.load_thread(post_id)

        # Assert
        assert ids(forest) == [cid(1)]
        assert ids(forest[0].children) == [cid(2)]

    @pytest.mark.asyncio
    async def test_load_thread_uses_joined_profiles(self):
        # Arrange
        repo = InMemoryCommentRepository()
        thread_service = ThreadService(repo, anonymous_label="Nobody")
        post_id = PostId(uuid4())
        named = make_comment(cid(1), post_id=post_id, created_at=at(0))
        unnamed = make_comment(cid(2), post_id=post_id, created_at=at(1))
        repo.add_profile(named.author_id, AuthorProfile(username="ada"))
        await repo.save(named)
        await repo.save(unnamed)

        # Act
        forest = await thread_service.load_thread(post_id)

        # Assert
        assert [n.author_label for n in forest] == ["ada", "Nobody"]

    @pytest.mark.asyncio
    async def test_load_empty_thread(self, unit_env):
        thread_service = await unit_env.get(ThreadService)

        assert await thread_service.load_thread(PostId(uuid4())) == []
