"""Unit tests for GetThreadUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import (
    CommentNodeResponse,
    GetThreadRequest,
    GetThreadUseCase,
)
from discuss.domain.service import build_forest
from discuss.domain.value import AuthorProfile, PostId
from discuss.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import at, cid, make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetThreadUseCase:
    """Tests for GetThreadUseCase."""

    @pytest.mark.asyncio
    async def test_returns_thread_in_display_order(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetThreadUseCase)
        repo = await unit_env.get(InMemoryCommentRepository)
        post_id = PostId(uuid4())
        await repo.save(
            make_comment(
                cid(1),
                post_id=post_id,
                created_at=at(0),
                author=AuthorProfile(display_name="Ada"),
            )
        )
        await repo.save(
            make_comment(cid(2), parent_id=cid(1), post_id=post_id, created_at=at(2))
        )
        await repo.save(
            make_comment(cid(3), parent_id=cid(1), post_id=post_id, created_at=at(1))
        )

        # Act
        response = await use_case.execute(GetThreadRequest(post_id=str(post_id)))

        # Assert
        assert response.total == 3
        assert [c.comment_id for c in response.comments] == [
            str(cid(1)),
            str(cid(3)),
            str(cid(2)),
        ]
        assert [c.depth for c in response.comments] == [0, 1, 1]
        root, first, _ = response.comments
        assert root.author_label == "Ada"
        assert root.parent_id is None
        assert root.reply_count == 2
        assert first.parent_id == str(cid(1))
        assert first.reply_count == 0

    @pytest.mark.asyncio
    async def test_empty_post(self, unit_env):
        use_case = await unit_env.get(GetThreadUseCase)
        post_id = str(uuid4())

        response = await use_case.execute(GetThreadRequest(post_id=post_id))

        assert response.post_id == post_id
        assert response.comments == []
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_invalid_post_id(self, unit_env):
        use_case = await unit_env.get(GetThreadUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(GetThreadRequest(post_id="not-a-uuid"))


class TestCommentNodeResponse:
    """Tests for converting forests to response models."""

    def test_deep_forest_converts(self):
        depth = 3000
        rows = [make_comment(cid(1), created_at=at(0))]
        rows += [
            make_comment(cid(n), parent_id=cid(n - 1), created_at=at(n))
            for n in range(2, depth + 1)
        ]

        nodes = CommentNodeResponse.from_forest(build_forest(rows))

        assert len(nodes) == depth
        assert nodes[-1].comment_id == str(cid(depth))
        assert nodes[-1].depth == depth - 1
        assert nodes[-1].parent_id == str(cid(depth - 1))

    def test_replies_follow_their_parent(self):
        rows = [
            make_comment(cid(1), created_at=at(0)),
            make_comment(cid(2), created_at=at(1)),
            make_comment(cid(3), parent_id=cid(1), created_at=at(2)),
            make_comment(cid(4), parent_id=cid(3), created_at=at(3)),
        ]

        nodes = CommentNodeResponse.from_forest(build_forest(rows))

        assert [n.comment_id for n in nodes] == [
            str(cid(1)),
            str(cid(3)),
            str(cid(4)),
            str(cid(2)),
        ]
        assert [n.depth for n in nodes] == [0, 1, 2, 0]
