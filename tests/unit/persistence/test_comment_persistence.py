"""Unit tests for comment row mapping and the Postgres repository."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from discuss.domain.error import PersistenceError
from discuss.domain.model import NewComment
from discuss.domain.value import AuthorProfile, CommentId, PostId, UserId
from discuss.persistence.mappers import (
    new_comment_to_dict,
    row_to_comment,
    row_to_receipt,
)
from discuss.persistence.repository import PostgresCommentRepository

CREATED = datetime(2025, 3, 1, 12, tzinfo=timezone.utc)


def db_row(**overrides):
    row = {
        "id": uuid4(),
        "post_id": uuid4(),
        "author_id": uuid4(),
        "parent_id": None,
        "body": "Hello",
        "created_at": CREATED,
        "updated_at": CREATED,
        "author_display_name": None,
        "author_username": None,
    }
    row.update(overrides)
    return row


class TestRowToComment:
    """Tests for row_to_comment."""

    def test_flat_join_columns(self):
        row = db_row(author_display_name="Ada", author_username="ada")

        comment = row_to_comment(row)

        assert comment.id == row["id"]
        assert comment.author == AuthorProfile(display_name="Ada", username="ada")

    def test_missing_profile(self):
        assert row_to_comment(db_row()).author is None

    def test_nested_author_list(self):
        row = db_row(author=[{"displayName": None, "username": "ada99"}])

        assert row_to_comment(row).author == AuthorProfile(username="ada99")

    def test_string_ids(self):
        parent = uuid4()
        row = db_row(id=str(uuid4()), parent_id=str(parent))

        comment = row_to_comment(row)

        assert comment.parent_id == parent


class TestWriteMappers:
    """Tests for new_comment_to_dict and row_to_receipt."""

    def test_new_comment_has_no_id(self):
        new_comment = NewComment(
            post_id=PostId(uuid4()), body="Hi", author_id=UserId(uuid4())
        )

        values = new_comment_to_dict(new_comment)

        assert "id" not in values
        assert "created_at" not in values
        assert values["parent_id"] is None

    def test_receipt(self):
        comment_id = uuid4()

        receipt = row_to_receipt({"id": comment_id, "created_at": CREATED})

        assert receipt.id == comment_id
        assert receipt.created_at == CREATED


class TestPostgresCommentRepository:
    """Tests for store failures surfacing as PersistenceError."""

    @pytest.fixture
    def failing_session(self):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("down"))
        )
        session.flush = AsyncMock()
        return session

    @pytest.mark.asyncio
    async def test_create_failure(self, failing_session):
        repo = PostgresCommentRepository(failing_session)
        new_comment = NewComment(
            post_id=PostId(uuid4()), body="Hi", author_id=UserId(uuid4())
        )

        with pytest.raises(PersistenceError):
            await repo.create(new_comment)

    @pytest.mark.asyncio
    async def test_find_by_post_failure(self, failing_session):
        repo = PostgresCommentRepository(failing_session)

        with pytest.raises(PersistenceError):
            await repo.find_by_post(PostId(uuid4()))

    @pytest.mark.asyncio
    async def test_find_by_id_maps_row(self):
        # Arrange
        row = db_row(author_username="ada")
        result = MagicMock()
        result.fetchone.return_value._asdict.return_value = row
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)
        repo = PostgresCommentRepository(session)

        # Act
        comment = await repo.find_by_id(CommentId(row["id"]))

        # Assert
        assert comment.id == row["id"]
        assert comment.author == AuthorProfile(username="ada")
        session.execute.assert_awaited_once()
