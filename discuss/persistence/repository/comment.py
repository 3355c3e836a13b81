"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from discuss.domain.error import PersistenceError
from discuss.domain.model import Comment, CommentReceipt, NewComment
from discuss.domain.repository import CommentRepository
from discuss.domain.value import CommentId, PostId
from discuss.persistence.mappers import (
    new_comment_to_dict,
    row_to_comment,
    row_to_receipt,
)
from discuss.persistence.tables import comments_table, profiles_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _select_with_author(self):
        """Comments left-joined to their author's profile."""
        return select(
            comments_table,
            profiles_table.c.display_name.label("author_display_name"),
            profiles_table.c.username.label("author_username"),
        ).select_from(
            comments_table.outerjoin(
                profiles_table, comments_table.c.author_id == profiles_table.c.id
            )
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = self._select_with_author().where(comments_table.c.id == comment_id)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load comment {comment_id}") from e
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = (
            self._select_with_author()
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load comments for post {post_id}") from e
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def create(self, new_comment: NewComment) -> CommentReceipt:
        """Insert a comment and return its generated id and timestamp."""
        stmt = (
            comments_table.insert()
            .values(**new_comment_to_dict(new_comment))
            .returning(comments_table.c.id, comments_table.c.created_at)
        )
        try:
            result = await self.session.execute(stmt)
            row = result.fetchone()
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.warn("Comment insert failed", error=str(e))
            raise PersistenceError("Failed to save comment") from e
        return row_to_receipt(row._asdict())

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment; replies go with it through ON DELETE CASCADE."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        try:
            await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to delete comment {comment_id}") from e
