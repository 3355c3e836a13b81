"""HTTP client for a remote comments API.

Implements the comment repository contract on top of the service's own HTTP
endpoints, so a ``ReplyCoordinator`` can run in a process that has no
database access.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import httpx
import logfire

from discuss.config import ClientSettings
from discuss.domain.error import PersistenceError
from discuss.domain.model import Comment, CommentReceipt, NewComment
from discuss.domain.repository import CommentRepository
from discuss.domain.service import normalize_author_relation
from discuss.domain.value import CommentId, PostId, UserId

AUTH_COOKIE = "auth_token"


def _row_to_comment(data: dict[str, Any]) -> Comment:
    """Convert a JSON comment row from the API into a Comment."""
    return Comment(
        id=CommentId(UUID(data["comment_id"])),
        post_id=PostId(UUID(data["post_id"])),
        author_id=UserId(UUID(data["author_id"])),
        parent_id=CommentId(UUID(data["parent_id"])) if data.get("parent_id") else None,
        body=data["body"],
        created_at=datetime.fromisoformat(data["created_at"]),
        author=normalize_author_relation(data.get("author")),
    )


class HttpCommentRepository(CommentRepository):
    """Comment repository backed by the comments HTTP API."""

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize HTTP repository.

        Args:
            base_url: API root, e.g. "http://localhost:8000"
            auth_token: Session JWT sent as the auth cookie on writes
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls, settings: ClientSettings, auth_token: str | None = None
    ) -> "HttpCommentRepository":
        """Build a repository from the `CLIENT__*` settings."""
        return cls(settings.base_url, auth_token=auth_token, timeout=settings.timeout)

    def _client(self) -> httpx.AsyncClient:
        cookies = {AUTH_COOKIE: self.auth_token} if self.auth_token else None
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, cookies=cookies
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Fetch one comment row, None on 404."""
        try:
            async with self._client() as client:
                response = await client.get(f"/comments/{comment_id}")
                if response.status_code == 404:
                    return None
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise PersistenceError(f"Failed to load comment {comment_id}: {e}") from e
        return _row_to_comment(response.json())

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Fetch the flat comment rows of a post."""
        try:
            async with self._client() as client:
                response = await client.get(f"/posts/{post_id}/comments/rows")
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise PersistenceError(
                f"Failed to load comments for post {post_id}: {e}"
            ) from e
        return [_row_to_comment(row) for row in response.json()["rows"]]

    async def create(self, new_comment: NewComment) -> CommentReceipt:
        """POST a new comment.

        The author is taken from the auth cookie by the server;
        ``new_comment.author_id`` must match the session the token belongs to.
        """
        payload = {
            "body": new_comment.body,
            "parent_id": str(new_comment.parent_id) if new_comment.parent_id else None,
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/posts/{new_comment.post_id}/comments", json=payload
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logfire.warn(
                "Comments API rejected write",
                status_code=e.response.status_code,
                post_id=str(new_comment.post_id),
            )
            raise PersistenceError(
                f"Comment rejected with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logfire.warn("Comments API unreachable", error=str(e))
            raise PersistenceError(f"Failed to save comment: {e}") from e

        data = response.json()
        return CommentReceipt(
            id=CommentId(UUID(data["comment_id"])),
            created_at=datetime.fromisoformat(data["created_at"]),
        )

    async def delete(self, comment_id: CommentId) -> None:
        """DELETE a comment (and, server-side, its replies)."""
        try:
            async with self._client() as client:
                response = await client.delete(f"/comments/{comment_id}")
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise PersistenceError(f"Failed to delete comment {comment_id}: {e}") from e
