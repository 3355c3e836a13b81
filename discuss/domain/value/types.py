"""Domain value objects for discussion threads."""

from typing import Literal, Union

from pydantic import Field

from discuss.domain.value.common import ValueObject
from discuss.domain.value.identifiers import CommentId, TempCommentId, UserId


class AuthorProfile(ValueObject):
    """The author relation attached to a comment row.

    Either field may be missing; see ``resolve_author_label`` for how a
    single display string is chosen.
    """

    display_name: str | None = None
    username: str | None = None


class SessionIdentity(ValueObject):
    """The currently signed-in author, as seen by the identity collaborator."""

    author_id: UserId
    profile: AuthorProfile = Field(default_factory=AuthorProfile)


class Pending(ValueObject):
    """A reply inserted locally and still waiting for the store."""

    kind: Literal["pending"] = "pending"
    temp_id: TempCommentId


class Confirmed(ValueObject):
    """A comment whose id was assigned by the store."""

    kind: Literal["confirmed"] = "confirmed"
    comment_id: CommentId


NodeState = Union[Pending, Confirmed]
