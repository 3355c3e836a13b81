"""Strongly typed identifiers for discussion entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)

# Locally generated id of a reply that the store has not confirmed yet
TempCommentId = NewType("TempCommentId", UUID)
