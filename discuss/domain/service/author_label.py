"""Author label resolution.

The comments query joins each row to its author's profile. Depending on the
client that produced the row, the joined value arrives as nothing, a single
record, or a list holding zero or one records. These helpers collapse all of
those shapes into one display string.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from discuss.domain.value import AuthorProfile

ANONYMOUS_LABEL = "Anonymous"


def normalize_author_relation(relation: Any) -> AuthorProfile | None:
    """Reduce an author relation of any supported shape to one optional profile.

    Accepts ``None``, an ``AuthorProfile``, a mapping with ``display_name``
    (or ``displayName``) and ``username`` keys, or a list/tuple holding zero
    or one of those.

    Args:
        relation: Raw author relation from a comment row

    Returns:
        The profile, or None when the relation is absent or empty
    """
    if isinstance(relation, Sequence) and not isinstance(relation, (str, bytes)):
        relation = relation[0] if relation else None

    if relation is None:
        return None
    if isinstance(relation, AuthorProfile):
        return relation
    if isinstance(relation, Mapping):
        display_name = relation.get("display_name", relation.get("displayName"))
        return AuthorProfile(
            display_name=display_name,
            username=relation.get("username"),
        )
    return None


def resolve_author_label(relation: Any, fallback: str = ANONYMOUS_LABEL) -> str:
    """Pick the string shown next to a comment.

    Display name wins over username; an author with neither (or no author at
    all) gets the fallback label.

    Args:
        relation: Raw author relation, in any shape ``normalize_author_relation``
            understands
        fallback: Label used when nothing better is available

    Returns:
        Display label, never empty unless ``fallback`` is
    """
    profile = normalize_author_relation(relation)
    if profile is None:
        return fallback
    if profile.display_name:
        return profile.display_name
    if profile.username:
        return profile.username
    return fallback
