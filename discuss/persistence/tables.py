"""SQLAlchemy table definitions for discussion threads.

They match the schema defined in Alembic migrations. Posts live in another
service, so ``comments.post_id`` carries no foreign key here.
"""

from sqlalchemy import Column, ForeignKey, Index, MetaData, String, Table, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(255), nullable=True, unique=True),
    Column("display_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_profiles_username", profiles_table.c.username)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("post_id", UUID, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("body", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post", comments_table.c.post_id)
Index("idx_comments_parent", comments_table.c.parent_id)
