# pylint: skip-file
# ruff: noqa
"""Initial schema - create all tables

Revision ID: 001
Revises:
Create Date: 2025-03-01 00:00:00

Tables created:
- users: Principals bound to an identity provider subject
- work_stories: Templated, owner-authored content
- profiles: Shareable curations with a unique share token
- profile_stories: Ordered profile membership (composite key)
- share_links: Legacy single link per user

Enums created:
- templatetype: project, role_highlight, lessons_learned
- storystatus: draft, published
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Enum types
template_type_enum = postgresql.ENUM(
    "project",
    "role_highlight",
    "lessons_learned",
    name="templatetype",
    create_type=False,
)

story_status_enum = postgresql.ENUM(
    "draft",
    "published",
    name="storystatus",
    create_type=False,
)


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def _shareable() -> list:
    return [
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_viewed_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    template_type_enum.create(op.get_bind(), checkfirst=True)
    story_status_enum.create(op.get_bind(), checkfirst=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # USERS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("auth_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("headline", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("profile_photo_url", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_auth_id", "users", ["auth_id"], unique=True)

    # ═══════════════════════════════════════════════════════════════════════════
    # WORK STORIES
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "work_stories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("template_type", template_type_enum, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("responses", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("assets", postgresql.JSONB(), nullable=False, server_default="[]"),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("status", story_status_enum, nullable=False, server_default="draft"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_work_stories_user_id", "work_stories", ["user_id"])

    # ═══════════════════════════════════════════════════════════════════════════
    # PROFILES
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("headline", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("share_token", sa.String(16), nullable=False),
        *_shareable(),
        *_timestamps(),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"])
    op.create_index("ix_profiles_share_token", "profiles", ["share_token"], unique=True)

    op.create_table(
        "profile_stories",
        sa.Column(
            "profile_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "work_story_id",
            sa.Uuid(),
            sa.ForeignKey("work_stories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_profile_stories_work_story_id", "profile_stories", ["work_story_id"])

    # ═══════════════════════════════════════════════════════════════════════════
    # SHARE LINKS
    # ═══════════════════════════════════════════════════════════════════════════
    op.create_table(
        "share_links",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("token", sa.String(16), nullable=False),
        *_shareable(),
        *_timestamps(),
    )
    op.create_index("ix_share_links_token", "share_links", ["token"], unique=True)


def downgrade() -> None:
    """Downgrade database schema."""
    # Drop tables in reverse order (respect foreign keys)
    op.drop_table("share_links")
    op.drop_table("profile_stories")
    op.drop_table("profiles")
    op.drop_table("work_stories")
    op.drop_table("users")

    # Drop enum types
    op.execute("DROP TYPE IF EXISTS storystatus")
    op.execute("DROP TYPE IF EXISTS templatetype")
