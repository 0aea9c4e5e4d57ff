"""Initial schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates initial database tables:
- users: User accounts
- travel_stories: Travel journal entries
- story_locations: Ordered visited locations per story
- story_collaborators: Shared access to stories
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

collaborator_role = sa.Enum("viewer", "editor", name="collaborator_role")


def upgrade() -> None:
    """Create all initial tables."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create travel_stories table
    op.create_table(
        "travel_stories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("narrative", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(length=500), nullable=False),
        sa.Column("visit_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_favourite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_travel_stories_user_id", "travel_stories", ["user_id"])
    op.create_index("ix_travel_stories_visit_date", "travel_stories", ["visit_date"])

    # Create story_locations table
    op.create_table(
        "story_locations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("story_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(["story_id"], ["travel_stories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_story_locations_story_id", "story_locations", ["story_id"])

    # Create story_collaborators table
    op.create_table(
        "story_collaborators",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("story_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role", collaborator_role, nullable=False, server_default="viewer"),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["story_id"], ["travel_stories.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("story_id", "user_id", name="uq_story_collaborators_story_user"),
    )
    op.create_index("ix_story_collaborators_story_id", "story_collaborators", ["story_id"])
    op.create_index("ix_story_collaborators_user_id", "story_collaborators", ["user_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("story_collaborators")
    op.drop_table("story_locations")
    op.drop_table("travel_stories")
    op.drop_table("users")
    collaborator_role.drop(op.get_bind(), checkfirst=True)
