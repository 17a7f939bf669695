"""create users, notes and personal access tokens

Revision ID: a1c3e5f70001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from notely.core.models.types import GUID

# revision identifiers, used by Alembic.
revision: str = "a1c3e5f70001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("profile_picture", sa.String(length=2048), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "notes",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "user_id", GUID(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
        ),
        *_timestamps(),
        sa.CheckConstraint("length(title) > 0", name="ck_notes_title_not_empty"),
        sa.CheckConstraint("length(content) > 0", name="ck_notes_content_not_empty"),
    )
    op.create_index("idx_notes_title", "notes", ["title"])
    op.create_index("idx_notes_user_created", "notes", ["user_id", "created_at"])

    op.create_table(
        "personal_access_tokens",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column(
            "user_id", GUID(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("token", name="uq_personal_access_tokens_token"),
    )
    op.create_index("idx_access_tokens_token", "personal_access_tokens", ["token"])
    op.create_index("idx_access_tokens_user_id", "personal_access_tokens", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_access_tokens_user_id", table_name="personal_access_tokens")
    op.drop_index("idx_access_tokens_token", table_name="personal_access_tokens")
    op.drop_table("personal_access_tokens")
    op.drop_index("idx_notes_user_created", table_name="notes")
    op.drop_index("idx_notes_title", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
