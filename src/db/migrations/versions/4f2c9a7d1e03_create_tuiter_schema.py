"""
Create users, tuits, relations, follows and messages tables.

Revision ID: 4f2c9a7d1e03
Revises:
Create Date: 2026-10-17 10:02:41.118302
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2c9a7d1e03"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text("clock_timestamp()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("profile_photo", sa.Text(), nullable=True),
        sa.Column("header_image", sa.Text(), nullable=True),
        sa.Column("biography", sa.Text(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("account_type", sa.String(length=20), nullable=False),
        sa.Column("marital_status", sa.String(length=20), nullable=False),
        _timestamp("joined"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "tuits",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("tuit", sa.Text(), nullable=False),
        sa.Column("posted_by", sa.Uuid(), nullable=False),
        _timestamp("posted_on"),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("youtube", sa.Text(), nullable=True),
        sa.Column("avatar_logo", sa.Text(), nullable=True),
        sa.Column("image_overlay", sa.Text(), nullable=True),
        sa.Column("reply_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("retuit_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("like_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("dislike_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("bookmark_count", sa.Integer(), server_default="0", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("like_count >= 0", name="ck_tuit_like_count"),
        sa.CheckConstraint("dislike_count >= 0", name="ck_tuit_dislike_count"),
        sa.CheckConstraint("bookmark_count >= 0", name="ck_tuit_bookmark_count"),
        sa.ForeignKeyConstraint(["posted_by"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tuits_posted_by"), "tuits", ["posted_by"], unique=False)
    op.create_index(
        "ix_tuits_posted_by_posted_on", "tuits", ["posted_by", "posted_on"], unique=False,
    )

    op.create_table(
        "relations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.Column("subject_id", sa.Uuid(), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "kind IN ('bookmark', 'like', 'dislike')",
            name="ck_relation_kind",
        ),
        # Constraint names below are matched by RelationStore.insert
        sa.ForeignKeyConstraint(
            ["actor_id"], ["users.id"],
            name="relations_actor_id_fkey", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["subject_id"], ["tuits.id"],
            name="relations_subject_id_fkey", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "actor_id", "subject_id", "kind", name="uq_relation_actor_subject_kind",
        ),
    )
    op.create_index("ix_relations_subject_kind", "relations", ["subject_id", "kind"])
    op.create_index("ix_relations_actor_kind", "relations", ["actor_id", "kind"])

    op.create_table(
        "follows",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("follower_id", sa.Uuid(), nullable=False),
        sa.Column("followee_id", sa.Uuid(), nullable=False),
        _timestamp("followed_on"),
        sa.CheckConstraint("follower_id <> followee_id", name="ck_follow_no_self"),
        sa.ForeignKeyConstraint(["follower_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["followee_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "followee_id", name="uq_follow_pair"),
    )
    op.create_index(op.f("ix_follows_follower_id"), "follows", ["follower_id"])
    op.create_index(op.f("ix_follows_followee_id"), "follows", ["followee_id"])

    op.create_table(
        "messages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("sender_id", sa.Uuid(), nullable=False),
        sa.Column("recipient_id", sa.Uuid(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        _timestamp("sent_on"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_messages_sender_id"), "messages", ["sender_id"])
    op.create_index(op.f("ix_messages_recipient_id"), "messages", ["recipient_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_messages_recipient_id"), table_name="messages")
    op.drop_index(op.f("ix_messages_sender_id"), table_name="messages")
    op.drop_table("messages")
    op.drop_index(op.f("ix_follows_followee_id"), table_name="follows")
    op.drop_index(op.f("ix_follows_follower_id"), table_name="follows")
    op.drop_table("follows")
    op.drop_index("ix_relations_actor_kind", table_name="relations")
    op.drop_index("ix_relations_subject_kind", table_name="relations")
    op.drop_table("relations")
    op.drop_index("ix_tuits_posted_by_posted_on", table_name="tuits")
    op.drop_index(op.f("ix_tuits_posted_by"), table_name="tuits")
    op.drop_table("tuits")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
