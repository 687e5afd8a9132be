"""Initial schema: players, hands to review, reviewers, claimed users, mental game

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

Embedded lists (stakes, comments, ratings) are JSON columns. Claimed names
are unique ignoring case through a unique index on lower(name).

Rollback: downgrade() drops every table (destructive, all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_and_timestamps():
    return [
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
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


def upgrade() -> None:
    op.create_table(
        "players",
        *_id_and_timestamps(),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("player_type", sa.String(50), nullable=False, server_default="Unknown"),
        sa.Column("stakes_seen_at", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index("ix_players_username", "players", ["username"])

    op.create_table(
        "hands_to_review",
        *_id_and_timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("hand_text", sa.Text(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("comments", sa.JSON(), nullable=False),
        sa.Column("star_ratings", sa.JSON(), nullable=False),
        sa.Column("spicy_ratings", sa.JSON(), nullable=False),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "idx_hands_to_review_status_created_at",
        "hands_to_review",
        ["status", "created_at"],
    )

    op.create_table(
        "reviewers",
        *_id_and_timestamps(),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
    )

    op.create_table(
        "claimed_users",
        *_id_and_timestamps(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("improvement_notes", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index(
        "uq_claimed_users_name_lower",
        "claimed_users",
        [sa.text("lower(name)")],
        unique=True,
    )

    op.create_table(
        "mental_game_entries",
        *_id_and_timestamps(),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("session_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("state_rating", sa.Integer(), nullable=False),
        sa.Column("observation", sa.String(280), nullable=False, server_default=""),
        sa.Column("tilt_affected", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("fatigue_affected", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("confidence_affected", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.CheckConstraint("state_rating BETWEEN 1 AND 5", name="ck_mental_state_rating_range"),
    )
    op.create_index(
        "idx_mental_game_user_session",
        "mental_game_entries",
        ["user_id", "session_date"],
    )


def downgrade() -> None:
    op.drop_index("idx_mental_game_user_session", table_name="mental_game_entries")
    op.drop_table("mental_game_entries")
    op.drop_index("uq_claimed_users_name_lower", table_name="claimed_users")
    op.drop_table("claimed_users")
    op.drop_table("reviewers")
    op.drop_index("idx_hands_to_review_status_created_at", table_name="hands_to_review")
    op.drop_table("hands_to_review")
    op.drop_index("ix_players_username", table_name="players")
    op.drop_table("players")
