"""Learning tracker: leaks and edges

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 12:00:00.000000+00:00

Linked hand ids and notes are JSON columns, like the embedded lists of
hands_to_review. Leaks carry the review schedule (resolved_at,
next_review_at, review_stage).

Rollback: downgrade() drops both tables (destructive, learning data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _learning_columns(default_status: str):
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
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("category", sa.String(50), nullable=False, server_default="other"),
        sa.Column("status", sa.String(20), nullable=False, server_default=default_status),
        sa.Column("linked_hand_ids", sa.JSON(), nullable=False),
        sa.Column("notes", sa.JSON(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "leaks",
        *_learning_columns("identified"),
        sa.Column("player_id", sa.String(64), nullable=True),
        sa.Column("player_username", sa.String(255), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("next_review_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("review_stage", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index(
        "idx_leaks_user_status_created_at", "leaks", ["user_id", "status", "created_at"]
    )
    op.create_index("idx_leaks_user_next_review_at", "leaks", ["user_id", "next_review_at"])

    op.create_table("edges", *_learning_columns("developing"))
    op.create_index(
        "idx_edges_user_status_created_at", "edges", ["user_id", "status", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("idx_edges_user_status_created_at", table_name="edges")
    op.drop_table("edges")
    op.drop_index("idx_leaks_user_next_review_at", table_name="leaks")
    op.drop_index("idx_leaks_user_status_created_at", table_name="leaks")
    op.drop_table("leaks")
