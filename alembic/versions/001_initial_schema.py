"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # World state singleton (game clock, current week, prize pool)
    op.create_table(
        "world_state",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("launch_timestamp", sa.BigInteger(), nullable=False),
        sa.Column("week_length_seconds", sa.Integer(), nullable=False),
        sa.Column("day_length_seconds", sa.Integer(), nullable=False),
        sa.Column("daily_task_cap", sa.SmallInteger(), nullable=False, server_default="3"),
        sa.Column("entry_fee", sa.String(78), nullable=False),
        sa.Column("current_week", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("weekly_prize_pool", sa.String(78), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        mysql_charset="utf8mb4",
        mysql_collate="utf8mb4_unicode_ci",
    )

    # Players table
    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("address", sa.String(42), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_base_points", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("weekly_base_points", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("total_tasks_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active_this_week", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("player_week", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_check_in_time", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("tasks_completed_today", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("last_task_reset_time", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("address"),
        mysql_charset="utf8mb4",
        mysql_collate="utf8mb4_unicode_ci",
    )
    op.create_index("ix_players_address", "players", ["address"])
    op.create_index("ix_players_player_week", "players", ["player_week"])

    # Per-week task pool; position is the task id players see
    op.create_table(
        "quest_tasks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "task_type",
            sa.Enum("onchain", "offchain", "hybrid"),
            nullable=False,
            server_default="onchain",
        ),
        sa.Column("base_points_reward", sa.BigInteger(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("week", "position", name="uq_task_week_position"),
        mysql_charset="utf8mb4",
        mysql_collate="utf8mb4_unicode_ci",
    )
    op.create_index("ix_quest_tasks_week", "quest_tasks", ["week"])

    # Closed weeks awaiting or holding settlement
    op.create_table(
        "week_closures",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("prize_pool", sa.String(78), nullable=False),
        sa.Column("closed_at", sa.BigInteger(), nullable=False),
        sa.Column("entrants", sa.JSON(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "settled", "failed"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("settled_amount", sa.String(78), nullable=False, server_default="0"),
        sa.Column("treasury_remainder", sa.String(78), nullable=False, server_default="0"),
        sa.Column("failure_reason", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("week"),
        mysql_charset="utf8mb4",
        mysql_collate="utf8mb4_unicode_ci",
    )

    op.create_table(
        "payouts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("closure_id", sa.Integer(), nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("address", sa.String(42), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("amount", sa.String(78), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["closure_id"], ["week_closures.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("week", "address", name="uq_payout_week_address"),
        mysql_charset="utf8mb4",
        mysql_collate="utf8mb4_unicode_ci",
    )

    # Append-only event log
    op.create_table(
        "game_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "event_type",
            sa.Enum("player_joined", "task_completed", "streak_updated", "week_closed"),
            nullable=False,
        ),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("player_address", sa.String(42), nullable=True),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("occurred_at", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        mysql_charset="utf8mb4",
        mysql_collate="utf8mb4_unicode_ci",
    )
    op.create_index("ix_game_events_week", "game_events", ["week"])
    op.create_index("ix_game_events_player_address", "game_events", ["player_address"])


def downgrade() -> None:
    op.drop_table("game_events")
    op.drop_table("payouts")
    op.drop_table("week_closures")
    op.drop_table("quest_tasks")
    op.drop_table("players")
    op.drop_table("world_state")
