"""create journal_entries

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

One row per calendar day. Every answer column is nullable so that
"not recorded" survives the round trip.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_TRI_STATE = (
    "mood_positive", "had_cravings", "stress_high", "sleep_quality",
    "used_breathing", "mood_swings", "irritability", "exercised",
    "headaches", "social_support", "avoided_triggers", "productive_day",
    "triggers_encountered", "coping_strategies_used",
)
_SCALES = (
    "craving_intensity", "anxiety_level", "energy_level", "concentration", "appetite",
)
_COUNTERS = ("meditation_minutes", "water_glasses", "exercise_minutes")


def upgrade() -> None:
    op.create_table(
        "journal_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        *[sa.Column(name, sa.Boolean(), nullable=True) for name in _TRI_STATE],
        *[sa.Column(name, sa.Integer(), nullable=True) for name in _SCALES],
        sa.Column("sleep_hours", sa.Float(), nullable=True),
        *[sa.Column(name, sa.Integer(), nullable=True) for name in _COUNTERS],
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("day", name="uq_journal_entries_day"),
    )
    op.create_index("ix_journal_entries_id", "journal_entries", ["id"])
    op.create_index("ix_journal_entries_day", "journal_entries", ["day"])


def downgrade() -> None:
    op.drop_index("ix_journal_entries_day", table_name="journal_entries")
    op.drop_index("ix_journal_entries_id", table_name="journal_entries")
    op.drop_table("journal_entries")
