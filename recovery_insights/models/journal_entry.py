"""
JournalRecord - one row per calendar day.

Every answer column is nullable: NULL means "not recorded" and is kept
distinct from False all the way into the insights engine. Saving a day
that already exists replaces it (last write wins).
"""
from datetime import datetime, date
from sqlalchemy import Integer, Float, Boolean, Text, DateTime, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from recovery_insights.db.base import Base


class JournalRecord(Base):
    __tablename__ = "journal_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False, unique=True, index=True)

    # Yes / no / not recorded
    mood_positive: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    had_cravings: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    stress_high: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    sleep_quality: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    used_breathing: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    mood_swings: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    irritability: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    exercised: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    headaches: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    social_support: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    avoided_triggers: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    productive_day: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    triggers_encountered: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    coping_strategies_used: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    # 1-10 scales
    craving_intensity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    anxiety_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    energy_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    concentration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    appetite: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Counters
    sleep_hours: Mapped[float | None] = mapped_column(Float, nullable=True)
    meditation_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    water_glasses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    exercise_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
