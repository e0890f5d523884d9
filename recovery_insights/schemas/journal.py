"""
Journal entry request / response schemas.

Single day:  PUT /journal/{day}      -> JournalEntryIn    -> JournalEntryResponse
Batch:       POST /journal/batch     -> JournalBatchRequest -> JournalBatchResponse

Yes/no answers are Optional[bool]: null (or omitted) means "not recorded".
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BATCH_MAX_ITEMS = 100

Scale = Annotated[Optional[int], Field(ge=1, le=10)]
Count = Annotated[Optional[int], Field(ge=0)]


class JournalEntryIn(BaseModel):
    """One day's answers. Every field is optional."""
    model_config = ConfigDict(extra="ignore")

    mood_positive: Optional[bool] = None
    had_cravings: Optional[bool] = None
    stress_high: Optional[bool] = None
    sleep_quality: Optional[bool] = None
    used_breathing: Optional[bool] = None
    mood_swings: Optional[bool] = None
    irritability: Optional[bool] = None
    exercised: Optional[bool] = None
    headaches: Optional[bool] = None
    social_support: Optional[bool] = None
    avoided_triggers: Optional[bool] = None
    productive_day: Optional[bool] = None
    triggers_encountered: Optional[bool] = None
    coping_strategies_used: Optional[bool] = None

    craving_intensity: Scale = None
    anxiety_level: Scale = None
    energy_level: Scale = None
    concentration: Scale = None
    appetite: Scale = None

    sleep_hours: Optional[float] = Field(
        default=None, ge=0, le=24, description="Hours slept; fractions allowed.",
        examples=[7.5],
    )
    meditation_minutes: Count = None
    water_glasses: Count = None
    exercise_minutes: Count = None

    notes: Optional[str] = Field(default=None, max_length=10_000)

    @field_validator("notes", mode="before")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class JournalEntryResponse(JournalEntryIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
    day: str
    created_at: str
    updated_at: str


class JournalEntryListResponse(BaseModel):
    total: int
    items: list[JournalEntryResponse]


class JournalBatchItem(JournalEntryIn):
    day: date = Field(description="Calendar day the answers belong to.", examples=["2026-10-18"])


class JournalBatchRequest(BaseModel):
    """Up to BATCH_MAX_ITEMS days, e.g. when importing history from the device."""
    items: list[JournalBatchItem] = Field(
        description=f"1 to {BATCH_MAX_ITEMS} entries. A repeated day keeps the last item.",
    )


class JournalBatchResponse(BaseModel):
    saved: int
    days: list[str]
