"""
Journal entry shape consumed by the insights engine.

Yes/no questions are tri-state: a user may skip any of them, and a skipped
answer is "not recorded", never "no". Numeric fields use ``None`` for the
same purpose and are range-guarded at read time.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Mapping, Optional, Union


class TriState(str, enum.Enum):
    yes = "yes"
    no = "no"
    unset = "unset"

    @classmethod
    def of(cls, value: Any) -> "TriState":
        if isinstance(value, TriState):
            return value
        if value is None:
            return cls.unset
        return cls.yes if value else cls.no

    @property
    def recorded(self) -> bool:
        return self is not TriState.unset

    def as_bool(self) -> Optional[bool]:
        if self is TriState.unset:
            return None
        return self is TriState.yes


TRI_STATE_FIELDS = (
    "mood_positive",
    "had_cravings",
    "stress_high",
    "sleep_quality",
    "used_breathing",
    "mood_swings",
    "irritability",
    "exercised",
    "headaches",
    "social_support",
    "avoided_triggers",
    "productive_day",
    "triggers_encountered",
    "coping_strategies_used",
)

SCALE_FIELDS = (
    "craving_intensity",
    "anxiety_level",
    "energy_level",
    "concentration",
    "appetite",
)

COUNTER_FIELDS = (
    "sleep_hours",
    "meditation_minutes",
    "water_glasses",
    "exercise_minutes",
)

SCALE_MIN = 1
SCALE_MAX = 10


@dataclass
class JournalEntry:
    """One day's self-report. Every field may be left unrecorded."""

    mood_positive: TriState = TriState.unset
    had_cravings: TriState = TriState.unset
    stress_high: TriState = TriState.unset
    sleep_quality: TriState = TriState.unset
    used_breathing: TriState = TriState.unset
    mood_swings: TriState = TriState.unset
    irritability: TriState = TriState.unset
    exercised: TriState = TriState.unset
    headaches: TriState = TriState.unset
    social_support: TriState = TriState.unset
    avoided_triggers: TriState = TriState.unset
    productive_day: TriState = TriState.unset
    triggers_encountered: TriState = TriState.unset
    coping_strategies_used: TriState = TriState.unset

    craving_intensity: Optional[int] = None
    anxiety_level: Optional[int] = None
    energy_level: Optional[int] = None
    concentration: Optional[int] = None
    appetite: Optional[int] = None

    sleep_hours: Optional[float] = None
    meditation_minutes: Optional[int] = None
    water_glasses: Optional[int] = None
    exercise_minutes: Optional[int] = None

    notes: Optional[str] = None

    # Filled in by the normalizer from the collection key.
    day: Optional[date] = None

    def __post_init__(self) -> None:
        for name in TRI_STATE_FIELDS:
            setattr(self, name, TriState.of(getattr(self, name)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "JournalEntry":
        """Build from a dict with snake_case or the mobile app's camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = key if key in known else _snake(key)
            name = _ALIASES.get(name, name)
            if name in known and name != "day":
                kwargs[name] = value
        return cls(**kwargs)


# Mobile client field names that don't map 1:1 after snake-casing.
_ALIASES = {
    "had_headaches": "headaches",
    "high_stress": "stress_high",
    "good_sleep": "sleep_quality",
    "had_social_support": "social_support",
}


def _snake(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def scale(entry: JournalEntry, name: str) -> Optional[int]:
    """A 1-10 scale value, or None when missing or out of range."""
    value = getattr(entry, name)
    if value is None or not SCALE_MIN <= value <= SCALE_MAX:
        return None
    return value


def counter(entry: JournalEntry, name: str) -> Optional[Union[int, float]]:
    """A non-negative counter value, or None when missing or negative."""
    value = getattr(entry, name)
    if value is None or value < 0:
        return None
    return value


EntryCollection = Mapping[Union[str, date], JournalEntry]
