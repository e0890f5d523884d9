"""
Entry normalizer.

Turns the caller's date-keyed collection into a chronologically ordered
list, counts it, and assigns the data-quality tier.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from recovery_insights.core.errors import InvalidEntryDateError
from recovery_insights.insights.entries import EntryCollection, JournalEntry
from recovery_insights.insights.numeric import tail
from recovery_insights.insights.tiers import (
    MIN_ENTRIES,
    RECENT_WINDOW,
    DataQuality,
    classify,
)

NEVER = "Never"


@dataclass
class NormalizedEntries:
    entries: list[JournalEntry]   # oldest first
    recent: list[JournalEntry]    # last RECENT_WINDOW entries, oldest first
    count: int
    data_quality: DataQuality
    last_date: Optional[date]
    last_updated: str

    @property
    def sufficient(self) -> bool:
        return self.count >= MIN_ENTRIES


def parse_day(key) -> date:
    """Calendar day for a collection key: a date, a datetime, or an ISO string."""
    if isinstance(key, datetime):
        return key.date()
    if isinstance(key, date):
        return key
    text = str(key).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidEntryDateError(key) from None


def normalize(collection: EntryCollection, today: date) -> NormalizedEntries:
    """
    Order entries by date and classify the collection.

    Entries are copied with their `day` set from the key, so the caller's
    objects are never mutated. Keys naming the same day collapse to one
    entry; the last key in iteration order wins.
    """
    by_day: dict[date, JournalEntry] = {}
    for key, entry in collection.items():
        day = parse_day(key)
        by_day[day] = replace(entry, day=day)
    dated = sorted(by_day.values(), key=lambda e: e.day)

    count = len(dated)
    last_date = dated[-1].day if dated else None
    return NormalizedEntries(
        entries=dated,
        recent=tail(dated, RECENT_WINDOW),
        count=count,
        data_quality=classify(count),
        last_date=last_date,
        last_updated=format_last_updated(last_date, today),
    )


def format_last_updated(day: Optional[date], today: date) -> str:
    """Human label for how long ago `day` was, relative to `today`."""
    if day is None:
        return NEVER

    days = (today - day).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        weeks = days // 7
        return f"{weeks} {'week' if weeks == 1 else 'weeks'} ago"
    months = days // 30
    return f"{months} {'month' if months == 1 else 'months'} ago"
