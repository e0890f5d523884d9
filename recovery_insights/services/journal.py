"""
Journal store service.

One JournalRecord per calendar day. Saving a day that already exists
overwrites every answer (last write wins); omitted answers become NULL,
i.e. "not recorded".

Public API
----------
upsert_entry(db, day, data)      -> JournalRecord
upsert_batch(db, items)          -> list[JournalRecord]
get_entry(db, day)               -> JournalRecord          (raises if missing)
list_entries(db, limit, offset)  -> (total, page)          newest first
delete_entry(db, day)            -> None                   (raises if missing)
load_collection(db)              -> dict[str, JournalEntry] input for the engine
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

from sqlalchemy.orm import Session

from recovery_insights.core.errors import (
    BatchTooLargeError,
    EmptyBatchError,
    JournalEntryNotFoundError,
)
from recovery_insights.insights.entries import (
    COUNTER_FIELDS,
    SCALE_FIELDS,
    TRI_STATE_FIELDS,
    JournalEntry,
)
from recovery_insights.models.journal_entry import JournalRecord
from recovery_insights.schemas.journal import BATCH_MAX_ITEMS

logger = logging.getLogger(__name__)

ANSWER_FIELDS = TRI_STATE_FIELDS + SCALE_FIELDS + COUNTER_FIELDS + ("notes",)


def _find(db: Session, day: date) -> JournalRecord | None:
    return db.query(JournalRecord).filter(JournalRecord.day == day).first()


def _apply(record: JournalRecord, data: Mapping[str, Any]) -> None:
    for name in ANSWER_FIELDS:
        setattr(record, name, data.get(name))


def _stage(db: Session, day: date, data: Mapping[str, Any]) -> JournalRecord:
    record = _find(db, day)
    if record is None:
        record = JournalRecord(day=day)
        db.add(record)
    _apply(record, data)
    return record


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def upsert_entry(db: Session, day: date, data: Mapping[str, Any]) -> JournalRecord:
    """Create or replace the entry for `day`."""
    record = _stage(db, day, data)
    db.commit()
    db.refresh(record)
    logger.info("journal entry saved for %s", day)
    return record


def upsert_batch(db: Session, items: Sequence[Mapping[str, Any]]) -> list[JournalRecord]:
    """
    Save several days in one transaction. Each item carries its own `day`.
    A day repeated inside the batch keeps the last item.
    """
    if not items:
        raise EmptyBatchError()
    if len(items) > BATCH_MAX_ITEMS:
        raise BatchTooLargeError(max_items=BATCH_MAX_ITEMS, received=len(items))

    latest: dict[date, Mapping[str, Any]] = {}
    for item in items:
        latest[item["day"]] = item

    records = []
    for day, data in sorted(latest.items()):
        records.append(_stage(db, day, data))
        db.flush()
    db.commit()
    for record in records:
        db.refresh(record)
    logger.info("journal batch saved: %d days", len(records))
    return records


def delete_entry(db: Session, day: date) -> None:
    record = _find(db, day)
    if record is None:
        raise JournalEntryNotFoundError(day)
    db.delete(record)
    db.commit()
    logger.info("journal entry deleted for %s", day)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_entry(db: Session, day: date) -> JournalRecord:
    record = _find(db, day)
    if record is None:
        raise JournalEntryNotFoundError(day)
    return record


def list_entries(
    db: Session,
    limit: int = 30,
    offset: int = 0,
) -> tuple[int, list[JournalRecord]]:
    """Return (total, page) of entries ordered by day desc."""
    q = db.query(JournalRecord)
    total = q.count()
    items = (
        q.order_by(JournalRecord.day.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return total, items


def to_journal_entry(record: JournalRecord) -> JournalEntry:
    return JournalEntry(**{name: getattr(record, name) for name in ANSWER_FIELDS})


def load_collection(db: Session) -> dict[str, JournalEntry]:
    """Every stored day, keyed by ISO date, ready for generate_insights."""
    return {
        record.day.isoformat(): to_journal_entry(record)
        for record in db.query(JournalRecord).all()
    }
