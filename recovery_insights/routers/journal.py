"""
Journal router.

PUT    /journal/{day}   create or replace one day's entry
POST   /journal/batch   save up to 100 days at once
GET    /journal/{day}   one day's entry
GET    /journal         all entries (paginated, newest first)
DELETE /journal/{day}   remove one day's entry
"""
from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from recovery_insights.db.base import get_db
from recovery_insights.models.journal_entry import JournalRecord
from recovery_insights.schemas.common import ErrorResponse, ValidationErrorResponse
from recovery_insights.schemas.journal import (
    JournalBatchRequest,
    JournalBatchResponse,
    JournalEntryIn,
    JournalEntryListResponse,
    JournalEntryResponse,
)
from recovery_insights.services.journal import (
    ANSWER_FIELDS,
    delete_entry,
    get_entry,
    list_entries,
    upsert_batch,
    upsert_entry,
)

router = APIRouter(prefix="/journal", tags=["journal"])

Day = Annotated[date, Path(description="Calendar day (ISO date).", examples=["2026-10-18"])]


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def _record_to_response(record: JournalRecord) -> JournalEntryResponse:
    return JournalEntryResponse(
        id=record.id,
        day=str(record.day),
        created_at=record.created_at.isoformat() if record.created_at else "",
        updated_at=record.updated_at.isoformat() if record.updated_at else "",
        **{name: getattr(record, name) for name in ANSWER_FIELDS},
    )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@router.put(
    "/{day}",
    response_model=JournalEntryResponse,
    summary="Save one day's journal entry",
    responses={
        422: {"model": ValidationErrorResponse, "description": "Out-of-range scale or counter."},
    },
)
def save_entry(
    payload: JournalEntryIn,
    day: Day,
    db: Session = Depends(get_db),
):
    """
    Create the entry for `day`, or replace it if one exists.

    Omitted or `null` answers are stored as *not recorded* and are left
    out of every insight calculation (they never count as "no").
    """
    record = upsert_entry(db=db, day=day, data=payload.model_dump())
    return _record_to_response(record)


@router.post(
    "/batch",
    response_model=JournalBatchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save several days at once",
    responses={
        422: {"model": ErrorResponse, "description": "Empty batch or more than 100 items."},
    },
)
def save_batch(payload: JournalBatchRequest, db: Session = Depends(get_db)):
    records = upsert_batch(db=db, items=[item.model_dump() for item in payload.items])
    return JournalBatchResponse(
        saved=len(records),
        days=[str(r.day) for r in records],
    )


@router.delete(
    "/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one day's journal entry",
    responses={404: {"model": ErrorResponse}},
)
def remove_entry(day: Day, db: Session = Depends(get_db)):
    delete_entry(db=db, day=day)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@router.get(
    "/{day}",
    response_model=JournalEntryResponse,
    summary="Get one day's journal entry",
    responses={404: {"model": ErrorResponse}},
)
def read_entry(day: Day, db: Session = Depends(get_db)):
    return _record_to_response(get_entry(db=db, day=day))


@router.get(
    "",
    response_model=JournalEntryListResponse,
    summary="List journal entries (newest first)",
)
def read_entries(
    limit: int = Query(default=30, ge=1, le=366, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N days."),
    db: Session = Depends(get_db),
):
    total, items = list_entries(db=db, limit=limit, offset=offset)
    return JournalEntryListResponse(
        total=total,
        items=[_record_to_response(r) for r in items],
    )
