"""
Insights router.

GET /insights   patterns and insights over every stored journal entry
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from recovery_insights.db.base import get_db
from recovery_insights.insights import generate_insights
from recovery_insights.schemas.insights import InsightsResponse
from recovery_insights.services.journal import load_collection

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get(
    "",
    response_model=InsightsResponse,
    summary="Recovery patterns and insights",
    responses={
        200: {"description": "Freshly computed on every call; nothing is cached."},
    },
)
def read_insights(
    today: Optional[date] = Query(
        default=None,
        description=(
            "Date that `last_updated` is measured from. "
            "Defaults to today in the configured timezone."
        ),
        examples=["2026-10-19"],
    ),
    db: Session = Depends(get_db),
):
    """
    Analyse the whole journal.

    ### Data quality tiers
    | Entries | Tier | Patterns shown (+/-) | Insights shown |
    |---|---|---|---|
    | < 5    | `limited` | none (analysis skipped) | none |
    | 5-29   | `limited` | 3 / 2 | 3 |
    | 30-99  | `good`    | 4 / 3 | 4 |
    | 100+   | `excellent` | 5 / 4 | 5 |

    Passing the same `today` twice over the same journal returns an
    identical response.
    """
    result = generate_insights(load_collection(db), today=today)
    return InsightsResponse(**result.to_dict())
