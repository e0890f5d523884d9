"""
Recovery Insights API.

    /journal    one self-report per calendar day
    /insights   patterns and prioritized insights over the whole journal
    /health     liveness + database reachability
"""
import logging

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recovery_insights.core.config import settings
from recovery_insights.core.errors import (
    RecoveryInsightsError,
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from recovery_insights.core.logging import configure_logging
from recovery_insights.db.base import get_db
from recovery_insights.routers import insights, journal

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Recovery Insights API",
    description=(
        "**Recovery journal and insights engine**\n\n"
        "Stores one self-report per day and derives which habits help or hurt "
        "recovery, with a short prioritized list of insights on top.\n\n"
        "Errors use the `{code, message, details}` envelope."
    ),
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Most specific first.
app.add_exception_handler(RecoveryInsightsError, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

for module in (journal, insights):
    app.include_router(module.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    `{"status": "ok", "db": "ok", "env": ...}` when the database answers,
    HTTP 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("health check: database unreachable", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": "unreachable"},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
