"""
Exception hierarchy for the Recovery Insights service.

Every HTTP error carries a machine-readable `code` so the mobile client
can branch on it without parsing English messages. The insights engine
itself raises nothing for well-typed input; these errors come from the
journal store and from malformed collection keys.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Sequence

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from recovery_insights.schemas.common import (
    FieldError,
    ValidationErrorDetails,
    ValidationErrorResponse,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class RecoveryInsightsError(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class JournalEntryNotFoundError(RecoveryInsightsError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "ENTRY_NOT_FOUND"

    def __init__(self, day: date):
        super().__init__(f"No journal entry for {day}.", {"day": str(day)})


class InvalidEntryDateError(RecoveryInsightsError):
    """A collection key that is not an ISO calendar date."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_ENTRY_DATE"

    def __init__(self, key: Any):
        super().__init__(
            f"Entry key {key!r} is not an ISO calendar date.", {"key": str(key)}
        )


class BatchTooLargeError(RecoveryInsightsError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "BATCH_TOO_LARGE"

    def __init__(self, max_items: int, received: int):
        super().__init__(
            f"A batch holds at most {max_items} days; got {received}.",
            {"max_items": max_items, "received": received},
        )


class EmptyBatchError(RecoveryInsightsError):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "EMPTY_BATCH"

    def __init__(self):
        super().__init__("A batch needs at least one day.")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _field_name(loc: Sequence[Any]) -> str:
    # ("body", "items", 0, "energy_level") -> "items.0.energy_level"
    return ".".join(str(part) for part in loc if part != "body")


async def app_exception_handler(request: Request, exc: RecoveryInsightsError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 listing every rejected field."""
    body = ValidationErrorResponse(
        details=ValidationErrorDetails(errors=[
            FieldError(field=_field_name(err["loc"]), message=err["msg"], type=err["type"])
            for err in exc.errors()
        ]),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
    )
