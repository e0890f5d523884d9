"""
Error envelope shared by every endpoint.

    {"code": "ENTRY_NOT_FOUND", "message": "...", "details": {"day": "2026-10-18"}}

Request validation failures use code VALIDATION_ERROR and list each
offending field under details.errors.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class FieldError(BaseModel):
    field: str = Field(examples=["energy_level"])
    message: str = Field(examples=["Input should be less than or equal to 10"])
    type: str = Field(examples=["less_than_equal"])


class ValidationErrorDetails(BaseModel):
    errors: list[FieldError]


class ErrorResponse(BaseModel):
    code: str = Field(examples=["ENTRY_NOT_FOUND"])
    message: str
    details: Optional[dict[str, Any]] = None


class ValidationErrorResponse(BaseModel):
    code: str = Field(default="VALIDATION_ERROR")
    message: str = Field(default="Request validation failed.")
    details: ValidationErrorDetails
