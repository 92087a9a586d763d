"""
VerseNotes Backend — Shared Response Schemas
==============================================

What:  The response envelope shared by every endpoint.
Why:   Clients read `success` to decide what happened; HTTP status stays 200
       for every application-level outcome.

Envelope:
    Success:  {"success": true,  "message"?: str, ...payload}
    Failure:  {"success": false, "message": str}
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """Base for all response bodies. Subclasses add their payload fields."""

    success: bool = Field(default=True, description="Whether the operation succeeded")

    # populate_by_name: services build responses with snake_case field names;
    # FastAPI serializes them with their camelCase aliases
    model_config = {"populate_by_name": True}


class FailureResponse(ApiResponse):
    """
    What:  Body returned for every handled failure.
    Who:   Produced by the global exception handlers in main.py.
    """
    success: bool = Field(default=False)
    message: str = Field(description="Human-readable reason for the failure")
    request_id: Optional[str] = Field(
        default=None,
        description="Correlation ID (only set for unexpected server faults)",
    )


class HealthResponse(ApiResponse):
    """Liveness probe payload. Static: no dependency is checked."""
    message: str = Field(default="Server is running")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since the process started")


def blank_to_none(value: Any) -> Any:
    """
    Before-validator for optional id fields: "" is treated as absent.

    The client sends empty form values as "", which must surface as the
    endpoint's "required" message rather than an integer parse error.
    """
    if isinstance(value, str) and not value.strip():
        return None
    return value
