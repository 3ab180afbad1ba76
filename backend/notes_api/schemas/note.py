"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract.
Why:   Each operation declares its input schema (field, required/optional,
       strict type, transform) and FastAPI evaluates it before the handler
       runs. Every violation is collected, not just the first.
How:   Request models sanitize string fields on the way in: surrounding
       whitespace is trimmed, then HTML-special characters are escaped.
       Stored values are therefore the escaped form, and reads return them
       verbatim.

Design Decision:
    Schemas are separate from SQLAlchemy models because the API contract
    (e.g. `noteId` in the create response) changes independently of the table.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictStr, field_validator

# Decimal digits with an optional sign; no whitespace, dots or underscores
NOTE_ID_PATTERN = r"^[+-]?[0-9]+$"

# ══════════════════════════════════════════════════════════════════════════
# Input Sanitization
# ══════════════════════════════════════════════════════════════════════════

# Same character set as the validator.js `escape()` sanitizer
_ESCAPE_TABLE = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


def escape_html(value: str) -> str:
    """Replace HTML-special characters with their entities."""
    return value.translate(_ESCAPE_TABLE)


def sanitize_text(value: str) -> str:
    """Trim surrounding whitespace, then escape."""
    return escape_html(value.strip())


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes. Both fields required, both must be strings.

    StrictStr: numbers, booleans and objects are rejected instead of coerced.
    """
    title: StrictStr = Field(description="Note title")
    content: StrictStr = Field(description="Note body")

    @field_validator("title", "content")
    @classmethod
    def sanitize(cls, v: str) -> str:
        return sanitize_text(v)


class NoteUpdate(BaseModel):
    """
    Body of PUT and PATCH /api/notes/{id}. Both fields optional.

    An omitted field (or explicit null) stays None here. What None means is
    up to the operation: PUT stores NULL, PATCH keeps the existing value.
    """
    title: Optional[StrictStr] = Field(default=None, description="New title")
    content: Optional[StrictStr] = Field(default=None, description="New body")

    @field_validator("title", "content")
    @classmethod
    def sanitize(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return sanitize_text(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    A stored note. title/content may be null after a PUT that omitted them.
    """
    id: int = Field(description="Store-assigned note identifier")
    title: Optional[str] = Field(default=None, description="Note title (escaped)")
    content: Optional[str] = Field(default=None, description="Note body (escaped)")

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Returned by POST /api/notes with HTTP 201."""
    message: str = Field(default="Note added successfully")
    note_id: int = Field(alias="noteId", description="Id of the new note")

    model_config = {"populate_by_name": True}


class MessageResponse(BaseModel):
    """Returned by PUT, PATCH and DELETE on success."""
    message: str = Field(description="Human-readable success message")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (validation: {"errors": [...]})
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
