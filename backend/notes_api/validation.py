"""
Notes API — Validation Error Translation
==========================================

What:  Turns FastAPI/Pydantic validation errors into our field-level violations.
Why:   Clients get 400 with one readable message per field instead of
       FastAPI's default 422 payload.
How:   Each Pydantic error carries a location tuple and an error type; both
       are looked up in the tables below.
"""

from typing import Any, Dict, List, Sequence, Tuple

from notes_api.exceptions import ValidationError

# parameter name → (field name reported to the client, label used in messages)
FIELD_LABELS: Dict[str, Tuple[str, str]] = {
    "note_id": ("id", "ID"),
    "title": ("title", "Title"),
    "content": ("content", "Content"),
    "keyword": ("keyword", "Keyword"),
}

# Pydantic error type → message template
MESSAGE_TEMPLATES: Dict[str, str] = {
    "missing": "{label} is required",
    "string_too_short": "{label} is required",
    "string_type": "{label} must be a string",
    "int_parsing": "{label} must be an integer",
    "int_type": "{label} must be an integer",
    "int_from_float": "{label} must be an integer",
    "string_pattern_mismatch": "{label} must be an integer",
}

BODY_MESSAGES: Dict[str, str] = {
    "missing": "Request body is required",
    "json_invalid": "Request body is not valid JSON",
    "model_attributes_type": "Request body must be a JSON object",
    "dict_type": "Request body must be a JSON object",
}


def to_violation(error: Dict[str, Any]) -> Dict[str, str]:
    """Translate one Pydantic error dict into {field, message, location}."""
    loc = tuple(error.get("loc", ()))
    location = str(loc[0]) if loc else "body"
    error_type = error.get("type", "")

    # Error on the body as a whole (no field component)
    if len(loc) <= 1 or error_type == "json_invalid":
        message = BODY_MESSAGES.get(error_type, error.get("msg", "Invalid request"))
        return {"field": location, "message": message, "location": location}

    name = str(loc[-1])
    field, label = FIELD_LABELS.get(name, (name, name.replace("_", " ").capitalize()))
    template = MESSAGE_TEMPLATES.get(error_type)
    message = template.format(label=label) if template else error.get("msg", "Invalid value")
    return {"field": field, "message": message, "location": location}


def violations_from_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    return [to_violation(error) for error in errors]


def validation_error_from(errors: Sequence[Dict[str, Any]]) -> ValidationError:
    """Build the 400 exception for a RequestValidationError's errors()."""
    return ValidationError(errors=violations_from_errors(errors))
