# skintriage/utils/responses.py

from typing import Sequence


def format_error_response(detail) -> dict:
    return {"error": str(detail)}


def format_validation_error(errors: Sequence[dict]) -> dict:
    """Flatten pydantic/FastAPI validation errors into a single readable message."""
    if not errors:
        return format_error_response("Invalid request body")
    first = errors[0]
    # Drop the leading "body" segment FastAPI adds to request-body locations
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    message = first.get("msg", "Invalid value")
    return format_error_response(f"{field}: {message}" if field else message)
