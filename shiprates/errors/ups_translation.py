"""Extraction of error information from carrier error bodies.

Carrier error responses vary in structure. The helpers here pull a
human-readable message and, where present, the carrier's own error code
out of a decoded response body without ever raising.
"""

from typing import Any

GENERIC_ERROR_MESSAGE = "Unknown error"
GENERIC_BODY_MESSAGE = "Unknown error occurred"

# Flat message keys, checked in priority order
_MESSAGE_KEYS = ("message", "error", "errorDescription")


def extract_ups_error(response: dict) -> tuple[str | None, str | None]:
    """Extract error code and message from UPS API response.

    UPS responses vary in structure. This handles common formats.

    Args:
        response: UPS API response dictionary.

    Returns:
        Tuple of (error_code, error_message), either may be None.
    """
    # Format 1: response.errors[0].code/message
    errors = response.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return (errors[0].get("code"), errors[0].get("message"))

    # Format 2: response.response.errors[0]
    inner = response.get("response")
    if isinstance(inner, dict):
        errors = inner.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            return (errors[0].get("code"), errors[0].get("message"))

    # Format 3: Fault format
    fault = response.get("Fault")
    if isinstance(fault, dict):
        detail = fault.get("detail", {})
        err = detail.get("Errors") if isinstance(detail, dict) else None
        if isinstance(err, dict) and "ErrorDetail" in err:
            ed = err["ErrorDetail"]
            if isinstance(ed, list):
                ed = ed[0] if ed else None
            primary = ed.get("PrimaryErrorCode") if isinstance(ed, dict) else None
            if isinstance(primary, dict):
                return (primary.get("Code"), primary.get("Description"))

    return (None, None)


def extract_error_message(data: Any) -> str:
    """Best-effort human-readable message from a carrier error body.

    Checks ``message``, ``error`` and ``errorDescription`` in that order,
    then the nested UPS error formats, then falls back to a placeholder.

    Args:
        data: Decoded response body (dict, string, or anything else).

    Returns:
        Message string, never empty.
    """
    if isinstance(data, str):
        return data or GENERIC_BODY_MESSAGE
    if isinstance(data, dict):
        for key in _MESSAGE_KEYS:
            value = data.get(key)
            if value:
                return str(value)
        _, ups_message = extract_ups_error(data)
        if ups_message:
            return str(ups_message)
        return GENERIC_ERROR_MESSAGE
    return GENERIC_BODY_MESSAGE


def extract_oauth_error(data: Any) -> str | None:
    """Return the OAuth ``error_description`` (or ``error``) from a token error body."""
    if not isinstance(data, dict):
        return None
    description = data.get("error_description") or data.get("error")
    if description:
        return str(description)
    _, ups_message = extract_ups_error(data)
    return ups_message
