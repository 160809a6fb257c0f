"""Flattening of pydantic validation errors into readable issue lines."""

from pydantic import ValidationError


def format_validation_issues(exc: ValidationError) -> list[str]:
    """Render each pydantic error as ``dotted.path: message``.

    Args:
        exc: The pydantic ValidationError to flatten.

    Returns:
        One string per issue, in pydantic's reporting order.
    """
    issues = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err.get("loc", ()))
        issues.append(f"{path}: {err.get('msg', 'invalid')}" if path else err.get("msg", "invalid"))
    return issues
