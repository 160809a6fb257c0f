"""Secret redaction for log lines and displayed configuration.

Carrier credentials (client id/secret), bearer tokens and account
numbers must never reach logs verbatim. Carrier error bodies and token
endpoint responses are passed through ``redact_for_logging`` before
being attached to a log record; free text goes through ``redact_text``.
"""

import re
from typing import Any

# Substring patterns matched case-insensitively against dict keys
_DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "secret", "token", "authorization", "password", "credential",
    "client_id", "clientid", "account_number", "shippernumber",
})

# Keys whose entire value is redacted (regardless of content type)
_CONTAINER_KEYS = frozenset({"credentials", "headers"})

_REDACTED = "***REDACTED***"

_SENSITIVE_KEYWORDS = (
    r"secret|token|password|client_id|client_secret|"
    r"access_token|authorization|credential"
)
_SENSITIVE_VALUE_PATTERNS = re.compile(
    r"(?i)"
    r"(?:"
    # Authorization: Bearer <token> / Basic <credentials>
    r"Authorization\s*:\s*(?:Bearer|Basic)\s+\S+"
    r"|"
    # JSON-style "key": "value"
    r'"(?:' + _SENSITIVE_KEYWORDS + r')"\s*:\s*"[^"]*"'
    r"|"
    # key=value (unquoted, consumes until whitespace/end)
    r"(?:" + _SENSITIVE_KEYWORDS + r")\s*[=:]\s*\S+"
    r")",
)


def _is_sensitive_key(key: str, sensitive_patterns: frozenset[str]) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in sensitive_patterns)


def redact_for_logging(
    obj: Any,
    sensitive_patterns: frozenset[str] = _DEFAULT_SENSITIVE_PATTERNS,
) -> Any:
    """Redact sensitive values from a decoded body for safe logging.

    Args:
        obj: Dict to redact (not mutated, a copy is returned). Non-dict
            values are returned unchanged, strings after ``redact_text``.
        sensitive_patterns: Substring patterns whose matching keys' values
            should be replaced. Matching is case-insensitive.

    Returns:
        Copy with sensitive values replaced by '***REDACTED***'.
        Handles nested dicts, lists of dicts, and container keys recursively.
    """
    if isinstance(obj, str):
        return redact_text(obj)
    if not isinstance(obj, dict):
        return obj

    result = {}
    for key, value in obj.items():
        key_str = str(key)
        if key_str.lower() in _CONTAINER_KEYS:
            result[key] = _REDACTED
        elif _is_sensitive_key(key_str, sensitive_patterns):
            result[key] = _REDACTED
        elif isinstance(value, dict):
            result[key] = redact_for_logging(value, sensitive_patterns)
        elif isinstance(value, list):
            result[key] = [
                redact_for_logging(item, sensitive_patterns) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


def redact_text(msg: str | None, max_length: int = 2000) -> str | None:
    """Redact sensitive-looking fragments in free text and truncate.

    Args:
        msg: Text to sanitize (None passes through).
        max_length: Maximum length of the sanitized text.

    Returns:
        Sanitized and truncated text, or None.
    """
    if msg is None:
        return None
    sanitized = _SENSITIVE_VALUE_PATTERNS.sub(_REDACTED, msg)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length - 3] + "..."
    return sanitized


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Mask a secret for display, keeping only the last few characters.

    Args:
        value: Secret value (may be empty).
        visible: Number of trailing characters to keep.

    Returns:
        '(not set)' for empty values, otherwise '****' plus the tail.
    """
    if not value:
        return "(not set)"
    if len(value) <= visible:
        return "*" * len(value)
    return "****" + value[-visible:]
