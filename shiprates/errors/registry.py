"""Error code registry with E-XXXX format codes.

Every carrier failure belongs to exactly one ErrorKind. Each kind has a
registry entry with a stable code, a short title and remediation steps,
so callers can display or branch on errors without inspecting types:
- E-2xxx: Validation errors (bad request input, malformed carrier data)
- E-3xxx: Carrier API errors (network, rate limit, unexpected status)
- E-4xxx: Configuration errors
- E-5xxx: Authentication errors
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of carrier failure kinds."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    CARRIER_API = "carrier_api"
    CONFIGURATION = "configuration"


@dataclass(frozen=True)
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        kind: Failure kind the code belongs to.
        title: Short title for display.
        remediation: Action the caller should take to resolve.
        is_retryable: Whether the operation can be retried without user action.
    """

    code: str
    kind: ErrorKind
    title: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Validation errors (E-2xxx)
    "E-2001": ErrorCode(
        code="E-2001",
        kind=ErrorKind.VALIDATION,
        title="Validation Failed",
        remediation="Correct the request fields listed in the error details and retry.",
    ),
    # Carrier API errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        kind=ErrorKind.NETWORK,
        title="Carrier Unreachable",
        remediation="Check network connectivity. Retry once the carrier API responds.",
        is_retryable=True,
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        kind=ErrorKind.RATE_LIMIT,
        title="Carrier Rate Limit Exceeded",
        remediation="Wait for the Retry-After interval (or 60 seconds) before retrying.",
        is_retryable=True,
    ),
    "E-3005": ErrorCode(
        code="E-3005",
        kind=ErrorKind.CARRIER_API,
        title="Carrier API Error",
        remediation="Inspect the carrier message and status code. Contact support if it persists.",
    ),
    # Configuration errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        kind=ErrorKind.CONFIGURATION,
        title="Invalid Configuration",
        remediation="Fix the configuration values listed in the error and restart.",
    ),
    # Auth errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        kind=ErrorKind.AUTHENTICATION,
        title="Carrier Authentication Failed",
        remediation="Verify the client ID, client secret and account number are correct.",
    ),
}

_KIND_TO_CODE: dict[ErrorKind, str] = {
    entry.kind: code for code, entry in ERROR_REGISTRY.items()
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_error_for_kind(kind: ErrorKind) -> ErrorCode:
    """Get the registry entry for a failure kind."""
    return ERROR_REGISTRY[_KIND_TO_CODE[kind]]


def get_errors_by_kind(kind: ErrorKind) -> list[ErrorCode]:
    """Get all errors of a kind.

    Args:
        kind: The failure kind to filter by.

    Returns:
        List of ErrorCode objects of the specified kind.
    """
    return [e for e in ERROR_REGISTRY.values() if e.kind == kind]
