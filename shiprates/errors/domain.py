"""Tagged carrier error type.

All failures raised by the rating core are a single exception type,
CarrierError, distinguished by its ``kind`` tag rather than by subclass.
Callers match on the kind:

    try:
        response = await carrier.get_rates(request)
    except CarrierError as e:
        if e.kind is ErrorKind.RATE_LIMIT:
            schedule_retry(e.retry_after)
        elif e.kind is ErrorKind.AUTHENTICATION:
            alert_credentials_owner(e)
        else:
            raise
"""

from dataclasses import dataclass
from typing import Any

from shiprates.errors.registry import ErrorKind, get_error_for_kind


@dataclass(eq=False)
class CarrierError(Exception):
    """Error from the carrier rating core.

    Attributes:
        kind: Failure kind (see ErrorKind)
        message: Human-readable error message
        details: Structured context (schema issues, raw carrier body, ...)
        status_code: HTTP status returned by the carrier, when there was one
        retry_after: Seconds the carrier asked us to wait (rate limits only)
        carrier_code: Carrier-specific error code, when the body carried one
    """

    kind: ErrorKind
    message: str
    details: Any = None
    status_code: int | None = None
    retry_after: int | None = None
    carrier_code: str | None = None

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"[{self.code}] {self.message}"

    @property
    def code(self) -> str:
        """E-XXXX registry code for this error's kind."""
        return get_error_for_kind(self.kind).code

    @property
    def remediation(self) -> str:
        return get_error_for_kind(self.kind).remediation

    @property
    def is_retryable(self) -> bool:
        return get_error_for_kind(self.kind).is_retryable

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output (CLI, logs)."""
        return {
            "code": self.code,
            "kind": self.kind.value,
            "message": self.message,
            "remediation": self.remediation,
            "status_code": self.status_code,
            "retry_after": self.retry_after,
            "carrier_code": self.carrier_code,
        }

    # ── Constructors, one per kind ───────────────────────────────────

    @classmethod
    def validation(cls, message: str, details: Any = None) -> "CarrierError":
        return cls(kind=ErrorKind.VALIDATION, message=message, details=details)

    @classmethod
    def authentication(
        cls,
        message: str,
        details: Any = None,
        status_code: int | None = None,
    ) -> "CarrierError":
        return cls(
            kind=ErrorKind.AUTHENTICATION,
            message=message,
            details=details,
            status_code=status_code,
        )

    @classmethod
    def rate_limit(
        cls,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
    ) -> "CarrierError":
        return cls(
            kind=ErrorKind.RATE_LIMIT,
            message=message,
            details={"retry_after": retry_after},
            status_code=429,
            retry_after=retry_after,
        )

    @classmethod
    def network(cls, message: str, details: Any = None) -> "CarrierError":
        return cls(kind=ErrorKind.NETWORK, message=message, details=details)

    @classmethod
    def carrier_api(
        cls,
        message: str,
        status_code: int,
        carrier_code: str | None = None,
        details: Any = None,
    ) -> "CarrierError":
        return cls(
            kind=ErrorKind.CARRIER_API,
            message=message,
            details=details,
            status_code=status_code,
            carrier_code=carrier_code,
        )

    @classmethod
    def configuration(cls, message: str, details: Any = None) -> "CarrierError":
        return cls(kind=ErrorKind.CONFIGURATION, message=message, details=details)
