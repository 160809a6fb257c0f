"""Error handling framework for shiprates.

This package provides:
- Error code registry with E-XXXX format codes, one per failure kind
- CarrierError, the single tagged exception raised by the rating core
- Extraction of messages and codes from carrier error bodies

Error kinds:
- validation: malformed input or malformed carrier response
- authentication: token endpoint rejected us, or a 401/403 from the API
- rate_limit: HTTP 429, optionally with a retry-after hint
- network: timeout, connection failure, no response
- carrier_api: any other non-2xx carrier response
- configuration: invalid or missing startup configuration
"""

from shiprates.errors.domain import CarrierError
from shiprates.errors.registry import (
    ERROR_REGISTRY,
    ErrorCode,
    ErrorKind,
    get_error,
    get_error_for_kind,
    get_errors_by_kind,
)
from shiprates.errors.ups_translation import (
    extract_error_message,
    extract_oauth_error,
    extract_ups_error,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorKind",
    "ERROR_REGISTRY",
    "get_error",
    "get_error_for_kind",
    "get_errors_by_kind",
    # Error type
    "CarrierError",
    # Body extraction
    "extract_error_message",
    "extract_oauth_error",
    "extract_ups_error",
]
