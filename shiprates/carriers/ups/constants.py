"""Canonical UPS rating constants.

Single source of truth for UPS endpoints, payload defaults and packaging
codes used by the rating integration. Payload-building modules import
from here instead of using inline magic values.
"""

# ---------------------------------------------------------------------------
# Carrier identity
# ---------------------------------------------------------------------------

UPS_CARRIER_NAME = "UPS"

# ---------------------------------------------------------------------------
# Endpoints (Customer Integration Environment by default)
# ---------------------------------------------------------------------------

UPS_SANDBOX_API_BASE_URL = "https://wwwcie.ups.com/api"
UPS_SANDBOX_OAUTH_URL = "https://wwwcie.ups.com/security/v1/oauth/token"
UPS_RATE_PATH = "/rating/v1/Rate"

# ---------------------------------------------------------------------------
# Timeouts and token lifetime
# ---------------------------------------------------------------------------

UPS_TOKEN_TIMEOUT_SECONDS = 10.0
UPS_REQUEST_TIMEOUT_SECONDS = 30.0

# Tokens are treated as expired this long before UPS says they expire
TOKEN_EXPIRY_BUFFER_SECONDS = 5 * 60


# ---------------------------------------------------------------------------
# Packaging
# ---------------------------------------------------------------------------

# Customer-supplied packaging
DEFAULT_PACKAGING_CODE = "02"
DEFAULT_PACKAGING_DESCRIPTION = "Package"


# ---------------------------------------------------------------------------
# Units of measurement
# ---------------------------------------------------------------------------

# Domain weight unit value -> UPS PackageWeight code
UPS_WEIGHT_UNITS: dict[str, str] = {
    "LBS": "LBS",
    "KG": "KGS",
}


# ---------------------------------------------------------------------------
# Request defaults
# ---------------------------------------------------------------------------

DEFAULT_CURRENCY_CODE = "USD"
NEGOTIATED_RATES_INDICATOR = "1"
RESIDENTIAL_ADDRESS_INDICATOR = "1"
RATE_CUSTOMER_CONTEXT = "Rating Request"
SHIPPER_NAME = "Shipper"
RECIPIENT_NAME = "Recipient"
