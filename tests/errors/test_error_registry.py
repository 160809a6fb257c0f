"""Tests for the error registry, CarrierError and error body extraction."""

import pytest

from shiprates.errors import (
    ERROR_REGISTRY,
    CarrierError,
    ErrorKind,
    extract_error_message,
    extract_oauth_error,
    extract_ups_error,
    get_error,
    get_error_for_kind,
    get_errors_by_kind,
)


class TestErrorRegistry:
    """Tests for the E-XXXX registry."""

    def test_every_kind_has_exactly_one_entry(self):
        """Each failure kind resolves to a single registry code."""
        for kind in ErrorKind:
            assert len(get_errors_by_kind(kind)) == 1
            assert get_error_for_kind(kind).kind is kind

    def test_codes_use_e_format(self):
        """Registry keys match their entries and use E-XXXX format."""
        for code, entry in ERROR_REGISTRY.items():
            assert entry.code == code
            assert code.startswith("E-") and len(code) == 6

    def test_only_transient_kinds_are_retryable(self):
        """Rate limits and network failures are retryable; nothing else is."""
        retryable = {e.kind for e in ERROR_REGISTRY.values() if e.is_retryable}
        assert retryable == {ErrorKind.RATE_LIMIT, ErrorKind.NETWORK}

    def test_get_error_unknown_code(self):
        """Unknown codes return None."""
        assert get_error("E-9999") is None
        assert get_error("E-2001").kind is ErrorKind.VALIDATION


class TestCarrierError:
    """Tests for the tagged CarrierError type."""

    def test_str_includes_code(self):
        """String form is '[code] message'."""
        err = CarrierError.validation("Invalid rate request: packages: too short")
        assert str(err) == "[E-2001] Invalid rate request: packages: too short"

    def test_is_an_exception_matched_by_kind(self):
        """Raised and caught as CarrierError, distinguished by kind."""
        with pytest.raises(CarrierError) as exc_info:
            raise CarrierError.network("Request timeout")
        assert exc_info.value.kind is ErrorKind.NETWORK
        assert exc_info.value.is_retryable

    def test_rate_limit_carries_retry_after(self):
        """Rate-limit errors carry status 429 and the retry hint."""
        err = CarrierError.rate_limit(retry_after=60)
        assert err.message == "Rate limit exceeded"
        assert err.status_code == 429
        assert err.retry_after == 60
        assert err.details == {"retry_after": 60}

    def test_carrier_api_carries_status_and_code(self):
        """Carrier API errors keep the HTTP status and carrier code."""
        err = CarrierError.carrier_api("Invalid Address", status_code=400, carrier_code="250003")
        assert err.kind is ErrorKind.CARRIER_API
        assert err.status_code == 400
        assert err.carrier_code == "250003"
        assert not err.is_retryable

    def test_to_dict(self):
        """Serialized form exposes code, kind and remediation."""
        data = CarrierError.authentication("Authentication failed", status_code=401).to_dict()
        assert data["code"] == "E-5001"
        assert data["kind"] == "authentication"
        assert data["status_code"] == 401
        assert data["remediation"]

    def test_hashable(self):
        """Errors can be stored in sets (identity semantics)."""
        err = CarrierError.configuration("bad")
        assert err in {err}


class TestExtractUPSError:
    """Tests for UPS error body extraction."""

    def test_nested_response_errors(self):
        """Reads response.errors[0] (Rating API format)."""
        body = {"response": {"errors": [{"code": "250003", "message": "Invalid Address"}]}}
        assert extract_ups_error(body) == ("250003", "Invalid Address")

    def test_top_level_errors(self):
        body = {"errors": [{"code": "10001", "message": "Bad"}]}
        assert extract_ups_error(body) == ("10001", "Bad")

    def test_fault_format(self):
        """Reads the SOAP-style Fault format."""
        body = {
            "Fault": {
                "detail": {
                    "Errors": {
                        "ErrorDetail": {
                            "PrimaryErrorCode": {"Code": "120002", "Description": "Bad ZIP"}
                        }
                    }
                }
            }
        }
        assert extract_ups_error(body) == ("120002", "Bad ZIP")

    def test_fault_with_error_detail_list(self):
        body = {
            "Fault": {"detail": {"Errors": {"ErrorDetail": [
                {"PrimaryErrorCode": {"Code": "120100", "Description": "Missing shipper"}},
            ]}}}
        }
        assert extract_ups_error(body) == ("120100", "Missing shipper")

    @pytest.mark.parametrize(
        "error_detail",
        [[], "boom", ["boom"], None, {"PrimaryErrorCode": "boom"}, {}],
    )
    def test_malformed_fault_never_raises(self, error_detail):
        body = {"Fault": {"detail": {"Errors": {"ErrorDetail": error_detail}}}}
        assert extract_ups_error(body) == (None, None)

    def test_unknown_format(self):
        assert extract_ups_error({"foo": "bar"}) == (None, None)


class TestExtractErrorMessage:
    """Tests for best-effort message extraction."""

    def test_flat_keys_in_priority_order(self):
        """message wins over error, error over errorDescription."""
        assert extract_error_message({"message": "m", "error": "e"}) == "m"
        assert extract_error_message({"error": "e", "errorDescription": "d"}) == "e"
        assert extract_error_message({"errorDescription": "d"}) == "d"

    def test_nested_ups_message(self):
        body = {"response": {"errors": [{"code": "250003", "message": "Invalid Address"}]}}
        assert extract_error_message(body) == "Invalid Address"

    def test_fallbacks(self):
        """Unrecognized bodies get a placeholder, strings pass through."""
        assert extract_error_message({}) == "Unknown error"
        assert extract_error_message(None) == "Unknown error occurred"
        assert extract_error_message("Service Unavailable") == "Service Unavailable"


class TestExtractOAuthError:
    """Tests for OAuth error body extraction."""

    def test_error_description_preferred(self):
        body = {"error": "invalid_client", "error_description": "Invalid client credentials"}
        assert extract_oauth_error(body) == "Invalid client credentials"

    def test_error_only(self):
        assert extract_oauth_error({"error": "invalid_client"}) == "invalid_client"

    def test_non_dict(self):
        assert extract_oauth_error("oops") is None
