"""Tests for UPS text field parsing helpers."""

import pytest

from shiprates.carriers.ups.parser import (
    extract_currency,
    extract_monetary_value,
    parse_ups_date,
    safe_parse_float,
    safe_parse_int,
    try_parse_int,
    try_parse_ups_date,
)
from shiprates.carriers.ups.schemas import UPSMonetaryValue, UPSNegotiatedRateCharges
from shiprates.errors import CarrierError, ErrorKind


def _money(value: str, currency: str = "USD") -> UPSMonetaryValue:
    return UPSMonetaryValue(currency_code=currency, monetary_value=value)


class TestSafeParseFloat:
    """Tests for safe_parse_float."""

    def test_parses_decimal(self):
        assert safe_parse_float("12.45", "totalCharge") == 12.45
        assert safe_parse_float("0", "totalCharge") == 0.0

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        with pytest.raises(CarrierError, match="totalCharge is missing"):
            safe_parse_float(value, "totalCharge")

    @pytest.mark.parametrize("value", ["abc", "nan", "inf"])
    def test_not_a_number(self, value):
        with pytest.raises(CarrierError, match="not a valid number") as exc_info:
            safe_parse_float(value, "totalCharge")
        assert exc_info.value.kind is ErrorKind.VALIDATION

    def test_negative(self):
        with pytest.raises(CarrierError, match="cannot be negative"):
            safe_parse_float("-1.50", "totalCharge")


class TestSafeParseInt:
    """Tests for safe_parse_int."""

    def test_parses_integer(self):
        assert safe_parse_int("3", "transitDays") == 3

    def test_rejects_decimal(self):
        with pytest.raises(CarrierError, match="not a valid integer"):
            safe_parse_int("2.5", "transitDays")

    def test_rejects_negative(self):
        with pytest.raises(CarrierError, match="cannot be negative"):
            safe_parse_int("-2", "transitDays")

    def test_missing(self):
        with pytest.raises(CarrierError, match="transitDays is missing"):
            safe_parse_int(None, "transitDays")


class TestParseUPSDate:
    """Tests for YYYYMMDD conversion."""

    def test_converts_to_iso(self):
        assert parse_ups_date("20240125", "arrival") == "2024-01-25"

    @pytest.mark.parametrize(
        "value, message",
        [
            ("2024125", "must be 8 characters"),
            ("2024O125", "non-numeric"),
            ("2024012\u00b2", "non-numeric"),
            ("20241325", "invalid month"),
            ("20240132", "invalid day"),
            ("20230229", "not a calendar date"),
        ],
    )
    def test_rejects_malformed(self, value, message):
        with pytest.raises(CarrierError, match=message):
            parse_ups_date(value, "arrival")

    def test_try_variant_returns_none(self):
        assert try_parse_ups_date("20240125") == "2024-01-25"
        assert try_parse_ups_date("2024125") is None
        assert try_parse_ups_date("20240230") is None
        assert try_parse_ups_date("2024012\u00b2") is None
        assert try_parse_ups_date("-2024012") is None
        assert try_parse_ups_date(None) is None


class TestTryParseInt:
    """Tests for best-effort integer parsing."""

    def test_values(self):
        assert try_parse_int("3") == 3
        assert try_parse_int(" 2 ") == 2
        assert try_parse_int("abc") is None
        assert try_parse_int("-1") is None
        assert try_parse_int("+4") == 4
        assert try_parse_int(None) is None

    @pytest.mark.parametrize("value", ["--1", "+-2", "\u00b2", "1\u00b2", "1.5", ""])
    def test_malformed_returns_none(self, value):
        """Repeated signs and non-ASCII digits are dropped, not raised."""
        assert try_parse_int(value) is None


class TestExtractMonetaryValue:
    """Tests for negotiated-first charge extraction."""

    def test_negotiated_preferred(self):
        negotiated = UPSNegotiatedRateCharges(total_charge=_money("10.89"))
        assert extract_monetary_value(negotiated, _money("12.45"), "totalCharge") == 10.89

    def test_falls_back_to_published(self):
        assert extract_monetary_value(None, _money("12.45"), "totalCharge") == 12.45

    def test_negotiated_block_without_total(self):
        """An empty NegotiatedRateCharges block falls back to the published amount."""
        assert extract_monetary_value(
            UPSNegotiatedRateCharges(), _money("10.50"), "totalCharge"
        ) == 10.5

    def test_neither_present(self):
        with pytest.raises(CarrierError, match="missing in both negotiated and regular"):
            extract_monetary_value(None, None, "totalCharge")


class TestExtractCurrency:
    """Tests for currency extraction."""

    def test_negotiated_currency_preferred(self):
        negotiated = UPSNegotiatedRateCharges(total_charge=_money("10.00", "CAD"))
        assert extract_currency(negotiated, _money("12.45", "USD")) == "CAD"

    def test_published_currency(self):
        assert extract_currency(None, _money("12.45")) == "USD"

    def test_missing(self):
        with pytest.raises(CarrierError, match="Currency code is missing"):
            extract_currency(None, None)
