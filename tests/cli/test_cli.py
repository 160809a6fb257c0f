"""Tests for the shiprates CLI commands and output formatting."""

import json

import pytest
from typer.testing import CliRunner

from shiprates.cli import main as cli_main
from shiprates.cli.main import app
from shiprates.cli.output import format_charge, format_health, format_quotes
from shiprates.domain import RateQuote, RateResponse, ServiceLevel
from shiprates.services import CarrierService
from tests.helpers import (
    RATE_PATH,
    TOKEN_PATH,
    FakeTransport,
    make_rate_request,
    make_rate_response,
    make_token_response,
    make_ups_carrier,
)
from tests.helpers.fake_transport import request_json

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    """Credentials from the environment, no config file, logging untouched."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("UPS_CLIENT_ID", "env_client_id")
    monkeypatch.setenv("UPS_CLIENT_SECRET", "env_client_secret")
    monkeypatch.setenv("UPS_ACCOUNT_NUMBER", "A1B2C3D4")
    monkeypatch.setattr(cli_main, "configure_logging", lambda level: None)
    monkeypatch.setattr(cli_main, "_config_path", None)
    monkeypatch.setattr(cli_main, "_log_level", None)


@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    """Route the CLI's carrier traffic through a fake transport."""
    fake = FakeTransport({
        TOKEN_PATH: (200, make_token_response()),
        RATE_PATH: (200, make_rate_response()),
    })
    monkeypatch.setattr(
        cli_main, "_build_service", lambda cfg: CarrierService([make_ups_carrier(fake)])
    )
    return fake


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(make_rate_request()))
    return path


class TestRatesCommand:
    """Tests for `shiprates rates`."""

    def test_json_output_sorted_by_charge(self, transport, request_file):
        result = runner.invoke(app, ["rates", str(request_file), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [q["totalCharge"] for q in data["quotes"]] == [10.89, 22.34, 39.99]
        assert data["quotes"][0]["serviceLevel"] == "GROUND"

    def test_single_carrier_and_service(self, transport, request_file):
        result = runner.invoke(
            app, ["rates", str(request_file), "-c", "ups", "--service", "2ND_DAY_AIR", "--json"]
        )
        assert result.exit_code == 0, result.output
        body = request_json(transport.calls(RATE_PATH)[0])
        assert body["RateRequest"]["Shipment"]["Service"]["Code"] == "02"

    def test_table_output(self, transport, request_file):
        result = runner.invoke(app, ["rates", str(request_file)])
        assert result.exit_code == 0, result.output
        assert "Rates" in result.stdout
        assert "UPS" in result.stdout

    def test_carrier_error_exits_1(self, transport, request_file):
        transport.set_route(RATE_PATH, (429, {}, {"Retry-After": "30"}))
        result = runner.invoke(app, ["rates", str(request_file), "--json"])
        assert result.exit_code == 1
        assert "E-3002" in result.stdout

    def test_invalid_request_file(self, transport, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        result = runner.invoke(app, ["rates", str(path)])
        assert result.exit_code == 1
        assert "not valid JSON" in result.stdout
        assert transport.requests == []

    def test_unknown_carrier(self, transport, request_file):
        result = runner.invoke(app, ["rates", str(request_file), "-c", "fedex"])
        assert result.exit_code == 1
        assert "E-4001" in result.stdout


class TestHealthCommand:
    """Tests for `shiprates health`."""

    def test_healthy(self, transport):
        result = runner.invoke(app, ["health", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"UPS": True}

    def test_unhealthy_exits_1(self, transport):
        transport.set_route(TOKEN_PATH, (401, {"error": "invalid_client"}))
        result = runner.invoke(app, ["health", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"UPS": False}


class TestConfigCommands:
    """Tests for `shiprates config`."""

    def test_show_masks_secrets(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "env_client_secret" not in result.stdout
        assert "****cret" in result.stdout
        assert "****C3D4" in result.stdout
        assert "https://wwwcie.ups.com/api" in result.stdout

    def test_validate_reports_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("UPS_CLIENT_SECRET")
        result = runner.invoke(app, ["config", "validate"])
        assert result.exit_code == 1
        assert "E-4001" in result.stdout
        assert "client_secret" in result.stdout

    def test_validate_ok(self):
        result = runner.invoke(app, ["config", "validate"])
        assert result.exit_code == 0
        assert "Config is valid" in result.stdout


class TestOutput:
    """Tests for output formatters."""

    def _response(self) -> RateResponse:
        return RateResponse(quotes=[
            RateQuote(
                carrier="UPS",
                service_level=ServiceLevel.GROUND,
                service_name="UPS Ground",
                total_charge=1234.5,
                estimated_delivery_date="2024-01-25",
                transit_days=3,
                guaranteed_delivery=True,
            ),
        ])

    def test_format_charge(self):
        assert format_charge(1234.5, "USD") == "1,234.50 USD"

    def test_quotes_json(self):
        data = json.loads(format_quotes(self._response(), as_json=True))
        assert data["quotes"][0]["estimatedDeliveryDate"] == "2024-01-25"

    def test_quotes_table(self):
        output = format_quotes(self._response())
        assert "UPS Ground" in output
        assert "2024-01-25" in output

    def test_empty_quotes(self):
        assert format_quotes(RateResponse()) == "No rates returned."

    def test_health(self):
        assert json.loads(format_health({"UPS": False}, as_json=True)) == {"UPS": False}
        assert "unhealthy" in format_health({"UPS": False})
        assert format_health({}) == "No carriers registered."
