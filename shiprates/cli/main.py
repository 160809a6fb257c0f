"""shiprates CLI: shipping rate quotes from the command line.

Usage:
    shiprates rates request.json            Quote with every carrier
    shiprates rates request.json -c UPS     Quote with one carrier
    shiprates health                        Check carrier connectivity
    shiprates config show                   Show resolved config (masked)
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from shiprates.carriers.ups import create_ups_carrier
from shiprates.cli.output import format_config, format_health, format_quotes
from shiprates.config import ShipRatesConfig, configure_logging, load_config
from shiprates.domain import ServiceLevel
from shiprates.errors import CarrierError
from shiprates.services import CarrierService

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="shiprates",
    help="Shipping rate quotes from carrier APIs",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")

console = Console()

# --- Global state ---
_config_path: str | None = None
_log_level: str | None = None


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to shiprates.yaml config file"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="debug, info, warning or error"
    ),
):
    """shiprates CLI."""
    global _config_path, _log_level
    _config_path = config
    _log_level = log_level


def _fail(exc: CarrierError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    if exc.remediation:
        console.print(f"[dim]{escape(exc.remediation)}[/dim]")
    return typer.Exit(1)


def _emit(output: str, as_json: bool) -> None:
    # JSON goes out verbatim, without Rich markup or wrapping
    if as_json:
        typer.echo(output)
    else:
        console.print(output)


def _load_config() -> ShipRatesConfig:
    """Load config and set up logging, exiting on configuration errors."""
    try:
        cfg = load_config(config_path=_config_path)
    except CarrierError as e:
        configure_logging(_log_level or "warning")
        raise _fail(e)
    configure_logging(_log_level or cfg.app.log_level)
    return cfg


def _build_service(cfg: ShipRatesConfig) -> CarrierService:
    return CarrierService([create_ups_carrier(cfg.ups)])


def _read_request(path: Path, service: ServiceLevel | None) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text())
    except OSError as e:
        console.print(f"[red]Cannot read request file:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Request file is not valid JSON:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        console.print("[red]Request file must contain a JSON object[/red]")
        raise typer.Exit(1)
    if service is not None:
        data.pop("serviceLevel", None)
        data["service_level"] = service.value
    return data


# --- Rate commands ---


@app.command()
def rates(
    request_file: Path = typer.Argument(..., help="Rate request JSON file"),
    carrier: Optional[str] = typer.Option(
        None, "--carrier", "-c", help="Quote with one carrier only"
    ),
    service: Optional[ServiceLevel] = typer.Option(
        None, "--service", "-s", help="Quote a single service level"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Quote a shipment, cheapest first."""
    cfg = _load_config()
    request = _read_request(request_file, service)

    async def _run():
        async with _build_service(cfg) as svc:
            if carrier:
                return await svc.get_rates(carrier, request)
            return await svc.get_all_rates(request)

    try:
        response = asyncio.run(_run())
    except CarrierError as e:
        _log.debug("Rate command failed: %s", e.to_dict())
        raise _fail(e)
    _emit(format_quotes(response, as_json=json_output), json_output)


@app.command()
def health(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Check that every configured carrier can authenticate."""
    cfg = _load_config()

    async def _run():
        async with _build_service(cfg) as svc:
            return await svc.health_check()

    status = asyncio.run(_run())
    _emit(format_health(status, as_json=json_output), json_output)
    if not all(status.values()):
        raise typer.Exit(1)


# --- Config commands ---


@config_app.command("show")
def config_show():
    """Display resolved configuration (secrets masked)."""
    cfg = _load_config()
    console.print(format_config(cfg))


@config_app.command("validate")
def config_validate():
    """Validate configuration without calling any carrier."""
    _load_config()
    console.print("[green]Config is valid.[/green]")


if __name__ == "__main__":
    app()
