"""CLI output formatters for Rich tables and JSON.

Provides human-readable Rich table output (default) and machine-parseable
JSON output (--json flag).
"""

import json

from rich.console import Console
from rich.table import Table

from shiprates.config import ShipRatesConfig
from shiprates.domain import RateResponse
from shiprates.utils.redaction import mask_secret

console = Console()


def format_charge(amount: float, currency: str) -> str:
    """Format a charge like "12.45 USD" with thousands separators."""
    return f"{amount:,.2f} {currency}"


def format_quotes(response: RateResponse, as_json: bool = False) -> str:
    """Format rate quotes as a Rich table or JSON.

    Args:
        response: Quotes to display.
        as_json: If True, return JSON string instead of Rich table.

    Returns:
        Formatted string output.
    """
    if as_json:
        return response.model_dump_json(indent=2, by_alias=True)

    if not response.quotes:
        return "No rates returned."

    table = Table(title="Rates", show_lines=True)
    table.add_column("Carrier", style="cyan", no_wrap=True)
    table.add_column("Service", style="white")
    table.add_column("Charge", justify="right", style="green")
    table.add_column("Delivery")
    table.add_column("Days", justify="right")
    table.add_column("Guaranteed", justify="center")

    for quote in response.quotes:
        table.add_row(
            quote.carrier,
            quote.service_name,
            format_charge(quote.total_charge, quote.currency),
            quote.estimated_delivery_date or "-",
            str(quote.transit_days) if quote.transit_days is not None else "-",
            "yes" if quote.guaranteed_delivery else "no",
        )

    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_health(status: dict[str, bool], as_json: bool = False) -> str:
    """Format per-carrier health as colored lines or JSON."""
    if as_json:
        return json.dumps(status, indent=2)
    if not status:
        return "No carriers registered."
    lines = []
    for name, healthy in status.items():
        label = "[green]healthy[/green]" if healthy else "[red]unhealthy[/red]"
        lines.append(f"{name}: {label}")
    return "\n".join(lines)


def format_config(cfg: ShipRatesConfig) -> str:
    """Render resolved configuration with credentials masked."""
    ups = cfg.ups
    return "\n".join([
        "[bold]UPS:[/bold]",
        f"  client_id: {mask_secret(ups.client_id)}",
        f"  client_secret: {mask_secret(ups.client_secret)}",
        f"  account_number: {mask_secret(ups.account_number)}",
        f"  api_base_url: {ups.api_base_url}",
        f"  oauth_url: {ups.oauth_url}",
        f"  token_timeout: {ups.token_timeout}s",
        f"  request_timeout: {ups.request_timeout}s",
        "",
        "[bold]App:[/bold]",
        f"  log_level: {cfg.app.log_level}",
    ])
