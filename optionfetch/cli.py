"""
optionfetch CLI

Run the contract lookup locally, without deploying the function:
- optionfetch contracts AAPL --days 45 --type put
- optionfetch contract O:AAPL251219C00150000
- optionfetch invoke event.json
"""
from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from optionfetch.config import QueryDefaults, load_settings
from optionfetch.data.polygon import PolygonError, fetch_contract_snapshot
from optionfetch.handler import fetch_option_contracts, lambda_handler
from optionfetch.models import ContractQuery, InvalidQueryError, OptionContract
from optionfetch.transform import format_contract, render_response
from optionfetch.utils.occ import underlying_of

app = typer.Typer(
    add_completion=False,
    help="""optionfetch CLI — filtered option contracts from Polygon.io

\b
  optionfetch contracts AAPL          Filtered contracts for a ticker
  optionfetch contract O:AAPL...      Snapshot of one contract
  optionfetch invoke event.json       Run the Lambda handler on an event
""",
)

console = Console()


def _print_table(title: str, contracts: list[OptionContract]) -> None:
    table = Table(title=title, show_header=True, expand=False)
    table.add_column("Ticker", style="cyan")
    table.add_column("Type")
    table.add_column("Expiry")
    table.add_column("Strike", justify="right")
    table.add_column("IV", justify="right")
    table.add_column("OI", justify="right")
    table.add_column("Premium", justify="right", style="yellow")
    for c in contracts:
        table.add_row(
            c.ticker,
            c.contract_type,
            c.expiration_date,
            c.strike_price,
            c.implied_volatility,
            c.open_interest,
            c.premium,
        )
    console.print(table)


@app.command("contracts")
def contracts_cmd(
    ticker: str = typer.Argument("AAPL", help="Underlying ticker symbol"),
    limit: int = typer.Option(10, "--limit", "-n", help="Max contracts to return"),
    days: int = typer.Option(30, "--days", "-d", help="Expiration window in days from today"),
    contract_type: str = typer.Option("call", "--type", "-t", help="call, put or all"),
    lookup: str = typer.Option(None, "--lookup", help="chain or details (default from settings)"),
    api_key: str = typer.Option(None, "--api-key", envvar="POLYGON_API_KEY", help="Polygon API key"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw response body"),
):
    """Filtered option contracts for a ticker."""
    settings = load_settings()
    mode = lookup or settings.lookup_mode
    params = {
        "ticker_symbol": ticker,
        "limit": str(limit),
        "days_forward": str(days),
        "contract_type": contract_type,
    }
    if api_key:
        params["api_key"] = api_key

    try:
        query = ContractQuery.from_params(params, settings, lookup=mode)
        contracts = fetch_option_contracts(query, settings, lookup=mode)
    except (InvalidQueryError, PolygonError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(render_response(contracts))
        return
    if not contracts:
        console.print(f"[yellow]No contracts for {query.ticker} in the next {query.days_forward} days[/yellow]")
        return
    _print_table(f"{query.ticker} {(query.contract_type or 'all').upper()} | {query.days_forward}d", contracts)


@app.command("contract")
def contract_cmd(
    option_ticker: str = typer.Argument(..., help="OCC option ticker, e.g. O:AAPL251219C00150000"),
    api_key: str = typer.Option(None, "--api-key", envvar="POLYGON_API_KEY", help="Polygon API key"),
    as_json: bool = typer.Option(False, "--json", help="Print the formatted contract as JSON"),
):
    """Snapshot of a single option contract."""
    settings = load_settings()
    try:
        underlying = underlying_of(option_ticker)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    symbol = option_ticker if option_ticker.startswith("O:") else f"O:{option_ticker}"
    key = api_key or settings.polygon_api_key or QueryDefaults().api_key
    try:
        snap = fetch_contract_snapshot(settings, key, underlying, symbol)
    except PolygonError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    if snap is None:
        console.print(f"[yellow]No snapshot data for {symbol}[/yellow]")
        raise typer.Exit(code=1)

    contract = format_contract(snap)
    if as_json:
        typer.echo(json.dumps(contract.to_dict()))
        return
    _print_table(symbol, [contract])


@app.command("invoke")
def invoke_cmd(
    event_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON event file"),
):
    """Run the Lambda handler on a JSON event, as the runtime would."""
    try:
        event = json.loads(event_file.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]Invalid event JSON: {e}[/red]")
        raise typer.Exit(code=1)
    result = lambda_handler(event, None)
    typer.echo(json.dumps(result))


def main():
    app()


if __name__ == "__main__":
    main()
