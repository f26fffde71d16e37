"""
Countries CLI

Usage:
    python -m src.countries resolve UK France 840
    python -m src.countries show "Côte d'Ivoire"
    python -m src.countries search guinea
    python -m src.countries list --limit 20
    python -m src.countries download --force
    python -m src.countries export countries.csv -p iso3166_alpha3 -p official_name_en
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from src.countries import api
from src.countries.adapters.export import write_csv
from src.countries.adapters.source import download_table
from src.countries.config import CountriesConfig
from src.countries.core.resolver import CountryResolver
from src.countries.exceptions import AmbiguousCountryError, CountriesError, InvalidCountryError

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="countries",
    help="Resolve country names and codes to ISO 3166 countries",
    no_args_is_help=True,
)


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@app.callback()
def main(
    ctx: typer.Context,
    csv_path: Annotated[
        Path | None,
        typer.Option("--csv-path", help="Country table CSV (default: from config)"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (default: from config)"),
    ] = None,
) -> None:
    """Countries - ISO 3166 country resolution."""
    overrides: dict = {}
    if csv_path:
        overrides["csv_path"] = csv_path
    if log_level:
        overrides["log_level"] = log_level.upper()

    config = CountriesConfig(**overrides)
    setup_logging(config.log_level)
    ctx.obj = config


def _get_resolver(ctx: typer.Context) -> CountryResolver:
    try:
        return api.get_resolver(ctx.obj)
    except CountriesError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _coerce_token(token: str) -> str | int:
    """Treat all-digit tokens as ISO 3166 numeric codes."""
    return int(token) if token.isdecimal() else token


def _print_candidates(error: AmbiguousCountryError) -> None:
    for country in error.candidates:
        console.print(f"    {country.iso3166_alpha3}  {country.official_name_en}")


@app.command("resolve")
def resolve_command(
    ctx: typer.Context,
    tokens: Annotated[list[str], typer.Argument(help="Names, codes or numeric codes")],
) -> None:
    """Resolve each token to a country."""
    resolver = _get_resolver(ctx)

    table = Table(title="Resolved countries")
    table.add_column("Token")
    table.add_column("Alpha-3", style="cyan")
    table.add_column("Name")

    failed = 0
    for token in tokens:
        try:
            country = resolver.resolve(_coerce_token(token))
        except AmbiguousCountryError as e:
            failed += 1
            console.print(f"[yellow]Ambiguous:[/yellow] {token!r} matches several countries:")
            _print_candidates(e)
            continue
        except InvalidCountryError as e:
            failed += 1
            console.print(f"[red]Not resolved:[/red] {token!r} ({e.code})")
            continue
        table.add_row(token, str(country.iso3166_alpha3), country.official_name_en)

    if table.row_count:
        console.print(table)
    if failed:
        raise typer.Exit(1)


@app.command("show")
def show_command(
    ctx: typer.Context,
    token: Annotated[str, typer.Argument(help="Name, code or numeric code")],
) -> None:
    """Show every property of one country."""
    resolver = _get_resolver(ctx)
    try:
        country = resolver.resolve(_coerce_token(token))
    except AmbiguousCountryError as e:
        console.print(f"[yellow]Ambiguous:[/yellow] {token!r} matches several countries:")
        _print_candidates(e)
        raise typer.Exit(1) from e
    except InvalidCountryError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    table = Table(title=repr(country))
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    for name, value in country.to_dict().items():
        table.add_row(name, str(value))
    console.print(table)


@app.command("list")
def list_command(
    ctx: typer.Context,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Show at most this many countries"),
    ] = None,
) -> None:
    """List the catalog of countries."""
    resolver = _get_resolver(ctx)
    countries = list(resolver.registry.catalog)
    if limit is not None:
        countries = countries[:limit]

    table = Table(title=f"Countries ({len(resolver.registry.catalog)})")
    table.add_column("Alpha-2", style="cyan")
    table.add_column("Alpha-3", style="cyan")
    table.add_column("Numeric", justify="right")
    table.add_column("Name")
    for country in countries:
        numeric = country.iso3166_numeric
        table.add_row(
            str(country.iso3166_alpha2),
            str(country.iso3166_alpha3),
            f"{numeric:03d}" if numeric else "",
            country.official_name_en,
        )
    console.print(table)


@app.command("search")
def search_command(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Text contained in a name or code")],
) -> None:
    """Show every country whose names or codes contain the text."""
    resolver = _get_resolver(ctx)
    matches = resolver.search(text)
    if not matches:
        console.print(f"[yellow]No country matches {text!r}[/yellow]")
        raise typer.Exit(1)
    for country in matches:
        console.print(f"{country.iso3166_alpha3}  {country.official_name_en}")


@app.command("download")
def download_command(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Download even if the file exists"),
    ] = False,
) -> None:
    """Download the country table to the configured path."""
    config: CountriesConfig = ctx.obj
    if config.csv_path.exists() and not force:
        console.print(f"Country table already present: {config.csv_path}")
        return
    try:
        path = download_table(config.csv_url, config.csv_path, config.timeout_seconds)
    except CountriesError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]Saved[/green] {path}")


@app.command("export")
def export_command(
    ctx: typer.Context,
    output_path: Annotated[Path, typer.Argument(help="CSV file to write")],
    properties: Annotated[
        list[str] | None,
        typer.Option("--property", "-p", help="Property to include (repeatable)"),
    ] = None,
) -> None:
    """Export the catalog as CSV."""
    resolver = _get_resolver(ctx)
    try:
        path = write_csv(resolver.registry.catalog, output_path, properties or None)
    except KeyError as e:
        console.print(f"[red]Error:[/red] unknown property {e}")
        raise typer.Exit(1) from e
    console.print(f"[green]Wrote[/green] {len(resolver.registry.catalog)} countries to {path}")


@app.command()
def version() -> None:
    """Show version information."""
    from src import __version__

    typer.echo(f"countries version {__version__}")
