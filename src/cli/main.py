"""CLI principal (Typer).

Por qué Typer:
- Opciones tipadas con ayuda autogenerada y un sub-comando `doctor`.
- `CliRunner` permite probar la CLI completa sin subprocess.

Contrato de salida: el comando de consulta siempre termina con código 0.
Los errores se imprimen, no se señalan vía exit status.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from cli import doctor
from cli.log_config import configure_logging
from cli.ui_components import print_banner, render_result
from core.config import AppSettings
from core.domain.address import looks_like_sui_address
from core.errors import PackageQueryError
from core.services.package_query import query_package

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Query a Sui Move package through the GraphQL indexer.",
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _settings_with_overrides(
    *,
    address: str | None,
    endpoint: str | None,
    output: Path | None,
) -> AppSettings:
    overrides: dict[str, object] = {}
    if address is not None:
        overrides["package_address"] = address
    if endpoint is not None:
        overrides["graphql_endpoint"] = endpoint
    if output is not None:
        overrides["output_path"] = output
    return AppSettings(**overrides)


def run_query(settings: AppSettings, console: Console) -> None:
    """Ejecuta una consulta e imprime el resultado. Nunca propaga errores del cliente."""

    address = settings.package_address
    print_banner(console, address=address, endpoint=settings.graphql_endpoint)
    if not looks_like_sui_address(address):
        logger.warning("Address %r does not look like 0x + 64 hex characters; sending it anyway.", address)

    try:
        result = asyncio.run(query_package(address, settings=settings))
    except PackageQueryError as exc:
        console.print(f"[bold red]Error occurred:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        return

    render_result(console, result)
    console.print("\n[bold green]Query completed successfully![/bold green]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    address: Optional[str] = typer.Option(
        None, "--address", "-a", help="Package address (default: SUI_PKG_PACKAGE_ADDRESS)."
    ),
    endpoint: Optional[str] = typer.Option(
        None, "--endpoint", "-e", help="GraphQL endpoint (default: Sui mainnet)."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Where to write the raw response (default: response.json)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Fetch one package's metadata and version history, then print a summary."""

    if ctx.invoked_subcommand is not None:
        return

    try:
        settings = _settings_with_overrides(address=address, endpoint=endpoint, output=output)
    except ValidationError as exc:
        _console.print(f"[bold red]Invalid configuration:[/bold red] {escape(str(exc))}")
        return
    configure_logging("DEBUG" if verbose else settings.log_level)
    run_query(settings, _console)


def run() -> None:
    app()
