"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.sui_graphql import CHAIN_IDENTIFIER_QUERY, SuiGraphQLClient, parse_graphql_response
from core.config import AppSettings, get_user_env_file
from core.domain.address import looks_like_sui_address
from core.domain.models import GraphQLRequest
from core.errors import PackageQueryError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_endpoint(settings: AppSettings) -> tuple[bool, str]:
    """POST `{ chainIdentifier }` to the endpoint and report what came back."""

    request = GraphQLRequest(query=CHAIN_IDENTIFIER_QUERY)
    try:
        async with build_async_client(settings) as client:
            reply = await SuiGraphQLClient(client, endpoint=settings.graphql_endpoint).execute(request)
        if not reply.is_success:
            return False, f"HTTP {reply.status_code} {reply.reason_phrase}".rstrip()
        envelope = parse_graphql_response(reply.text)
    except PackageQueryError as exc:
        return False, str(exc)

    if envelope.error_messages:
        return False, "; ".join(envelope.error_messages)
    data = envelope.data if isinstance(envelope.data, dict) else {}
    chain = data.get("chainIdentifier")
    if not chain:
        return False, "Response has no chainIdentifier"
    return True, f"chainIdentifier={chain}"


def _check_output(path: Path) -> tuple[bool, str]:
    parent = path.resolve().parent
    if not parent.exists():
        return True, f"{parent} will be created"
    if os.access(parent, os.W_OK):
        return True, str(path.resolve())
    return False, f"{parent} is not writable"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Sui Package Query Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Endpoint", "OK", settings.graphql_endpoint)

    if looks_like_sui_address(settings.package_address):
        table.add_row("Package address", "OK", settings.package_address)
    else:
        table.add_row("Package address", "WARN", f"{settings.package_address!r} is not 0x + 64 hex")

    ok_out, detail_out = _check_output(settings.output_path)
    table.add_row("Output file", "OK" if ok_out else "FAIL", detail_out)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_endpoint(settings))
    table.add_row("GraphQL connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Set SUI_PKG_GRAPHQL_ENDPOINT (or pass --endpoint) to use another indexer."
        )
