"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar la lógica del comando con detalles visuales.
- El servicio devuelve un `PackageQueryResult`; aquí solo se decide cómo se ve.

Los datos del servidor (direcciones, BCS, mensajes) se imprimen sin
interpretar markup de Rich: un `[` en un mensaje de error no debe romper nada.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.domain.models import PackageData, PackageVersionNode
from core.services.package_query import PackageQueryResult, QueryOutcome

PACKAGE_BCS_PREVIEW_CHARS = 100
MODULE_BCS_PREVIEW_CHARS = 50


def format_preview(value: str, limit: int) -> str:
    """`value` completo si cabe en `limit`; si no, los primeros `limit` chars + `...`."""

    if len(value) <= limit:
        return value
    return f"{value[:limit]}..."


def _line(console: Console, text: str = "", *, style: str | None = None) -> None:
    console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)


def _json(console: Console, payload: Any) -> None:
    console.print_json(data=payload)


def print_banner(console: Console, *, address: str, endpoint: str) -> None:
    """Imprime el encabezado de la consulta."""

    title = Text("Querying Sui Package...", style="bold cyan")
    details = Text.assemble(("package  ", "dim"), address, "\n", ("endpoint ", "dim"), endpoint)
    body = Align.left(Text.assemble(title, "\n", details))
    console.print(Panel(body, border_style="cyan", padding=(0, 2)))


def render_version_node(console: Console, index: int, node: PackageVersionNode) -> None:
    _line(console)
    _line(console, f"--- Version {index} ---", style="bold")
    _line(console, f"  Address: {node.address}")
    _line(console, f"  Version Number: {node.version}")

    if node.package_bcs is not None:
        bcs = node.package_bcs
        _line(console, f"  Package BCS Length: {len(bcs)} characters")
        if len(bcs) > PACKAGE_BCS_PREVIEW_CHARS:
            _line(console, f"  Package BCS Preview: {format_preview(bcs, PACKAGE_BCS_PREVIEW_CHARS)}")
        else:
            _line(console, f"  Package BCS: {bcs}")
    else:
        _line(console, "  Package BCS: None")

    if node.module_bcs is not None:
        _line(console, f"  Number of Modules: {len(node.module_bcs)}")
        for j, module in enumerate(node.module_bcs, start=1):
            _line(console, f"    Module {j}: {len(module)} characters")
            _line(console, f"      Preview: {format_preview(module, MODULE_BCS_PREVIEW_CHARS)}")
    else:
        _line(console, "  Module BCS: None")


def render_package(console: Console, package: PackageData) -> None:
    """Resumen legible de un `PackageData` decodificado."""

    _line(console, "=== Package Information ===", style="bold green")
    _line(console, f"Address: {package.address}")
    _line(console, f"Current Version: {package.version}")

    nodes = package.version_nodes
    if not nodes:
        _line(console, "No package versions found", style="yellow")
        return

    _line(console)
    _line(console, f"=== Package Versions ({len(nodes)} found) ===", style="bold green")
    for i, node in enumerate(nodes, start=1):
        render_version_node(console, i, node)


def render_result(console: Console, result: PackageQueryResult) -> None:
    """Imprime el diagnóstico/reporte que corresponde a `result.outcome`."""

    outcome = result.outcome

    if outcome is QueryOutcome.HTTP_ERROR:
        _line(console, f"HTTP Error: {result.http_status} {result.http_reason or ''}".rstrip(), style="red")
        _line(console, f"Error response: {result.body_text or ''}")
        return

    if outcome is QueryOutcome.GRAPHQL_ERRORS:
        _line(console, "GraphQL Errors:", style="red")
        for message in result.error_messages:
            _line(console, f"  - {message}")
        return

    if outcome is QueryOutcome.NOT_FOUND:
        _line(console, f"Package not found at address: {result.address}", style="yellow")
        return

    if outcome is QueryOutcome.NO_PACKAGE_FIELD:
        _line(console, "No package data in response", style="yellow")
        _line(console, "Full response:")
        _json(console, result.raw_data)
        return

    if outcome is QueryOutcome.NO_DATA:
        _line(console, "No data in response", style="yellow")
        return

    if outcome is QueryOutcome.DECODE_FAILED:
        _line(console, f"Failed to parse package data: {result.decode_error}", style="red")
        _line(console, "Raw data:")
        _json(console, result.raw_package)
    elif result.package is not None:
        render_package(console, result.package)

    if result.output_path is not None:
        _line(console)
        _line(console, f"Raw response saved to {result.output_path}", style="dim")
