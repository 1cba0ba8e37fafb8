from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from rich.console import Console

from core.config import AppSettings

ENDPOINT = "https://graphql.example.invalid/graphql"
ADDRESS = "0x" + "ab" * 32


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in (
        "SUI_PKG_GRAPHQL_ENDPOINT",
        "SUI_PKG_PACKAGE_ADDRESS",
        "SUI_PKG_OUTPUT_PATH",
        "SUI_PKG_HTTP_TIMEOUT_SECONDS",
        "SUI_PKG_USER_AGENT",
        "SUI_PKG_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        graphql_endpoint=ENDPOINT,
        package_address=ADDRESS,
        output_path=tmp_path / "response.json",
    )


@pytest.fixture
def record_console() -> Callable[[], tuple[Console, io.StringIO]]:
    def _make() -> tuple[Console, io.StringIO]:
        buf = io.StringIO()
        return Console(file=buf, width=400, color_system=None), buf

    return _make


def package_payload(*, nodes: list[dict[str, Any]] | None = None, version: int = 3) -> dict[str, Any]:
    if nodes is None:
        nodes = [
            {"address": ADDRESS, "version": 1, "packageBcs": "oRzrCwYAAAAK"},
            {"address": "0x" + "cd" * 32, "version": 2, "packageBcs": "A" * 150},
        ]
    return {
        "address": ADDRESS,
        "version": version,
        "packageVersions": {"nodes": nodes},
    }


def json_handler(
    body: Any,
    *,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if isinstance(body, str):
            return httpx.Response(status_code, text=body)
        return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))

    return handler


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
