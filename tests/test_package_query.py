from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest

from adapters.sui_graphql import SuiGraphQLClient
from conftest import ADDRESS, ENDPOINT, json_handler, mock_client, package_payload
from core.errors import InvalidAddressError, ResponseDecodeError, TransportError
from core.interfaces.transport import GraphQLReply
from core.services.package_query import QueryOutcome, query_package


def _run(handler, settings, address: str = ADDRESS, **kwargs):
    async def go():
        async with mock_client(handler) as client:
            transport = SuiGraphQLClient(client, endpoint=ENDPOINT)
            return await query_package(address, settings=settings, transport=transport, **kwargs)

    return asyncio.run(go())


def test_success_writes_envelope_and_decodes_package(settings) -> None:
    data = {"package": package_payload()}
    fixed = datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)

    result = _run(json_handler({"data": data}), settings, clock=lambda: fixed)

    assert result.outcome is QueryOutcome.SUCCESS
    assert result.package is not None
    assert result.package.version == 3
    assert [n.version for n in result.package.version_nodes] == [1, 2]
    assert result.output_path == settings.output_path

    written = json.loads(settings.output_path.read_text(encoding="utf-8"))
    assert written["status"] == "success"
    assert written["query"]["package_address"] == ADDRESS
    assert written["query"]["endpoint"] == ENDPOINT
    assert written["data"] == data
    ts = datetime.fromisoformat(written["query"]["timestamp"].replace("Z", "+00:00"))
    assert ts == fixed
    assert ts.tzinfo is not None


def test_default_clock_timestamp_is_rfc3339_utc(settings) -> None:
    _run(json_handler({"data": {"package": package_payload()}}), settings)

    written = json.loads(settings.output_path.read_text(encoding="utf-8"))
    ts = datetime.fromisoformat(written["query"]["timestamp"].replace("Z", "+00:00"))
    assert ts.utcoffset().total_seconds() == 0


def test_file_is_overwritten_on_each_run(settings) -> None:
    settings.output_path.write_text("stale", encoding="utf-8")

    _run(json_handler({"data": {"package": package_payload(version=9)}}), settings)

    written = json.loads(settings.output_path.read_text(encoding="utf-8"))
    assert written["data"]["package"]["version"] == 9


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_http_error_skips_decode_and_file(settings, status: int) -> None:
    result = _run(json_handler("upstream says no", status_code=status), settings)

    assert result.outcome is QueryOutcome.HTTP_ERROR
    assert result.http_status == status
    assert result.body_text == "upstream says no"
    assert result.package is None
    assert result.raw_package is None
    assert not settings.output_path.exists()


def test_graphql_errors_are_kept_in_order(settings) -> None:
    body = {
        "data": None,
        "errors": [
            {"message": "first", "locations": [{"line": 1, "column": 2}]},
            {"message": "second"},
        ],
    }

    result = _run(json_handler(body), settings)

    assert result.outcome is QueryOutcome.GRAPHQL_ERRORS
    assert result.error_messages == ("first", "second")
    assert result.package is None
    assert not settings.output_path.exists()


def test_errors_win_over_data(settings) -> None:
    body = {"data": {"package": package_payload()}, "errors": [{"message": "partial"}]}

    result = _run(json_handler(body), settings)

    assert result.outcome is QueryOutcome.GRAPHQL_ERRORS
    assert not settings.output_path.exists()


def test_empty_errors_list_is_ignored(settings) -> None:
    body = {"data": {"package": package_payload()}, "errors": []}

    result = _run(json_handler(body), settings)

    assert result.outcome is QueryOutcome.SUCCESS


def test_null_package_is_not_found(settings) -> None:
    result = _run(json_handler({"data": {"package": None}}), settings)

    assert result.outcome is QueryOutcome.NOT_FOUND
    assert result.address == ADDRESS
    assert result.package is None
    assert not settings.output_path.exists()


def test_missing_package_field(settings) -> None:
    result = _run(json_handler({"data": {"somethingElse": 1}}), settings)

    assert result.outcome is QueryOutcome.NO_PACKAGE_FIELD
    assert result.raw_data == {"somethingElse": 1}
    assert not settings.output_path.exists()


@pytest.mark.parametrize("body", [{}, {"data": None}])
def test_no_data(settings, body) -> None:
    result = _run(json_handler(body), settings)

    assert result.outcome is QueryOutcome.NO_DATA


def test_decode_failure_keeps_raw_package_and_still_writes_file(settings) -> None:
    raw = {"address": ADDRESS, "version": "not-a-number"}

    result = _run(json_handler({"data": {"package": raw}}), settings)

    assert result.outcome is QueryOutcome.DECODE_FAILED
    assert result.raw_package == raw
    assert "version" in (result.decode_error or "")
    assert result.package is None
    assert settings.output_path.exists()


def test_zero_version_nodes_decode_to_empty_list(settings) -> None:
    result = _run(json_handler({"data": {"package": package_payload(nodes=[])}}), settings)

    assert result.outcome is QueryOutcome.SUCCESS
    assert result.package.version_nodes == []


def test_non_json_body_raises_decode_error(settings) -> None:
    with pytest.raises(ResponseDecodeError):
        _run(json_handler("<html>gateway</html>"), settings)


def test_transport_failure_raises_transport_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        _run(handler, settings)


@pytest.mark.parametrize("address", ["", "   "])
def test_empty_address_is_rejected_before_sending(settings, address: str) -> None:
    seen: list[httpx.Request] = []

    with pytest.raises(InvalidAddressError):
        _run(json_handler({"data": None}, seen=seen), settings, address=address)

    assert seen == []


class _FakeTransport:
    endpoint = "https://fake.invalid/graphql"

    def __init__(self, reply: GraphQLReply) -> None:
        self.reply = reply
        self.requests = []

    async def execute(self, request):
        self.requests.append(request)
        return self.reply


def test_service_accepts_any_transport(settings) -> None:
    body = json.dumps({"data": {"package": package_payload()}})
    fake = _FakeTransport(GraphQLReply(status_code=200, reason_phrase="OK", text=body))

    result = asyncio.run(query_package(ADDRESS, settings=settings, transport=fake))

    assert result.outcome is QueryOutcome.SUCCESS
    assert result.endpoint == fake.endpoint
    assert fake.requests[0].variables == {"address": ADDRESS}


def test_default_transport_uses_settings_endpoint(settings, monkeypatch: pytest.MonkeyPatch) -> None:
    import core.services.package_query as service

    seen: list[httpx.Request] = []
    handler = json_handler({"data": {"package": None}}, seen=seen)
    monkeypatch.setattr(service, "build_async_client", lambda s: mock_client(handler))

    result = asyncio.run(query_package(ADDRESS, settings=settings))

    assert result.outcome is QueryOutcome.NOT_FOUND
    assert str(seen[0].url) == ENDPOINT


def test_string_version_goes_to_decode_failure(settings) -> None:
    raw = {"address": ADDRESS, "version": "7"}

    result = _run(json_handler({"data": {"package": raw}}), settings)

    assert result.outcome is QueryOutcome.DECODE_FAILED
    assert result.package is None
    assert result.raw_package == raw


@pytest.mark.parametrize("data", [[], [1, 2], "package", 3])
def test_non_object_data_has_no_package_field(settings, data) -> None:
    result = _run(json_handler({"data": data}), settings)

    assert result.outcome is QueryOutcome.NO_PACKAGE_FIELD
    assert result.raw_data == data
    assert not settings.output_path.exists()


def test_written_address_equals_caller_input(settings) -> None:
    seen: list[httpx.Request] = []
    address = f"{ADDRESS} "

    result = _run(json_handler({"data": {"package": package_payload()}}, seen=seen), settings, address=address)

    assert result.address == address
    assert json.loads(seen[0].content)["variables"] == {"address": address}
    written = json.loads(settings.output_path.read_text(encoding="utf-8"))
    assert written["query"]["package_address"] == address
