"""Package query orchestration.

This module owns the whole request/response flow for one package lookup:
build the GraphQL request, send it through a `GraphQLTransport`, branch on
the HTTP status and the GraphQL envelope, persist the raw response and decode
the typed `PackageData`.

Side-effects that belong to the UI (printing) stay out of here: every branch
ends in a `PackageQueryResult` that the CLI renders. Only genuinely broken
situations (network failure, non-JSON body, unwritable output file) raise,
always as `core.errors.PackageQueryError` subclasses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from adapters.http_client import build_async_client
from adapters.json_exporter import export_response_json
from adapters.sui_graphql import SuiGraphQLClient, build_package_request, parse_graphql_response
from core.config import AppSettings
from core.domain.models import GraphQLRequest, PackageData, QueryInfo, ResponseEnvelope
from core.interfaces.transport import GraphQLTransport

logger = logging.getLogger(__name__)


class QueryOutcome(str, Enum):
    """How a single package query ended."""

    HTTP_ERROR = "http_error"
    GRAPHQL_ERRORS = "graphql_errors"
    NO_DATA = "no_data"
    NO_PACKAGE_FIELD = "no_package_field"
    NOT_FOUND = "not_found"
    DECODE_FAILED = "decode_failed"
    SUCCESS = "success"


@dataclass(frozen=True)
class PackageQueryResult:
    """Output of a query invocation.

    Only the fields relevant to `outcome` are populated.
    """

    outcome: QueryOutcome
    address: str
    endpoint: str
    http_status: int | None = None
    http_reason: str | None = None
    body_text: str | None = None
    error_messages: tuple[str, ...] = ()
    raw_data: Any = None
    raw_package: Any = None
    decode_error: str | None = None
    package: PackageData | None = None
    output_path: Path | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def query_package(
    address: str,
    *,
    settings: AppSettings | None = None,
    transport: GraphQLTransport | None = None,
    clock: Callable[[], datetime] = _utcnow,
) -> PackageQueryResult:
    """Fetch package metadata for `address` and persist the raw response.

    When no `transport` is given, an httpx-backed `SuiGraphQLClient` pointed
    at `settings.graphql_endpoint` is created for the duration of the call.
    """

    settings = settings or AppSettings()
    request = build_package_request(address)

    if transport is not None:
        return await _run(address, request=request, transport=transport, settings=settings, clock=clock)

    async with build_async_client(settings) as client:
        sui = SuiGraphQLClient(client, endpoint=settings.graphql_endpoint)
        return await _run(address, request=request, transport=sui, settings=settings, clock=clock)


async def _run(
    address: str,
    *,
    request: GraphQLRequest,
    transport: GraphQLTransport,
    settings: AppSettings,
    clock: Callable[[], datetime],
) -> PackageQueryResult:
    endpoint = transport.endpoint
    reply = await transport.execute(request)

    if not reply.is_success:
        logger.info("HTTP %s from %s", reply.status_code, endpoint)
        return PackageQueryResult(
            outcome=QueryOutcome.HTTP_ERROR,
            address=address,
            endpoint=endpoint,
            http_status=reply.status_code,
            http_reason=reply.reason_phrase,
            body_text=reply.text,
        )

    envelope = parse_graphql_response(reply.text)

    messages = envelope.error_messages
    if messages:
        logger.info("GraphQL returned %d error(s)", len(messages))
        return PackageQueryResult(
            outcome=QueryOutcome.GRAPHQL_ERRORS,
            address=address,
            endpoint=endpoint,
            error_messages=tuple(messages),
        )

    data = envelope.data
    if data is None:
        return PackageQueryResult(outcome=QueryOutcome.NO_DATA, address=address, endpoint=endpoint)

    if not isinstance(data, dict) or "package" not in data:
        return PackageQueryResult(
            outcome=QueryOutcome.NO_PACKAGE_FIELD,
            address=address,
            endpoint=endpoint,
            raw_data=data,
        )

    raw_package = data["package"]
    if raw_package is None:
        logger.info("Package %s not found", address)
        return PackageQueryResult(outcome=QueryOutcome.NOT_FOUND, address=address, endpoint=endpoint)

    snapshot = ResponseEnvelope(
        query=QueryInfo(package_address=address, timestamp=clock(), endpoint=endpoint),
        data=data,
    )
    output_path = export_response_json(envelope=snapshot, output_path=settings.output_path)
    logger.info("Raw response written to %s", output_path)

    try:
        package = PackageData.model_validate(raw_package)
    except ValidationError as exc:
        logger.info("Package payload did not match the expected shape")
        return PackageQueryResult(
            outcome=QueryOutcome.DECODE_FAILED,
            address=address,
            endpoint=endpoint,
            raw_data=data,
            raw_package=raw_package,
            decode_error=str(exc),
            output_path=output_path,
        )

    return PackageQueryResult(
        outcome=QueryOutcome.SUCCESS,
        address=address,
        endpoint=endpoint,
        raw_data=data,
        raw_package=raw_package,
        package=package,
        output_path=output_path,
    )
