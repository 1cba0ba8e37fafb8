"""Adaptador GraphQL para el indexador de Sui.

Estos helpers están en adapters porque son I/O puro (HTTP) y traducen las
excepciones de httpx/pydantic a `core.errors`.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from core.domain.models import GraphQLRequest, GraphQLResponse
from core.errors import InvalidAddressError, ResponseDecodeError, TransportError
from core.interfaces.transport import GraphQLReply

logger = logging.getLogger(__name__)

PACKAGE_VERSIONS_PAGE_SIZE = 50

PACKAGE_QUERY = f"""
query PackageQuery($address: SuiAddress!) {{
    package(address: $address) {{
        address
        version
        packageVersions(first: {PACKAGE_VERSIONS_PAGE_SIZE}) {{
            nodes {{
                address
                version
                packageBcs
            }}
        }}
    }}
}}
"""

CHAIN_IDENTIFIER_QUERY = "query { chainIdentifier }"


def build_package_request(address: str) -> GraphQLRequest:
    """Construye el request `PackageQuery` para `address`.

    La única validación es que la dirección sea un string no vacío; el
    servidor decide si es una dirección Sui válida. Se envía tal cual.
    """

    if not isinstance(address, str) or not address.strip():
        raise InvalidAddressError(
            "Package address must be a non-empty string.",
            hint="Pass --address 0x... or set SUI_PKG_PACKAGE_ADDRESS.",
        )
    return GraphQLRequest(query=PACKAGE_QUERY, variables={"address": address})


def parse_graphql_response(text: str) -> GraphQLResponse:
    """Decodifica el cuerpo de una respuesta 2xx como envelope GraphQL."""

    try:
        return GraphQLResponse.model_validate_json(text)
    except ValidationError as exc:
        raise ResponseDecodeError(
            f"Response body is not a GraphQL JSON envelope: {exc.error_count()} error(s)",
            hint="Is SUI_PKG_GRAPHQL_ENDPOINT a GraphQL server?",
        ) from exc


class SuiGraphQLClient:
    """Implementación de `GraphQLTransport` sobre un `httpx.AsyncClient`.

    El cliente HTTP lo crea y cierra quien llama (`async with`), igual que en
    el resto de adaptadores.
    """

    def __init__(self, client: httpx.AsyncClient, *, endpoint: str) -> None:
        self._client = client
        self.endpoint = endpoint

    async def execute(self, request: GraphQLRequest) -> GraphQLReply:
        logger.debug("POST %s variables=%s", self.endpoint, request.variables)
        try:
            resp = await self._client.post(
                self.endpoint,
                json=request.model_dump(mode="json"),
                headers={"Content-Type": "application/json"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(
                f"Request to {self.endpoint} failed: {exc}",
                hint="Check network connectivity or SUI_PKG_GRAPHQL_ENDPOINT.",
            ) from exc

        logger.debug("HTTP %s (%d bytes)", resp.status_code, len(resp.content))
        return GraphQLReply(
            status_code=resp.status_code,
            reason_phrase=resp.reason_phrase,
            text=resp.text,
        )
