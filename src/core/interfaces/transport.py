"""Contrato de transporte GraphQL.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El servicio se prueba con un transporte falso, sin red ni httpx.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from core.domain.models import GraphQLRequest


@dataclass(frozen=True)
class GraphQLReply:
    """Respuesta HTTP mínima: lo que el servicio necesita para decidir."""

    status_code: int
    reason_phrase: str
    text: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class GraphQLTransport(Protocol):
    """Contrato mínimo para enviar un documento GraphQL.

    Reglas de diseño:
    - `execute` es asíncrono porque hace I/O (HTTP).
    - Fallos de red se traducen a `core.errors.TransportError`.
    - Un status no-2xx NO es excepción: se devuelve en el `GraphQLReply`.
    """

    endpoint: str

    async def execute(self, request: GraphQLRequest) -> GraphQLReply:
        ...
