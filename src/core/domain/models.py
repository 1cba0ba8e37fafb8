"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- La decodificación tipada del payload `package` es exactamente lo que hace
  `model_validate`: si el JSON no encaja, obtenemos un `ValidationError` legible.
- Los alias (`packageVersions`, `packageBcs`, ...) mantienen el naming Python
  sin perder el nombre de campo del esquema GraphQL.

Nota:
- Todos los modelos son inmutables (`frozen=True`): se construyen una vez por
  invocación a partir de la respuesta HTTP y no se modifican.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

U64_MAX = 2**64 - 1


class GraphQLRequest(BaseModel):
    """Envelope de request GraphQL: `{query, variables}`."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(
        ...,
        min_length=1,
        description="Documento GraphQL.",
    )
    variables: dict[str, Any] = Field(
        default_factory=dict,
        description="Variables del documento (nombre -> valor JSON).",
    )


class GraphQLError(BaseModel):
    """Un error GraphQL; solo nos interesa `message`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str = Field(..., description="Mensaje de error devuelto por el servidor.")


class GraphQLResponse(BaseModel):
    """Envelope de respuesta GraphQL: `{data, errors}`.

    Ambos campos ausentes es una respuesta válida (vacía).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Cualquier valor JSON; el servicio decide qué hacer si no es un objeto.
    data: Any = None
    errors: list[GraphQLError] | None = None

    @property
    def error_messages(self) -> list[str]:
        return [err.message for err in self.errors or []]


class PackageVersionNode(BaseModel):
    """Una revisión histórica de un paquete Move."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    address: str = Field(..., description="Dirección de esta versión del paquete.")
    version: int = Field(..., ge=0, le=U64_MAX, strict=True, description="Número de versión.")
    package_bcs: str | None = Field(
        default=None,
        alias="packageBcs",
        description="Bytes BCS del paquete (base64), opacos para nosotros.",
    )
    module_bcs: list[str] | None = Field(
        default=None,
        alias="moduleBcs",
        description="Bytes BCS de cada módulo, en orden.",
    )


class PackageVersions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    nodes: list[PackageVersionNode] = Field(default_factory=list)


class PackageData(BaseModel):
    """Registro tipado del campo `data.package`."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    address: str = Field(..., description="Dirección consultada.")
    version: int = Field(..., ge=0, le=U64_MAX, strict=True, description="Versión actual del paquete.")
    package_versions: PackageVersions | None = Field(
        default=None,
        alias="packageVersions",
        description="Historial de versiones (primera página, 50 nodos máx.).",
    )

    @property
    def version_nodes(self) -> list[PackageVersionNode]:
        if self.package_versions is None:
            return []
        return list(self.package_versions.nodes)


class QueryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    package_address: str
    timestamp: datetime
    endpoint: str


class ResponseEnvelope(BaseModel):
    """Lo que se persiste en `response.json`.

    Por qué un envelope propio:
    - Deja trazabilidad de *qué* se consultó, *cuándo* y *contra qué* endpoint
      junto al `data` crudo devuelto por el servidor.
    """

    model_config = ConfigDict(frozen=True)

    status: str = Field(default="success")
    query: QueryInfo
    data: dict[str, Any] = Field(
        ...,
        description="Objeto `data` crudo de la respuesta GraphQL.",
    )
