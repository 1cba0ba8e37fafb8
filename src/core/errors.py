"""Jerarquía de errores del cliente.

Por qué un módulo propio:
- Los adaptadores traducen excepciones de terceros (httpx, pydantic, OSError)
  a tipos propios; nada crudo cruza hacia la CLI.
- La CLI es el único borde que imprime estos errores.

Los resultados "benignos" (HTTP 4xx/5xx, errores GraphQL, paquete inexistente,
fallo de decodificación tipada) NO son excepciones: viajan en
`PackageQueryResult`.
"""

from __future__ import annotations


class PackageQueryError(Exception):
    """Base de todos los errores del cliente."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint


class InvalidAddressError(PackageQueryError):
    """La dirección del paquete está vacía o no es un string."""


class TransportError(PackageQueryError):
    """Fallo de red/transporte antes de obtener una respuesta HTTP."""


class ResponseDecodeError(PackageQueryError):
    """El cuerpo 2xx no es un envelope GraphQL JSON válido."""


class ExportError(PackageQueryError):
    """No se pudo escribir el archivo de respuesta."""
