"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/exportación) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SUI_MAINNET_GRAPHQL_URL = "https://sui-mainnet.mystenlabs.com/graphql"

DEFAULT_PACKAGE_ADDRESS = "0xc33c3e937e5aa2009cc0c3fdb3f345a0c3193d4ee663ffc601fe8b894fbc4ba6"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sui-package-query"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sui-package-query"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sui-package-query"
    return Path.home() / ".config" / "sui-package-query"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUI_PKG_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    graphql_endpoint: str = Field(
        default=SUI_MAINNET_GRAPHQL_URL,
        min_length=8,
        description="Endpoint GraphQL del indexador Sui.",
    )
    package_address: str = Field(
        default=DEFAULT_PACKAGE_ADDRESS,
        description="Dirección del paquete Move consultado por defecto.",
    )
    output_path: Path = Field(
        default=Path("response.json"),
        description="Archivo donde se persiste la respuesta cruda (se sobrescribe).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = defaults de httpx.",
    )
    user_agent: str = Field(
        default="sui-package-query/0.1",
        min_length=1,
        description="User-Agent de las peticiones GraphQL.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG/INFO/WARNING/ERROR).",
    )
