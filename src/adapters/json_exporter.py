"""Exportación JSON de la respuesta.

Por qué JSON:
- Deja la respuesta cruda del indexador disponible para inspección o para
  otras herramientas, sin depender del resumen impreso.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ResponseEnvelope
from core.errors import ExportError


def export_response_json(*, envelope: ResponseEnvelope, output_path: Path) -> Path:
    """Exporta `ResponseEnvelope` a JSON UTF-8 indentado (sobrescribe)."""

    payload = envelope.model_dump(mode="json")
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise ExportError(f"Could not write {output_path}: {exc}") from exc
    return output_path
