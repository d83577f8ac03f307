"""Exportación JSON de respuestas.

Por qué JSON:
- Permite guardar la respuesta cruda de PipeRun para auditoría o para
  alimentar otras herramientas sin volver a llamar a la API.
"""

from __future__ import annotations

import json
from pathlib import Path

from piperun.core.domain.models import ResponseEnvelope


def export_envelope_json(*, envelope: ResponseEnvelope, output_path: Path) -> Path:
    """Exporta `ResponseEnvelope` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = envelope.to_dict()
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
