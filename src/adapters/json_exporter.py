"""Exportación JSON de respuestas.

Vuelca cualquier modelo de respuesta (perfil, clasificación...) a un fichero
JSON UTF-8 con formato estable.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel


def export_model_json(*, model: BaseModel, output_path: Path) -> Path:
    """Exporta `model` a JSON UTF-8 con claves ordenadas."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = model.model_dump(mode="json", exclude_none=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
