"""Exportación JSON de entradas de tiempo.

Por qué JSON:
- Interoperabilidad con hojas de cálculo, scripts de facturación y otros pipelines.
- Cada entrada se escribe con su actividad resuelta embebida.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import TimeEntry


def export_time_entries_json(*, entries: Iterable[TimeEntry], output_path: Path) -> Path:
    """Exporta las entradas a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.model_dump(mode="json") for entry in entries]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
