## `src/rasterreclass/adapters/csv_exporter.py`

from __future__ import annotations

import csv
import os
from typing import Mapping, Any, Iterable, Sequence

from ..ports.exporters import ReportExporterPort

class CSVExporter(ReportExporterPort):
    """Exporter "report" mínimo: escribe un CSV desde `context`.

    Convención:
      - `context["headers"]` -> lista de nombres de columna (opcional)
      - `context["rows"]`    -> iterable de dicts o secuencias
    Si no hay `headers`, se infiere desde la primera fila.
    `template_id` no se usa (un solo formato).
    """
    def render(self, template_id: str, context: Mapping[str, Any], out_uri: str) -> str:
        rows = list(context.get("rows", []))  # type: ignore[arg-type]
        headers = context.get("headers")
        os.makedirs(os.path.dirname(out_uri) or ".", exist_ok=True)
        if headers is None and rows:
            first = rows[0]
            if isinstance(first, Mapping):
                headers = list(first.keys())
            else:
                headers = [f"col{i+1}" for i in range(len(first))]
        with open(out_uri, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            if headers:
                writer.writerow(headers)
            for r in rows:
                writer.writerow(self._row(r, headers or ()))
        return out_uri

    @staticmethod
    def _row(r: Any, headers: Sequence[str]) -> Iterable[Any]:
        if isinstance(r, Mapping):
            return [r.get(h, "") for h in headers]
        return list(r)
