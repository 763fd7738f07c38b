# src/rasterreclass/ports/exporters.py
from __future__ import annotations

from typing import Protocol, runtime_checkable, Mapping, Any

URI = str

@runtime_checkable
class ReportExporterPort(Protocol):
    """
    Genera reportes tabulares a partir de un contexto.
    Convención de contexto: `headers` (opcional) y `rows`.
    """
    def render(self, template_id: str, context: Mapping[str, Any], out_uri: URI) -> URI: ...

__all__ = ["ReportExporterPort", "URI"]
