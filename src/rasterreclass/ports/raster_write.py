# src/rasterreclass/ports/raster_write.py
from __future__ import annotations

from typing import Protocol, runtime_checkable, Mapping, Any, Optional
from ..contracts.geo import GeoRaster

URI = str

@runtime_checkable
class RasterWriterPort(Protocol):
    """
    Escritor de rasters (GeoTIFF). `metadata` se escribe como tags de la banda 1.
    """
    def write(self, uri: URI, raster: GeoRaster, *, compress: Optional[str] = None, tiled: bool = True,
              metadata: Optional[Mapping[str, Any]] = None) -> URI: ...
    def mkdirs(self, uri: URI) -> None: ...

__all__ = ["RasterWriterPort", "URI"]
