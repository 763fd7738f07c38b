# src/rasterreclass/services/coverage.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..contracts.geo import GeoProfile, GeoRaster
from ..contracts.reclass import StatisticsSummary
from ..ports.grid import WritableGridPort


@dataclass(frozen=True)
class Coverage:
    """Raster de salida + estadísticas de la banda (min/max de lo clasificado)."""
    name: str
    raster: GeoRaster
    minimum: Optional[float]
    maximum: Optional[float]

    @property
    def nodata(self) -> Optional[float]:
        return self.raster.profile.nodata

    def band_metadata(self) -> Dict[str, Any]:
        """Tags GDAL de estadísticas (vacío si no hubo celdas clasificadas)."""
        if self.minimum is None or self.maximum is None:
            return {}
        return {
            "STATISTICS_MINIMUM": repr(self.minimum),
            "STATISTICS_MAXIMUM": repr(self.maximum),
        }


def assemble_coverage(
    name: str,
    grid: WritableGridPort,
    nodata: float,
    stats: StatisticsSummary,
    source_profile: GeoProfile,
) -> Coverage:
    """Empaqueta la grilla escrita con la georreferencia de la entrada.

    No reproyecta: transform/CRS se copian tal cual.
    """
    if (grid.width, grid.height) != (source_profile.width, source_profile.height):
        raise ValueError(
            f"Dimensiones no coinciden: grilla {grid.width}x{grid.height} vs "
            f"perfil {source_profile.width}x{source_profile.height}"
        )
    profile = source_profile.single_band(grid.pixel_type.dtype, float(nodata))
    raster = GeoRaster(data=grid.to_array(), profile=profile)
    return Coverage(name=name, raster=raster, minimum=stats.minimum, maximum=stats.maximum)


__all__ = ["Coverage", "assemble_coverage"]
