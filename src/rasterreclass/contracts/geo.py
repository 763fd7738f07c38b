# src/rasterreclass/contracts/geo.py

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Literal, NamedTuple, Tuple, Optional

import numpy as np
import numpy.typing as npt

GeoTransform = Tuple[float, float, float, float, float, float]
DTypeStr = Literal["uint8","uint16","int16","uint32","int32","float32","float64"]

class Bounds(NamedTuple):
    minx: float; miny: float; maxx: float; maxy: float

# ---------- CRS (puro dominio, sin GDAL) ----------
@dataclass(frozen=True)
class CRSRef:
    wkt: Optional[str] = None
    epsg: Optional[int] = None

    @staticmethod
    def from_epsg(code: int) -> "CRSRef":
        return CRSRef(epsg=int(code))

    @staticmethod
    def from_wkt(wkt: str) -> "CRSRef":
        return CRSRef(wkt=wkt)

    def is_empty(self) -> bool:
        return not self.wkt and self.epsg is None

    @staticmethod
    def _normalize_wkt(wkt: str) -> str:
        # upper + espacios colapsados; no reordena nodos
        s = " ".join(wkt.strip().upper().split())
        s = s.replace(" ,", ",").replace(", ", ",")
        return s.replace("[ ", "[").replace(" ]", "]")

    def equals(self, other: "CRSRef") -> bool:
        """
        Comparación determinista sin GDAL:
        1) Si ambos tienen EPSG -> compara enteros.
        2) Si ambos tienen WKT -> compara WKT normalizado.
        3) Dos CRS vacíos son iguales; cualquier otra mezcla -> False.
        """
        if self is other:
            return True
        if self.epsg is not None and other.epsg is not None:
            return int(self.epsg) == int(other.epsg)
        if self.wkt and other.wkt:
            return self._normalize_wkt(self.wkt) == self._normalize_wkt(other.wkt)
        return self.is_empty() and other.is_empty()

# ---------- Perfil y Raster (puro dominio) ----------
@dataclass(frozen=True)
class GeoProfile:
    count: int
    dtype: DTypeStr
    width: int
    height: int
    transform: GeoTransform
    crs: CRSRef
    nodata: Optional[float] = None

    @property
    def bounds(self) -> Bounds:
        return geotransform_bounds(self.transform, self.width, self.height)

    def single_band(self, dtype: DTypeStr, nodata: Optional[float]) -> "GeoProfile":
        """Perfil de una banda con la misma georreferencia."""
        return replace(self, count=1, dtype=dtype, nodata=nodata)

@dataclass(frozen=True)
class GeoRaster:
    data: "npt.NDArray[Any]"  # type: ignore[valid-type]
    profile: GeoProfile

    def __post_init__(self):
        # Bloquea mutaciones accidentales sobre los datos
        if hasattr(self.data, "setflags"):
            try:
                self.data.setflags(write=False)
            except ValueError:
                pass

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.data.shape  # type: ignore[no-any-return]

# ---------- GeoTransform helpers ----------
def geotransform_bounds(gt: GeoTransform, width: int, height: int) -> Bounds:
    x0, px, rx, y0, ry, py = gt
    x_w = x0 + width * px + height * rx
    y_w = y0 + width * ry + height * py
    minx, maxx = (x0, x_w) if x0 <= x_w else (x_w, x0)
    miny, maxy = (y_w, y0) if y_w <= y0 else (y0, y_w)
    return Bounds(minx, miny, maxx, maxy)

def np_to_dtype_str(dt: Any) -> DTypeStr:
    name = np.dtype(dt).name
    if name not in ("uint8","uint16","int16","uint32","int32","float32","float64"):
        raise ValueError(f"dtype {dt} no soportado")
    return name  # type: ignore[return-value]

__all__ = [
    "GeoTransform","Bounds","CRSRef","GeoProfile","GeoRaster","geotransform_bounds",
    "np_to_dtype_str","DTypeStr",
]
