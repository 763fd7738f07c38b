# src/rasterreclass/services/pixel_type.py
from __future__ import annotations

from typing import Tuple

from ..contracts.reclass import PixelType, RangeTable
from ..exceptions import InvalidRangeSpecError

_INTEGER_TYPES = (PixelType.INT16, PixelType.INT32)


def _fits_integer(pt: PixelType, lo: float, hi: float) -> bool:
    # el mínimo del tipo queda reservado para NoData
    return pt.nodata < lo and hi <= pt.max_value


def select_pixel_type(table: RangeTable) -> PixelType:
    """Menor tipo que representa todos los class_value y su NoData.

    Se decide por el class_value mayor; valores no enteros van a FLOAT32.
    """
    if not table:
        raise InvalidRangeSpecError("RangeTable vacía", argument="ranges")
    hi = table.max_class_value
    lo = table.min_class_value
    integral = all(float(v).is_integer() for v in table.class_values)
    if integral:
        for pt in _INTEGER_TYPES:
            if _fits_integer(pt, lo, hi):
                return pt
    if PixelType.FLOAT32.min_value <= lo and hi <= PixelType.FLOAT32.max_value:
        return PixelType.FLOAT32
    raise InvalidRangeSpecError(
        f"class_value fuera del rango de float32: [{lo:g}, {hi:g}]", argument=f"{hi:g}"
    )


def select_output(table: RangeTable) -> Tuple[PixelType, float]:
    """Tipo de pixel y NoData en una sola llamada (no pueden divergir)."""
    pt = select_pixel_type(table)
    return pt, pt.nodata


__all__ = ["select_pixel_type", "select_output"]
