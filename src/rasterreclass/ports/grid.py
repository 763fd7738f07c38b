# src/rasterreclass/ports/grid.py
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import numpy.typing as npt

from ..contracts.reclass import PixelType


@runtime_checkable
class GridPort(Protocol):
    """
    Grilla de lectura (una o más bandas).
    Reglas: `band` es 0-based; `band_array` devuelve (height, width).
    """
    @property
    def width(self) -> int: ...
    @property
    def height(self) -> int: ...
    @property
    def band_count(self) -> int: ...
    def sample_at(self, row: int, col: int, band: int) -> float: ...
    def band_array(self, band: int) -> "npt.NDArray[Any]": ...


@runtime_checkable
class WritableGridPort(Protocol):
    """Grilla de salida de una banda con tipo de pixel fijo."""
    @property
    def width(self) -> int: ...
    @property
    def height(self) -> int: ...
    @property
    def pixel_type(self) -> PixelType: ...
    def set_sample(self, row: int, col: int, value: float) -> None: ...
    def sample_at(self, row: int, col: int, band: int = 0) -> float: ...
    def write_array(self, values: "npt.NDArray[Any]") -> None: ...
    def to_array(self) -> "npt.NDArray[Any]": ...


@runtime_checkable
class GridFactoryPort(Protocol):
    def create_grid(self, width: int, height: int, pixel_type: PixelType, fill: float = 0.0) -> WritableGridPort: ...


__all__ = ["GridPort", "WritableGridPort", "GridFactoryPort"]
