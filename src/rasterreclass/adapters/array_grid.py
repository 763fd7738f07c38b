## `src/rasterreclass/adapters/array_grid.py`
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from ..contracts.geo import GeoRaster
from ..contracts.reclass import PixelType
from ..ports.grid import GridPort, WritableGridPort, GridFactoryPort


class ArrayGrid(GridPort):
    """Grilla de lectura sobre un ndarray (h, w) o (bands, h, w).

    No copia los datos: una banda 2D se ve como (1, h, w).
    """

    def __init__(self, data: np.ndarray):
        arr = np.asarray(data)
        if arr.ndim == 2:
            arr = arr[np.newaxis, ...]
        if arr.ndim != 3:
            raise ValueError(f"Se esperaba arreglo 2D o 3D; ndim={arr.ndim}")
        self._data = arr

    @classmethod
    def from_raster(cls, raster: GeoRaster) -> "ArrayGrid":
        return cls(raster.data)

    @property
    def width(self) -> int:
        return int(self._data.shape[2])

    @property
    def height(self) -> int:
        return int(self._data.shape[1])

    @property
    def band_count(self) -> int:
        return int(self._data.shape[0])

    def _check_band(self, band: int) -> None:
        if not 0 <= band < self.band_count:
            raise IndexError(f"band {band} fuera de rango (0..{self.band_count - 1})")

    def sample_at(self, row: int, col: int, band: int) -> float:
        self._check_band(band)
        return float(self._data[band, row, col])

    def band_array(self, band: int) -> np.ndarray:
        self._check_band(band)
        return self._data[band]


class WritableArrayGrid(WritableGridPort):
    """Grilla de salida (una banda) respaldada por un ndarray del tipo pedido."""

    def __init__(self, width: int, height: int, pixel_type: PixelType, fill: float = 0.0):
        if width <= 0 or height <= 0:
            raise ValueError(f"Dimensiones inválidas: {width}x{height}")
        self._pixel_type = pixel_type
        self._data = np.full((height, width), fill, dtype=np.dtype(pixel_type.dtype))

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def pixel_type(self) -> PixelType:
        return self._pixel_type

    def set_sample(self, row: int, col: int, value: float) -> None:
        self._data[row, col] = value

    def sample_at(self, row: int, col: int, band: int = 0) -> float:
        if band != 0:
            raise IndexError("WritableArrayGrid tiene una sola banda")
        return float(self._data[row, col])

    def write_array(self, values: Any) -> None:
        arr = np.asarray(values)
        if arr.shape != self._data.shape:
            raise ValueError(f"shape {arr.shape} no coincide con {self._data.shape}")
        self._data[...] = arr.astype(self._data.dtype, copy=False)

    def to_array(self) -> np.ndarray:
        # copia: el GeoRaster resultante congela su buffer
        return self._data.copy()


@dataclass(frozen=True)
class ArrayGridFactory(GridFactoryPort):
    def create_grid(self, width: int, height: int, pixel_type: PixelType, fill: float = 0.0) -> WritableArrayGrid:
        return WritableArrayGrid(width, height, pixel_type, fill)


__all__ = ["ArrayGrid", "WritableArrayGrid", "ArrayGridFactory"]
