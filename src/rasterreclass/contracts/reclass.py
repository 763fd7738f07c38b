# src/rasterreclass/contracts/reclass.py
from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .geo import DTypeStr

# Tolerancia fija para comparar NoData y el límite superior de un intervalo
DOUBLE_COMPARE_TOLERANCE = 1e-10

MIN_BOUND = -sys.float_info.max
MAX_BOUND = sys.float_info.max


# -------------------------
# Reglas de clasificación
# -------------------------
class ClassificationRule(BaseModel):
    """Intervalo [minimum, maximum) -> class_value.

    El límite superior se incluye sólo a través de la tolerancia
    (ver `RangeTable.match`).
    """
    model_config = ConfigDict(frozen=True)
    class_value: float
    minimum: float = MIN_BOUND
    maximum: float = MAX_BOUND

    @field_validator("class_value", "minimum", "maximum")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"valor no finito: {v}")
        return v

    @model_validator(mode="after")
    def _ordered(self) -> "ClassificationRule":
        if self.minimum > self.maximum:
            raise ValueError(f"minimum ({self.minimum}) > maximum ({self.maximum})")
        return self

    @property
    def open_ended(self) -> bool:
        return self.maximum == MAX_BOUND

    def contains(self, value: float, tolerance: float = DOUBLE_COMPARE_TOLERANCE) -> bool:
        """Pertenencia con límite superior ensanchado por `tolerance`."""
        return self.minimum <= value <= self.maximum + tolerance

    def contains_half_open(self, value: float) -> bool:
        return self.minimum <= value < self.maximum

    def __str__(self) -> str:
        return f"{self.class_value:g} : {self.minimum:g} ~ {self.maximum:g}"


@dataclass(frozen=True)
class RangeTable:
    """
    Tabla inmutable de reglas, una por class_value y ordenada por class_value
    ascendente (NO por límites). El orden decide los solapes: gana la regla
    con el class_value menor.
    """
    rules: Tuple[ClassificationRule, ...]

    def __post_init__(self):
        keys = [r.class_value for r in self.rules]
        if keys != sorted(keys) or len(set(keys)) != len(keys):
            raise ValueError("rules debe estar ordenado por class_value y sin duplicados")

    @classmethod
    def from_rules(cls, rules: Iterable[ClassificationRule]) -> "RangeTable":
        """Construye la tabla; un class_value repetido reemplaza al anterior."""
        by_key: dict[float, ClassificationRule] = {}
        for r in rules:
            by_key[r.class_value] = r
        return cls(tuple(by_key[k] for k in sorted(by_key)))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[ClassificationRule]:
        return iter(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)

    @property
    def class_values(self) -> Tuple[float, ...]:
        return tuple(r.class_value for r in self.rules)

    @property
    def max_class_value(self) -> float:
        if not self.rules:
            raise ValueError("RangeTable vacía")
        return self.rules[-1].class_value

    @property
    def min_class_value(self) -> float:
        if not self.rules:
            raise ValueError("RangeTable vacía")
        return self.rules[0].class_value

    def match(self, value: float, tolerance: float = DOUBLE_COMPARE_TOLERANCE) -> Optional[ClassificationRule]:
        """Primera regla (por class_value) que contiene `value`, o None.

        1) intervalos semiabiertos [min, max)
        2) si ninguno contiene el valor: [min, max + tolerance]
        """
        for r in self.rules:
            if r.contains_half_open(value):
                return r
        for r in self.rules:
            if r.contains(value, tolerance):
                return r
        return None


# -------------------------
# Tipo de pixel de salida
# -------------------------
_F32_TINY = float(np.nextafter(np.float32(0), np.float32(1)))

class PixelType(str, Enum):
    INT16 = "int16"
    INT32 = "int32"
    FLOAT32 = "float32"

    @property
    def dtype(self) -> DTypeStr:
        return self.value  # type: ignore[return-value]

    @property
    def nodata(self) -> float:
        """Centinela NoData acoplado al tipo (mínimo entero / subnormal float)."""
        if self is PixelType.FLOAT32:
            return _F32_TINY
        return float(np.iinfo(self.value).min)

    @property
    def min_value(self) -> float:
        if self is PixelType.FLOAT32:
            return -float(np.finfo(np.float32).max)
        return float(np.iinfo(self.value).min)

    @property
    def max_value(self) -> float:
        if self is PixelType.FLOAT32:
            return float(np.finfo(np.float32).max)
        return float(np.iinfo(self.value).max)


# -------------------------
# Estadísticas
# -------------------------
@dataclass(frozen=True)
class StatisticsSummary:
    count: int
    minimum: Optional[float]
    maximum: Optional[float]

    @property
    def is_empty(self) -> bool:
        return self.count == 0


__all__ = [
    "DOUBLE_COMPARE_TOLERANCE", "MIN_BOUND", "MAX_BOUND",
    "ClassificationRule", "RangeTable", "PixelType", "StatisticsSummary",
]
