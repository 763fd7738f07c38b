# src/rasterreclass/services/statistics.py
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from ..contracts.reclass import StatisticsSummary


class RunningStatistics:
    """Acumula min/max/conteo de los valores clasificados (no NoData).

    Vive sólo durante un escaneo; cada invocación crea la suya.
    """

    def __init__(self) -> None:
        self.count = 0
        self.minimum: Optional[float] = None
        self.maximum: Optional[float] = None

    def update(self, value: float) -> None:
        v = float(value)
        self.count += 1
        if self.minimum is None or v < self.minimum:
            self.minimum = v
        if self.maximum is None or v > self.maximum:
            self.maximum = v

    def update_many(self, values: Any) -> None:
        arr = np.asarray(values, dtype=np.float64).ravel()
        if arr.size == 0:
            return
        self.count += int(arr.size)
        lo, hi = float(arr.min()), float(arr.max())
        self.minimum = lo if self.minimum is None else min(self.minimum, lo)
        self.maximum = hi if self.maximum is None else max(self.maximum, hi)

    def finalize(self) -> StatisticsSummary:
        return StatisticsSummary(count=self.count, minimum=self.minimum, maximum=self.maximum)


__all__ = ["RunningStatistics"]
