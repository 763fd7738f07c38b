# src/rasterreclass/services/reclass_service.py
from __future__ import annotations

"""
Servicio de RECLASIFICACIÓN de una banda, contracts-first.
Pipeline determinista:
  PARSE → TYPE (+NoData) → SCAN → ASSEMBLE → (WRITE TIF) → (REPORT CSV)

La RangeTable es un valor: se construye por invocación y se pasa
explícitamente; el servicio no guarda estado entre llamadas.
"""

import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Optional, Tuple

import numpy as np

from ..contracts.geo import GeoRaster
from ..contracts.reclass import (
    DOUBLE_COMPARE_TOLERANCE, PixelType, RangeTable, StatisticsSummary,
)
from ..adapters.array_grid import ArrayGrid, ArrayGridFactory
from ..ports.exporters import ReportExporterPort
from ..ports.grid import GridFactoryPort, GridPort, WritableGridPort
from ..ports.raster_read import RasterReaderPort
from ..ports.raster_write import RasterWriterPort
from .coverage import Coverage, assemble_coverage
from .pixel_type import select_output
from .range_parser import parse_ranges
from .statistics import RunningStatistics

logger = logging.getLogger(__name__)

COVERAGE_NAME = "Reclass"


# ----------------------
# Motor (por celda y vectorizado)
# ----------------------

def is_nodata(value: float, input_nodata: Optional[float], tolerance: float = DOUBLE_COMPARE_TOLERANCE) -> bool:
    if math.isnan(value):
        return True
    if input_nodata is None:
        return False
    if math.isnan(input_nodata):
        return False
    return abs(value - input_nodata) <= tolerance


def classify_value(
    value: float,
    table: RangeTable,
    input_nodata: Optional[float],
    nodata: float,
    tolerance: float = DOUBLE_COMPARE_TOLERANCE,
) -> Tuple[float, bool]:
    """Clasifica una celda. Devuelve (valor_salida, clasificada)."""
    if is_nodata(value, input_nodata, tolerance):
        return nodata, False
    rule = table.match(value, tolerance)
    if rule is None:
        return nodata, False
    return rule.class_value, True


def classify_array(
    values: np.ndarray,
    table: RangeTable,
    input_nodata: Optional[float],
    nodata: float,
    tolerance: float = DOUBLE_COMPARE_TOLERANCE,
) -> Tuple[np.ndarray, np.ndarray]:
    """Equivalente vectorizado de `classify_value` sobre una banda completa.

    Devuelve (códigos float64, máscara de celdas clasificadas).
    """
    v = np.asarray(values, dtype=np.float64)
    out = np.full(v.shape, nodata, dtype=np.float64)
    classified = np.zeros(v.shape, dtype=bool)
    with np.errstate(invalid="ignore", over="ignore"):
        pending = ~np.isnan(v)
        if input_nodata is not None and not math.isnan(input_nodata):
            pending &= ~(np.abs(v - input_nodata) <= tolerance)

        # 1) semiabierto [min, max) en orden de class_value
        for r in table:
            m = pending & (v >= r.minimum) & (v < r.maximum)
            out[m] = r.class_value
            classified |= m
            pending &= ~m
        # 2) límite superior ensanchado por la tolerancia
        for r in table:
            m = pending & (v >= r.minimum) & (v <= r.maximum + tolerance)
            out[m] = r.class_value
            classified |= m
            pending &= ~m
    return out, classified


def reclassify(
    grid: GridPort,
    band_index: int,
    input_nodata: Optional[float],
    table: RangeTable,
    *,
    tolerance: float = DOUBLE_COMPARE_TOLERANCE,
    factory: Optional[GridFactoryPort] = None,
) -> Tuple[WritableGridPort, StatisticsSummary]:
    """Escanea la banda `band_index` (0-based) y escribe códigos o NoData.

    La grilla de salida se crea una vez, del mismo tamaño y con el tipo
    elegido para la tabla, prellenada con NoData.
    """
    if not 0 <= band_index < grid.band_count:
        raise IndexError(f"band_index {band_index} fuera de rango (0..{grid.band_count - 1})")
    pixel_type, nodata = select_output(table)
    factory = factory or ArrayGridFactory()
    out_grid = factory.create_grid(grid.width, grid.height, pixel_type, fill=nodata)

    codes, classified = classify_array(grid.band_array(band_index), table, input_nodata, nodata, tolerance)
    out_grid.write_array(codes)

    # estadísticas sobre lo efectivamente escrito (ya en el tipo de salida)
    stats = RunningStatistics()
    stats.update_many(out_grid.to_array()[classified])
    summary = stats.finalize()
    logger.info(
        "reclass banda=%d %dx%d tipo=%s clasificadas=%d/%d",
        band_index, grid.width, grid.height, pixel_type.value, summary.count, grid.width * grid.height,
    )
    return out_grid, summary


def class_counts(data: np.ndarray, table: RangeTable) -> Dict[float, int]:
    """Conteo de celdas por class_value (incluye clases sin celdas)."""
    arr = np.asarray(data)
    return {r.class_value: int(np.count_nonzero(arr == r.class_value)) for r in table}


# ----------------------
# Especificaciones / DTOs
# ----------------------

@dataclass(frozen=True)
class ReclassSpec:
    band_index: int = 0                   # 0-based
    input_nodata: Optional[float] = None  # si None -> profile.nodata de la entrada
    tolerance: float = DOUBLE_COMPARE_TOLERANCE
    out_tif: Optional[Path] = None        # si None -> no escribe GeoTIFF
    out_report: Optional[Path] = None     # si None -> no escribe CSV
    compress: Optional[str] = None
    tiled: bool = True

@dataclass(frozen=True)
class ReclassResult:
    coverage: Coverage
    table: RangeTable
    pixel_type: PixelType
    stats: StatisticsSummary
    counts: Dict[float, int]
    out_tif: Optional[Path] = None
    out_report: Optional[Path] = None

    @property
    def raster(self) -> GeoRaster:
        return self.coverage.raster

    @property
    def nodata(self) -> float:
        return float(self.coverage.raster.profile.nodata)  # type: ignore[arg-type]

    def percents(self) -> Dict[float, float]:
        total = int(self.raster.data.size)
        if total <= 0:
            return {k: 0.0 for k in self.counts}
        return {k: (v / float(total)) * 100.0 for k, v in self.counts.items()}


# ----------------------
# Servicio
# ----------------------

@dataclass
class ReclassService:
    reader: Optional[RasterReaderPort] = None
    writer: Optional[RasterWriterPort] = None
    reporter: Optional[ReportExporterPort] = None
    grid_factory: Optional[GridFactoryPort] = None

    # --------- API principal ---------
    def run(self, uri: str, ranges: str, spec: ReclassSpec = ReclassSpec()) -> ReclassResult:
        if self.reader is None:
            raise RuntimeError("RasterReaderPort no configurado")
        # parse antes de cualquier lectura/escritura
        table = parse_ranges(ranges)
        raster = self.reader.read_all(uri)
        return self._run(raster, table, spec)

    def run_raster(self, raster: GeoRaster, ranges: str, spec: ReclassSpec = ReclassSpec()) -> ReclassResult:
        table = parse_ranges(ranges)
        return self._run(raster, table, spec)

    # --------- Fases internas ---------
    def _run(self, raster: GeoRaster, table: RangeTable, spec: ReclassSpec) -> ReclassResult:
        grid = ArrayGrid.from_raster(raster)
        in_nodata = spec.input_nodata if spec.input_nodata is not None else raster.profile.nodata
        out_grid, stats = reclassify(
            grid, spec.band_index, in_nodata, table,
            tolerance=spec.tolerance, factory=self.grid_factory,
        )
        nodata = out_grid.pixel_type.nodata
        coverage = assemble_coverage(COVERAGE_NAME, out_grid, nodata, stats, raster.profile)
        counts = class_counts(coverage.raster.data, table)

        result = ReclassResult(
            coverage=coverage,
            table=table,
            pixel_type=out_grid.pixel_type,
            stats=stats,
            counts=counts,
        )
        out_tif, out_report = self._export(result, spec)
        return replace(result, out_tif=out_tif, out_report=out_report)

    # --------- Export (opcional y sin rutas implícitas) ---------
    def _export(self, result: ReclassResult, spec: ReclassSpec) -> Tuple[Optional[Path], Optional[Path]]:
        out_tif: Optional[Path] = None
        out_report: Optional[Path] = None

        if spec.out_tif is not None:
            if self.writer is None:
                raise RuntimeError("out_tif requiere un RasterWriterPort configurado")
            out_tif = Path(spec.out_tif)
            out_tif.parent.mkdir(parents=True, exist_ok=True)
            self.writer.write(
                str(out_tif), result.raster,
                compress=spec.compress, tiled=spec.tiled,
                metadata=result.coverage.band_metadata(),
            )
            logger.info("GeoTIFF escrito: %s", out_tif)

        if spec.out_report is not None:
            if self.reporter is None:
                raise RuntimeError("out_report requiere un ReportExporterPort configurado")
            out_report = Path(spec.out_report)
            self.reporter.render("reclass_summary", self._report_context(result), str(out_report))
            logger.info("Reporte escrito: %s", out_report)

        return out_tif, out_report

    @staticmethod
    def _report_context(result: ReclassResult) -> dict:
        perc = result.percents()
        rows = []
        for r in result.table:
            rows.append({
                "class_value": f"{r.class_value:g}",
                "minimum": f"{r.minimum:g}",
                "maximum": "" if r.open_ended else f"{r.maximum:g}",
                "cells": result.counts[r.class_value],
                "percent": f"{perc[r.class_value]:.4f}",
            })
        return {
            "headers": ["class_value", "minimum", "maximum", "cells", "percent"],
            "rows": rows,
        }


__all__ = [
    "COVERAGE_NAME",
    "is_nodata",
    "classify_value",
    "classify_array",
    "reclassify",
    "class_counts",
    "ReclassSpec",
    "ReclassResult",
    "ReclassService",
]
