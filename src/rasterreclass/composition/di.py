from __future__ import annotations
from pathlib import Path
from typing import Optional

import yaml

from ..config import Settings
from ..adapters.gdal_raster_reader import GdalRasterReader
from ..adapters.gdal_raster_writer import GdalRasterWriter
from ..adapters.csv_exporter import CSVExporter
from ..services.reclass_service import ReclassService, ReclassSpec

def load_settings_from_yaml(path: Path) -> Settings:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: se esperaba un mapeo YAML")
    return Settings(**data)

def build_service(settings: Settings, *, with_report: bool = False) -> ReclassService:
    # reporter sólo si la config lo pide o el CLI lo fuerza con --report
    return ReclassService(
        reader=GdalRasterReader(),
        writer=GdalRasterWriter(),
        reporter=CSVExporter() if (settings.write_report or with_report) else None,
    )

def build_spec(
    settings: Settings,
    *,
    band: Optional[int] = None,
    input_nodata: Optional[float] = None,
    out_tif: Optional[Path] = None,
    out_report: Optional[Path] = None,
) -> ReclassSpec:
    """Traduce banda 1-based (CLI/config) a ReclassSpec 0-based."""
    band_1 = settings.default_band if band is None else int(band)
    if band_1 < 1:
        raise ValueError(f"band es 1-based: {band_1}")
    if out_report is None and settings.write_report and out_tif is not None:
        out_report = Path(out_tif).with_suffix(".csv")
    return ReclassSpec(
        band_index=band_1 - 1,
        input_nodata=input_nodata,
        tolerance=settings.tolerance,
        out_tif=out_tif,
        out_report=out_report,
        compress=settings.compress,
        tiled=settings.tiled,
    )
