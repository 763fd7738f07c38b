# tests/integration/adapters/test_gdal_raster_io.py
import numpy as np
import pytest
from pathlib import Path

rasterio = pytest.importorskip("rasterio")

from rasterreclass.adapters.csv_exporter import CSVExporter
from rasterreclass.adapters.gdal_raster_reader import GdalRasterReader
from rasterreclass.adapters.gdal_raster_writer import GdalRasterWriter
from rasterreclass.services.reclass_service import ReclassService, ReclassSpec
from tests.factories import ASPECT_RANGES, make_raster

pytestmark = pytest.mark.integration


def _write_input(path: Path) -> Path:
    data = np.array([
        [[10.0, 100.0, 300.0], [-9999.0, 365.0, 400.0]],
        [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],
    ], dtype=np.float32)
    GdalRasterWriter().write(str(path), make_raster(data, nodata=-9999.0))
    return path


def test_reader_roundtrip_profile(tmp_path: Path):
    src = _write_input(tmp_path / "in.tif")
    reader = GdalRasterReader()
    r = reader.read(str(src), band_index=1)
    assert r.profile.count == 1 and r.profile.nodata == -9999.0
    assert r.profile.crs.epsg == 32719
    assert reader.read_all(str(src)).data.shape == (2, 2, 3)
    assert reader.size(str(src)) == (3, 2)
    assert reader.exists(str(src))


def test_service_end_to_end(tmp_path: Path):
    src = _write_input(tmp_path / "in.tif")
    svc = ReclassService(reader=GdalRasterReader(), writer=GdalRasterWriter(), reporter=CSVExporter())
    spec = ReclassSpec(out_tif=tmp_path / "out" / "cls.tif", out_report=tmp_path / "out" / "cls.csv")
    res = svc.run(str(src), ASPECT_RANGES, spec)

    with rasterio.open(res.out_tif) as ds:
        assert ds.dtypes[0] == "int16"
        assert ds.nodata == -32768
        assert ds.read(1).tolist() == [[1, 2, 3], [-32768, 3, -32768]]
        tags = ds.tags(1)
        assert float(tags["STATISTICS_MINIMUM"]) == 1.0
        assert float(tags["STATISTICS_MAXIMUM"]) == 3.0
    lines = res.out_report.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "class_value,minimum,maximum,cells,percent"
    assert len(lines) == 4
