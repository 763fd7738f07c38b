## `src/rasterreclass/adapters/gdal_raster_writer.py`
from __future__ import annotations

import os
from typing import Mapping, Any, Optional

import numpy as np

try:
    import rasterio
    from rasterio.transform import Affine
    _HAS_RASTERIO = True
except ImportError:  # pragma: no cover
    _HAS_RASTERIO = False

try:
    from osgeo import gdal, osr  # type: ignore
    _HAS_GDAL = True
except ImportError:  # pragma: no cover
    _HAS_GDAL = False

from ..contracts.geo import GeoRaster, GeoProfile
from ..ports.raster_write import RasterWriterPort


def _ensure_dir(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def _gt_to_affine(p: GeoProfile) -> "Affine":
    x0, px, rx, y0, ry, py = p.transform
    return Affine(px, rx, x0, ry, py, y0)


class GdalRasterWriter(RasterWriterPort):
    def write(self, uri: str, raster: GeoRaster, *, compress: Optional[str] = None, tiled: bool = True,
              metadata: Optional[Mapping[str, Any]] = None) -> str:
        uri = str(uri)
        _ensure_dir(uri)
        data = raster.data
        p = raster.profile
        compress = (compress or "DEFLATE").upper()
        tags = {str(k): str(v) for k, v in (metadata or {}).items()}

        if _HAS_RASTERIO:
            profile = {
                "driver": "GTiff",
                "height": p.height,
                "width": p.width,
                "count": 1 if data.ndim == 2 else data.shape[0],
                "dtype": data.dtype,
                "transform": _gt_to_affine(p),
                "compress": compress,
                "nodata": p.nodata,
            }
            # GTiff exige bloques múltiplos de 16; rasters chicos van en tiras
            if tiled and p.width >= 256 and p.height >= 256:
                profile.update(tiled=True, blockxsize=256, blockysize=256)
            if p.crs.epsg is not None:
                profile["crs"] = f"EPSG:{p.crs.epsg}"
            elif p.crs.wkt:
                profile["crs"] = p.crs.wkt
            with rasterio.open(uri, "w", **profile) as dst:
                if data.ndim == 2:
                    dst.write(data, 1)
                else:
                    for i in range(data.shape[0]):
                        dst.write(data[i], i + 1)
                if tags:
                    dst.update_tags(1, **tags)
            return uri

        if _HAS_GDAL:
            driver = gdal.GetDriverByName("GTiff")
            count = 1 if data.ndim == 2 else data.shape[0]
            _NP2GDAL = {
                np.dtype("uint8"): gdal.GDT_Byte,
                np.dtype("uint16"): gdal.GDT_UInt16,
                np.dtype("int16"): gdal.GDT_Int16,
                np.dtype("uint32"): gdal.GDT_UInt32,
                np.dtype("int32"): gdal.GDT_Int32,
                np.dtype("float32"): gdal.GDT_Float32,
                np.dtype("float64"): gdal.GDT_Float64,
            }
            dtype = _NP2GDAL.get(data.dtype, gdal.GDT_Float32)
            ds = driver.Create(uri, p.width, p.height, count, dtype, options=[f"COMPRESS={compress}", "TILED=YES" if tiled else "TILED=NO"])
            ds.SetGeoTransform(p.transform)
            if p.crs.wkt:
                ds.SetProjection(p.crs.wkt)
            elif p.crs.epsg:
                srs = osr.SpatialReference(); srs.ImportFromEPSG(int(p.crs.epsg))
                ds.SetProjection(srs.ExportToWkt())
            planes = [data] if data.ndim == 2 else [data[i] for i in range(count)]
            for i, plane in enumerate(planes):
                band = ds.GetRasterBand(i + 1)
                band.WriteArray(plane)
                if p.nodata is not None:
                    band.SetNoDataValue(float(p.nodata))
            if tags:
                ds.GetRasterBand(1).SetMetadata(tags)
            ds.FlushCache(); ds = None
            return uri

        raise RuntimeError("No hay backend para escribir rasters (instala rasterio o GDAL)")

    def mkdirs(self, uri: str) -> None:
        _ensure_dir(str(uri))
