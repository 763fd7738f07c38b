# src/rasterreclass/adapters/gdal_raster_reader.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import os
import math
import numpy as np

# rasterio primero; GDAL como respaldo
try:  # rasterio path
    import rasterio
    from rasterio.transform import Affine
    _HAS_RASTERIO = True
except ImportError:  # pragma: no cover
    _HAS_RASTERIO = False

try:  # GDAL path
    from osgeo import gdal  # type: ignore
    _HAS_GDAL = True
except ImportError:  # pragma: no cover
    _HAS_GDAL = False

from ..contracts.geo import GeoRaster, GeoProfile, CRSRef, GeoTransform, np_to_dtype_str
from ..ports.raster_read import RasterReaderPort


def _affine_to_gt(a: "Affine") -> GeoTransform:
    return (a.c, a.a, a.b, a.f, a.d, a.e)


def _rasterio_crs_to_crsref(crs_obj) -> CRSRef:
    """Convierte rasterio CRS → CRSRef (intenta EPSG, si no WKT, si no vacío)."""
    if not crs_obj:
        return CRSRef()
    epsg = crs_obj.to_epsg()
    if epsg is not None:
        return CRSRef.from_epsg(int(epsg))
    wkt = crs_obj.to_wkt()
    return CRSRef.from_wkt(wkt) if wkt else CRSRef()


def _clean_nodata(nodata) -> float | None:
    if nodata is None:
        return None
    return float(nodata)


@dataclass(frozen=True)
class GdalRasterReader(RasterReaderPort):
    """Lector de raster. Prefiere rasterio; si no, GDAL.

    Regla: `read()` devuelve un **GeoRaster count==1**; `band_index` es
    1-based (convención GDAL/rasterio). `read_all()` devuelve todas las bandas.
    """

    # --------------- rasterio ---------------
    def _profile_from_ds(self, ds, count: int, dtype) -> GeoProfile:
        return GeoProfile(
            count=count,
            dtype=np_to_dtype_str(dtype),
            width=ds.width,
            height=ds.height,
            transform=_affine_to_gt(ds.transform),
            crs=_rasterio_crs_to_crsref(ds.crs),
            nodata=_clean_nodata(ds.nodata),
        )

    def _read_with_rasterio(self, uri: str, band_index: int | None) -> GeoRaster:
        with rasterio.open(uri) as ds:
            idx = 1 if band_index is None else int(band_index)
            arr = ds.read(idx)
            if arr.ndim != 2:
                raise ValueError("Se esperaba banda 2D (count==1)")
            return GeoRaster(arr, self._profile_from_ds(ds, 1, arr.dtype))

    def _read_all_with_rasterio(self, uri: str) -> GeoRaster:
        with rasterio.open(uri) as ds:
            arr = ds.read()
            return GeoRaster(arr, self._profile_from_ds(ds, ds.count, arr.dtype))

    def _profile_with_rasterio(self, uri: str) -> GeoProfile:
        with rasterio.open(uri) as ds:
            dtype0 = np.dtype(ds.dtypes[0]) if ds.dtypes and ds.dtypes[0] else np.dtype("float32")
            return self._profile_from_ds(ds, ds.count, dtype0)

    # --------------- GDAL ---------------
    def _read_with_gdal(self, uri: str, band_index: int | None) -> GeoRaster:
        ds = gdal.Open(str(uri), gdal.GA_ReadOnly)
        if ds is None:
            raise FileNotFoundError(uri)
        try:
            idx = 1 if band_index is None else int(band_index)
            band = ds.GetRasterBand(idx)
            arr = band.ReadAsArray()
            return GeoRaster(data=arr, profile=self._profile_from_gdal(ds, 1, arr.dtype, band))
        finally:
            ds = None  # cierre explícito

    def _read_all_with_gdal(self, uri: str) -> GeoRaster:
        ds = gdal.Open(str(uri), gdal.GA_ReadOnly)
        if ds is None:
            raise FileNotFoundError(uri)
        try:
            arr = ds.ReadAsArray()
            if arr.ndim == 2:
                arr = arr[np.newaxis, ...]
            return GeoRaster(data=arr, profile=self._profile_from_gdal(ds, ds.RasterCount, arr.dtype, ds.GetRasterBand(1)))
        finally:
            ds = None

    @staticmethod
    def _profile_from_gdal(ds, count: int, dtype, band) -> GeoProfile:
        gt = ds.GetGeoTransform()
        srs_wkt = ds.GetProjection() or None
        nodata = band.GetNoDataValue()
        return GeoProfile(
            count=count,
            dtype=np_to_dtype_str(dtype),
            width=ds.RasterXSize,
            height=ds.RasterYSize,
            transform=(gt[0], gt[1], gt[2], gt[3], gt[4], gt[5]),
            crs=CRSRef.from_wkt(srs_wkt) if srs_wkt else CRSRef(),
            nodata=float(nodata) if nodata is not None and not math.isnan(nodata) else None,
        )

    # --------------- RasterReaderPort ---------------
    def read(self, uri: str, band_index: int | None = None) -> GeoRaster:
        if _HAS_RASTERIO:
            return self._read_with_rasterio(uri, band_index)
        if _HAS_GDAL:
            return self._read_with_gdal(uri, band_index)
        raise RuntimeError("No hay backend para leer rasters (instala rasterio o GDAL)")

    def read_all(self, uri: str) -> GeoRaster:
        if _HAS_RASTERIO:
            return self._read_all_with_rasterio(uri)
        if _HAS_GDAL:
            return self._read_all_with_gdal(uri)
        raise RuntimeError("No hay backend para leer rasters (instala rasterio o GDAL)")

    def profile(self, uri: str) -> GeoProfile:
        if _HAS_RASTERIO:
            return self._profile_with_rasterio(uri)
        if _HAS_GDAL:
            return self._read_all_with_gdal(uri).profile
        raise RuntimeError("No hay backend para leer rasters (instala rasterio o GDAL)")

    def size(self, uri: str) -> Tuple[int, int]:
        p = self.profile(uri)
        return p.width, p.height

    def exists(self, uri: str) -> bool:
        return os.path.exists(uri)
