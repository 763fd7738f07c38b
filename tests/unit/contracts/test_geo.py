import numpy as np
import pytest
from rasterreclass.contracts.geo import GeoProfile, CRSRef, GeoRaster, np_to_dtype_str

def test_georaster_immutable_buffer():
    p = GeoProfile(count=1, dtype="int16", width=4, height=3,
                   transform=(0,10,0,0,0,-10), crs=CRSRef.from_epsg(32719))
    r = GeoRaster(np.zeros((3,4), dtype=np.int16), p)
    assert r.shape == (3, 4)
    with pytest.raises((ValueError, RuntimeError)):
        r.data[...] = 1

def test_single_band_keeps_georef():
    p = GeoProfile(3, "float32", 4, 3, (100.0, 10, 0, 200.0, 0, -10), CRSRef.from_epsg(32719), nodata=-9999.0)
    q = p.single_band("int16", -32768.0)
    assert (q.count, q.dtype, q.nodata) == (1, "int16", -32768.0)
    assert q.transform == p.transform
    assert q.crs.equals(p.crs)
    assert q.bounds.minx == 100.0 and q.bounds.maxy == 200.0

def test_crs_equals():
    assert CRSRef.from_epsg(4326).equals(CRSRef.from_epsg(4326))
    assert CRSRef.from_wkt('GEOGCS[ "WGS 84" ]').equals(CRSRef.from_wkt('geogcs["WGS 84"]'))
    assert not CRSRef.from_epsg(4326).equals(CRSRef.from_wkt("GEOGCS[]"))
    assert CRSRef().equals(CRSRef())

def test_dtype_str():
    assert np_to_dtype_str(np.float32) == "float32"
    with pytest.raises(ValueError):
        np_to_dtype_str(np.complex64)
