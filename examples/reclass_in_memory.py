# =============================
# FILE: examples/reclass_in_memory.py
# =============================
"""
Uso mínimo: ReclassService sin disco sobre una banda sintética de aspecto (0..360).
"""
import numpy as np

from rasterreclass.contracts.geo import CRSRef, GeoProfile, GeoRaster
from rasterreclass.services.reclass_service import ReclassService, ReclassSpec


if __name__ == "__main__":
    aspect = np.linspace(0.0, 360.0, 24, dtype=np.float32).reshape(4, 6)
    prof = GeoProfile(count=1, dtype="float32", width=6, height=4,
                      transform=(0.0, 10.0, 0.0, 0.0, 0.0, -10.0),
                      crs=CRSRef.from_epsg(32719), nodata=-9999.0)
    res = ReclassService().run_raster(GeoRaster(aspect, prof), "0 30 1; 30 270 2; 270 365 3", ReclassSpec())

    print("tipo:", res.pixel_type.value, "nodata:", res.nodata)
    print("min/max:", res.stats.minimum, res.stats.maximum)
    for k, v in res.counts.items():
        print(f" - clase {k:g}: {v} celdas")
    print(res.raster.data)
