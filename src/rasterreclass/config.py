# src/rasterreclass/config.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .contracts.reclass import DOUBLE_COMPARE_TOLERANCE

_COMPRESSIONS = ("NONE", "DEFLATE", "LZW", "ZSTD", "PACKBITS")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Config unificada del proyecto. No toca disco.
    Debe ser construida y provista por composition/di.py (CLI/adapters).
    Variables de entorno con prefijo RECLASS_ (p.ej. RECLASS_TOLERANCE).
    """
    model_config = SettingsConfigDict(
        frozen=True,
        env_file=".env",
        env_prefix="RECLASS_",
        extra="forbid",
    )

    # --- motor ---
    tolerance: float = DOUBLE_COMPARE_TOLERANCE
    default_band: int = 1  # 1-based (convención GDAL/rasterio)

    # --- salida ---
    compress: str = "DEFLATE"
    tiled: bool = True
    write_report: bool = False

    # --- logging ---
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # ----------------------------
    # Normalizadores / validadores
    # ----------------------------
    @field_validator("tolerance")
    @classmethod
    def _small_positive(cls, v: float) -> float:
        if not 0.0 < v < 1e-3:
            raise ValueError(f"tolerance debe estar en (0, 1e-3): {v}")
        return v

    @field_validator("default_band")
    @classmethod
    def _one_based(cls, v: int) -> int:
        if v < 1:
            raise ValueError("default_band es 1-based (>= 1)")
        return v

    @field_validator("compress", mode="before")
    @classmethod
    def _known_compress(cls, v: str) -> str:
        v2 = str(v).strip().upper()
        if v2 not in _COMPRESSIONS:
            raise ValueError(f"compress inválido: {v} (usa {', '.join(_COMPRESSIONS)})")
        return v2

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v2 = str(v).strip().upper()
        if v2 not in _LOG_LEVELS:
            raise ValueError(f"log_level inválido: {v}")
        return v2


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Instancia cacheada. Úsala SOLO desde composition/di.py o CLI.
    Prohibido usarla en services/ (dominio). Para tests, recuerda limpiar:
        get_settings.cache_clear()
    """
    return Settings()
