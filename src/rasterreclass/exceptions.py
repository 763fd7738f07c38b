# src/rasterreclass/exceptions.py
from __future__ import annotations


class RasterReclassError(Exception):
    """Error base del paquete."""


class InvalidRangeSpecError(RasterReclassError, ValueError):
    """Especificación de rangos mal formada o no representable.

    `argument` identifica el token/descriptor culpable (si se conoce).
    """

    def __init__(self, message: str, *, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


__all__ = ["RasterReclassError", "InvalidRangeSpecError"]
