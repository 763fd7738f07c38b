# src/rasterreclass/logging_config.py
from __future__ import annotations

"""
Configuración centralizada de logging (stdlib). La llama el CLI una vez;
los módulos sólo hacen `logging.getLogger(__name__)`.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "rasterreclass"


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """Configura el logger raíz del paquete (consola + archivo opcional).

    Idempotente: si ya tiene handlers sólo ajusta el nivel.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Nivel de log inválido: {level}")
    logger.setLevel(numeric_level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    logger.debug("logging inicializado en nivel %s", level)
    return logger


__all__ = ["setup_logging", "LOG_FORMAT", "ROOT_LOGGER"]
