# src/rasterreclass/cli.py
from __future__ import annotations

"""
CLI de reclasificación de rasters (contracts-first, minimal).

Comandos:
  - reclass: reclasifica una banda por intervalos y escribe un GeoTIFF.
  - ranges: muestra la tabla parseada, el tipo de pixel y el NoData.

Ejemplos rápidos:
  python -m rasterreclass.cli reclass \
      -i ./aspect.tif -r "0 30 1; 30 270 2; 270 365 3" -o ./aspect_cls.tif --report ./aspect_cls.csv

  python -m rasterreclass.cli ranges -r "0 100 1; 50 150 2"
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings, get_settings
from .composition.di import build_service, build_spec, load_settings_from_yaml
from .logging_config import setup_logging
from .services.pixel_type import select_output
from .services.range_parser import parse_ranges

logger = logging.getLogger(__name__)


def _resolve_settings(args: argparse.Namespace) -> Settings:
    s = load_settings_from_yaml(Path(args.config)) if args.config else get_settings()
    if args.log_level:
        s = s.model_copy(update={"log_level": args.log_level.upper()})
    return s


# ----------------------
# Comandos
# ----------------------

def cmd_reclass(args: argparse.Namespace, s: Settings) -> int:
    out_tif = Path(args.out)
    out_report = Path(args.report) if args.report else None
    svc = build_service(s, with_report=out_report is not None)
    spec = build_spec(
        s,
        band=args.band,
        input_nodata=args.nodata,
        out_tif=out_tif,
        out_report=out_report,
    )
    res = svc.run(args.input, args.ranges, spec)
    st = res.stats
    logger.info(
        "tipo=%s nodata=%r min=%s max=%s celdas=%d",
        res.pixel_type.value, res.nodata, st.minimum, st.maximum, st.count,
    )
    print(str(res.out_tif))
    if res.out_report is not None:
        print(str(res.out_report))
    return 0


def cmd_ranges(args: argparse.Namespace, s: Settings) -> int:
    table = parse_ranges(args.ranges)
    pixel_type, nodata = select_output(table)
    for r in table:
        print(str(r))
    print(f"pixel_type={pixel_type.value} nodata={nodata!r}")
    return 0


# ----------------------
# Parser
# ----------------------

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rasterreclass", description="Reclasificación de rasters por intervalos")
    p.add_argument("--config", help="YAML de Settings (si no, variables RECLASS_* / .env)")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    sub = p.add_subparsers(dest="cmd", required=True)

    # reclass
    pr = sub.add_parser("reclass", help="reclasifica una banda y escribe GeoTIFF")
    pr.add_argument("-i", "--input", required=True, help="raster de entrada")
    pr.add_argument("-r", "--ranges", required=True, help='rangos "min max clase; min clase; ..."')
    pr.add_argument("-o", "--out", required=True, help="GeoTIFF de salida")
    pr.add_argument("--band", type=int, default=None, help="banda 1-based (default: Settings.default_band)")
    pr.add_argument("--nodata", type=float, default=None, help="NoData de entrada (si no, el del raster)")
    pr.add_argument("--report", help="CSV con conteos por clase (opcional)")
    pr.set_defaults(func=cmd_reclass)

    # ranges
    pg = sub.add_parser("ranges", help="valida y muestra una especificación de rangos")
    pg.add_argument("-r", "--ranges", required=True, help="especificación de rangos")
    pg.set_defaults(func=cmd_ranges)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        s = _resolve_settings(args)
        setup_logging(s.log_level, s.log_file)
        return int(args.func(args, s))
    except KeyboardInterrupt:
        return 130
    except Exception as ex:
        logger.debug("fallo en comando %s", args.cmd, exc_info=True)
        print(f"[ERROR] {ex}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
