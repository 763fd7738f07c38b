# src/rasterreclass/services/range_parser.py
from __future__ import annotations

"""
Parser de la especificación de rangos.

Gramática: descriptores separados por ';'. Cada descriptor (espacios
colapsados y recortados) se parte en tokens:
  - "min max clase"  -> límites explícitos
  - "min clase"      -> maximum = máximo representable
  - otra cantidad    -> se ignora en silencio

Ejemplo: "0.00 30.00 1; 30.00 270.00 2; 270.00 365.00 3"
"""

import logging
import math
import re
from typing import List, Optional

from pydantic import ValidationError

from ..contracts.reclass import ClassificationRule, RangeTable, MAX_BOUND
from ..exceptions import InvalidRangeSpecError

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


def _to_number(token: str, descriptor: str) -> float:
    try:
        v = float(token)
    except ValueError as e:
        raise InvalidRangeSpecError(
            f"Argumento inválido en ranges: '{token}' (descriptor '{descriptor}')",
            argument=token,
        ) from e
    if not math.isfinite(v):
        raise InvalidRangeSpecError(
            f"Argumento no finito en ranges: '{token}' (descriptor '{descriptor}')",
            argument=token,
        )
    return v


def _parse_descriptor(raw: str) -> Optional[ClassificationRule]:
    descriptor = _WS_RE.sub(" ", raw).strip()
    tokens = descriptor.split(" ") if descriptor else []
    if len(tokens) == 3:
        lo, hi, key = (_to_number(t, descriptor) for t in tokens)
    elif len(tokens) == 2:
        lo, key = (_to_number(t, descriptor) for t in tokens)
        hi = MAX_BOUND
    else:
        if descriptor:
            logger.debug("descriptor ignorado (%d tokens): '%s'", len(tokens), descriptor)
        return None
    try:
        return ClassificationRule(class_value=key, minimum=lo, maximum=hi)
    except ValidationError as e:
        raise InvalidRangeSpecError(
            f"Descriptor inválido en ranges: '{descriptor}' ({e.errors()[0]['msg']})",
            argument=descriptor,
        ) from e


def parse_ranges(spec: str) -> RangeTable:
    """Convierte la especificación textual en una `RangeTable`.

    Lanza `InvalidRangeSpecError` si algún token no es numérico o si la
    especificación no produce ninguna regla. Nunca devuelve tablas parciales.
    """
    if spec is None or not str(spec).strip():
        raise InvalidRangeSpecError("ranges vacío", argument="ranges")

    rules: List[ClassificationRule] = []
    seen: dict[float, ClassificationRule] = {}
    for raw in str(spec).split(";"):
        rule = _parse_descriptor(raw)
        if rule is None:
            continue
        prev = seen.get(rule.class_value)
        if prev is not None:
            # TODO: confirmar con los dueños del formato si el reemplazo es intencional
            logger.warning("class_value %g repetido: '%s' reemplaza a '%s'", rule.class_value, rule, prev)
        seen[rule.class_value] = rule
        rules.append(rule)

    if not rules:
        raise InvalidRangeSpecError(f"ranges sin reglas válidas: '{spec}'", argument="ranges")
    table = RangeTable.from_rules(rules)
    logger.debug("RangeTable con %d reglas: %s", len(table), [str(r) for r in table])
    return table


def format_ranges(table: RangeTable) -> str:
    """Representación canónica (forma de 2 tokens si maximum es el por defecto)."""
    parts = []
    for r in table:
        if r.open_ended:
            parts.append(f"{r.minimum!r} {r.class_value!r}")
        else:
            parts.append(f"{r.minimum!r} {r.maximum!r} {r.class_value!r}")
    return "; ".join(parts)


__all__ = ["parse_ranges", "format_ranges"]
