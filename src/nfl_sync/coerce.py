from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable, Dict, Optional

NA_SENTINELS = ("", "NA")


class ColumnKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOLEAN = "boolean"


def _clean(raw: Any) -> Optional[str]:
    """Return the trimmed string form of ``raw`` or None for absent values."""
    if raw is None:
        return None
    value = raw.strip() if isinstance(raw, str) else str(raw).strip()
    if value in NA_SENTINELS:
        return None
    return value


def as_integer(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    value = _clean(raw)
    # Python accepts "1_000"; the feeds never mean that
    if value is None or "_" in value:
        return None
    try:
        return int(value, 10)
    except ValueError:
        pass
    # integral decimals such as "40.0"
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def as_float(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    value = _clean(raw)
    if value is None or "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def as_text(raw: Any) -> Optional[str]:
    return _clean(raw)


def as_boolean(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    value = _clean(raw)
    if value is None:
        return None
    return value in ("1", "true")


COERCERS: Dict[ColumnKind, Callable[[Any], Any]] = {
    ColumnKind.INTEGER: as_integer,
    ColumnKind.FLOAT: as_float,
    ColumnKind.TEXT: as_text,
    ColumnKind.BOOLEAN: as_boolean,
}


def coerce(kind: ColumnKind, raw: Any) -> Any:
    return COERCERS[kind](raw)
