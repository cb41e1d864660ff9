"""Never-raising value coercion used by the provider decoders and normalizers.

Provider payloads carry numbers as ints, floats, numeric strings, empty
strings or placeholders such as "-" and "--". These helpers collapse all of
that into plain Python values with a documented default.
"""

from __future__ import annotations

import math
import re
from typing import Any

_leading_int_re = re.compile(r"^[+-]?[0-9]+")


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        f = float(value)
    elif isinstance(value, str):
        v = value.strip().rstrip("%")
        if not v:
            return None
        try:
            f = float(v)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(f) or math.isinf(f):
        return None
    return f


def optional_int(value: Any) -> int | None:
    """Parse an integer; None when absent or not numeric.

    Strings are read like parseInt: "12abc" -> 12, "7.9" -> 7.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        m = _leading_int_re.match(value.strip())
        if m is None:
            return None
        try:
            return int(m.group(0))
        except ValueError:
            # Past the interpreter's int-string digit limit.
            return None
    return None


def parse_int(value: Any, default: int = 0) -> int:
    """Non-negative integer with a default for anything unusable."""
    parsed = optional_int(value)
    if parsed is None or parsed < 0:
        return default
    return parsed


def optional_float(value: Any) -> float | None:
    return _to_float(value)


def parse_float(value: Any, default: float = 0.0) -> float:
    parsed = _to_float(value)
    return default if parsed is None else parsed


def optional_str(value: Any) -> str | None:
    if isinstance(value, str):
        v = value.strip()
        return v or None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def dict_items(value: Any) -> list[dict[str, Any]]:
    return [v for v in as_list(value) if isinstance(v, dict)]
