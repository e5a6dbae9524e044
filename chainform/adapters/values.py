"""Strict scalar parsers used when encoding submitted values.

Unlike field transforms these raise :class:`EncodingError` on bad input.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ..errors import EncodingError

_HEX_INT = re.compile(r"^-?0[xX][0-9a-fA-F]+$")
_DEC_INT = re.compile(r"^-?\d+$")


def coerce_json(value: Any, type_name: str) -> Any:
    """Decode ``value`` if it is JSON text, otherwise return it unchanged."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise EncodingError(f"Expected JSON for {type_name}, got {value!r}") from exc


def parse_integer(value: Any, type_name: str) -> int:
    if isinstance(value, bool):
        raise EncodingError(f"Expected integer for {type_name}, got boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if _HEX_INT.match(text):
            return int(text, 16)
        if _DEC_INT.match(text):
            return int(text, 10)
    raise EncodingError(f"Invalid {type_name} value: {value!r}")


def parse_boolean(value: Any, type_name: str = "bool") -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise EncodingError(f"Invalid {type_name} value: {value!r}")
