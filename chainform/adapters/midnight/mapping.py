"""Midnight (Compact / generated TypeScript) type to field kind mapping."""

from __future__ import annotations

import re
from typing import Dict, Optional

from ...observability.logging import get_logger
from ...types import FieldType

logger = get_logger(__name__)

MIDNIGHT_TYPE_TO_FIELD_TYPE: Dict[str, FieldType] = {
    "bigint": FieldType.BIGINT,
    "number": FieldType.NUMBER,
    "boolean": FieldType.CHECKBOX,
    "Boolean": FieldType.CHECKBOX,
    "string": FieldType.TEXT,
    "Uint8Array": FieldType.BYTES,
    "Field": FieldType.BIGINT,
    "ContractAddress": FieldType.ADDRESS,
    "ZswapCoinPublicKey": FieldType.ADDRESS,
    "struct": FieldType.OBJECT,
}

_SUFFIX_ARRAY = re.compile(r"^(?P<element>.+)\[\]$")
_GENERIC_ARRAY = re.compile(r"^(?:Array|ReadonlyArray)<(?P<element>.+)>$")
_VECTOR = re.compile(r"^Vector<\s*\d+\s*,\s*(?P<element>.+)>$")
_UINT = re.compile(r"^Uint<(?P<bits>\d+)(?:\.\.\d+)?>$")
_BYTES = re.compile(r"^Bytes<\d+>$")
_OPAQUE_STRING = re.compile(r"""^Opaque<['"]string['"]>$""")


def parse_midnight_array_type(parameter_type: str) -> Optional[str]:
    native = parameter_type.strip()
    match = _SUFFIX_ARRAY.match(native) or _GENERIC_ARRAY.match(native) or _VECTOR.match(native)
    if not match:
        return None
    element = match.group("element").strip()
    if element.startswith("(") and element.endswith(")"):
        element = element[1:-1].strip()
    if element.startswith("{"):
        return "struct"
    return element


def map_midnight_param_type_to_field_type(parameter_type: str) -> FieldType:
    native = (parameter_type or "").strip()

    element = parse_midnight_array_type(native)
    if element is not None:
        return FieldType.ARRAY_OBJECT if element == "struct" else FieldType.ARRAY

    if native.startswith("{"):
        return FieldType.OBJECT

    mapped = MIDNIGHT_TYPE_TO_FIELD_TYPE.get(native)
    if mapped is not None:
        return mapped

    uint = _UINT.match(native)
    if uint:
        return FieldType.NUMBER if int(uint.group("bits")) <= 32 else FieldType.BIGINT
    if _BYTES.match(native):
        return FieldType.BYTES
    if _OPAQUE_STRING.match(native):
        return FieldType.TEXT

    logger.debug("Unknown Midnight type %r, falling back to text", native)
    return FieldType.TEXT
