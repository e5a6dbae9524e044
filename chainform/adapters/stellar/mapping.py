"""Stellar (Soroban) type to field kind mapping."""

from __future__ import annotations

import re
from typing import Dict, Optional

from ...observability.logging import get_logger
from ...types import FieldType

logger = get_logger(__name__)

# Keys are lower-cased; Soroban spec names are matched case-insensitively.
STELLAR_TYPE_TO_FIELD_TYPE: Dict[str, FieldType] = {
    "address": FieldType.ADDRESS,
    "muxedaddress": FieldType.ADDRESS,
    "bool": FieldType.CHECKBOX,
    "symbol": FieldType.TEXT,
    "string": FieldType.TEXT,
    "bytes": FieldType.BYTES,
    "u32": FieldType.NUMBER,
    "i32": FieldType.NUMBER,
    "u64": FieldType.BIGINT,
    "i64": FieldType.BIGINT,
    "u128": FieldType.BIGINT,
    "i128": FieldType.BIGINT,
    "u256": FieldType.BIGINT,
    "i256": FieldType.BIGINT,
    "timepoint": FieldType.BIGINT,
    "duration": FieldType.BIGINT,
}

UDT_PREFIX = "udt:"

_VEC = re.compile(r"^Vec<(?P<element>.+)>$", re.IGNORECASE)
_OPTION = re.compile(r"^Option<(?P<inner>.+)>$", re.IGNORECASE)
_BYTES_N = re.compile(r"^BytesN<\d+>$", re.IGNORECASE)
_JSON_TYPES = re.compile(r"^(Map|Tuple|Result)<.+>$", re.IGNORECASE)


def parse_stellar_array_type(parameter_type: str) -> Optional[str]:
    match = _VEC.match(parameter_type.strip())
    return match.group("element").strip() if match else None


def unwrap_stellar_option(parameter_type: str) -> str:
    match = _OPTION.match(parameter_type.strip())
    return match.group("inner").strip() if match else parameter_type.strip()


def map_stellar_param_type_to_field_type(parameter_type: str) -> FieldType:
    native = unwrap_stellar_option(parameter_type or "")

    element = parse_stellar_array_type(native)
    if element is not None:
        if unwrap_stellar_option(element).lower().startswith(UDT_PREFIX):
            return FieldType.ARRAY_OBJECT
        return FieldType.ARRAY

    if native.lower().startswith(UDT_PREFIX):
        return FieldType.OBJECT
    if _BYTES_N.match(native):
        return FieldType.BYTES
    if _JSON_TYPES.match(native):
        return FieldType.TEXTAREA

    mapped = STELLAR_TYPE_TO_FIELD_TYPE.get(native.lower())
    if mapped is not None:
        return mapped

    logger.debug("Unknown Stellar type %r, falling back to text", native)
    return FieldType.TEXT
