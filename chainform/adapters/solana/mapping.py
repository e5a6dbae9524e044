"""Solana (Anchor IDL) type to field kind mapping.

IDL type objects are flattened to strings when loaded: ``{"vec": "u8"}`` becomes
``Vec<u8>``, ``{"array": ["u8", 32]}`` becomes ``[u8; 32]``, ``{"option": T}``
becomes ``Option<T>`` and ``{"defined": "Name"}`` becomes ``defined:Name``.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from ...observability.logging import get_logger
from ...types import FieldType

logger = get_logger(__name__)

SOLANA_TYPE_TO_FIELD_TYPE: Dict[str, FieldType] = {
    "publicKey": FieldType.ADDRESS,
    "pubkey": FieldType.ADDRESS,
    "string": FieldType.TEXT,
    "bool": FieldType.CHECKBOX,
    "bytes": FieldType.TEXTAREA,
    "u8": FieldType.NUMBER,
    "u16": FieldType.NUMBER,
    "u32": FieldType.NUMBER,
    "i8": FieldType.NUMBER,
    "i16": FieldType.NUMBER,
    "i32": FieldType.NUMBER,
    "f32": FieldType.NUMBER,
    "f64": FieldType.NUMBER,
    "u64": FieldType.BIGINT,
    "u128": FieldType.BIGINT,
    "u256": FieldType.BIGINT,
    "i64": FieldType.BIGINT,
    "i128": FieldType.BIGINT,
    "i256": FieldType.BIGINT,
}

STRUCT_PREFIX = "defined:"
ENUM_PREFIX = "enum:"

_VEC = re.compile(r"^Vec<(?P<element>.+)>$")
_ARRAY = re.compile(r"^\[(?P<element>.+);\s*(?P<size>\d+)\]$")
_OPTION = re.compile(r"^Option<(?P<inner>.+)>$")


def parse_solana_array_type(parameter_type: str) -> Optional[str]:
    native = parameter_type.strip()
    match = _VEC.match(native) or _ARRAY.match(native)
    return match.group("element").strip() if match else None


def unwrap_solana_option(parameter_type: str) -> str:
    match = _OPTION.match(parameter_type.strip())
    return match.group("inner").strip() if match else parameter_type.strip()


def map_solana_param_type_to_field_type(parameter_type: str) -> FieldType:
    native = unwrap_solana_option(parameter_type or "")

    element = parse_solana_array_type(native)
    if element is not None:
        if unwrap_solana_option(element).startswith(STRUCT_PREFIX):
            return FieldType.ARRAY_OBJECT
        return FieldType.ARRAY

    if native.startswith(STRUCT_PREFIX):
        return FieldType.OBJECT

    mapped = SOLANA_TYPE_TO_FIELD_TYPE.get(native)
    if mapped is not None:
        return mapped

    if not native.startswith(ENUM_PREFIX):
        logger.debug("Unknown Solana type %r, falling back to text", native)
    return FieldType.TEXT
