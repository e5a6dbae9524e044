"""EVM (Solidity ABI) type to field kind mapping."""

from __future__ import annotations

import re
from typing import Dict, Optional

from ...observability.logging import get_logger
from ...types import FieldType

logger = get_logger(__name__)

# ``uint``/``int`` are aliases of the 256-bit types.
EVM_TYPE_TO_FIELD_TYPE: Dict[str, FieldType] = {
    "address": FieldType.ADDRESS,
    "string": FieldType.TEXT,
    "bool": FieldType.CHECKBOX,
    "bytes": FieldType.TEXTAREA,
    "bytes32": FieldType.TEXT,
    "uint": FieldType.BIGINT,
    "int": FieldType.BIGINT,
    "uint8": FieldType.NUMBER,
    "uint16": FieldType.NUMBER,
    "uint32": FieldType.NUMBER,
    "uint64": FieldType.BIGINT,
    "uint128": FieldType.BIGINT,
    "uint256": FieldType.BIGINT,
    "int8": FieldType.NUMBER,
    "int16": FieldType.NUMBER,
    "int32": FieldType.NUMBER,
    "int64": FieldType.BIGINT,
    "int128": FieldType.BIGINT,
    "int256": FieldType.BIGINT,
}

_ARRAY_TYPE = re.compile(r"^(?P<element>.+)\[(?P<size>\d*)\]$")
_SIZED_INT = re.compile(r"^u?int(?P<bits>\d+)$")
_FIXED_BYTES = re.compile(r"^bytes(?P<size>\d+)$")

# Widths above this no longer fit a JavaScript number exactly.
_MAX_NUMBER_BITS = 32


def parse_evm_array_type(parameter_type: str) -> Optional[str]:
    """``uint256[3][]`` -> ``uint256[3]``; ``None`` for non-array types."""
    match = _ARRAY_TYPE.match(parameter_type.strip())
    return match.group("element") if match else None


def evm_array_size(parameter_type: str) -> Optional[int]:
    """Fixed length of the outermost dimension, ``None`` when dynamic or not an array."""
    match = _ARRAY_TYPE.match(parameter_type.strip())
    if not match or not match.group("size"):
        return None
    return int(match.group("size"))


def map_evm_param_type_to_field_type(parameter_type: str) -> FieldType:
    native = (parameter_type or "").strip()

    element = parse_evm_array_type(native)
    if element is not None:
        if element.startswith("tuple"):
            return FieldType.ARRAY_OBJECT
        return FieldType.ARRAY

    if native.startswith("tuple"):
        return FieldType.OBJECT

    mapped = EVM_TYPE_TO_FIELD_TYPE.get(native)
    if mapped is not None:
        return mapped

    sized = _SIZED_INT.match(native)
    if sized:
        return FieldType.NUMBER if int(sized.group("bits")) <= _MAX_NUMBER_BITS else FieldType.BIGINT

    if _FIXED_BYTES.match(native):
        return FieldType.TEXT

    logger.debug("Unknown EVM type %r, falling back to text", native)
    return FieldType.TEXT
