"""ABI value parsing and call data encoding."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import decode_hex, function_signature_to_4byte_selector, is_address, to_checksum_address

from ...errors import EncodingError
from ...types import ContractFunction, FunctionParameter
from ..values import coerce_json, parse_boolean, parse_integer
from .abi import canonical_type, function_signature
from .mapping import evm_array_size, parse_evm_array_type

_INT_TYPE = re.compile(r"^u?int\d*$")


@dataclass(frozen=True)
class EvmTransactionData:
    """Native payload for an EVM contract call."""

    address: str
    function_name: str
    args: List[Any] = field(default_factory=list)
    data: str = "0x"


def _parse_bytes(abi_type: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return decode_hex(value)
        except ValueError as exc:
            raise EncodingError(f"Invalid hex for {abi_type}: {value!r}") from exc
    raise EncodingError(f"Invalid {abi_type} value: {value!r}")


def _parse_tuple(abi_type: str, value: Any, members: Sequence[FunctionParameter]) -> tuple:
    data = coerce_json(value, abi_type)
    if isinstance(data, Mapping):
        missing = [member.name for member in members if member.name not in data]
        if missing:
            raise EncodingError(f"Missing tuple member(s): {', '.join(missing)}")
        ordered = [data[member.name] for member in members]
    elif isinstance(data, (list, tuple)):
        if len(data) != len(members):
            raise EncodingError(f"Tuple expects {len(members)} member(s), got {len(data)}")
        ordered = list(data)
    else:
        raise EncodingError(f"Expected object for tuple, got {type(data).__name__}")
    return tuple(parse_evm_value(member.type, item, member.components) for member, item in zip(members, ordered))


def parse_evm_value(abi_type: str, value: Any, components: Optional[Sequence[FunctionParameter]] = None) -> Any:
    """Convert a submitted value into the Python value eth_abi expects for ``abi_type``."""
    element_type = parse_evm_array_type(abi_type)
    if element_type is not None:
        items = coerce_json(value, abi_type)
        if not isinstance(items, (list, tuple)):
            raise EncodingError(f"Expected array for {abi_type}, got {type(items).__name__}")
        size = evm_array_size(abi_type)
        if size is not None and len(items) != size:
            raise EncodingError(f"{abi_type} expects {size} element(s), got {len(items)}")
        return [parse_evm_value(element_type, item, components) for item in items]

    if abi_type.startswith("tuple"):
        return _parse_tuple(abi_type, value, list(components or []))
    if abi_type == "address":
        if not isinstance(value, str) or not is_address(value):
            raise EncodingError(f"Invalid address: {value!r}")
        return to_checksum_address(value)
    if abi_type == "bool":
        return parse_boolean(value)
    if _INT_TYPE.match(abi_type):
        return parse_integer(value, abi_type)
    if abi_type.startswith("bytes"):
        return _parse_bytes(abi_type, value)
    if abi_type == "string":
        if value is None:
            raise EncodingError("Invalid string value: None")
        return str(value)
    return value


def encode_function_call(function: ContractFunction, args: Sequence[Any]) -> str:
    """Selector plus ABI-encoded arguments as a ``0x`` hex string."""
    types = [canonical_type(parameter) for parameter in function.inputs]
    selector = function_signature_to_4byte_selector(function_signature(function))
    try:
        encoded = encode(types, list(args))
    except (AbiEncodingError, TypeError, ValueError, OverflowError) as exc:
        raise EncodingError(
            f"Could not encode arguments for {function.name}: {exc}",
            context={"function_id": function.id, "types": types},
        ) from exc
    return "0x" + (selector + encoded).hex()
