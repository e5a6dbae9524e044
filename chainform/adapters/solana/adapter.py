"""Solana (Anchor) program adapter."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

from ...errors import EncodingError
from ...types import ContractSchema, FieldType, FormFieldConfig, FunctionParameter
from ..base import ContractAdapter
from ..values import coerce_json, parse_boolean, parse_integer
from .idl import parse_anchor_idl
from .mapping import (
    SOLANA_TYPE_TO_FIELD_TYPE,
    STRUCT_PREFIX,
    map_solana_param_type_to_field_type,
    parse_solana_array_type,
    unwrap_solana_option,
)

_BASE58_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True)
class SolanaInstructionData:
    """Instruction payload handed to the wallet/client for signing."""

    program_id: str
    instruction: str
    discriminator: str
    args: Dict[str, Any] = field(default_factory=dict)


def instruction_discriminator(name: str) -> bytes:
    """Anchor's 8-byte sighash: ``sha256("global:<snake_name>")[:8]``."""
    snake = _CAMEL_BOUNDARY.sub("_", name).lower()
    return hashlib.sha256(f"global:{snake}".encode("utf-8")).digest()[:8]


class SolanaAdapter(ContractAdapter):
    ecosystem = "solana"
    package_name = "@chainform/adapter-solana"
    class_name = "SolanaAdapter"

    def map_parameter_type_to_field_type(self, parameter_type: str) -> FieldType:
        return map_solana_param_type_to_field_type(parameter_type)

    def parse_array_element_type(self, parameter_type: str) -> Optional[str]:
        return parse_solana_array_type(unwrap_solana_option(parameter_type))

    def is_valid_address(self, address: Any) -> bool:
        return isinstance(address, str) and bool(_BASE58_ADDRESS.match(address))

    def load_contract_schema(self, definition: Any, address: str = "") -> ContractSchema:
        return parse_anchor_idl(definition, address)

    def _parse_value(self, parameter: FunctionParameter, native_type: str, value: Any) -> Any:
        if native_type.startswith("Option<"):
            if value is None or value == "":
                return None
            return self._parse_value(parameter, unwrap_solana_option(native_type), value)

        element = parse_solana_array_type(native_type)
        if element is not None:
            items = coerce_json(value, native_type)
            if not isinstance(items, (list, tuple)):
                raise EncodingError(f"Expected array for {native_type}, got {type(items).__name__}")
            return [self._parse_value(parameter, element, item) for item in items]

        if native_type.startswith(STRUCT_PREFIX):
            data = coerce_json(value, native_type)
            if not isinstance(data, Mapping):
                raise EncodingError(f"Expected object for {native_type}, got {type(data).__name__}")
            parsed: Dict[str, Any] = {}
            for member in parameter.components or []:
                if member.name not in data:
                    raise EncodingError(f"Missing struct member '{member.name}' of {native_type}")
                parsed[member.name] = self._parse_value(member, member.type, data[member.name])
            return parsed

        kind = SOLANA_TYPE_TO_FIELD_TYPE.get(native_type)
        if kind == FieldType.ADDRESS:
            if not self.is_valid_address(value):
                raise EncodingError(f"Invalid Solana public key: {value!r}")
            return value
        if kind == FieldType.CHECKBOX:
            return parse_boolean(value)
        if kind in (FieldType.NUMBER, FieldType.BIGINT) and not native_type.startswith("f"):
            return parse_integer(value, native_type)
        if native_type.startswith("f"):
            try:
                return float(value)
            except (TypeError, ValueError) as exc:
                raise EncodingError(f"Invalid {native_type} value: {value!r}") from exc
        return value

    def format_transaction_data(
        self,
        contract_schema: ContractSchema,
        function_id: str,
        submitted_inputs: Mapping[str, Any],
        fields: Sequence[FormFieldConfig],
    ) -> SolanaInstructionData:
        function = self._require_function(contract_schema, function_id)
        args = {
            parameter.name: self._parse_value(parameter, parameter.type, value)
            for parameter, value in self._resolve_argument_values(function, submitted_inputs, fields)
        }
        return SolanaInstructionData(
            program_id=contract_schema.address,
            instruction=function.name,
            discriminator=instruction_discriminator(function.name).hex(),
            args=args,
        )


ADAPTER_CLASS = SolanaAdapter
