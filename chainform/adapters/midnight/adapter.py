"""Midnight contract adapter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from ...errors import EncodingError
from ...types import ContractSchema, FieldType, FormFieldConfig, FunctionParameter
from ..base import ContractAdapter
from ..values import coerce_json, parse_boolean, parse_integer
from .artifacts import MidnightContractArtifacts, parse_midnight_artifacts
from .mapping import map_midnight_param_type_to_field_type, parse_midnight_array_type

# Hex contract address or a bech32-style ``<hrp>1<data>`` string.
_MIDNIGHT_ADDRESS = re.compile(r"^(?:(?:0x)?[0-9a-fA-F]{64,70}|[a-z]+1[0-9a-z]{20,})$")


@dataclass(frozen=True)
class MidnightCircuitCall:
    contract_address: str
    circuit: str
    private_state_id: Optional[str] = None
    args: List[Any] = field(default_factory=list)


class MidnightAdapter(ContractAdapter):
    ecosystem = "midnight"
    package_name = "@chainform/adapter-midnight"
    class_name = "MidnightAdapter"

    def __init__(self, network_config: Any = None):
        super().__init__(network_config)
        self.artifacts: Optional[MidnightContractArtifacts] = None

    def map_parameter_type_to_field_type(self, parameter_type: str) -> FieldType:
        return map_midnight_param_type_to_field_type(parameter_type)

    def parse_array_element_type(self, parameter_type: str) -> Optional[str]:
        return parse_midnight_array_type(parameter_type)

    def is_valid_address(self, address: Any) -> bool:
        return isinstance(address, str) and bool(_MIDNIGHT_ADDRESS.match(address))

    def load_contract_schema(self, definition: Any, address: str = "") -> ContractSchema:
        self.artifacts, schema = parse_midnight_artifacts(definition, address)
        return schema

    def _parse_value(self, parameter: FunctionParameter, native_type: str, value: Any) -> Any:
        element = parse_midnight_array_type(native_type)
        if element is not None:
            items = coerce_json(value, native_type)
            if not isinstance(items, (list, tuple)):
                raise EncodingError(f"Expected array for {native_type}, got {type(items).__name__}")
            return [self._parse_value(parameter, element, item) for item in items]

        kind = map_midnight_param_type_to_field_type(native_type)
        if kind == FieldType.OBJECT:
            data = coerce_json(value, native_type)
            if not isinstance(data, Mapping):
                raise EncodingError(f"Expected object for {parameter.name}, got {type(data).__name__}")
            return {
                member.name: self._parse_value(member, member.type, data.get(member.name))
                for member in parameter.components or []
            }
        if kind == FieldType.CHECKBOX:
            return parse_boolean(value, native_type)
        if kind in (FieldType.NUMBER, FieldType.BIGINT):
            return parse_integer(value, native_type)
        if kind == FieldType.BYTES and isinstance(value, str):
            try:
                return bytes.fromhex(value[2:] if value.startswith("0x") else value)
            except ValueError as exc:
                raise EncodingError(f"Invalid hex for {native_type}: {value!r}") from exc
        return value

    def format_transaction_data(
        self,
        contract_schema: ContractSchema,
        function_id: str,
        submitted_inputs: Mapping[str, Any],
        fields: Sequence[FormFieldConfig],
    ) -> MidnightCircuitCall:
        function = self._require_function(contract_schema, function_id)
        return MidnightCircuitCall(
            contract_address=contract_schema.address,
            circuit=function.name,
            private_state_id=self.artifacts.private_state_id if self.artifacts else None,
            args=[
                self._parse_value(parameter, parameter.type, value)
                for parameter, value in self._resolve_argument_values(function, submitted_inputs, fields)
            ],
        )


ADAPTER_CLASS = MidnightAdapter
