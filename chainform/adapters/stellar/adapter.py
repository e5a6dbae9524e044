"""Stellar (Soroban) contract adapter."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from ...errors import ContractDefinitionError, EncodingError
from ...observability.logging import get_logger
from ...types import ContractFunction, ContractSchema, FieldType, FormFieldConfig, FunctionParameter
from ..base import ContractAdapter, humanize_name, load_definition
from ..values import coerce_json, parse_boolean, parse_integer
from .mapping import (
    STELLAR_TYPE_TO_FIELD_TYPE,
    UDT_PREFIX,
    map_stellar_param_type_to_field_type,
    parse_stellar_array_type,
    unwrap_stellar_option,
)

logger = get_logger(__name__)

# G... accounts and C... contracts, StrKey base32.
_STRKEY_ADDRESS = re.compile(r"^[GC][A-Z2-7]{55}$")


@dataclass(frozen=True)
class StellarInvocationData:
    """``invokeHostFunction`` arguments for a Soroban contract call."""

    contract_id: str
    function_name: str
    args: List[Any] = field(default_factory=list)
    arg_types: List[str] = field(default_factory=list)


def _parse_parameter(raw: Any, index: int) -> FunctionParameter:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("type"), str):
        raise ContractDefinitionError(f"Malformed Stellar spec input at position {index}: {raw!r}")
    components = raw.get("components")
    return FunctionParameter(
        name=raw.get("name") or f"arg{index}",
        type=raw["type"],
        description=raw.get("doc") or None,
        components=[_parse_parameter(item, i) for i, item in enumerate(components)] if components else None,
    )


def _parse_output(raw: Any, index: int) -> FunctionParameter:
    if isinstance(raw, str):
        return FunctionParameter(name=f"result{index}", type=raw)
    return _parse_parameter(raw, index)


def parse_stellar_spec(definition: Any, address: str = "") -> ContractSchema:
    """Accept ``[{name, inputs, outputs, readonly}]`` or ``{"name", "functions": [...]}``."""
    document = load_definition(definition)
    contract_name = "Contract"
    if isinstance(document, Mapping):
        contract_name = document.get("name") or contract_name
        address = address or document.get("contractId") or ""
        document = document.get("functions")
    if not isinstance(document, list):
        raise ContractDefinitionError("Stellar contract spec must be a list of function entries")

    functions: List[ContractFunction] = []
    for entry in document:
        if not isinstance(entry, Mapping) or not entry.get("name"):
            raise ContractDefinitionError(f"Malformed Stellar spec entry: {entry!r}")
        name = str(entry["name"])
        readonly = bool(entry.get("readonly", False))
        functions.append(
            ContractFunction(
                id=name,
                name=name,
                display_name=humanize_name(name),
                description=entry.get("doc") or "",
                inputs=[_parse_parameter(item, i) for i, item in enumerate(entry.get("inputs") or [])],
                outputs=[_parse_output(item, i) for i, item in enumerate(entry.get("outputs") or [])],
                state_mutability="view" if readonly else None,
                modifies_state=not readonly,
            )
        )
    try:
        return ContractSchema(ecosystem="stellar", name=contract_name, address=address, functions=functions)
    except ValidationError as exc:
        raise ContractDefinitionError(f"Invalid Stellar spec: {exc.errors(include_url=False)[0]['msg']}") from exc


class StellarAdapter(ContractAdapter):
    ecosystem = "stellar"
    package_name = "@chainform/adapter-stellar"
    class_name = "StellarAdapter"

    def map_parameter_type_to_field_type(self, parameter_type: str) -> FieldType:
        return map_stellar_param_type_to_field_type(parameter_type)

    def parse_array_element_type(self, parameter_type: str) -> Optional[str]:
        return parse_stellar_array_type(unwrap_stellar_option(parameter_type))

    def is_valid_address(self, address: Any) -> bool:
        return isinstance(address, str) and bool(_STRKEY_ADDRESS.match(address))

    def load_contract_schema(self, definition: Any, address: str = "") -> ContractSchema:
        return parse_stellar_spec(definition, address)

    def _parse_value(self, parameter: FunctionParameter, native_type: str, value: Any) -> Any:
        inner = unwrap_stellar_option(native_type)
        if inner != native_type.strip():
            if value is None or value == "":
                return None
            return self._parse_value(parameter, inner, value)

        element = parse_stellar_array_type(native_type)
        if element is not None:
            items = coerce_json(value, native_type)
            if not isinstance(items, (list, tuple)):
                raise EncodingError(f"Expected array for {native_type}, got {type(items).__name__}")
            return [self._parse_value(parameter, element, item) for item in items]

        if native_type.lower().startswith(UDT_PREFIX):
            data = coerce_json(value, native_type)
            if not isinstance(data, Mapping):
                raise EncodingError(f"Expected object for {native_type}, got {type(data).__name__}")
            return {
                member.name: self._parse_value(member, member.type, data.get(member.name))
                for member in parameter.components or []
            }

        kind = STELLAR_TYPE_TO_FIELD_TYPE.get(native_type.lower())
        if kind == FieldType.ADDRESS:
            if not self.is_valid_address(value):
                raise EncodingError(f"Invalid Stellar address: {value!r}")
            return value
        if kind == FieldType.CHECKBOX:
            return parse_boolean(value)
        if kind in (FieldType.NUMBER, FieldType.BIGINT):
            return parse_integer(value, native_type)
        return value

    def format_transaction_data(
        self,
        contract_schema: ContractSchema,
        function_id: str,
        submitted_inputs: Mapping[str, Any],
        fields: Sequence[FormFieldConfig],
    ) -> StellarInvocationData:
        function = self._require_function(contract_schema, function_id)
        resolved = self._resolve_argument_values(function, submitted_inputs, fields)
        return StellarInvocationData(
            contract_id=contract_schema.address,
            function_name=function.name,
            args=[self._parse_value(parameter, parameter.type, value) for parameter, value in resolved],
            arg_types=[parameter.type for parameter, _ in resolved],
        )

    async def query_view_function(
        self,
        contract_address: str,
        function_id: str,
        params: Sequence[Any] = (),
        contract_schema: Optional[ContractSchema] = None,
    ) -> Any:
        network_name = getattr(self.network_config, "name", "unknown")
        logger.warning("Stellar view queries are not implemented (network: %s)", network_name)
        return await super().query_view_function(contract_address, function_id, params, contract_schema)


ADAPTER_CLASS = StellarAdapter
