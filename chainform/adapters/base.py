"""Ecosystem adapter framework - base interface and shared helpers.

Every supported ecosystem provides one :class:`ContractAdapter` subclass that:
- maps native parameter types onto canonical field kinds
- normalizes ecosystem contract metadata into a :class:`ContractSchema`
- validates addresses and execution settings
- encodes submitted values into the ecosystem's native call payload

Downstream code (schema derivation, code generation) only ever sees the
abstract interface, never a concrete variant.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

from ..errors import ContractDefinitionError, EncodingError, ViewQueryUnsupportedError
from ..observability.logging import get_logger
from ..types import (
    ContractFunction,
    ContractSchema,
    ExecutionConfig,
    ExecutionMethod,
    FieldType,
    FormFieldConfig,
    FunctionParameter,
)

logger = get_logger(__name__)


# Field kinds a user may switch a field to, keyed by the kind the type maps to.
COMPATIBLE_FIELD_TYPES: Dict[FieldType, List[FieldType]] = {
    FieldType.ADDRESS: [FieldType.ADDRESS, FieldType.TEXT],
    FieldType.NUMBER: [FieldType.NUMBER, FieldType.AMOUNT, FieldType.TEXT],
    FieldType.BIGINT: [FieldType.BIGINT, FieldType.NUMBER, FieldType.AMOUNT, FieldType.TEXT],
    FieldType.CHECKBOX: [FieldType.CHECKBOX, FieldType.SELECT, FieldType.RADIO],
    FieldType.TEXT: [FieldType.TEXT, FieldType.TEXTAREA, FieldType.EMAIL, FieldType.PASSWORD, FieldType.URL],
    FieldType.TEXTAREA: [FieldType.TEXTAREA, FieldType.TEXT, FieldType.BYTES],
    FieldType.BYTES: [FieldType.BYTES, FieldType.TEXTAREA, FieldType.TEXT],
    FieldType.OBJECT: [FieldType.OBJECT],
    FieldType.ARRAY: [FieldType.ARRAY],
    FieldType.ARRAY_OBJECT: [FieldType.ARRAY_OBJECT],
}

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|[_\-\s]+")


def humanize_name(name: str) -> str:
    """Turn ``inputNestedStruct`` / ``book_id`` / ``_to`` into a display label."""
    parts = [part for part in _WORD_BOUNDARY.split(name or "") if part]
    if not parts:
        return name or ""
    return " ".join(part[:1].upper() + part[1:] for part in parts)


def load_definition(definition: Any) -> Any:
    """Accept a JSON string or an already-parsed definition object."""
    if isinstance(definition, (str, bytes)):
        try:
            return json.loads(definition)
        except json.JSONDecodeError as exc:
            raise ContractDefinitionError(
                f"Contract definition is not valid JSON: {exc.msg}",
                hint="Provide the raw ABI/IDL/spec JSON document",
            ) from exc
    return definition


class ContractAdapter(ABC):
    """Capability set implemented once per ecosystem.

    Subclasses declare their identity (``ecosystem``, ``package_name``,
    ``class_name``) and implement the abstract operations. Optional
    capabilities advertise themselves through class flags so that their
    absence can be surfaced rather than silently ignored.
    """

    ecosystem: ClassVar[str]
    package_name: ClassVar[str]
    class_name: ClassVar[str]
    supports_view_queries: ClassVar[bool] = False
    supported_execution_methods: ClassVar[Tuple[ExecutionMethod, ...]] = (ExecutionMethod.EOA,)

    def __init__(self, network_config: Any = None):
        self.network_config = network_config
        self.initialized = False

    async def initialize(self) -> None:
        """Load ecosystem runtime support. Called once by the registry."""
        self.initialized = True

    # ------------------------------------------------------------------
    # Type mapping
    # ------------------------------------------------------------------

    @abstractmethod
    def map_parameter_type_to_field_type(self, parameter_type: str) -> FieldType:
        """Map a native type name to a field kind. Never raises; unknown types map to text."""

    def get_compatible_field_types(self, parameter_type: str) -> List[FieldType]:
        default = self.map_parameter_type_to_field_type(parameter_type)
        return list(COMPATIBLE_FIELD_TYPES.get(default, [default]))

    def parse_array_element_type(self, parameter_type: str) -> Optional[str]:
        """Return the element type encoded in an array type string, if any."""
        return None

    def get_array_element_parameter(self, parameter: FunctionParameter) -> Optional[FunctionParameter]:
        element_type = parameter.element_type or self.parse_array_element_type(parameter.type)
        if element_type is None:
            return None
        return FunctionParameter(
            name="item",
            type=element_type,
            components=parameter.components,
        )

    # ------------------------------------------------------------------
    # Contract metadata
    # ------------------------------------------------------------------

    @abstractmethod
    def load_contract_schema(self, definition: Any, address: str = "") -> ContractSchema:
        """Normalize an ecosystem-specific contract definition."""

    def get_writable_functions(self, contract_schema: ContractSchema) -> List[ContractFunction]:
        return [function for function in contract_schema.functions if function.modifies_state]

    def is_view_function(self, function: ContractFunction) -> bool:
        return not function.modifies_state

    @abstractmethod
    def is_valid_address(self, address: Any) -> bool:
        """Ecosystem-specific address syntax check."""

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @abstractmethod
    def format_transaction_data(
        self,
        contract_schema: ContractSchema,
        function_id: str,
        submitted_inputs: Mapping[str, Any],
        fields: Sequence[FormFieldConfig],
    ) -> Any:
        """Encode final field values into the native call payload.

        Raises:
            EncodingError: if the values cannot be encoded
        """

    async def query_view_function(
        self,
        contract_address: str,
        function_id: str,
        params: Sequence[Any] = (),
        contract_schema: Optional[ContractSchema] = None,
    ) -> Any:
        raise ViewQueryUnsupportedError(self.ecosystem)

    def validate_execution_config(self, config: ExecutionConfig) -> Optional[str]:
        """Return an error message for an unusable execution config, or None."""
        if config.method not in self.supported_execution_methods:
            return f"Execution method '{config.method.value}' is not supported for {self.ecosystem}"
        if config.method == ExecutionMethod.EOA and not config.allow_any:
            if not self.is_valid_address(config.specific_address or ""):
                return f"Invalid {self.ecosystem} address for specific EOA: {config.specific_address}"
        return None

    # ------------------------------------------------------------------
    # Helpers shared by concrete adapters
    # ------------------------------------------------------------------

    def _require_function(self, contract_schema: ContractSchema, function_id: str) -> ContractFunction:
        function = contract_schema.get_function(function_id)
        if function is None:
            raise EncodingError(
                f"Function {function_id} not found in contract schema",
                context={"function_id": function_id},
            )
        return function

    def _resolve_argument_values(
        self,
        function: ContractFunction,
        submitted_inputs: Mapping[str, Any],
        fields: Sequence[FormFieldConfig],
    ) -> List[Tuple[FunctionParameter, Any]]:
        """Pair each input with its value, preferring hardcoded literals over submitted values."""
        fields_by_name = {field.name: field for field in fields}
        resolved: List[Tuple[FunctionParameter, Any]] = []
        for parameter in function.inputs:
            field = fields_by_name.get(parameter.name)
            if field is not None and field.is_hardcoded:
                value = field.hardcoded_value
            elif parameter.name in submitted_inputs:
                value = submitted_inputs[parameter.name]
            elif field is not None and field.is_hidden and field.hardcoded_value is not None:
                value = field.hardcoded_value
            else:
                raise EncodingError(
                    f"Missing value for parameter '{parameter.name}' of {function.name}",
                    context={"function_id": function.id, "parameter": parameter.name},
                )
            resolved.append((parameter, value))
        return resolved

    def __repr__(self) -> str:
        network_id = getattr(self.network_config, "id", None)
        return f"{type(self).__name__}(network={network_id!r})"


__all__ = [
    "COMPATIBLE_FIELD_TYPES",
    "ContractAdapter",
    "humanize_name",
    "load_definition",
]
