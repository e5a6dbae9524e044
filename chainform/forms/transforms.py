"""Bidirectional value transforms keyed by field kind.

``input`` converts a native (chain) value into what the form edits, ``output``
converts the edited value back. Both are total: bad input falls back to the
kind's empty value instead of raising.
"""

from __future__ import annotations

import json
import math
import re
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Sequence

from ..types import FieldTransforms, FieldType, FormFieldConfig

if TYPE_CHECKING:
    from ..adapters.base import ContractAdapter

_HEX_INT = re.compile(r"^-?0[xX][0-9a-fA-F]+$")
_DEC_INT = re.compile(r"^[+-]?\d+$")


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_number(value: Any) -> Any:
    """Integer if exact, else float; ``0`` for anything unparseable."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if not isinstance(value, str):
        return 0
    text = value.strip()
    if not text or "_" in text:
        return 0
    if _DEC_INT.match(text):
        return int(text, 10)
    try:
        number = float(text)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def parse_bigint(value: Any) -> int:
    """Arbitrary-precision integer; ``0`` for anything that is not an exact integer."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else 0
    if not isinstance(value, str):
        return 0
    text = value.strip()
    if _DEC_INT.match(text):
        return int(text, 10)
    if _HEX_INT.match(text):
        return int(text, 16)
    return 0


def parse_checkbox(value: Any) -> bool:
    return value is True or value == "true"


def _address_transforms(adapter: Optional["ContractAdapter"]) -> FieldTransforms:
    def output(value: Any) -> str:
        if not isinstance(value, str):
            return ""
        if adapter is None:
            return value
        try:
            return value if adapter.is_valid_address(value) else ""
        except Exception:
            return ""

    return FieldTransforms(
        input=lambda value: value if isinstance(value, str) else "",
        output=output,
    )


def _number_transforms() -> FieldTransforms:
    return FieldTransforms(input=_to_text, output=parse_number)


def _bigint_transforms() -> FieldTransforms:
    def to_input(value: Any) -> str:
        if isinstance(value, bool) or value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return value
        return str(parse_bigint(value))

    return FieldTransforms(input=to_input, output=parse_bigint)


def _checkbox_transforms() -> FieldTransforms:
    return FieldTransforms(input=parse_checkbox, output=parse_checkbox)


def _text_transforms() -> FieldTransforms:
    return FieldTransforms(input=_to_text, output=_to_text)


def _decode_json(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return None


def _transforms_of(field: FormFieldConfig, adapter: Optional["ContractAdapter"]) -> FieldTransforms:
    if field.transforms is not None:
        return field.transforms
    return create_transform_for_field_type(field.type, adapter, field)


def _object_transforms(
    components: Sequence[FormFieldConfig],
    adapter: Optional["ContractAdapter"],
) -> FieldTransforms:
    members = [(component.name, _transforms_of(component, adapter)) for component in components]

    def to_input(value: Any) -> dict:
        if isinstance(value, (list, tuple)):
            # Positional tuples, e.g. decoded ABI structs.
            values = dict(zip((name for name, _ in members), value))
        elif isinstance(value, Mapping):
            values = value
        else:
            values = {}
        return {name: transforms.input(values.get(name)) for name, transforms in members}

    def to_output(value: Any) -> dict:
        data = _decode_json(value)
        values = data if isinstance(data, Mapping) else {}
        return {name: transforms.output(values.get(name)) for name, transforms in members}

    return FieldTransforms(input=to_input, output=to_output)


def _array_transforms(
    element: Optional[FormFieldConfig],
    adapter: Optional["ContractAdapter"],
) -> FieldTransforms:
    if element is not None:
        element_transforms = _transforms_of(element, adapter)
        element_input: Callable[[Any], Any] = element_transforms.input
        element_output: Callable[[Any], Any] = element_transforms.output
    else:
        element_input = element_output = _identity

    def to_input(value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            return []
        return [element_input(item) for item in value]

    def to_output(value: Any) -> list:
        data = _decode_json(value)
        if not isinstance(data, (list, tuple)):
            return []
        return [element_output(item) for item in data]

    return FieldTransforms(input=to_input, output=to_output)


def _identity(value: Any) -> Any:
    return value


def create_transform_for_field_type(
    field_type: FieldType,
    adapter: Optional["ContractAdapter"] = None,
    field: Optional[FormFieldConfig] = None,
) -> FieldTransforms:
    """Build the transform pair for ``field_type``.

    Composite kinds need ``field`` so the component/element configs can be
    resolved; without it they treat members as opaque values.
    """
    if field_type == FieldType.ADDRESS:
        return _address_transforms(adapter)
    if field_type in (FieldType.NUMBER, FieldType.AMOUNT):
        return _number_transforms()
    if field_type == FieldType.BIGINT:
        return _bigint_transforms()
    if field_type == FieldType.CHECKBOX:
        return _checkbox_transforms()
    if field_type == FieldType.OBJECT:
        return _object_transforms((field.components or []) if field is not None else [], adapter)
    if field_type.is_array:
        return _array_transforms(field.element_field_config if field is not None else None, adapter)
    return _text_transforms()


__all__ = [
    "create_transform_for_field_type",
    "parse_bigint",
    "parse_checkbox",
    "parse_number",
]
