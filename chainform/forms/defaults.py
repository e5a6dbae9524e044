"""Initial form values per field kind."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from ..types import FieldType, FormFieldConfig

# Number.MAX_SAFE_INTEGER in the generated TypeScript app.
MAX_SAFE_INTEGER = 2**53 - 1


def default_value_for_field(field: FormFieldConfig) -> Any:
    if field.is_hardcoded:
        return field.hardcoded_value
    if field.type == FieldType.CHECKBOX:
        return False
    if field.type == FieldType.OBJECT:
        return default_values_for_fields(field.components or [])
    if field.type.is_array:
        return []
    return ""


def default_values_for_fields(fields: Iterable[FormFieldConfig]) -> Dict[str, Any]:
    return {field.name: default_value_for_field(field) for field in fields}


def _portable_untyped(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, Mapping):
        return {key: _portable_untyped(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_portable_untyped(item) for item in value]
    return value


def portable_value(field: Optional[FormFieldConfig], value: Any) -> Any:
    """``value`` in a form JSON can carry into the generated app without rounding.

    Integers of bigint fields become decimal strings, as do integers outside
    JavaScript's safe range in any other field.
    """
    if field is None or isinstance(value, bool) or value is None:
        return _portable_untyped(value)
    if field.type == FieldType.OBJECT and isinstance(value, Mapping):
        components = {component.name: component for component in field.components or []}
        return {key: portable_value(components.get(key), item) for key, item in value.items()}
    if field.type.is_array and isinstance(value, (list, tuple)):
        return [portable_value(field.element_field_config, item) for item in value]
    if field.type == FieldType.BIGINT and isinstance(value, int):
        return str(value)
    return _portable_untyped(value)
