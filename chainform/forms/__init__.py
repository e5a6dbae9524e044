"""Form schema derivation and value transforms."""

from .defaults import default_value_for_field, default_values_for_fields, portable_value
from .factory import FormSchemaFactory, default_description, resolve_form_text
from .transforms import create_transform_for_field_type, parse_bigint, parse_checkbox, parse_number
from .validation import find_missing_render_schema_parts, iter_leaf_fields, validate_render_schema

__all__ = [
    "FormSchemaFactory",
    "create_transform_for_field_type",
    "default_description",
    "default_value_for_field",
    "default_values_for_fields",
    "find_missing_render_schema_parts",
    "iter_leaf_fields",
    "parse_bigint",
    "parse_checkbox",
    "parse_number",
    "portable_value",
    "resolve_form_text",
    "validate_render_schema",
]
