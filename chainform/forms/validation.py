"""Structural completeness checks for finalized form schemas."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from ..errors import InvalidRenderFormSchemaError
from ..types import FieldType, FormFieldConfig


def find_missing_render_schema_parts(candidate: Mapping[str, Any]) -> List[str]:
    """Names of required render schema parts that are absent or empty."""
    missing: List[str] = []
    if not candidate.get("id"):
        missing.append("id")
    if not candidate.get("title"):
        missing.append("title")
    if candidate.get("fields") is None:
        missing.append("fields")
    for key in ("layout", "validation"):
        if candidate.get(key) is None:
            missing.append(key)
    submit_button = candidate.get("submit_button")
    if submit_button is None or not getattr(submit_button, "text", None):
        missing.append("submitButton")
    return missing


def iter_leaf_fields(fields: Iterable[FormFieldConfig]) -> Iterable[FormFieldConfig]:
    for field in fields:
        if field.type == FieldType.OBJECT:
            yield from iter_leaf_fields(field.components or [])
        elif field.type.is_array and field.element_field_config is not None:
            yield from iter_leaf_fields([field.element_field_config])
        else:
            yield field


def validate_render_schema(candidate: Mapping[str, Any]) -> None:
    """Raise :class:`InvalidRenderFormSchemaError` unless the candidate is complete.

    Every leaf field must also carry a transform pair.
    """
    missing = find_missing_render_schema_parts(candidate)
    if missing:
        raise InvalidRenderFormSchemaError(missing)
    untransformed = [field.name for field in iter_leaf_fields(candidate["fields"]) if field.transforms is None]
    if untransformed:
        raise InvalidRenderFormSchemaError(detail=f"fields without transforms: {', '.join(untransformed)}")
