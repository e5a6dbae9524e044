"""Normalize an Anchor IDL into a :class:`ContractSchema`."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from ...errors import ContractDefinitionError
from ...types import ContractFunction, ContractSchema, FunctionParameter
from ..base import humanize_name, load_definition
from .mapping import ENUM_PREFIX, STRUCT_PREFIX

TypeDefs = Dict[str, Mapping[str, Any]]


def _defined_name(raw: Any) -> str:
    # Anchor >= 0.30 nests the name: {"defined": {"name": "Foo"}}
    if isinstance(raw, Mapping):
        return str(raw.get("name") or "")
    return str(raw)


def _resolve_type(
    raw: Any,
    types: TypeDefs,
    stack: FrozenSet[str],
) -> Tuple[str, Optional[List[FunctionParameter]]]:
    """Flatten an IDL type to ``(type string, struct components)``."""
    if isinstance(raw, str):
        return raw, None
    if not isinstance(raw, Mapping) or len(raw) != 1:
        raise ContractDefinitionError(f"Unsupported IDL type: {raw!r}")

    kind, inner = next(iter(raw.items()))
    if kind == "vec":
        element, components = _resolve_type(inner, types, stack)
        return f"Vec<{element}>", components
    if kind == "array":
        if not isinstance(inner, list) or len(inner) != 2:
            raise ContractDefinitionError(f"Malformed IDL array type: {raw!r}")
        element, components = _resolve_type(inner[0], types, stack)
        return f"[{element}; {int(inner[1])}]", components
    if kind in ("option", "coption"):
        element, components = _resolve_type(inner, types, stack)
        return f"Option<{element}>", components
    if kind == "defined":
        name = _defined_name(inner)
        definition = types.get(name)
        if definition is None:
            raise ContractDefinitionError(f"IDL references undefined type '{name}'")
        body = definition.get("type") or {}
        if body.get("kind") == "enum":
            return f"{ENUM_PREFIX}{name}", None
        if name in stack:
            # Self-referential struct: stop expanding.
            return f"{STRUCT_PREFIX}{name}", []
        fields = body.get("fields") or []
        return f"{STRUCT_PREFIX}{name}", [
            _parse_arg(item, index, types, stack | {name}) for index, item in enumerate(fields)
        ]
    raise ContractDefinitionError(f"Unsupported IDL type kind '{kind}'")


def _parse_arg(raw: Any, index: int, types: TypeDefs, stack: FrozenSet[str] = frozenset()) -> FunctionParameter:
    if not isinstance(raw, Mapping) or "type" not in raw:
        raise ContractDefinitionError(f"Malformed IDL argument at position {index}: {raw!r}")
    type_name, components = _resolve_type(raw["type"], types, stack)
    docs = raw.get("docs") or []
    return FunctionParameter(
        name=raw.get("name") or f"arg{index}",
        type=type_name,
        description=" ".join(docs) if docs else None,
        components=components,
    )


def parse_anchor_idl(definition: Any, address: str = "") -> ContractSchema:
    document = load_definition(definition)
    if not isinstance(document, Mapping) or not isinstance(document.get("instructions"), list):
        raise ContractDefinitionError("Anchor IDL must be an object with an 'instructions' list")

    types: TypeDefs = {}
    for entry in document.get("types") or []:
        if isinstance(entry, Mapping) and entry.get("name"):
            types[str(entry["name"])] = entry

    functions: List[ContractFunction] = []
    for instruction in document["instructions"]:
        if not isinstance(instruction, Mapping) or not instruction.get("name"):
            raise ContractDefinitionError(f"Malformed IDL instruction: {instruction!r}")
        name = str(instruction["name"])
        docs = instruction.get("docs") or []
        functions.append(
            ContractFunction(
                id=name,
                name=name,
                display_name=humanize_name(name),
                description=" ".join(docs),
                inputs=[_parse_arg(arg, index, types) for index, arg in enumerate(instruction.get("args") or [])],
                type="instruction",
                modifies_state=True,
            )
        )

    metadata = document.get("metadata") or {}
    program_name = document.get("name") or metadata.get("name") or "Program"
    program_address = address or document.get("address") or metadata.get("address") or ""
    try:
        return ContractSchema(ecosystem="solana", name=program_name, address=program_address, functions=functions)
    except ValidationError as exc:
        raise ContractDefinitionError(f"Invalid Anchor IDL: {exc.errors(include_url=False)[0]['msg']}") from exc
