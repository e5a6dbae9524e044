"""Midnight contract artifacts and TypeScript interface parsing.

Compact contracts ship a generated ``index.d.ts``. Its ``Circuits`` /
``ImpureCircuits`` / ``PureCircuits`` interfaces list the callable circuits,
which become the schema functions.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from ...errors import ContractDefinitionError
from ...types import ContractFunction, ContractSchema, FunctionParameter
from ...types.base import CamelModel
from ..base import humanize_name, load_definition


class MidnightContractArtifacts(CamelModel):
    contract_address: str
    private_state_id: str
    contract_schema: str
    contract_module: Optional[str] = None
    witness_code: Optional[str] = None


_REQUIRED_KEYS = ("contractAddress", "privateStateId", "contractSchema")

_INTERFACE = re.compile(r"(?:export\s+)?(?:declare\s+)?(?:interface|type)\s+(?P<name>\w+)\s*(?:<[^>{]*>)?\s*=?\s*\{")
_METHOD = re.compile(r"(?P<name>[A-Za-z_$][\w$]*)\s*(?:<[^>(]*>)?\s*\((?P<params>[^()]*(?:\([^()]*\)[^()]*)*)\)\s*:\s*(?P<returns>[^;\n]+);?")


def is_midnight_contract_artifacts(value: Any) -> bool:
    """Shape check: an object carrying the three required string properties."""
    if not isinstance(value, Mapping):
        return False
    return all(isinstance(value.get(key), str) for key in _REQUIRED_KEYS)


def _interface_bodies(source: str) -> List[Tuple[str, str]]:
    bodies: List[Tuple[str, str]] = []
    for match in _INTERFACE.finditer(source):
        depth = 1
        position = match.end()
        while position < len(source) and depth:
            char = source[position]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
            position += 1
        bodies.append((match.group("name"), source[match.end():position - 1]))
    return bodies


def _split_top_level(text: str, separator: str = ",") -> List[str]:
    parts: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char in "<([{":
            depth += 1
        elif char in ">)]}":
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    if "".join(current).strip():
        parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def _parse_object_literal(type_text: str) -> Optional[List[FunctionParameter]]:
    text = type_text.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return None
    members: List[FunctionParameter] = []
    for index, entry in enumerate(_split_top_level(text[1:-1].replace(";", ","))):
        name, _, member_type = entry.partition(":")
        members.append(_make_parameter(name.strip().rstrip("?"), member_type.strip(), index))
    return members


def _make_parameter(name: str, type_text: str, index: int) -> FunctionParameter:
    components = _parse_object_literal(type_text)
    if components is not None:
        return FunctionParameter(name=name or f"arg{index}", type="struct", components=components)
    element_components = None
    if type_text.endswith("[]"):
        element_components = _parse_object_literal(type_text[:-2].strip().strip("()"))
    return FunctionParameter(name=name or f"arg{index}", type=type_text, components=element_components)


def _parse_params(params: str) -> List[FunctionParameter]:
    parameters: List[FunctionParameter] = []
    for index, entry in enumerate(_split_top_level(params)):
        name, _, type_text = entry.partition(":")
        type_text = type_text.strip()
        if "CircuitContext" in type_text or name.strip() == "context":
            continue
        parameters.append(_make_parameter(name.strip().rstrip("?"), type_text, index))
    return parameters


def parse_midnight_interface(source: str) -> List[ContractFunction]:
    """Extract circuit signatures from TypeScript declarations.

    Impure circuits modify state; those only found in ``PureCircuits`` do not.
    """
    functions: Dict[str, ContractFunction] = {}
    for interface_name, body in _interface_bodies(source):
        is_pure = interface_name.startswith("Pure")
        for match in _METHOD.finditer(body):
            name = match.group("name")
            existing = functions.get(name)
            if existing is not None and (is_pure or existing.modifies_state):
                continue
            functions[name] = ContractFunction(
                id=name,
                name=name,
                display_name=humanize_name(name),
                inputs=_parse_params(match.group("params")),
                type="circuit",
                state_mutability="pure" if is_pure else None,
                modifies_state=not is_pure,
            )
    return list(functions.values())


def parse_midnight_artifacts(definition: Any, address: str = "") -> Tuple[MidnightContractArtifacts, ContractSchema]:
    document = load_definition(definition)
    if not is_midnight_contract_artifacts(document):
        raise ContractDefinitionError(
            "Midnight artifacts must provide contractAddress, privateStateId and contractSchema",
        )
    try:
        artifacts = MidnightContractArtifacts.model_validate(document)
    except ValidationError as exc:
        raise ContractDefinitionError(f"Invalid Midnight artifacts: {exc.error_count()} error(s)") from exc
    functions = parse_midnight_interface(artifacts.contract_schema)
    names = [name for name, _ in _interface_bodies(artifacts.contract_schema)]
    schema = ContractSchema(
        ecosystem="midnight",
        name=next((name for name in names if "Circuits" not in name), names[0] if names else "Contract"),
        address=address or artifacts.contract_address,
        functions=functions,
    )
    return artifacts, schema
