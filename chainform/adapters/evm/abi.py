"""Normalize Solidity ABI JSON into a :class:`ContractSchema`."""

from __future__ import annotations

import re
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from ...errors import ContractDefinitionError
from ...types import ContractEvent, ContractFunction, ContractSchema, FunctionParameter
from ..base import humanize_name, load_definition

READ_ONLY_MUTABILITY = frozenset({"view", "pure"})

_ALIASED_INT = re.compile(r"^(u?int)(?=\[|$)")


def canonical_type(parameter: FunctionParameter) -> str:
    """ABI type as used in signatures, with tuples expanded: ``(address,uint256)[]``."""
    if not parameter.type.startswith("tuple"):
        return _ALIASED_INT.sub(r"\g<1>256", parameter.type)
    suffix = parameter.type[len("tuple"):]
    inner = ",".join(canonical_type(component) for component in parameter.components or [])
    return f"({inner}){suffix}"


def function_signature(function: ContractFunction) -> str:
    return f"{function.name}({','.join(canonical_type(p) for p in function.inputs)})"


def make_function_id(name: str, inputs: Sequence[FunctionParameter], *, canonical: bool = False) -> str:
    """Deterministic id from name plus input types, e.g. ``transfer_address_uint256``.

    With ``canonical`` the tuple members are spelled out, e.g. ``submit_(uint256,address)``.
    """
    if not inputs:
        return name
    tokens = (canonical_type(parameter) if canonical else parameter.type for parameter in inputs)
    return f"{name}_{'_'.join(tokens)}"


def _assign_ids(entries: Sequence[Tuple[str, List[FunctionParameter]]]) -> List[str]:
    # Overloads whose raw ids collide (struct arguments all read ``tuple``) use canonical types.
    raw_ids = [make_function_id(name, inputs) for name, inputs in entries]
    counts = Counter(raw_ids)
    return [
        make_function_id(name, inputs, canonical=True) if counts[raw_id] > 1 else raw_id
        for raw_id, (name, inputs) in zip(raw_ids, entries)
    ]


def _parse_parameter(raw: Any, index: int) -> FunctionParameter:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("type"), str):
        raise ContractDefinitionError(f"Malformed ABI parameter at position {index}: {raw!r}")
    components = raw.get("components")
    return FunctionParameter(
        name=raw.get("name") or f"param{index}",
        type=raw["type"],
        components=[_parse_parameter(item, i) for i, item in enumerate(components)] if components else None,
    )


def _parse_parameters(raw: Any) -> List[FunctionParameter]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ContractDefinitionError(f"ABI inputs/outputs must be a list, got {type(raw).__name__}")
    return [_parse_parameter(item, index) for index, item in enumerate(raw)]


def _modifies_state(entry: Mapping[str, Any]) -> bool:
    mutability = entry.get("stateMutability")
    if mutability is None:
        # Pre-0.4.16 ABIs only carry ``constant``.
        return not entry.get("constant", False)
    return mutability not in READ_ONLY_MUTABILITY


def parse_evm_abi(definition: Any, address: str = "", name: Optional[str] = None) -> ContractSchema:
    """Accept a raw ABI list, its JSON text, or an artifact object with an ``abi`` key."""
    document = load_definition(definition)
    contract_name = name
    if isinstance(document, Mapping) and "abi" in document:
        contract_name = contract_name or document.get("contractName")
        document = document["abi"]
    if not isinstance(document, list):
        raise ContractDefinitionError("EVM ABI must be a JSON array of entries")

    parsed: Dict[str, List[Tuple[Mapping[str, Any], str, List[FunctionParameter]]]] = {"function": [], "event": []}
    for entry in document:
        if not isinstance(entry, Mapping):
            raise ContractDefinitionError(f"Malformed ABI entry: {entry!r}")
        entry_type = entry.get("type", "function")
        if entry_type in parsed:
            parsed[entry_type].append((entry, entry.get("name") or "", _parse_parameters(entry.get("inputs"))))

    function_ids = _assign_ids([(entry_name, inputs) for _, entry_name, inputs in parsed["function"]])
    functions = [
        ContractFunction(
            id=function_id,
            name=entry_name,
            display_name=humanize_name(entry_name),
            inputs=inputs,
            outputs=_parse_parameters(entry.get("outputs")),
            type="function",
            state_mutability=entry.get("stateMutability"),
            modifies_state=_modifies_state(entry),
        )
        for function_id, (entry, entry_name, inputs) in zip(function_ids, parsed["function"])
    ]
    event_ids = _assign_ids([(entry_name, inputs) for _, entry_name, inputs in parsed["event"]])
    events = [
        ContractEvent(id=event_id, name=entry_name, inputs=inputs)
        for event_id, (_, entry_name, inputs) in zip(event_ids, parsed["event"])
    ]

    try:
        return ContractSchema(
            ecosystem="evm",
            name=contract_name or "Contract",
            address=address,
            functions=functions,
            events=events,
        )
    except ValidationError as exc:
        raise ContractDefinitionError(f"Invalid EVM ABI: {exc.errors(include_url=False)[0]['msg']}") from exc
