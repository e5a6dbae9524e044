"""Canonical contract schema shared by every ecosystem."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel


class Ecosystem(str, Enum):
    """Known contract ecosystems."""

    EVM = "evm"
    SOLANA = "solana"
    STELLAR = "stellar"
    MIDNIGHT = "midnight"


class FunctionParameter(CamelModel):
    """A single (possibly nested) function input or output.

    ``components`` describes struct/tuple members. ``element_type`` names the
    array element type when the native type string does not encode it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    components: Optional[List[FunctionParameter]] = None
    element_type: Optional[str] = None


class ContractFunction(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    display_name: str = ""
    description: str = ""
    inputs: List[FunctionParameter] = Field(default_factory=list)
    outputs: List[FunctionParameter] = Field(default_factory=list)
    type: str = "function"
    state_mutability: Optional[str] = None
    modifies_state: bool = True


class ContractEvent(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    inputs: List[FunctionParameter] = Field(default_factory=list)


class ContractSchema(CamelModel):
    """Normalized contract interface. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    ecosystem: str
    name: str = ""
    address: str = ""
    functions: List[ContractFunction] = Field(default_factory=list)
    events: List[ContractEvent] = Field(default_factory=list)

    @field_validator("functions")
    @classmethod
    def _unique_function_ids(cls, functions: List[ContractFunction]) -> List[ContractFunction]:
        seen = set()
        for function in functions:
            if function.id in seen:
                raise ValueError(f"Duplicate function id: {function.id}")
            seen.add(function.id)
        return functions

    def get_function(self, function_id: str) -> Optional[ContractFunction]:
        for function in self.functions:
            if function.id == function_id:
                return function
        return None


FunctionParameter.model_rebuild()
