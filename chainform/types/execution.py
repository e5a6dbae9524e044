"""Execution method configuration embedded in generated apps."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import model_validator

from .base import CamelModel


class ExecutionMethod(str, Enum):
    EOA = "eoa"
    RELAYER = "relayer"
    MULTISIG = "multisig"


class ExecutionConfig(CamelModel):
    """How the generated app submits transactions.

    For ``eoa`` either any signer is accepted or ``specific_address`` must sign.
    ``relayer`` requires a ``service_url``.
    """

    method: ExecutionMethod = ExecutionMethod.EOA
    allow_any: bool = True
    specific_address: Optional[str] = None
    service_url: Optional[str] = None

    @model_validator(mode="after")
    def _check_method_requirements(self) -> "ExecutionConfig":
        if self.method == ExecutionMethod.EOA and not self.allow_any and not self.specific_address:
            raise ValueError("specific_address is required when allow_any is false")
        if self.method == ExecutionMethod.RELAYER and not self.service_url:
            raise ValueError("service_url is required for relayer execution")
        return self
