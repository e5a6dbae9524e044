"""Midnight ecosystem support."""

from .adapter import ADAPTER_CLASS, MidnightAdapter, MidnightCircuitCall
from .artifacts import MidnightContractArtifacts, is_midnight_contract_artifacts, parse_midnight_interface
from .mapping import MIDNIGHT_TYPE_TO_FIELD_TYPE, map_midnight_param_type_to_field_type

__all__ = [
    "ADAPTER_CLASS",
    "MIDNIGHT_TYPE_TO_FIELD_TYPE",
    "MidnightAdapter",
    "MidnightCircuitCall",
    "MidnightContractArtifacts",
    "is_midnight_contract_artifacts",
    "map_midnight_param_type_to_field_type",
    "parse_midnight_interface",
]
