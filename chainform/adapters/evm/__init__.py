"""EVM ecosystem support."""

from .adapter import ADAPTER_CLASS, EvmAdapter
from .encoding import EvmTransactionData, parse_evm_value
from .mapping import EVM_TYPE_TO_FIELD_TYPE, map_evm_param_type_to_field_type

__all__ = [
    "ADAPTER_CLASS",
    "EVM_TYPE_TO_FIELD_TYPE",
    "EvmAdapter",
    "EvmTransactionData",
    "map_evm_param_type_to_field_type",
    "parse_evm_value",
]
