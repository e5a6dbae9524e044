"""Solana ecosystem support."""

from .adapter import ADAPTER_CLASS, SolanaAdapter, SolanaInstructionData
from .mapping import SOLANA_TYPE_TO_FIELD_TYPE, map_solana_param_type_to_field_type

__all__ = [
    "ADAPTER_CLASS",
    "SOLANA_TYPE_TO_FIELD_TYPE",
    "SolanaAdapter",
    "SolanaInstructionData",
    "map_solana_param_type_to_field_type",
]
