"""Stellar ecosystem support."""

from .adapter import ADAPTER_CLASS, StellarAdapter, StellarInvocationData, parse_stellar_spec
from .mapping import STELLAR_TYPE_TO_FIELD_TYPE, map_stellar_param_type_to_field_type

__all__ = [
    "ADAPTER_CLASS",
    "STELLAR_TYPE_TO_FIELD_TYPE",
    "StellarAdapter",
    "StellarInvocationData",
    "map_stellar_param_type_to_field_type",
    "parse_stellar_spec",
]
