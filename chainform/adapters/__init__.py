"""
Ecosystem adapters.

Concrete adapters live in per-ecosystem subpackages and are loaded on demand
through :class:`AdapterRegistry`; import them directly only when a specific
ecosystem is needed.
"""

from .base import COMPATIBLE_FIELD_TYPES, ContractAdapter, humanize_name
from .registry import ADAPTER_MODULES, AdapterRegistry, create_default_registry

__all__ = [
    "ADAPTER_MODULES",
    "COMPATIBLE_FIELD_TYPES",
    "AdapterRegistry",
    "ContractAdapter",
    "create_default_registry",
    "humanize_name",
]
