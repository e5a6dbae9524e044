"""
Field kind / ecosystem -> npm dependency mapping.

Single source of truth for what an exported app needs in its ``package.json``:

1. Core renderer packages (always required)
2. Packages required by individual field kinds (date pickers, radix widgets, ...)
3. The ecosystem adapter package plus the chain SDK it builds on

When the same package appears in several sources the later source wins
(adapter > field > core).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..types import FieldType


@dataclass(frozen=True)
class NPMPackage:
    """npm package specification with version constraint"""

    name: str
    version: str = "^1.0.0"
    dev: bool = False

    def to_package_json_entry(self) -> Tuple[str, str]:
        return (self.name, self.version)


@dataclass(frozen=True)
class AdapterPackage:
    """Identity of an ecosystem adapter as imported by generated code."""

    package_name: str
    class_name: str


# =============================================================================
# CORE RENDERER DEPENDENCIES (always required)
# =============================================================================

CORE_RENDERER_PACKAGES: List[NPMPackage] = [
    NPMPackage("react", "^19.0.0"),
    NPMPackage("react-dom", "^19.0.0"),
    NPMPackage("react-hook-form", "^7.45.4"),
    NPMPackage("@radix-ui/react-label", "^2.0.2"),
    NPMPackage("@radix-ui/react-slot", "^1.0.2"),
    NPMPackage("class-variance-authority", "^0.7.0"),
    NPMPackage("clsx", "^2.0.0"),
    NPMPackage("tailwind-merge", "^1.14.0"),
    NPMPackage("@chainform/renderer", "^0.3.0"),
    NPMPackage("@chainform/types", "^0.3.0"),
    NPMPackage("@chainform/utils", "^0.3.0"),
]


# =============================================================================
# FIELD KIND DEPENDENCIES
# =============================================================================

FIELD_TYPE_PACKAGES: Dict[FieldType, List[NPMPackage]] = {
    FieldType.CHECKBOX: [NPMPackage("@radix-ui/react-checkbox", "^1.0.4")],
    FieldType.SELECT: [NPMPackage("@radix-ui/react-select", "^1.2.2")],
    FieldType.SELECT_GROUPED: [NPMPackage("@radix-ui/react-select", "^1.2.2")],
    FieldType.RADIO: [NPMPackage("@radix-ui/react-radio-group", "^1.1.3")],
    FieldType.DATE: [
        NPMPackage("react-datepicker", "^4.16.0"),
        NPMPackage("@types/react-datepicker", "^4.11.2", dev=True),
    ],
    FieldType.CODE_EDITOR: [NPMPackage("@uiw/react-textarea-code-editor", "^3.0.2")],
}


# =============================================================================
# ECOSYSTEM ADAPTERS
# =============================================================================

ADAPTER_PACKAGE_MAP: Dict[str, AdapterPackage] = {
    "evm": AdapterPackage("@chainform/adapter-evm", "EvmAdapter"),
    "solana": AdapterPackage("@chainform/adapter-solana", "SolanaAdapter"),
    "stellar": AdapterPackage("@chainform/adapter-stellar", "StellarAdapter"),
    "midnight": AdapterPackage("@chainform/adapter-midnight", "MidnightAdapter"),
}

ADAPTER_PACKAGES: Dict[str, List[NPMPackage]] = {
    "evm": [
        NPMPackage("@chainform/adapter-evm", "^0.3.0"),
        NPMPackage("viem", "^2.21.0"),
        NPMPackage("wagmi", "^2.14.0"),
        NPMPackage("@tanstack/react-query", "^5.59.0"),
    ],
    "solana": [
        NPMPackage("@chainform/adapter-solana", "^0.3.0"),
        NPMPackage("@solana/web3.js", "^1.95.0"),
    ],
    "stellar": [
        NPMPackage("@chainform/adapter-stellar", "^0.3.0"),
        NPMPackage("@stellar/stellar-sdk", "^13.0.0"),
    ],
    "midnight": [
        NPMPackage("@chainform/adapter-midnight", "^0.3.0"),
        NPMPackage("@midnight-ntwrk/midnight-js-contracts", "^1.0.0"),
        NPMPackage("@midnight-ntwrk/compact-runtime", "^0.7.0"),
    ],
}


def get_field_packages(field_type: FieldType) -> List[NPMPackage]:
    return list(FIELD_TYPE_PACKAGES.get(field_type, []))


def get_adapter_packages(ecosystem: str) -> List[NPMPackage]:
    return list(ADAPTER_PACKAGES.get(ecosystem, []))
