"""
Network configurations and the built-in network catalogue.

Every network belongs to exactly one ecosystem. ``export_const_name`` is the
stable TypeScript identifier generated apps use to import the configuration.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Type

from pydantic import Field, ValidationError

from .errors import ConfigurationError, UnsupportedEcosystemError
from .types.base import CamelModel


class NativeCurrency(CamelModel):
    name: str
    symbol: str
    decimals: int = 18


class NetworkConfig(CamelModel):
    """Fields shared by every ecosystem's network configuration."""

    id: str
    name: str
    ecosystem: str
    network: str
    type: Literal["mainnet", "testnet", "devnet"] = "testnet"
    is_testnet: bool = True
    export_const_name: str
    explorer_url: Optional[str] = None
    icon: Optional[str] = None


class EvmNetworkConfig(NetworkConfig):
    ecosystem: Literal["evm"] = "evm"
    chain_id: int
    rpc_url: str
    native_currency: NativeCurrency
    api_url: Optional[str] = None


class SolanaNetworkConfig(NetworkConfig):
    ecosystem: Literal["solana"] = "solana"
    rpc_endpoint: str
    commitment: Literal["processed", "confirmed", "finalized"] = "confirmed"


class StellarNetworkConfig(NetworkConfig):
    ecosystem: Literal["stellar"] = "stellar"
    horizon_url: str
    network_passphrase: str
    soroban_rpc_url: Optional[str] = None


class MidnightNetworkConfig(NetworkConfig):
    ecosystem: Literal["midnight"] = "midnight"
    network_id: str = "testnet"
    indexer_uri: Optional[str] = None
    node_uri: Optional[str] = None


NETWORK_CONFIG_TYPES: Dict[str, Type[NetworkConfig]] = {
    "evm": EvmNetworkConfig,
    "solana": SolanaNetworkConfig,
    "stellar": StellarNetworkConfig,
    "midnight": MidnightNetworkConfig,
}


def parse_network_config(data: Mapping[str, Any]) -> NetworkConfig:
    """Validate a raw mapping into the matching ecosystem-specific network config."""
    ecosystem = str(data.get("ecosystem") or "")
    config_type = NETWORK_CONFIG_TYPES.get(ecosystem)
    if config_type is None:
        raise UnsupportedEcosystemError(ecosystem or "<missing>")
    try:
        return config_type.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid network configuration '{data.get('id', '<unknown>')}': {exc.error_count()} error(s)",
            context={"errors": exc.errors(include_url=False)},
        ) from exc


ethereum_mainnet = EvmNetworkConfig(
    id="ethereum-mainnet",
    name="Ethereum",
    network="ethereum",
    type="mainnet",
    is_testnet=False,
    export_const_name="ethereumMainnet",
    chain_id=1,
    rpc_url="https://eth.llamarpc.com",
    native_currency=NativeCurrency(name="Ether", symbol="ETH", decimals=18),
    explorer_url="https://etherscan.io",
    api_url="https://api.etherscan.io/api",
    icon="ethereum",
)

ethereum_sepolia = EvmNetworkConfig(
    id="ethereum-sepolia",
    name="Sepolia",
    network="ethereum",
    type="testnet",
    is_testnet=True,
    export_const_name="ethereumSepolia",
    chain_id=11155111,
    rpc_url="https://rpc.sepolia.org",
    native_currency=NativeCurrency(name="Sepolia Ether", symbol="ETH", decimals=18),
    explorer_url="https://sepolia.etherscan.io",
    api_url="https://api-sepolia.etherscan.io/api",
    icon="ethereum",
)

solana_devnet = SolanaNetworkConfig(
    id="solana-devnet",
    name="Solana Devnet",
    network="solana",
    type="devnet",
    is_testnet=True,
    export_const_name="solanaDevnet",
    rpc_endpoint="https://api.devnet.solana.com",
    commitment="confirmed",
    explorer_url="https://explorer.solana.com/?cluster=devnet",
    icon="solana",
)

solana_testnet = SolanaNetworkConfig(
    id="solana-testnet",
    name="Solana Testnet",
    network="solana",
    type="testnet",
    is_testnet=True,
    export_const_name="solanaTestnet",
    rpc_endpoint="https://api.testnet.solana.com",
    commitment="confirmed",
    explorer_url="https://explorer.solana.com/?cluster=testnet",
    icon="solana",
)

stellar_public = StellarNetworkConfig(
    id="stellar-public",
    name="Stellar",
    network="stellar",
    type="mainnet",
    is_testnet=False,
    export_const_name="stellarPublic",
    horizon_url="https://horizon.stellar.org",
    network_passphrase="Public Global Stellar Network ; September 2015",
    soroban_rpc_url="https://mainnet.sorobanrpc.com",
    explorer_url="https://stellar.expert/explorer/public",
    icon="stellar",
)

stellar_testnet = StellarNetworkConfig(
    id="stellar-testnet",
    name="Stellar Testnet",
    network="stellar",
    type="testnet",
    is_testnet=True,
    export_const_name="stellarTestnet",
    horizon_url="https://horizon-testnet.stellar.org",
    network_passphrase="Test SDF Network ; September 2015",
    soroban_rpc_url="https://soroban-testnet.stellar.org",
    explorer_url="https://stellar.expert/explorer/testnet",
    icon="stellar",
)

midnight_testnet = MidnightNetworkConfig(
    id="midnight-testnet",
    name="Midnight Testnet",
    network="midnight",
    type="testnet",
    is_testnet=True,
    export_const_name="midnightTestnet",
    network_id="testnet",
    indexer_uri="https://indexer.testnet.midnight.network/api/v1/graphql",
    node_uri="https://rpc.testnet.midnight.network",
    icon="midnight",
)


_BUILTIN_NETWORKS: List[NetworkConfig] = [
    ethereum_mainnet,
    ethereum_sepolia,
    solana_devnet,
    solana_testnet,
    stellar_public,
    stellar_testnet,
    midnight_testnet,
]


class NetworkCatalogue:
    """Lookup table of network configurations keyed by id.

    Starts from the built-in networks; workspace configuration may register more.
    """

    def __init__(self, networks: Optional[List[NetworkConfig]] = None):
        self._networks: Dict[str, NetworkConfig] = {}
        for network in networks if networks is not None else _BUILTIN_NETWORKS:
            self.register(network)

    def register(self, network: NetworkConfig) -> None:
        self._networks[network.id] = network

    def get(self, network_id: str) -> NetworkConfig:
        try:
            return self._networks[network_id]
        except KeyError:
            raise KeyError(f"Unknown network: {network_id}") from None

    def list(self, ecosystem: Optional[str] = None) -> List[NetworkConfig]:
        return [
            network
            for network in self._networks.values()
            if ecosystem is None or network.ecosystem == ecosystem
        ]


def get_networks(ecosystem: Optional[str] = None) -> List[NetworkConfig]:
    """List built-in networks, optionally filtered by ecosystem."""
    return NetworkCatalogue().list(ecosystem)


def get_network(network_id: str) -> NetworkConfig:
    """Return a built-in network by id. Raises ``KeyError`` for unknown ids."""
    return NetworkCatalogue().get(network_id)


__all__ = [
    "NativeCurrency",
    "NetworkConfig",
    "EvmNetworkConfig",
    "SolanaNetworkConfig",
    "StellarNetworkConfig",
    "MidnightNetworkConfig",
    "NETWORK_CONFIG_TYPES",
    "NetworkCatalogue",
    "parse_network_config",
    "get_networks",
    "get_network",
]
