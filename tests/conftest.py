"""Shared fixtures: sample contract definitions and adapters."""

import pytest

from chainform.adapters.evm.adapter import EvmAdapter
from chainform.networks import get_network

ERC20_ABI = [
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_to", "type": "address"},
            {"name": "_value", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "approve",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_spender", "type": "address"},
            {"name": "_value", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "_owner", "type": "address"}],
        "outputs": [{"name": "balance", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "pause",
        "stateMutability": "nonpayable",
        "inputs": [],
        "outputs": [],
    },
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
]

INPUT_TESTER_ABI = [
    {
        "type": "function",
        "name": "inputBool",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "flag", "type": "bool"}],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "inputUnlimitedUints",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "values", "type": "uint256[]"}],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "inputNestedStruct",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "book",
                "type": "tuple",
                "components": [
                    {"name": "title", "type": "string"},
                    {
                        "name": "meta",
                        "type": "tuple",
                        "components": [
                            {"name": "pages", "type": "uint32"},
                            {"name": "author", "type": "address"},
                        ],
                    },
                    {"name": "tags", "type": "string[]"},
                ],
            }
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "inputStructArray",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "entries",
                "type": "tuple[]",
                "components": [
                    {"name": "id", "type": "uint64"},
                    {"name": "enabled", "type": "bool"},
                ],
            }
        ],
        "outputs": [],
    },
]

CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
RECIPIENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


@pytest.fixture
def evm_network():
    return get_network("ethereum-sepolia")


@pytest.fixture
def evm_adapter(evm_network):
    return EvmAdapter(evm_network)


@pytest.fixture
def erc20_schema(evm_adapter):
    return evm_adapter.load_contract_schema(ERC20_ABI, CONTRACT_ADDRESS)


@pytest.fixture
def input_tester_schema(evm_adapter):
    return evm_adapter.load_contract_schema(INPUT_TESTER_ABI, CONTRACT_ADDRESS)
