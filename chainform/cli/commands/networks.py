"""
Networks command implementation.

Lists the built-in networks plus any declared in the workspace config.
"""

import argparse

from ..context import CLIContext


def cmd_networks(args: argparse.Namespace) -> int:
    context = CLIContext.from_args(args)
    networks = context.catalogue.list(args.ecosystem)
    if not networks:
        print(f"No networks configured for ecosystem {args.ecosystem}")
        return 0
    for network in networks:
        kind = "testnet" if network.is_testnet else "mainnet"
        print(f"{network.id:<24} {network.ecosystem:<9} {kind:<8} {network.name}")
    return 0


def add_networks_command(subparsers) -> None:
    parser = subparsers.add_parser("networks", help="List available networks")
    parser.add_argument("--ecosystem", choices=["evm", "solana", "stellar", "midnight"], help="Only list this ecosystem")
    parser.set_defaults(func=cmd_networks)
