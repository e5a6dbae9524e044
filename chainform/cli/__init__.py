"""
chainform CLI entry point.

Dispatches subcommands to the modules in :mod:`chainform.cli.commands`.
"""

import argparse
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..config import load_workspace_config
from ..observability.logging import configure_logging
from .commands import (
    add_export_command,
    add_functions_command,
    add_networks_command,
    add_schema_command,
)
from .errors import handle_cli_exception


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chainform",
        description="Generate transaction forms and standalone apps from smart contract definitions",
    )
    parser.add_argument("--version", action="version", version=f"chainform {__version__}")
    parser.add_argument("--root", help="Workspace root (default: current directory)")
    parser.add_argument("--config", help="Path to chainform.toml or .chainformrc")
    parser.add_argument("--log-level", help="Logging level (overrides config and CHAINFORM_LOG_LEVEL)")
    parser.add_argument("--debug", action="store_true", help="Show tracebacks on errors")

    subparsers = parser.add_subparsers(dest="command", required=True)
    add_networks_command(subparsers)
    add_functions_command(subparsers)
    add_schema_command(subparsers)
    add_export_command(subparsers)
    return parser


def _configure_runtime_logging(args: argparse.Namespace) -> None:
    level = args.log_level
    if not level:
        root = Path(args.root or Path.cwd())
        level = load_workspace_config(root, Path(args.config) if args.config else None).defaults.log_level
    configure_logging(level)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        _configure_runtime_logging(args)
        return args.func(args)
    except Exception as exc:
        return handle_cli_exception(exc, debug=args.debug)


__all__ = ["build_parser", "main"]
