"""Command implementations for the chainform CLI."""

from .export import add_export_command, cmd_export
from .functions import add_functions_command, cmd_functions
from .networks import add_networks_command, cmd_networks
from .schema import add_schema_command, cmd_schema

__all__ = [
    "add_export_command",
    "add_functions_command",
    "add_networks_command",
    "add_schema_command",
    "cmd_export",
    "cmd_functions",
    "cmd_networks",
    "cmd_schema",
]
