"""
Schema command implementation.

Prints the finalized render form schema for one function as JSON.
"""

import argparse
import json

from ...export import AppCodeGenerator
from ..context import CLIContext


def cmd_schema(args: argparse.Namespace) -> int:
    context = CLIContext.from_args(args)
    network = context.resolve_network(args.network)
    adapter = context.get_adapter(network)
    contract_schema = context.load_contract(adapter, args.definition, args.address)
    form_config = context.load_form_config(adapter, contract_schema, args.function, args.form_config)

    render_schema = AppCodeGenerator().build_render_schema(
        form_config, contract_schema, args.function, adapter=adapter
    )
    print(json.dumps(render_schema.to_json_dict(), indent=2))
    return 0


def add_schema_command(subparsers) -> None:
    parser = subparsers.add_parser("schema", help="Print the render form schema for a function")
    parser.add_argument("definition", help="Path to the contract definition JSON")
    parser.add_argument("--network", required=True, help="Network id")
    parser.add_argument("--function", required=True, help="Function id (see 'chainform functions')")
    parser.add_argument("--address", help="Contract address")
    parser.add_argument("--form-config", help="Edited BuilderFormConfig JSON to finalize")
    parser.set_defaults(func=cmd_schema)
