"""
Functions command implementation.

Loads a contract definition with the network's adapter and lists the
functions a form can be generated for.
"""

import argparse

from ..context import CLIContext


def cmd_functions(args: argparse.Namespace) -> int:
    context = CLIContext.from_args(args)
    network = context.resolve_network(args.network)
    adapter = context.get_adapter(network)
    schema = context.load_contract(adapter, args.definition, args.address)

    functions = schema.functions if args.all else adapter.get_writable_functions(schema)
    for function in functions:
        kind = "view" if adapter.is_view_function(function) else "write"
        params = ", ".join(f"{parameter.type} {parameter.name}" for parameter in function.inputs)
        print(f"{function.id:<40} {kind:<5} {function.name}({params})")
    return 0


def add_functions_command(subparsers) -> None:
    parser = subparsers.add_parser("functions", help="List the functions in a contract definition")
    parser.add_argument("definition", help="Path to the ABI, IDL, function spec or artifacts JSON")
    parser.add_argument("--network", required=True, help="Network id (see 'chainform networks')")
    parser.add_argument("--address", help="Contract address")
    parser.add_argument("--all", action="store_true", help="Include read-only functions")
    parser.set_defaults(func=cmd_functions)
