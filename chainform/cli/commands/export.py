"""
Export command implementation.

Generates a complete TypeScript app for one contract function and writes it
to a directory or a zip archive.
"""

import argparse
from pathlib import Path

from ...export import AppCodeGenerator, ExportOptions, ProjectWriter
from ...observability.logging import get_logger
from ..context import CLIContext
from ..errors import CLIError

logger = get_logger(__name__)


def cmd_export(args: argparse.Namespace) -> int:
    context = CLIContext.from_args(args)
    defaults = context.config.defaults
    network = context.resolve_network(args.network)
    adapter = context.get_adapter(network)
    contract_schema = context.load_contract(adapter, args.definition, args.address)
    form_config = context.load_form_config(adapter, contract_schema, args.function, args.form_config)

    error = adapter.validate_execution_config(form_config.execution_config) if form_config.execution_config else None
    if error:
        raise CLIError(f"Invalid execution config: {error}")

    options = ExportOptions(
        project_name=args.name,
        template=args.template or defaults.template,
        include_debug_mode=args.debug_mode or defaults.include_debug_mode,
    )
    files = AppCodeGenerator().generate_template_project(
        form_config, contract_schema, network, args.function, options
    )

    writer = ProjectWriter()
    if args.zip:
        destination = Path(args.zip)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(writer.write_zip(files))
    else:
        destination = writer.write_directory(files, Path(args.out) if args.out else defaults.output_dir)
    print(f"Exported {len(files)} files to {destination}")
    return 0


def add_export_command(subparsers) -> None:
    parser = subparsers.add_parser("export", help="Generate a standalone app for a contract function")
    parser.add_argument("definition", help="Path to the contract definition JSON")
    parser.add_argument("--network", required=True, help="Network id")
    parser.add_argument("--function", required=True, help="Function id")
    parser.add_argument("--address", help="Contract address")
    destination = parser.add_mutually_exclusive_group()
    destination.add_argument("--out", help="Output directory (must be empty or absent)")
    destination.add_argument("--zip", help="Write a zip archive instead of a directory")
    parser.add_argument("--name", help="package.json name (default: <function-id>-form)")
    parser.add_argument("--template", help="Base template name")
    parser.add_argument("--form-config", help="Edited BuilderFormConfig JSON")
    parser.add_argument("--debug-mode", action="store_true", help="Include the debug panel in the generated form")
    parser.set_defaults(func=cmd_export)
