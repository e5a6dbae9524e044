"""Shared state for CLI commands: workspace config, networks and adapters."""

from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..adapters import AdapterRegistry, ContractAdapter, create_default_registry
from ..config import WorkspaceConfig, load_workspace_config
from ..forms import FormSchemaFactory
from ..networks import NetworkCatalogue, NetworkConfig
from ..types import BuilderFormConfig, ContractSchema
from .errors import CLIError


def read_json_file(path: Path, what: str) -> Any:
    if not path.is_file():
        raise CLIError(f"{what} not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CLIError(f"{what} is not valid JSON: {path} ({exc.msg})") from exc


@dataclass
class CLIContext:
    config: WorkspaceConfig
    catalogue: NetworkCatalogue
    registry: AdapterRegistry

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIContext":
        root = Path(getattr(args, "root", None) or Path.cwd())
        explicit = Path(args.config) if getattr(args, "config", None) else None
        config = load_workspace_config(root, explicit)
        return cls(
            config=config,
            catalogue=config.network_catalogue(),
            registry=create_default_registry(rpc_timeout=config.defaults.rpc_timeout),
        )

    def resolve_network(self, network_id: str) -> NetworkConfig:
        try:
            return self.catalogue.get(network_id)
        except KeyError:
            raise CLIError(
                f"Unknown network: {network_id}",
                hint="Run 'chainform networks' to list available networks",
            ) from None

    def get_adapter(self, network: NetworkConfig) -> ContractAdapter:
        return asyncio.run(self.registry.get_adapter(network))

    def load_contract(
        self,
        adapter: ContractAdapter,
        definition: str,
        address: Optional[str] = None,
    ) -> ContractSchema:
        path = Path(definition)
        if not path.is_file():
            raise CLIError(f"Contract definition not found: {path}")
        return adapter.load_contract_schema(path.read_text(encoding="utf-8"), address or "")

    def load_form_config(
        self,
        adapter: ContractAdapter,
        contract_schema: ContractSchema,
        function_id: str,
        form_config_path: Optional[str] = None,
    ) -> BuilderFormConfig:
        """Edited form config from ``form_config_path``, else the derived initial one."""
        if form_config_path:
            data = read_json_file(Path(form_config_path), "Form config")
            form_config = BuilderFormConfig.model_validate(data)
            if form_config.function_id != function_id:
                raise CLIError(
                    f"Form config targets {form_config.function_id}, not {function_id}",
                )
            return form_config
        return FormSchemaFactory().build_initial_form_config(adapter, contract_schema, function_id)
