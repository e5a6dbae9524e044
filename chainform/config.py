"""Workspace configuration support for the chainform CLI."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import ChainformError, ConfigurationError
from .networks import NetworkCatalogue, NetworkConfig, parse_network_config

CONFIG_FILE_CANDIDATES = ("chainform.toml", ".chainformrc")

ENV_LOG_LEVEL = "CHAINFORM_LOG_LEVEL"
ENV_OUTPUT_DIR = "CHAINFORM_OUTPUT_DIR"


@dataclass
class WorkspaceDefaults:
    """Defaults applied to generated projects when not given on the command line."""

    template: str = "typescript-react-vite"
    output_dir: Path = Path("build")
    include_debug_mode: bool = False
    log_level: str = "WARNING"
    rpc_timeout: float = 10.0


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    defaults: WorkspaceDefaults
    networks: List[NetworkConfig] = field(default_factory=list)
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def network_catalogue(self) -> NetworkCatalogue:
        """Built-in networks plus those declared in the workspace (which win on id clashes)."""
        catalogue = NetworkCatalogue()
        for network in self.networks:
            catalogue.register(network)
        return catalogue


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {path.name}: {exc.msg}", context={"path": str(path)}) from exc


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        try:
            return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {path.name}: {exc}", context={"path": str(path)}) from exc


def _parse_defaults(data: Mapping[str, Any], root: Path) -> WorkspaceDefaults:
    section = data.get("defaults") or {}
    if not isinstance(section, Mapping):
        raise ConfigurationError("[defaults] must be a table")

    output_dir = Path(section.get("output_dir") or WorkspaceDefaults.output_dir)
    if not output_dir.is_absolute():
        output_dir = (root / output_dir).resolve()
    template = str(section.get("template") or WorkspaceDefaults.template)
    include_debug_mode = bool(section.get("include_debug_mode", WorkspaceDefaults.include_debug_mode))
    log_level = str(section.get("log_level") or WorkspaceDefaults.log_level).upper()
    try:
        rpc_timeout = float(section.get("rpc_timeout", WorkspaceDefaults.rpc_timeout))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"rpc_timeout must be a number, got {section.get('rpc_timeout')!r}") from exc
    if rpc_timeout <= 0:
        raise ConfigurationError("rpc_timeout must be positive")

    return WorkspaceDefaults(
        template=template,
        output_dir=output_dir,
        include_debug_mode=include_debug_mode,
        log_level=log_level,
        rpc_timeout=rpc_timeout,
    )


def _parse_networks(data: Mapping[str, Any]) -> List[NetworkConfig]:
    section = data.get("networks") or []
    if not isinstance(section, list):
        raise ConfigurationError("networks must be an array of tables")
    networks: List[NetworkConfig] = []
    for raw in section:
        if not isinstance(raw, Mapping):
            raise ConfigurationError("each network entry must be a table")
        try:
            networks.append(parse_network_config(raw))
        except ConfigurationError:
            raise
        except ChainformError as exc:
            raise ConfigurationError(exc.message, context={"network": raw.get("id")}) from exc
    return networks


def _apply_env_overrides(defaults: WorkspaceDefaults, root: Path, environ: Mapping[str, str]) -> WorkspaceDefaults:
    log_level = environ.get(ENV_LOG_LEVEL)
    if log_level:
        defaults.log_level = log_level.upper()
    output_dir = environ.get(ENV_OUTPUT_DIR)
    if output_dir:
        path = Path(output_dir)
        defaults.output_dir = path if path.is_absolute() else (root / path).resolve()
    return defaults


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigurationError(f"Config file not found: {explicit}")
        return explicit
    for candidate in CONFIG_FILE_CANDIDATES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_workspace_config(
    root: Path,
    explicit: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> WorkspaceConfig:
    """Load ``chainform.toml`` (or the JSON ``.chainformrc``) from ``root``.

    Environment variables override file values. A missing file yields defaults.
    """
    root = root.resolve()
    env = os.environ if environ is None else environ
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        defaults = _apply_env_overrides(_parse_defaults({}, root), root, env)
        return WorkspaceConfig(root=root, defaults=defaults)

    if config_path.suffix == ".toml":
        data = _read_toml_config(config_path)
    else:
        data = _read_json_config(config_path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path.name} must contain a table/object at the top level")

    defaults = _apply_env_overrides(_parse_defaults(data, root), root, env)
    networks = _parse_networks(data)

    return WorkspaceConfig(
        root=root,
        defaults=defaults,
        networks=networks,
        source=config_path,
        raw=data,
    )


__all__ = [
    "CONFIG_FILE_CANDIDATES",
    "ENV_LOG_LEVEL",
    "ENV_OUTPUT_DIR",
    "WorkspaceConfig",
    "WorkspaceDefaults",
    "load_workspace_config",
    "locate_config_file",
]
