"""
Dependency resolution and ``package.json`` rewriting for exported apps.

Strategy:
--------
1. Collect the field kinds used anywhere in the form (recursively)
2. Resolve packages from core -> field kinds -> ecosystem adapter
3. Merge into the template's ``package.json``; resolved versions win
4. Emit deterministic output (sorted dependency maps, 2-space JSON)
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..errors import AdapterResolutionError, ProjectWriteError
from ..observability.logging import get_logger, log_event
from ..types import BuilderFormConfig, FieldType, FormFieldConfig
from .options import ExportOptions, default_project_name
from .packages import (
    ADAPTER_PACKAGES,
    CORE_RENDERER_PACKAGES,
    FIELD_TYPE_PACKAGES,
    NPMPackage,
)

logger = get_logger(__name__)


def collect_field_types(fields: Iterable[FormFieldConfig]) -> Set[FieldType]:
    found: Set[FieldType] = set()
    for field in fields:
        found.add(field.type)
        if field.components:
            found |= collect_field_types(field.components)
        if field.element_field_config is not None:
            found |= collect_field_types([field.element_field_config])
    return found


class PackageManager:
    """
    Resolves npm dependencies for an exported form app.

    Usage:
        manager = PackageManager()
        content = manager.update_package_json(template_json, form_config, "evm", "transfer_address_uint256")
    """

    def __init__(
        self,
        core_packages: Optional[List[NPMPackage]] = None,
        field_packages: Optional[Dict[FieldType, List[NPMPackage]]] = None,
        adapter_packages: Optional[Dict[str, List[NPMPackage]]] = None,
    ):
        self.core_packages = list(CORE_RENDERER_PACKAGES if core_packages is None else core_packages)
        self.field_packages = dict(FIELD_TYPE_PACKAGES if field_packages is None else field_packages)
        self.adapter_packages = dict(ADAPTER_PACKAGES if adapter_packages is None else adapter_packages)

    def _ordered_sources(self, form_config: BuilderFormConfig, ecosystem: str) -> List[Tuple[str, List[NPMPackage]]]:
        if ecosystem not in self.adapter_packages:
            raise AdapterResolutionError(ecosystem)
        field_types = sorted(collect_field_types(form_config.fields), key=lambda kind: kind.value)
        field_packages: List[NPMPackage] = []
        for kind in field_types:
            field_packages.extend(self.field_packages.get(kind, []))
        return [
            ("core", self.core_packages),
            ("field", field_packages),
            ("adapter", self.adapter_packages[ecosystem]),
        ]

    def _resolve(self, form_config: BuilderFormConfig, ecosystem: str, dev: bool) -> Dict[str, str]:
        resolved: Dict[str, str] = {}
        origin: Dict[str, str] = {}
        for source, packages in self._ordered_sources(form_config, ecosystem):
            for package in packages:
                if package.dev != dev:
                    continue
                name, version = package.to_package_json_entry()
                previous = resolved.get(name)
                if previous is not None and previous != version:
                    log_event(
                        "dependency.conflict",
                        f"{name}: {origin[name]} requires {previous}, {source} requires {version}; using {version}",
                        logger=logger,
                        level=logging.WARNING,
                        package=name,
                        previous=previous,
                        selected=version,
                    )
                resolved[name] = version
                origin[name] = source
        return dict(sorted(resolved.items()))

    def get_dependencies(self, form_config: BuilderFormConfig, ecosystem: str) -> Dict[str, str]:
        return self._resolve(form_config, ecosystem, dev=False)

    def get_dev_dependencies(self, form_config: BuilderFormConfig, ecosystem: str) -> Dict[str, str]:
        return self._resolve(form_config, ecosystem, dev=True)

    def update_package_json(
        self,
        original_content: str,
        form_config: BuilderFormConfig,
        ecosystem: str,
        function_id: str,
        options: Optional[ExportOptions] = None,
    ) -> str:
        """Return the rewritten ``package.json`` text."""
        options = options or ExportOptions()
        try:
            package_json = json.loads(original_content)
        except json.JSONDecodeError as exc:
            raise ProjectWriteError(f"Template package.json is not valid JSON: {exc.msg}") from exc

        dependencies = dict(package_json.get("dependencies") or {})
        dev_dependencies = dict(package_json.get("devDependencies") or {})
        dependencies.update(self.get_dependencies(form_config, ecosystem))
        dev_dependencies.update(self.get_dev_dependencies(form_config, ecosystem))
        for name in dependencies:
            dev_dependencies.pop(name, None)

        package_json["name"] = options.project_name or default_project_name(function_id)
        package_json["dependencies"] = dict(sorted(dependencies.items()))
        package_json["devDependencies"] = dict(sorted(dev_dependencies.items()))
        return json.dumps(package_json, indent=2) + "\n"
