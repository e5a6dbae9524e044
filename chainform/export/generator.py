"""
Application code generation for exported form apps.

``AppCodeGenerator`` turns an edited form configuration into a complete
TypeScript project tree: the base template files overlaid with generated
``main.tsx``, ``App.tsx`` and ``components/GeneratedForm.tsx`` plus a
rewritten ``package.json``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..adapters.base import ContractAdapter
from ..errors import AdapterResolutionError, FunctionNotFoundError
from ..forms.factory import FormSchemaFactory, resolve_form_text
from ..networks import NetworkConfig
from ..observability.logging import get_logger, log_event
from ..types import (
    BuilderFormConfig,
    ContractFunction,
    ContractSchema,
    ExecutionConfig,
    RenderFormSchema,
)
from .options import ExportOptions
from .package_manager import PackageManager
from .packages import ADAPTER_PACKAGE_MAP, AdapterPackage
from .processor import (
    APP_COMPONENT_TEMPLATE,
    FORM_COMPONENT_TEMPLATE,
    MAIN_TEMPLATE,
    TemplateProcessor,
)
from .template_manager import TemplateManager

logger = get_logger(__name__)

MAIN_PATH = "src/main.tsx"
APP_PATH = "src/App.tsx"
FORM_COMPONENT_PATH = "src/components/GeneratedForm.tsx"
PACKAGE_JSON_PATH = "package.json"


def _to_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def resolve_adapter_package(ecosystem: str) -> AdapterPackage:
    try:
        return ADAPTER_PACKAGE_MAP[ecosystem]
    except KeyError:
        raise AdapterResolutionError(ecosystem) from None


class AppCodeGenerator:
    """
    Generates exported app source files and whole project trees.

    Usage:
        generator = AppCodeGenerator()
        files = generator.generate_template_project(
            form_config, contract_schema, network_config, "transfer_address_uint256"
        )
    """

    def __init__(
        self,
        package_manager: Optional[PackageManager] = None,
        template_manager: Optional[TemplateManager] = None,
        processor: Optional[TemplateProcessor] = None,
        factory: Optional[FormSchemaFactory] = None,
    ):
        self.package_manager = package_manager or PackageManager()
        self.template_manager = template_manager or TemplateManager()
        self.processor = processor or TemplateProcessor()
        self.factory = factory or FormSchemaFactory()

    def _require_function(self, contract_schema: ContractSchema, function_id: str) -> ContractFunction:
        function = contract_schema.get_function(function_id)
        if function is None:
            raise FunctionNotFoundError(function_id)
        return function

    def build_render_schema(
        self,
        form_config: BuilderFormConfig,
        contract_schema: ContractSchema,
        function_id: str,
        *,
        adapter: Optional[ContractAdapter] = None,
    ) -> RenderFormSchema:
        """Finalize ``form_config`` with the resolved title and description."""
        function = self._require_function(contract_schema, function_id)
        title, description = resolve_form_text(function, form_config)
        return self.factory.finalize(form_config, title, description, adapter=adapter)

    def generate_form_component(
        self,
        form_config: BuilderFormConfig,
        contract_schema: ContractSchema,
        network_config: NetworkConfig,
        function_id: str,
        options: Optional[ExportOptions] = None,
    ) -> str:
        """
        Render ``GeneratedForm.tsx`` for one contract function.

        Raises:
            FunctionNotFoundError: if ``function_id`` is not in the schema
            AdapterResolutionError: if the ecosystem has no adapter package
            InvalidRenderFormSchemaError: if the finalized schema is incomplete
        """
        options = options or ExportOptions()
        adapter_package = resolve_adapter_package(network_config.ecosystem)
        render_schema = self.build_render_schema(form_config, contract_schema, function_id)
        execution_config = form_config.execution_config or ExecutionConfig()

        params = {
            "adapter_class_name": adapter_package.class_name,
            "adapter_package_name": adapter_package.package_name,
            "network_config_import_name": network_config.export_const_name,
            "function_id": function_id,
            "form_config_json": _to_json(render_schema.to_json_dict()),
            "contract_schema_json": _to_json(contract_schema.to_json_dict()),
            "execution_config_json": _to_json(execution_config.to_json_dict()),
            "include_debug_mode": options.include_debug_mode,
        }
        return self.processor.process_template(FORM_COMPONENT_TEMPLATE, params)

    def generate_main_tsx(self, network_config: NetworkConfig) -> str:
        adapter_package = resolve_adapter_package(network_config.ecosystem)
        return self.processor.process_template(
            MAIN_TEMPLATE,
            {
                "adapter_class_name": adapter_package.class_name,
                "adapter_package_name": adapter_package.package_name,
                "network_config_import_name": network_config.export_const_name,
                "network_id": network_config.id,
            },
        )

    def generate_app_component(
        self,
        ecosystem: str,
        function_id: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        title = title or function_id
        return self.processor.process_template(
            APP_COMPONENT_TEMPLATE,
            {
                "ecosystem": ecosystem,
                "function_id": function_id,
                "title": title,
                "description": description or "",
            },
        )

    def generate_template_project(
        self,
        form_config: BuilderFormConfig,
        contract_schema: ContractSchema,
        network_config: NetworkConfig,
        function_id: str,
        options: Optional[ExportOptions] = None,
    ) -> Dict[str, str]:
        """
        Build the complete project tree as POSIX path -> file text.

        Every generated file is produced before the base template is touched,
        so a failing schema never yields a partial tree.
        """
        options = options or ExportOptions()
        ecosystem = network_config.ecosystem
        function = self._require_function(contract_schema, function_id)
        title, description = resolve_form_text(function, form_config)

        generated = {
            FORM_COMPONENT_PATH: self.generate_form_component(
                form_config, contract_schema, network_config, function_id, options
            ),
            MAIN_PATH: self.generate_main_tsx(network_config),
            APP_PATH: self.generate_app_component(ecosystem, function_id, title=title, description=description),
        }

        base_files = self.template_manager.get_template_files(options.template)
        generated[PACKAGE_JSON_PATH] = self.package_manager.update_package_json(
            base_files.get(PACKAGE_JSON_PATH, "{}"),
            form_config,
            ecosystem,
            function_id,
            options,
        )
        files = self.template_manager.create_project(options.template, generated)
        files = dict(sorted(files.items()))

        log_event(
            "project.generated",
            f"Generated {len(files)} file(s) for {function_id} ({ecosystem})",
            logger=logger,
            function_id=function_id,
            ecosystem=ecosystem,
            template=options.template,
            file_count=len(files),
        )
        return files
