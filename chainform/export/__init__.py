"""Code generation and project materialization for exported form apps."""

from .formatting import FormattingOptions, format_source
from .generator import AppCodeGenerator, resolve_adapter_package
from .options import DEFAULT_TEMPLATE, ExportOptions, default_project_name
from .package_manager import PackageManager, collect_field_types
from .packages import (
    ADAPTER_PACKAGE_MAP,
    ADAPTER_PACKAGES,
    CORE_RENDERER_PACKAGES,
    FIELD_TYPE_PACKAGES,
    AdapterPackage,
    NPMPackage,
    get_adapter_packages,
    get_field_packages,
)
from .processor import TemplateProcessor
from .template_manager import TemplateManager
from .writer import ProjectWriter

__all__ = [
    "ADAPTER_PACKAGE_MAP",
    "ADAPTER_PACKAGES",
    "AdapterPackage",
    "AppCodeGenerator",
    "CORE_RENDERER_PACKAGES",
    "DEFAULT_TEMPLATE",
    "ExportOptions",
    "FIELD_TYPE_PACKAGES",
    "FormattingOptions",
    "NPMPackage",
    "PackageManager",
    "ProjectWriter",
    "TemplateManager",
    "TemplateProcessor",
    "collect_field_types",
    "default_project_name",
    "format_source",
    "get_adapter_packages",
    "get_field_packages",
]
