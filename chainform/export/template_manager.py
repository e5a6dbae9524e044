"""Base project templates shipped with chainform.

A template is an opaque file tree under ``chainform/export/templates/<name>/``.
Generated files are overlaid onto it with a right-biased union.
"""

from __future__ import annotations

from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from ..errors import ProjectWriteError

TemplateRoot = Union[Path, Traversable]


def _default_root() -> Traversable:
    return resources.files("chainform.export").joinpath("templates")


def _collect(node: TemplateRoot, prefix: str, files: Dict[str, str]) -> None:
    for child in sorted(node.iterdir(), key=lambda item: item.name):
        relative = f"{prefix}{child.name}"
        if child.is_dir():
            _collect(child, f"{relative}/", files)
        elif child.name != "__init__.py":
            files[relative] = child.read_text(encoding="utf-8")


class TemplateManager:
    """Lists and loads base template trees."""

    def __init__(self, root: Optional[TemplateRoot] = None):
        self.root = root if root is not None else _default_root()
        self._cache: Dict[str, Dict[str, str]] = {}

    def get_available_templates(self) -> List[str]:
        return sorted(child.name for child in self.root.iterdir() if child.is_dir() and not child.name.startswith("_"))

    def get_template_files(self, template_name: str) -> Dict[str, str]:
        """POSIX relative path -> file text for every file in the template."""
        if template_name not in self._cache:
            if template_name not in self.get_available_templates():
                raise ProjectWriteError(
                    f"Template not found: {template_name}",
                    hint=f"Available templates: {', '.join(self.get_available_templates())}",
                )
            files: Dict[str, str] = {}
            _collect(self.root.joinpath(template_name), "", files)
            self._cache[template_name] = files
        return dict(self._cache[template_name])

    def create_project(self, template_name: str, custom_files: Mapping[str, str]) -> Dict[str, str]:
        """Base tree overlaid with ``custom_files``; custom entries replace base ones."""
        return {**self.get_template_files(template_name), **custom_files}
