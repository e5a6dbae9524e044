"""Jinja2 rendering of the TypeScript code templates."""

from __future__ import annotations

from importlib import resources
from typing import Any, Dict, Mapping, Optional

from jinja2 import BaseLoader, Environment, StrictUndefined, Template, TemplateError

from ..errors import ProjectWriteError
from .formatting import FormattingOptions, format_source

CODE_TEMPLATE_SUFFIX = ".tsx.j2"

FORM_COMPONENT_TEMPLATE = "form-component"
MAIN_TEMPLATE = "main"
APP_COMPONENT_TEMPLATE = "app-component"


def _read_packaged_template(name: str) -> str:
    node = resources.files("chainform.export").joinpath("code_templates", f"{name}{CODE_TEMPLATE_SUFFIX}")
    if not node.is_file():
        raise ProjectWriteError(f"Code template not found: {name}")
    return node.read_text(encoding="utf-8")


class TemplateProcessor:
    """
    Renders named code templates with parameters and formats the output.

    Templates are loaded from ``chainform/export/code_templates`` unless a
    ``sources`` mapping (name -> template text) is given.
    """

    def __init__(
        self,
        sources: Optional[Mapping[str, str]] = None,
        formatting: Optional[FormattingOptions] = None,
    ):
        self.jinja_env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.sources = dict(sources) if sources is not None else None
        self.formatting = formatting or FormattingOptions()
        self._compiled: Dict[str, Template] = {}

    def get_template_source(self, name: str) -> str:
        if self.sources is not None:
            if name not in self.sources:
                raise ProjectWriteError(f"Code template not found: {name}")
            return self.sources[name]
        return _read_packaged_template(name)

    def _template(self, name: str) -> Template:
        if name not in self._compiled:
            try:
                self._compiled[name] = self.jinja_env.from_string(self.get_template_source(name))
            except TemplateError as exc:
                raise ProjectWriteError(f"Code template {name} failed to compile: {exc}") from exc
        return self._compiled[name]

    def render(self, name: str, params: Mapping[str, Any]) -> str:
        try:
            return self._template(name).render(**params)
        except TemplateError as exc:
            raise ProjectWriteError(
                f"Failed to render code template {name}: {exc}",
                context={"template": name},
            ) from exc

    def process_template(self, name: str, params: Mapping[str, Any]) -> str:
        """Render ``name`` with ``params`` and format the result."""
        return self.format_code(self.render(name, params))

    def format_code(self, code: str) -> str:
        return format_source(code, self.formatting)
