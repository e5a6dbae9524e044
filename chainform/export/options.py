"""Export options shared by the generator and package manager."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_TEMPLATE = "typescript-react-vite"

_NON_SLUG = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class ExportOptions:
    """User-selectable knobs for project generation."""

    project_name: Optional[str] = None
    template: str = DEFAULT_TEMPLATE
    include_debug_mode: bool = False


def default_project_name(function_id: str) -> str:
    """Deterministic npm-safe name: ``transfer_address_uint256`` -> ``transfer-address-uint256-form``."""
    slug = _NON_SLUG.sub("-", function_id.lower()).strip("-")
    return f"{slug}-form" if slug else "contract-form"
