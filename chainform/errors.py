"""Unified error model for chainform."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ChainformError(Exception):
    """Base class for all pipeline errors surfaced to callers."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint
        self.context = context or {}

    def format(self) -> str:
        components = [self.message]
        if self.code:
            components[-1] = f"{components[-1]} ({self.code})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class UnsupportedEcosystemError(ChainformError):
    """Raised when the adapter registry cannot resolve a network's ecosystem."""

    code = "CF_UNSUPPORTED_ECOSYSTEM"

    def __init__(self, ecosystem: str, **kwargs: Any) -> None:
        kwargs.setdefault("hint", "Supported ecosystems: evm, solana, stellar, midnight")
        super().__init__(f"Unsupported ecosystem: {ecosystem}", **kwargs)
        self.ecosystem = ecosystem


class FunctionNotFoundError(ChainformError):
    """Raised when a function id is absent from a contract schema."""

    code = "CF_FUNCTION_NOT_FOUND"

    def __init__(self, function_id: str, **kwargs: Any) -> None:
        super().__init__(f"Function {function_id} not found in contract schema", **kwargs)
        self.function_id = function_id


class InvalidRenderFormSchemaError(ChainformError):
    """Raised when a finalized form schema is structurally incomplete."""

    code = "CF_INVALID_RENDER_SCHEMA"

    def __init__(self, missing: Optional[list] = None, detail: Optional[str] = None, **kwargs: Any) -> None:
        self.missing = list(missing or [])
        message = "Invalid RenderFormSchema"
        if self.missing:
            message += f": missing {', '.join(self.missing)}"
        if detail:
            message += f" ({detail})"
        super().__init__(message, **kwargs)


class EncodingError(ChainformError):
    """Raised when final field values cannot be encoded into a native call payload."""

    code = "CF_ENCODING_ERROR"


class AdapterResolutionError(ChainformError):
    """Raised when no adapter package identity exists for an ecosystem at generation time."""

    code = "CF_ADAPTER_RESOLUTION"

    def __init__(self, ecosystem: str, **kwargs: Any) -> None:
        super().__init__(f"No adapter package found for ecosystem: {ecosystem}", **kwargs)
        self.ecosystem = ecosystem


class ViewQueryUnsupportedError(ChainformError):
    """Raised when an adapter does not implement read-only function queries."""

    code = "CF_VIEW_QUERY_UNSUPPORTED"

    def __init__(self, ecosystem: str, **kwargs: Any) -> None:
        super().__init__(f"View function queries are not supported for ecosystem: {ecosystem}", **kwargs)
        self.ecosystem = ecosystem


class ContractDefinitionError(ChainformError):
    """Raised when an ecosystem-specific contract definition cannot be parsed."""

    code = "CF_CONTRACT_DEFINITION"


class ConfigurationError(ChainformError):
    """Raised when workspace configuration is invalid."""

    code = "CF_CONFIG_ERROR"


class ProjectWriteError(ChainformError):
    """Raised when a generated project cannot be written to its destination."""

    code = "CF_PROJECT_WRITE"


__all__ = [
    "ChainformError",
    "UnsupportedEcosystemError",
    "FunctionNotFoundError",
    "InvalidRenderFormSchemaError",
    "EncodingError",
    "AdapterResolutionError",
    "ViewQueryUnsupportedError",
    "ContractDefinitionError",
    "ConfigurationError",
    "ProjectWriteError",
]
