"""
Shared type definitions for the chainform pipeline.

These pydantic models are the plain, serializable values exchanged between the
adapters, the schema derivation engine, the code generator and any external
collaborator (editor UI, persistence, packaging).
"""

from .base import CamelModel
from .contracts import (
    ContractEvent,
    ContractFunction,
    ContractSchema,
    Ecosystem,
    FunctionParameter,
)
from .execution import ExecutionConfig, ExecutionMethod
from .forms import (
    BuilderFormConfig,
    FieldTransforms,
    FieldType,
    FieldValidation,
    FormFieldConfig,
    FormLayout,
    FormValidationConfig,
    RenderFormSchema,
    SubmitButtonConfig,
)

__all__ = [
    "CamelModel",
    "ContractEvent",
    "ContractFunction",
    "ContractSchema",
    "Ecosystem",
    "FunctionParameter",
    "ExecutionConfig",
    "ExecutionMethod",
    "BuilderFormConfig",
    "FieldTransforms",
    "FieldType",
    "FieldValidation",
    "FormFieldConfig",
    "FormLayout",
    "FormValidationConfig",
    "RenderFormSchema",
    "SubmitButtonConfig",
]
