"""Form configuration and render schema models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import ConfigDict, Field

from .base import CamelModel
from .execution import ExecutionConfig


class FieldType(str, Enum):
    """Canonical, UI-facing field kinds every native parameter type maps into."""

    TEXT = "text"
    NUMBER = "number"
    BIGINT = "bigint"
    ADDRESS = "blockchain-address"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    SELECT_GROUPED = "select-grouped"
    TEXTAREA = "textarea"
    BYTES = "bytes"
    CODE_EDITOR = "code-editor"
    DATE = "date"
    EMAIL = "email"
    PASSWORD = "password"
    AMOUNT = "amount"
    ARRAY = "array"
    OBJECT = "object"
    ARRAY_OBJECT = "array-object"
    URL = "url"
    HIDDEN = "hidden"

    @property
    def is_array(self) -> bool:
        return self in (FieldType.ARRAY, FieldType.ARRAY_OBJECT)


class FieldTransforms:
    """Bidirectional value converters for one field.

    ``input`` turns a native (on-chain) value into its editable form and
    ``output`` turns an editable value back into the native representation.
    Both are pure and never raise.
    """

    __slots__ = ("input", "output")

    def __init__(self, input: Callable[[Any], Any], output: Callable[[Any], Any]) -> None:
        self.input = input
        self.output = output

    def __repr__(self) -> str:
        return f"FieldTransforms(input={self.input!r}, output={self.output!r})"


class FieldValidation(CamelModel):
    required: Optional[bool] = None
    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None


class FormFieldConfig(CamelModel):
    """Editable description of one (possibly nested) form field."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=False)

    id: str
    name: str
    label: str
    type: FieldType
    placeholder: str = ""
    helper_text: str = ""
    validation: FieldValidation = Field(default_factory=FieldValidation)
    width: str = "full"
    is_hidden: bool = False
    is_hardcoded: bool = False
    hardcoded_value: Any = None
    readonly: bool = False
    original_parameter_type: Optional[str] = None
    components: Optional[List[FormFieldConfig]] = None
    element_type: Optional[FieldType] = None
    element_field_config: Optional[FormFieldConfig] = None
    transforms: Optional[FieldTransforms] = Field(default=None, exclude=True)

    @property
    def is_visible(self) -> bool:
        return not (self.is_hidden or self.is_hardcoded)


class FormLayout(CamelModel):
    columns: int = 1
    spacing: str = "normal"
    label_position: str = "top"


class FormValidationConfig(CamelModel):
    mode: str = "onChange"
    show_errors: str = "inline"


class SubmitButtonConfig(CamelModel):
    text: str = "Submit"
    loading_text: str = "Processing..."
    variant: str = "primary"


class BuilderFormConfig(CamelModel):
    """Editable form configuration produced by stage 1 and mutated by the editor."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_id: str
    contract_address: str = ""
    fields: List[FormFieldConfig] = Field(default_factory=list)
    layout: FormLayout = Field(default_factory=FormLayout)
    validation: FormValidationConfig = Field(default_factory=FormValidationConfig)
    theme: Dict[str, Any] = Field(default_factory=dict)
    title: Optional[str] = None
    description: Optional[str] = None
    execution_config: Optional[ExecutionConfig] = None


class RenderFormSchema(CamelModel):
    """Finalized, immutable form description consumed by preview and code generation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    title: str
    description: str = ""
    fields: List[FormFieldConfig]
    layout: FormLayout
    validation: FormValidationConfig
    submit_button: SubmitButtonConfig
    contract_address: str = ""
    function_id: str
    default_values: Dict[str, Any] = Field(default_factory=dict)
    hardcoded_values: Dict[str, Any] = Field(default_factory=dict)
    theme: Dict[str, Any] = Field(default_factory=dict)


FormFieldConfig.model_rebuild()
