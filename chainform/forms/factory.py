"""Two-stage form schema derivation.

Stage 1 (:meth:`FormSchemaFactory.build_initial_form_config`) turns a contract
function into an editable :class:`BuilderFormConfig`. Stage 2
(:meth:`FormSchemaFactory.finalize`) attaches transforms, computes defaults and
produces the immutable :class:`RenderFormSchema`.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..adapters.base import ContractAdapter, humanize_name
from ..errors import FunctionNotFoundError
from ..observability.logging import get_logger
from ..types import (
    BuilderFormConfig,
    ContractFunction,
    ContractSchema,
    FieldType,
    FieldValidation,
    FormFieldConfig,
    FormLayout,
    FormValidationConfig,
    FunctionParameter,
    RenderFormSchema,
    SubmitButtonConfig,
)
from .defaults import default_values_for_fields, portable_value
from .transforms import create_transform_for_field_type
from .validation import validate_render_schema

logger = get_logger(__name__)

SUBMIT_TEXT = "Execute Transaction"
SUBMIT_LOADING_TEXT = "Processing..."


def default_description(title: str) -> str:
    return f"Form for interacting with the {title} function."


def resolve_form_text(
    function: ContractFunction,
    form_config: Optional[BuilderFormConfig] = None,
) -> Tuple[str, str]:
    """Title and description: user overrides, then function metadata, then generated text."""
    title = (form_config.title if form_config else None) or function.display_name or function.name
    description = (form_config.description if form_config else None) or function.description
    return title, description or default_description(title)


class FormSchemaFactory:
    """Derives form configurations from contract functions."""

    def build_initial_form_config(
        self,
        adapter: ContractAdapter,
        contract_schema: ContractSchema,
        function_id: str,
    ) -> BuilderFormConfig:
        function = contract_schema.get_function(function_id)
        if function is None:
            raise FunctionNotFoundError(function_id)

        fields = [self._build_field(adapter, parameter, parameter.name) for parameter in function.inputs]
        logger.debug("Built %d field(s) for %s", len(fields), function.id)
        return BuilderFormConfig(
            function_id=function.id,
            contract_address=contract_schema.address,
            fields=fields,
            layout=FormLayout(),
            validation=FormValidationConfig(),
            theme={},
        )

    def _build_field(self, adapter: ContractAdapter, parameter: FunctionParameter, path: str) -> FormFieldConfig:
        field_type = adapter.map_parameter_type_to_field_type(parameter.type)
        label = parameter.display_name or humanize_name(parameter.name)

        components = None
        element_config = None
        if field_type == FieldType.OBJECT:
            components = [
                self._build_field(adapter, component, f"{path}.{component.name}")
                for component in parameter.components or []
            ]
        elif field_type.is_array:
            element_parameter = adapter.get_array_element_parameter(parameter)
            if element_parameter is not None:
                element_config = self._build_field(adapter, element_parameter, f"{path}.item")

        return FormFieldConfig(
            id=f"field-{path}",
            name=parameter.name,
            label=label,
            type=field_type,
            placeholder=f"Enter {label}",
            helper_text=parameter.description or "",
            validation=FieldValidation(),
            original_parameter_type=parameter.type,
            components=components,
            element_type=element_config.type if element_config is not None else None,
            element_field_config=element_config,
        )

    def finalize(
        self,
        form_config: BuilderFormConfig,
        title: str,
        description: str = "",
        *,
        adapter: Optional[ContractAdapter] = None,
    ) -> RenderFormSchema:
        """Project an edited form configuration into a render schema.

        Hidden and hardcoded fields are dropped from ``fields`` but keep their
        values in ``default_values``/``hardcoded_values``. Hardcoded integers that
        JavaScript cannot hold exactly are carried as decimal strings.

        Raises:
            InvalidRenderFormSchemaError: if the result would be incomplete
        """
        fields = [self._attach_transforms(field, adapter) for field in form_config.fields]
        candidate = {
            "id": f"form-{form_config.function_id}" if form_config.function_id else "",
            "title": title,
            "description": description or "",
            "fields": [field for field in fields if field.is_visible],
            "layout": form_config.layout,
            "validation": form_config.validation,
            "submit_button": SubmitButtonConfig(text=SUBMIT_TEXT, loading_text=SUBMIT_LOADING_TEXT),
            "contract_address": form_config.contract_address,
            "function_id": form_config.function_id,
            "default_values": default_values_for_fields(fields),
            "hardcoded_values": {field.name: field.hardcoded_value for field in fields if field.is_hardcoded},
            "theme": dict(form_config.theme),
        }
        validate_render_schema(candidate)
        return RenderFormSchema(**candidate)

    def _attach_transforms(self, field: FormFieldConfig, adapter: Optional[ContractAdapter]) -> FormFieldConfig:
        update = {}
        if field.components is not None:
            update["components"] = [self._attach_transforms(component, adapter) for component in field.components]
        if field.element_field_config is not None:
            update["element_field_config"] = self._attach_transforms(field.element_field_config, adapter)
        if field.hardcoded_value is not None:
            update["hardcoded_value"] = portable_value(field, field.hardcoded_value)
        attached = field.model_copy(update=update)
        attached.transforms = create_transform_for_field_type(attached.type, adapter, attached)
        return attached

    def generate_form_schema(
        self,
        adapter: ContractAdapter,
        contract_schema: ContractSchema,
        function_id: str,
    ) -> RenderFormSchema:
        form_config = self.build_initial_form_config(adapter, contract_schema, function_id)
        function = contract_schema.get_function(function_id)
        title, description = resolve_form_text(function)
        return self.finalize(form_config, title, description, adapter=adapter)
