"""
Tests for chainform.forms.factory.

Covers initial form derivation, finalization and the combined pipeline.
"""

import pytest
from pydantic import ValidationError

from chainform.errors import FunctionNotFoundError, InvalidRenderFormSchemaError
from chainform.forms import (
    FormSchemaFactory,
    default_description,
    find_missing_render_schema_parts,
    resolve_form_text,
)
from chainform.types import FieldType

from .conftest import CONTRACT_ADDRESS, RECIPIENT


@pytest.fixture
def factory():
    return FormSchemaFactory()


class TestBuildInitialFormConfig:
    """Test stage one: contract function to editable form config"""

    def test_transfer_fields(self, factory, evm_adapter, erc20_schema):
        """transfer(address,uint256) yields an address and a bigint field"""
        config = factory.build_initial_form_config(evm_adapter, erc20_schema, "transfer_address_uint256")

        assert config.function_id == "transfer_address_uint256"
        assert config.contract_address == CONTRACT_ADDRESS
        assert [field.id for field in config.fields] == ["field-_to", "field-_value"]
        assert [field.name for field in config.fields] == ["_to", "_value"]
        assert [field.type for field in config.fields] == [FieldType.ADDRESS, FieldType.BIGINT]
        assert config.fields[0].label == "To"
        assert config.fields[0].placeholder == "Enter To"
        assert config.fields[1].original_parameter_type == "uint256"

    def test_unknown_function(self, factory, evm_adapter, erc20_schema):
        """Unknown function ids raise FunctionNotFoundError"""
        with pytest.raises(FunctionNotFoundError) as excinfo:
            factory.build_initial_form_config(evm_adapter, erc20_schema, "does-not-exist")
        assert excinfo.value.function_id == "does-not-exist"

    def test_fields_align_with_inputs(self, factory, evm_adapter, erc20_schema):
        """One top-level field per input, in declaration order"""
        for function in erc20_schema.functions:
            config = factory.build_initial_form_config(evm_adapter, erc20_schema, function.id)
            assert [field.name for field in config.fields] == [parameter.name for parameter in function.inputs]

    def test_nested_struct(self, factory, evm_adapter, input_tester_schema):
        """Tuple members become nested component fields"""
        config = factory.build_initial_form_config(evm_adapter, input_tester_schema, "inputNestedStruct_tuple")
        book = config.fields[0]

        assert book.type == FieldType.OBJECT
        assert [component.name for component in book.components] == ["title", "meta", "tags"]
        meta = book.components[1]
        assert meta.type == FieldType.OBJECT
        assert [component.id for component in meta.components] == ["field-book.meta.pages", "field-book.meta.author"]
        assert meta.components[0].type == FieldType.NUMBER

        tags = book.components[2]
        assert tags.type == FieldType.ARRAY
        assert tags.element_type == FieldType.TEXT
        assert tags.element_field_config.id == "field-book.tags.item"

    def test_struct_array(self, factory, evm_adapter, input_tester_schema):
        """tuple[] produces an array of objects with component fields"""
        config = factory.build_initial_form_config(evm_adapter, input_tester_schema, "inputStructArray_tuple[]")
        entries = config.fields[0]

        assert entries.type == FieldType.ARRAY_OBJECT
        element = entries.element_field_config
        assert element.type == FieldType.OBJECT
        assert [(c.name, c.type) for c in element.components] == [
            ("id", FieldType.BIGINT),
            ("enabled", FieldType.CHECKBOX),
        ]


class TestFinalize:
    """Test stage two: form config to render schema"""

    def test_generate_form_schema(self, factory, evm_adapter, erc20_schema):
        """The combined pipeline produces a complete render schema"""
        schema = factory.generate_form_schema(evm_adapter, erc20_schema, "transfer_address_uint256")

        assert schema.id == "form-transfer_address_uint256"
        assert schema.title == "Transfer"
        assert schema.description == "Form for interacting with the Transfer function."
        assert schema.submit_button.text == "Execute Transaction"
        assert schema.default_values == {"_to": "", "_value": ""}
        assert schema.contract_address == CONTRACT_ADDRESS
        assert all(field.transforms is not None for field in schema.fields)

    def test_address_transform_uses_adapter(self, factory, evm_adapter, erc20_schema):
        """Attached address transforms validate through the adapter"""
        schema = factory.generate_form_schema(evm_adapter, erc20_schema, "transfer_address_uint256")
        address_field = schema.fields[0]
        assert address_field.transforms.output(RECIPIENT) == RECIPIENT
        assert address_field.transforms.output("0x1234") == ""

    def test_zero_parameter_function(self, factory, evm_adapter, erc20_schema):
        """Functions without inputs still finalize"""
        schema = factory.generate_form_schema(evm_adapter, erc20_schema, "pause")
        assert schema.fields == []
        assert schema.default_values == {}
        assert schema.id == "form-pause"

    def test_hardcoded_fields_are_hidden(self, factory, evm_adapter, erc20_schema):
        """Hardcoded fields leave the field list but keep their value"""
        config = factory.build_initial_form_config(evm_adapter, erc20_schema, "transfer_address_uint256")
        config.fields[0] = config.fields[0].model_copy(update={"is_hardcoded": True, "hardcoded_value": RECIPIENT})

        schema = factory.finalize(config, "Transfer", adapter=evm_adapter)
        assert [field.name for field in schema.fields] == ["_value"]
        assert schema.hardcoded_values == {"_to": RECIPIENT}
        assert schema.default_values["_to"] == RECIPIENT

    def test_hardcoded_bigint_keeps_precision(self, factory, evm_adapter, erc20_schema):
        """Hardcoded bigint values are carried as exact decimal strings"""
        config = factory.build_initial_form_config(evm_adapter, erc20_schema, "transfer_address_uint256")
        config.fields[1] = config.fields[1].model_copy(update={"is_hardcoded": True, "hardcoded_value": 2**60 + 1})

        schema = factory.finalize(config, "Transfer", adapter=evm_adapter)
        assert schema.hardcoded_values == {"_value": "1152921504606846977"}
        assert schema.default_values["_value"] == "1152921504606846977"

        transaction = evm_adapter.format_transaction_data(
            erc20_schema, "transfer_address_uint256", {"_to": RECIPIENT}, config.fields
        )
        assert transaction.args[1] == 2**60 + 1

    def test_unsafe_integers_in_other_fields(self, evm_adapter, input_tester_schema):
        """Integers beyond JavaScript's safe range become strings; small ones stay numbers"""
        factory = FormSchemaFactory()
        config = factory.build_initial_form_config(evm_adapter, input_tester_schema, "inputNestedStruct_tuple")
        book = {"title": "Dune", "meta": {"pages": 412, "author": RECIPIENT}, "tags": [2**60]}
        config.fields[0] = config.fields[0].model_copy(update={"is_hardcoded": True, "hardcoded_value": book})

        schema = factory.finalize(config, "Book", adapter=evm_adapter)
        assert schema.hardcoded_values["book"] == {
            "title": "Dune",
            "meta": {"pages": 412, "author": RECIPIENT},
            "tags": ["1152921504606846976"],
        }

    def test_nested_defaults(self, factory, evm_adapter, input_tester_schema):
        """Defaults recurse into objects; arrays start empty"""
        schema = factory.generate_form_schema(evm_adapter, input_tester_schema, "inputNestedStruct_tuple")
        assert schema.default_values == {"book": {"title": "", "meta": {"pages": "", "author": ""}, "tags": []}}
        bool_schema = factory.generate_form_schema(evm_adapter, input_tester_schema, "inputBool_bool")
        assert bool_schema.default_values == {"flag": False}

    def test_missing_title_is_rejected(self, factory, evm_adapter, erc20_schema):
        """An empty title fails validation"""
        config = factory.build_initial_form_config(evm_adapter, erc20_schema, "transfer_address_uint256")
        with pytest.raises(InvalidRenderFormSchemaError) as excinfo:
            factory.finalize(config, "")
        assert excinfo.value.missing == ["title"]

    def test_missing_parts_are_listed(self):
        """Every absent part is reported"""
        assert find_missing_render_schema_parts({}) == [
            "id",
            "title",
            "fields",
            "layout",
            "validation",
            "submitButton",
        ]

    def test_render_schema_is_frozen(self, factory, evm_adapter, erc20_schema):
        """Render schemas cannot be mutated"""
        schema = factory.generate_form_schema(evm_adapter, erc20_schema, "transfer_address_uint256")
        with pytest.raises(ValidationError):
            schema.title = "Changed"

    def test_json_dump_uses_camel_case(self, factory, evm_adapter, erc20_schema):
        """Serialized schemas use camelCase and omit transforms"""
        data = factory.generate_form_schema(evm_adapter, erc20_schema, "transfer_address_uint256").to_json_dict()
        assert data["submitButton"]["loadingText"] == "Processing..."
        assert data["defaultValues"] == {"_to": "", "_value": ""}
        assert "transforms" not in data["fields"][0]
        assert data["fields"][0]["type"] == "blockchain-address"


class TestFormText:
    """Test title and description resolution"""

    def test_user_overrides_win(self, evm_adapter, erc20_schema):
        """Titles from the form config replace the function name"""
        function = erc20_schema.get_function("transfer_address_uint256")
        config = FormSchemaFactory().build_initial_form_config(evm_adapter, erc20_schema, function.id)
        config.title = "Send tokens"

        title, description = resolve_form_text(function, config)
        assert title == "Send tokens"
        assert description == default_description("Send tokens")

    def test_function_metadata(self, erc20_schema):
        """Without overrides the display name is used"""
        function = erc20_schema.get_function("balanceOf_address")
        assert resolve_form_text(function) == ("Balance Of", "Form for interacting with the Balance Of function.")
