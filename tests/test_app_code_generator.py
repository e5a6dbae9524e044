"""
Tests for chainform.export code generation.

Covers AppCodeGenerator, TemplateProcessor, TemplateManager and formatting.
"""

import json

import pytest

from chainform.adapters.solana.adapter import SolanaAdapter
from chainform.errors import (
    AdapterResolutionError,
    FunctionNotFoundError,
    InvalidRenderFormSchemaError,
    ProjectWriteError,
)
from chainform.export import (
    AppCodeGenerator,
    ExportOptions,
    TemplateManager,
    TemplateProcessor,
    format_source,
)
from chainform.forms import FormSchemaFactory
from chainform.networks import NetworkConfig, get_network
from chainform.types import BuilderFormConfig, ExecutionConfig

GENERATED_PATHS = ("src/main.tsx", "src/App.tsx", "src/components/GeneratedForm.tsx")


@pytest.fixture
def transfer_config(evm_adapter, erc20_schema):
    return FormSchemaFactory().build_initial_form_config(evm_adapter, erc20_schema, "transfer_address_uint256")


@pytest.fixture
def generator():
    return AppCodeGenerator()


class SpyTemplateManager(TemplateManager):
    def __init__(self):
        super().__init__()
        self.requested = []

    def get_template_files(self, template_name):
        self.requested.append(template_name)
        return super().get_template_files(template_name)


class TestGenerateTemplateProject:
    """Test whole-project generation"""

    def test_project_tree(self, generator, transfer_config, erc20_schema, evm_network):
        """Generated files are overlaid on the base template"""
        files = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )

        for path in GENERATED_PATHS + ("package.json", "index.html", "vite.config.ts", "src/index.css"):
            assert path in files
        assert "Replaced during export" not in files["src/App.tsx"]
        assert list(files) == sorted(files)

    def test_form_component(self, generator, transfer_config, erc20_schema, evm_network):
        """The form component wires the adapter, network and schemas"""
        files = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        component = files["src/components/GeneratedForm.tsx"]

        assert "import { EvmAdapter } from '@chainform/adapter-evm';" in component
        assert "import { ethereumSepolia } from '@chainform/adapter-evm/networks';" in component
        assert "new EvmAdapter(ethereumSepolia)" in component
        assert '"id": "form-transfer_address_uint256"' in component
        assert '"title": "Transfer"' in component
        assert '"method": "eoa"' in component
        assert "debugMode" not in component

    def test_main_and_app(self, generator, transfer_config, erc20_schema, evm_network):
        """main.tsx selects the network; App.tsx shows the form title"""
        files = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        assert 'initialNetworkId={ "ethereum-sepolia" }' in files["src/main.tsx"]
        assert '<h1>{ "Transfer" }</h1>' in files["src/App.tsx"]

    def test_package_json(self, generator, transfer_config, erc20_schema, evm_network):
        """The manifest is renamed and its dependencies resolved"""
        files = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        manifest = json.loads(files["package.json"])
        assert manifest["name"] == "transfer-address-uint256-form"
        assert manifest["dependencies"]["react"] == "^19.0.0"
        assert manifest["dependencies"]["@chainform/adapter-evm"] == "^0.3.0"

    def test_options(self, generator, transfer_config, erc20_schema, evm_network):
        """Project name and debug mode come from the options"""
        options = ExportOptions(project_name="token-console", include_debug_mode=True)
        files = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256", options
        )
        assert json.loads(files["package.json"])["name"] == "token-console"
        assert "      debugMode\n    />" in files["src/components/GeneratedForm.tsx"]

    def test_execution_config_embedded(self, generator, transfer_config, erc20_schema, evm_network):
        """A custom execution config is serialized into the component"""
        transfer_config.execution_config = ExecutionConfig(method="relayer", service_url="https://relay.example")
        component = generator.generate_form_component(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        assert '"method": "relayer"' in component
        assert '"serviceUrl": "https://relay.example"' in component

    def test_hardcoded_bigint_is_quoted(self, generator, transfer_config, erc20_schema, evm_network):
        """Large hardcoded integers are emitted as strings so the app does not round them"""
        transfer_config.fields[1] = transfer_config.fields[1].model_copy(
            update={"is_hardcoded": True, "hardcoded_value": 2**60 + 1}
        )
        component = generator.generate_form_component(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        lines = [line.strip() for line in component.splitlines() if "1152921504606846977" in line]
        assert lines == ['"_value": "1152921504606846977"', '"_value": "1152921504606846977"']

    def test_idempotent(self, generator, transfer_config, erc20_schema, evm_network):
        """Identical inputs produce identical trees"""
        first = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        second = AppCodeGenerator().generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        assert first == second

    def test_generated_files_are_formatted(self, generator, transfer_config, erc20_schema, evm_network):
        """Generated sources end with one newline and carry no trailing whitespace"""
        files = generator.generate_template_project(
            transfer_config, erc20_schema, evm_network, "transfer_address_uint256"
        )
        for path in GENERATED_PATHS:
            content = files[path]
            assert content.endswith("\n") and not content.endswith("\n\n")
            assert "\n\n\n" not in content
            assert all(line == line.rstrip() for line in content.split("\n"))

    def test_solana_project(self, generator):
        """Other ecosystems resolve their own adapter package"""
        idl = {
            "address": "Fg6PaFpoGXkYsidMpWTK6W2BeZ7FEfcYkg476zPFsLnS",
            "instructions": [{"name": "initialize", "args": [{"name": "amount", "type": "u64"}]}],
        }
        adapter = SolanaAdapter()
        schema = adapter.load_contract_schema(idl)
        config = FormSchemaFactory().build_initial_form_config(adapter, schema, "initialize")
        files = generator.generate_template_project(config, schema, get_network("solana-devnet"), "initialize")

        assert "import { SolanaAdapter } from '@chainform/adapter-solana';" in files["src/components/GeneratedForm.tsx"]
        assert "@solana/web3.js" in json.loads(files["package.json"])["dependencies"]


class TestGenerationFailures:
    """Test error paths"""

    def test_unknown_adapter_package(self, generator, transfer_config, erc20_schema):
        """Ecosystems without an adapter package raise AdapterResolutionError"""
        network = NetworkConfig(
            id="cosmos-hub",
            name="Cosmos Hub",
            ecosystem="cosmos",
            network="cosmos",
            export_const_name="cosmosHub",
        )
        with pytest.raises(AdapterResolutionError):
            generator.generate_template_project(transfer_config, erc20_schema, network, "transfer_address_uint256")

    def test_unknown_function(self, generator, transfer_config, erc20_schema, evm_network):
        """Unknown function ids raise FunctionNotFoundError"""
        with pytest.raises(FunctionNotFoundError):
            generator.generate_template_project(transfer_config, erc20_schema, evm_network, "does-not-exist")

    def test_invalid_schema_before_any_file(self, erc20_schema, evm_network):
        """An incomplete render schema fails before the template is loaded"""
        templates = SpyTemplateManager()
        generator = AppCodeGenerator(template_manager=templates)
        config = BuilderFormConfig(function_id="")

        with pytest.raises(InvalidRenderFormSchemaError):
            generator.generate_template_project(config, erc20_schema, evm_network, "transfer_address_uint256")
        assert templates.requested == []

    def test_unknown_template(self, generator, transfer_config, erc20_schema, evm_network):
        """Unknown base templates raise ProjectWriteError"""
        with pytest.raises(ProjectWriteError):
            generator.generate_template_project(
                transfer_config,
                erc20_schema,
                evm_network,
                "transfer_address_uint256",
                ExportOptions(template="svelte"),
            )


class TestTemplateProcessor:
    """Test Jinja2 rendering and formatting"""

    def test_render_and_format(self):
        """Rendered output is formatted"""
        processor = TemplateProcessor(sources={"greeting": "Hello {{ name }}  \r\n\n\n\nbye"})
        assert processor.process_template("greeting", {"name": "Ada"}) == "Hello Ada\n\nbye\n"

    def test_missing_parameter(self):
        """Undefined template variables are errors"""
        processor = TemplateProcessor(sources={"greeting": "Hello {{ name }}"})
        with pytest.raises(ProjectWriteError):
            processor.process_template("greeting", {})

    def test_unknown_template(self):
        """Unknown template names raise ProjectWriteError"""
        with pytest.raises(ProjectWriteError):
            TemplateProcessor().process_template("does-not-exist", {})

    def test_packaged_templates(self):
        """The bundled code templates are available"""
        processor = TemplateProcessor()
        assert "ReactDOM" in processor.get_template_source("main")
        assert "TransactionForm" in processor.get_template_source("form-component")


class TestFormatting:
    """Test format_source"""

    def test_rules(self):
        """Newlines, trailing whitespace and blank runs are normalized"""
        assert format_source("\n\na \r\nb\t\n\n\n\nc") == "a\nb\n\nc\n"

    def test_idempotent(self):
        """Formatting twice changes nothing"""
        text = "x  \n\n\n\ny\n\n"
        assert format_source(format_source(text)) == format_source(text)


class TestTemplateManager:
    """Test base template loading"""

    def test_available_templates(self):
        """The bundled template is listed"""
        assert TemplateManager().get_available_templates() == ["typescript-react-vite"]

    def test_template_files(self):
        """Template files are keyed by POSIX relative path"""
        files = TemplateManager().get_template_files("typescript-react-vite")
        assert "package.json" in files
        assert "src/components/GeneratedForm.tsx" in files
        assert json.loads(files["package.json"])["name"] == "chainform-app"

    def test_create_project_is_right_biased(self):
        """Custom files replace base files with the same path"""
        project = TemplateManager().create_project("typescript-react-vite", {"src/App.tsx": "custom", "extra.txt": "x"})
        assert project["src/App.tsx"] == "custom"
        assert project["extra.txt"] == "x"
        assert "index.html" in project

    def test_custom_root(self, tmp_path):
        """A directory of templates can replace the bundled ones"""
        (tmp_path / "minimal" / "src").mkdir(parents=True)
        (tmp_path / "minimal" / "package.json").write_text("{}", encoding="utf-8")
        (tmp_path / "minimal" / "src" / "main.tsx").write_text("//", encoding="utf-8")
        manager = TemplateManager(tmp_path)

        assert manager.get_available_templates() == ["minimal"]
        assert manager.get_template_files("minimal") == {"package.json": "{}", "src/main.tsx": "//"}
        with pytest.raises(ProjectWriteError):
            manager.get_template_files("typescript-react-vite")
