"""
Tests for chainform.config workspace loading.
"""

import json

import pytest

from chainform.config import WorkspaceDefaults, load_workspace_config, locate_config_file
from chainform.errors import ConfigurationError

LOCAL_NETWORK_TOML = """
[defaults]
template = "typescript-react-vite"
output_dir = "dist/forms"
include_debug_mode = true
log_level = "info"
rpc_timeout = 2.5

[[networks]]
id = "anvil"
name = "Anvil"
ecosystem = "evm"
network = "ethereum"
type = "devnet"
export_const_name = "anvil"
chain_id = 31337
rpc_url = "http://127.0.0.1:8545"

[networks.native_currency]
name = "Ether"
symbol = "ETH"
decimals = 18
"""


class TestLoadWorkspaceConfig:
    """Test load_workspace_config"""

    def test_defaults_without_file(self, tmp_path):
        """A workspace without a config file gets defaults"""
        config = load_workspace_config(tmp_path, environ={})

        assert config.source is None
        assert config.defaults.template == WorkspaceDefaults.template
        assert config.defaults.output_dir == (tmp_path / "build").resolve()
        assert config.defaults.log_level == "WARNING"
        assert config.network_catalogue().get("ethereum-sepolia").chain_id == 11155111

    def test_toml(self, tmp_path):
        """chainform.toml values and extra networks are loaded"""
        (tmp_path / "chainform.toml").write_text(LOCAL_NETWORK_TOML, encoding="utf-8")
        config = load_workspace_config(tmp_path, environ={})

        assert config.source == tmp_path.resolve() / "chainform.toml"
        assert config.defaults.output_dir == (tmp_path / "dist" / "forms").resolve()
        assert config.defaults.include_debug_mode is True
        assert config.defaults.log_level == "INFO"
        assert config.defaults.rpc_timeout == 2.5
        anvil = config.network_catalogue().get("anvil")
        assert anvil.chain_id == 31337
        assert anvil.native_currency.symbol == "ETH"

    def test_json_rc(self, tmp_path):
        """.chainformrc is read as JSON"""
        (tmp_path / ".chainformrc").write_text(json.dumps({"defaults": {"log_level": "debug"}}), encoding="utf-8")
        config = load_workspace_config(tmp_path, environ={})
        assert config.defaults.log_level == "DEBUG"

    def test_toml_takes_precedence(self, tmp_path):
        """chainform.toml wins over .chainformrc"""
        (tmp_path / "chainform.toml").write_text('[defaults]\nlog_level = "error"\n', encoding="utf-8")
        (tmp_path / ".chainformrc").write_text('{"defaults": {"log_level": "debug"}}', encoding="utf-8")
        assert locate_config_file(tmp_path) == tmp_path / "chainform.toml"
        assert load_workspace_config(tmp_path, environ={}).defaults.log_level == "ERROR"

    def test_environment_overrides(self, tmp_path):
        """Environment variables override file values"""
        (tmp_path / "chainform.toml").write_text(LOCAL_NETWORK_TOML, encoding="utf-8")
        config = load_workspace_config(
            tmp_path,
            environ={"CHAINFORM_LOG_LEVEL": "debug", "CHAINFORM_OUTPUT_DIR": "out"},
        )
        assert config.defaults.log_level == "DEBUG"
        assert config.defaults.output_dir == (tmp_path / "out").resolve()

    def test_explicit_file(self, tmp_path):
        """An explicit config path is used instead of discovery"""
        path = tmp_path / "custom.json"
        path.write_text('{"defaults": {"template": "custom"}}', encoding="utf-8")
        assert load_workspace_config(tmp_path, path, environ={}).defaults.template == "custom"

    def test_missing_explicit_file(self, tmp_path):
        """A missing explicit config file is an error"""
        with pytest.raises(ConfigurationError):
            load_workspace_config(tmp_path, tmp_path / "missing.toml", environ={})


class TestInvalidConfig:
    """Test configuration errors"""

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("chainform.toml", "[defaults\n"),
            (".chainformrc", "{not json"),
            (".chainformrc", "[1, 2]"),
            ("chainform.toml", "defaults = 3\n"),
            ("chainform.toml", "[defaults]\nrpc_timeout = \"soon\"\n"),
            ("chainform.toml", "[defaults]\nrpc_timeout = 0\n"),
            ("chainform.toml", "networks = 1\n"),
            ("chainform.toml", "[[networks]]\nid = \"x\"\necosystem = \"cosmos\"\n"),
            ("chainform.toml", "[[networks]]\nid = \"x\"\necosystem = \"evm\"\n"),
        ],
    )
    def test_raises_configuration_error(self, tmp_path, filename, content):
        """Malformed files raise ConfigurationError"""
        (tmp_path / filename).write_text(content, encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_workspace_config(tmp_path, environ={})
