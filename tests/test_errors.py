"""
Tests for chainform.errors and chainform.cli.errors formatting.
"""

import io

from chainform.cli.errors import CLIError, cli_debug_enabled, format_cli_error, handle_cli_exception
from chainform.errors import (
    ChainformError,
    FunctionNotFoundError,
    InvalidRenderFormSchemaError,
    UnsupportedEcosystemError,
)


class TestChainformError:
    """Test the shared error model"""

    def test_format_with_code_and_hint(self):
        """format() appends code and hint"""
        error = ChainformError("Broken", code="CF_X", hint="Fix it")
        assert error.format() == "Broken (CF_X) Hint: Fix it"

    def test_class_level_code(self):
        """Subclasses carry a default code"""
        error = FunctionNotFoundError("transfer")
        assert error.code == "CF_FUNCTION_NOT_FOUND"
        assert "transfer" in str(error)

    def test_unsupported_ecosystem_hint(self):
        """Unsupported ecosystems list the supported ones"""
        error = UnsupportedEcosystemError("cosmos")
        assert "evm" in error.hint
        assert error.ecosystem == "cosmos"

    def test_missing_parts(self):
        """Render schema errors list what is missing"""
        error = InvalidRenderFormSchemaError(["id", "title"])
        assert error.missing == ["id", "title"]
        assert error.message == "Invalid RenderFormSchema: missing id, title"


class TestCLIErrorFormatting:
    """Test CLI error output"""

    def test_chainform_error(self):
        """Pipeline errors use their formatted text"""
        assert format_cli_error(CLIError("Bad input", hint="Try again")) == "Error: Bad input (CF_CLI) Hint: Try again"

    def test_foreign_error(self):
        """Other exceptions show their type"""
        assert format_cli_error(ValueError("nope")) == "Error: ValueError: nope"

    def test_traceback_included_in_debug(self):
        """Debug mode appends the traceback"""
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            text = format_cli_error(exc, include_traceback=True)
        assert "Traceback" in text
        assert "boom" in text

    def test_handle_returns_exit_code(self):
        """handle_cli_exception prints and returns 1"""
        stream = io.StringIO()
        assert handle_cli_exception(CLIError("Bad"), stream=stream) == 1
        assert stream.getvalue().startswith("Error: Bad")

    def test_debug_env(self, monkeypatch):
        """CHAINFORM_DEBUG enables debug output"""
        monkeypatch.setenv("CHAINFORM_DEBUG", "1")
        assert cli_debug_enabled() is True
        monkeypatch.delenv("CHAINFORM_DEBUG")
        assert cli_debug_enabled() is False
        assert cli_debug_enabled(True) is True
