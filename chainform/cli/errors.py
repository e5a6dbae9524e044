"""
Error formatting for the chainform CLI.

Every failure surfaces as one readable message on stderr and exit code 1.
Set ``CHAINFORM_DEBUG=1`` to include the Python traceback.
"""

from __future__ import annotations

import os
import sys
import traceback
from typing import Any, Optional

from ..errors import ChainformError

_CLI_TRACE_LIMIT = 4000

ENV_DEBUG = "CHAINFORM_DEBUG"


class CLIError(ChainformError):
    """Invalid command-line usage or unreadable input files."""

    code = "CF_CLI"


def cli_debug_enabled(flag: bool = False) -> bool:
    if flag:
        return True
    return os.getenv(ENV_DEBUG, "").strip().lower() in {"1", "true", "yes", "on"}


def format_cli_error(exc: BaseException, *, include_traceback: bool = False) -> str:
    """
    Format an exception for CLI display.

    Examples:
        >>> print(format_cli_error(CLIError("Definition file not found", hint="Check the path")))
        Error: Definition file not found (CF_CLI) Hint: Check the path
    """
    if isinstance(exc, ChainformError):
        message = f"Error: {exc.format()}"
    else:
        message = f"Error: {type(exc).__name__}: {exc}"

    if include_traceback:
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if len(trace) > _CLI_TRACE_LIMIT:
            trace = "..." + trace[-_CLI_TRACE_LIMIT:]
        message = f"{message}\n\n{trace.rstrip()}"
    return message


def handle_cli_exception(exc: BaseException, *, debug: bool = False, stream: Optional[Any] = None) -> int:
    """Print ``exc`` and return the process exit code."""
    print(format_cli_error(exc, include_traceback=cli_debug_enabled(debug)), file=stream or sys.stderr)
    return 1
