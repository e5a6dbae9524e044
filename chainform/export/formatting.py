"""Deterministic text cleanup applied to generated source files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


@dataclass
class FormattingOptions:
    """Configuration options for generated-source cleanup."""

    trim_trailing_whitespace: bool = True
    insert_final_newline: bool = True
    max_empty_lines: int = 1


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def trim_trailing_whitespace(text: str) -> str:
    return "\n".join(line.rstrip() for line in text.split("\n"))


def collapse_blank_lines(text: str, max_empty_lines: int = 1) -> str:
    """Limit runs of empty lines to ``max_empty_lines``."""
    limit = max(max_empty_lines, 0)
    return re.sub(r"\n{%d,}" % (limit + 2), "\n" * (limit + 1), text)


def format_source(text: str, options: Optional[FormattingOptions] = None) -> str:
    """
    Normalize generated text.

    Newlines become ``\\n``, trailing whitespace is removed, blank-line runs are
    collapsed and the text ends with exactly one newline. Leading blank lines
    are dropped. Applying it twice yields the same result.
    """
    options = options or FormattingOptions()
    result = normalize_newlines(text)
    if options.trim_trailing_whitespace:
        result = trim_trailing_whitespace(result)
    result = collapse_blank_lines(result, options.max_empty_lines).lstrip("\n")
    if options.insert_final_newline:
        result = result.rstrip("\n") + "\n"
    return result
