"""Text pre/post-processing and measurement helpers."""

from __future__ import annotations

import math
import re

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_BLANK_LINE_RUN = re.compile(r"\n\s*\n\s*\n")
_CRLF = re.compile(r"\r\n?")

BYTES_PER_TOKEN = 4


def strip_comments(source_code: str) -> str:
    """Remove ``//`` line comments and ``/* */`` block comments.

    This is a crude textual pass, not a tokenizer: comment-like sequences
    inside string literals (``"http://x"``) are removed as well.
    """
    without_line = _LINE_COMMENT.sub("", source_code)
    return _BLOCK_COMMENT.sub("", without_line)


def preprocess_code(source_code: str, preserve_comments: bool) -> str:
    """Apply pre-conversion steps selected by options."""
    if preserve_comments:
        return source_code
    return strip_comments(source_code)


def postprocess_code(converted_code: str) -> str:
    """Normalize line endings to ``\\n`` and collapse blank-line runs.

    Three or more consecutive line breaks (whitespace allowed between them)
    become exactly one blank line.
    """
    normalized = _CRLF.sub("\n", converted_code)
    return _BLANK_LINE_RUN.sub("\n\n", normalized)


def count_lines(text: str) -> int:
    """Count newline-delimited segments; ``""`` counts as one."""
    return len(text.split("\n"))


def byte_length(text: str) -> int:
    """Return the UTF-8 encoded size of ``text``."""
    return len(text.encode("utf-8"))


def estimate_tokens(source_code: str, converted_code: str) -> int:
    """Estimate token volume at four bytes per token, rounded up."""
    total = byte_length(source_code) + byte_length(converted_code)
    return math.ceil(total / BYTES_PER_TOKEN)
