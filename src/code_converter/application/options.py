"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from code_converter.languages import DEFAULT_FALLBACK_EXTENSION

DEFAULT_BATCH_SIZE = 10
DEFAULT_MAX_UNIT_SIZE_BYTES = 1024 * 1024


@dataclass(frozen=True)
class ConversionOptions:
    """Conversion options passed through use-cases and to converters.

    Parameters
    ----------
    preserve_comments : bool, default=True
        Strip ``//`` and ``/* */`` comments before conversion when ``False``.
    include_types : bool, default=True
        Hint for converters; not interpreted by the orchestrator.
    target_framework : str | None, default=None
        Passed through to converters without validation.
    batch_size : int, default=10
        Files converted concurrently per batch. Values below 1 select the
        scheduler default.
    max_unit_size_bytes : int, default=1 MiB
        Units larger than this are rejected before conversion.
    source_language : str | None, default=None
        Restrict directory discovery to one language's extensions.
    fallback_extension : str, default=".ts"
        Output extension used when the target language is not in the table.
    max_tokens : int, default=4000
        Converter hint.
    temperature : float, default=0.1
        Converter hint.
    """

    preserve_comments: bool = True
    include_types: bool = True
    target_framework: str | None = None
    batch_size: int = DEFAULT_BATCH_SIZE
    max_unit_size_bytes: int = DEFAULT_MAX_UNIT_SIZE_BYTES
    source_language: str | None = None
    fallback_extension: str = DEFAULT_FALLBACK_EXTENSION
    max_tokens: int = 4000
    temperature: float = 0.1
