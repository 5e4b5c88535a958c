"""Public synchronous conversion API (delegates to application use-cases)."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

from code_converter.application.options import ConversionOptions
from code_converter.application.results import (
    BatchConversionReport,
    ConversionResult,
    FileConversionResult,
    LanguageSupport,
)
from code_converter.application.use_cases import (
    convert_code,
    convert_directory,
    convert_file,
    list_supported_languages,
)
from code_converter.plugins.registry import ConverterRegistry


def convert_code_snippet(
    source_code: str,
    source_language: str,
    target_language: str,
    options: ConversionOptions | None = None,
    *,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
) -> ConversionResult:
    """Convert an in-memory snippet and return the conversion result."""
    return asyncio.run(
        convert_code(
            source_code=source_code,
            source_language=source_language,
            target_language=target_language,
            options=options or ConversionOptions(),
            registry=registry,
            converter_modules=converter_modules,
        )
    )


def convert_source_file(
    file_path: Path,
    target_language: str,
    output_path: Path | None = None,
    options: ConversionOptions | None = None,
    *,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
) -> FileConversionResult:
    """Convert one source file; inspect ``success`` on the result."""
    return asyncio.run(
        convert_file(
            file_path=file_path,
            target_language=target_language,
            output_path=output_path,
            options=options or ConversionOptions(),
            registry=registry,
            converter_modules=converter_modules,
        )
    )


def convert_source_directory(
    directory_path: Path,
    target_language: str,
    output_directory: Path | None = None,
    options: ConversionOptions | None = None,
    *,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
) -> BatchConversionReport:
    """Convert every candidate file under ``directory_path``."""
    return asyncio.run(
        convert_directory(
            directory_path=directory_path,
            target_language=target_language,
            output_directory=output_directory,
            options=options or ConversionOptions(),
            registry=registry,
            converter_modules=converter_modules,
        )
    )


def supported_languages(
    *,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
) -> list[LanguageSupport]:
    """List registered language pairs and their features."""
    return list_supported_languages(
        registry=registry, converter_modules=converter_modules
    )
