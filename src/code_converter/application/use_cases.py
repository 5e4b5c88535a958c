"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from code_converter.application.batch import BatchScheduler
from code_converter.application.file_task import FileConversionTask
from code_converter.application.options import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_UNIT_SIZE_BYTES,
    ConversionOptions,
)
from code_converter.application.results import (
    BatchConversionReport,
    ConversionResult,
    FileConversionResult,
    LanguageSupport,
)
from code_converter.application.unit_converter import ConversionUnit, UnitConverter
from code_converter.errors import ConversionError
from code_converter.languages import DEFAULT_FALLBACK_EXTENSION
from code_converter.plugins.registry import ConverterRegistry, create_default_registry
from code_converter.schemas import (
    ConversionOptionsConfig,
    DirectoryConversionConfig,
    FileConversionConfig,
)


def build_conversion_options(
    *,
    preserve_comments: bool = True,
    include_types: bool = True,
    target_framework: str | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_unit_size_bytes: int = DEFAULT_MAX_UNIT_SIZE_BYTES,
    source_language: str | None = None,
    fallback_extension: str = DEFAULT_FALLBACK_EXTENSION,
    max_tokens: int = 4000,
    temperature: float = 0.1,
) -> ConversionOptions:
    """Build typed option object from command/API params."""
    try:
        config = ConversionOptionsConfig(
            preserve_comments=preserve_comments,
            include_types=include_types,
            target_framework=target_framework,
            batch_size=batch_size,
            max_unit_size_bytes=max_unit_size_bytes,
            source_language=source_language,
            fallback_extension=fallback_extension,
            max_tokens=max_tokens,
            temperature=temperature,
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid conversion options: {exc}") from exc
    return ConversionOptions(**config.model_dump())


def _registry_or_default(
    registry: ConverterRegistry | None,
    converter_modules: Iterable[str] | None,
    logger: logging.Logger | None,
) -> ConverterRegistry:
    if registry is None:
        return create_default_registry(extra_modules=converter_modules, logger=logger)
    for module in converter_modules or []:
        registry.load_module(module)
    return registry


async def convert_code(
    *,
    source_code: str,
    source_language: str,
    target_language: str,
    options: ConversionOptions,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
    logger: logging.Logger | None = None,
) -> ConversionResult:
    """Use-case: convert an in-memory code snippet."""
    unit_converter = UnitConverter(
        _registry_or_default(registry, converter_modules, logger), logger=logger
    )
    return await unit_converter.convert(
        ConversionUnit(
            source_code=source_code,
            source_language=source_language,
            target_language=target_language,
            options=options,
        )
    )


async def convert_file(
    *,
    file_path: Path,
    target_language: str,
    options: ConversionOptions,
    output_path: Path | None = None,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
    logger: logging.Logger | None = None,
) -> FileConversionResult:
    """Use-case: convert one file; failures are returned, not raised."""
    try:
        config = FileConversionConfig(
            file_path=file_path,
            target_language=target_language,
            output_path=output_path,
        )
    except ValidationError as exc:
        raise ConversionError(f"Invalid file conversion parameters: {exc}") from exc

    unit_converter = UnitConverter(
        _registry_or_default(registry, converter_modules, logger), logger=logger
    )
    task = FileConversionTask(unit_converter, logger=logger)
    return await task.convert_file(
        config.file_path,
        config.target_language,
        config.output_path,
        options,
    )


async def convert_directory(
    *,
    directory_path: Path,
    target_language: str,
    options: ConversionOptions,
    output_directory: Path | None = None,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
    logger: logging.Logger | None = None,
) -> BatchConversionReport:
    """Use-case: convert every candidate file under a directory."""
    try:
        config = DirectoryConversionConfig(
            directory_path=directory_path,
            target_language=target_language,
            output_directory=output_directory,
        )
    except ValidationError as exc:
        raise ConversionError(
            f"Invalid directory conversion parameters: {exc}"
        ) from exc

    unit_converter = UnitConverter(
        _registry_or_default(registry, converter_modules, logger), logger=logger
    )
    scheduler = BatchScheduler(
        FileConversionTask(unit_converter, logger=logger), logger=logger
    )
    return await scheduler.convert_directory(
        config.directory_path,
        config.target_language,
        config.output_directory,
        options,
    )


def list_supported_languages(
    *,
    registry: ConverterRegistry | None = None,
    converter_modules: Iterable[str] | None = None,
    logger: logging.Logger | None = None,
) -> list[LanguageSupport]:
    """Use-case: describe registered converters."""
    return _registry_or_default(registry, converter_modules, logger).list_supported()
