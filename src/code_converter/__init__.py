"""Top-level API for batch source-code conversion."""

from __future__ import annotations

from pathlib import Path

from code_converter.application.options import ConversionOptions
from code_converter.application.results import (
    BatchConversionReport,
    ConversionResult,
    ConversionStats,
    FileConversionResult,
)

__version__ = "0.1.0"


def convert_directory(
    directory_path: Path,
    target_language: str,
    output_directory: Path | None = None,
    options: ConversionOptions | None = None,
) -> BatchConversionReport:
    """Convert every supported source file under a directory.

    Parameters
    ----------
    directory_path : Path
        Root directory to scan.
    target_language : str
        Target language tag, e.g. ``"typescript"``.
    output_directory : Path | None, default=None
        Output root mirroring the source tree; outputs land beside the
        sources when omitted.
    options : ConversionOptions | None, default=None
        Conversion options.

    Returns
    -------
    BatchConversionReport
        Per-file results in discovery order and aggregate statistics.
    """
    from .api import convert_source_directory as _impl

    return _impl(
        directory_path=directory_path,
        target_language=target_language,
        output_directory=output_directory,
        options=options,
    )


def convert_file(
    file_path: Path,
    target_language: str,
    output_path: Path | None = None,
    options: ConversionOptions | None = None,
) -> FileConversionResult:
    """Convert one source file.

    Parameters
    ----------
    file_path : Path
        Source file.
    target_language : str
        Target language tag.
    output_path : Path | None, default=None
        Destination path. Defaults to the source path with the target
        language's extension.
    options : ConversionOptions | None, default=None
        Conversion options.

    Returns
    -------
    FileConversionResult
        Outcome; failures are reported through ``success`` and ``errors``.
    """
    from .api import convert_source_file as _impl

    return _impl(
        file_path=file_path,
        target_language=target_language,
        output_path=output_path,
        options=options,
    )


def convert_code(
    source_code: str,
    source_language: str,
    target_language: str,
    options: ConversionOptions | None = None,
) -> ConversionResult:
    """Convert an in-memory code snippet."""
    from .api import convert_code_snippet as _impl

    return _impl(
        source_code=source_code,
        source_language=source_language,
        target_language=target_language,
        options=options,
    )


__all__ = [
    "BatchConversionReport",
    "ConversionOptions",
    "ConversionResult",
    "ConversionStats",
    "FileConversionResult",
    "convert_code",
    "convert_directory",
    "convert_file",
]
