"""Application-layer use-cases, option and result objects."""

from __future__ import annotations

from code_converter.application.options import ConversionOptions
from code_converter.application.results import (
    BatchConversionReport,
    ConversionResult,
    ConversionStats,
    FileConversionResult,
    LanguageSupport,
)


def build_conversion_options(**kwargs: object) -> ConversionOptions:
    """Build typed conversion options via lazy use-case import."""
    from code_converter.application.use_cases import build_conversion_options as _impl

    return _impl(**kwargs)  # type: ignore[arg-type]


__all__ = [
    "BatchConversionReport",
    "ConversionOptions",
    "ConversionResult",
    "ConversionStats",
    "FileConversionResult",
    "LanguageSupport",
    "build_conversion_options",
]
