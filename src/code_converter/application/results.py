"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

from code_converter.types import Record


@dataclass(frozen=True)
class ConversionStats:
    """Timing and volume measurements for one or more conversions."""

    start_time: datetime
    end_time: datetime
    duration_ms: float
    source_lines: int = 0
    target_lines: int = 0
    tokens_used: int = 0

    @classmethod
    def measured(
        cls,
        start_time: datetime,
        end_time: datetime,
        *,
        source_lines: int = 0,
        target_lines: int = 0,
        tokens_used: int = 0,
    ) -> ConversionStats:
        """Build stats deriving a non-negative duration from timestamps."""
        elapsed = (end_time - start_time) / timedelta(milliseconds=1)
        return cls(
            start_time=start_time,
            end_time=end_time,
            duration_ms=max(elapsed, 0.0),
            source_lines=source_lines,
            target_lines=target_lines,
            tokens_used=tokens_used,
        )

    def to_record(self) -> Record:
        """Return a plain mapping using transport field names."""
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "duration": self.duration_ms,
            "sourceLines": self.source_lines,
            "targetLines": self.target_lines,
            "tokensUsed": self.tokens_used,
        }


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting one in-memory unit."""

    converted_code: str
    conversion_id: str
    stats: ConversionStats
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def to_record(self) -> Record:
        """Return a plain mapping using transport field names."""
        record: Record = {
            "convertedCode": self.converted_code,
            "conversionId": self.conversion_id,
            "stats": self.stats.to_record(),
        }
        if self.errors:
            record["errors"] = list(self.errors)
        if self.warnings:
            record["warnings"] = list(self.warnings)
        return record


@dataclass(frozen=True)
class FileConversionResult:
    """Outcome of converting one file; failures are captured, not raised."""

    file_path: Path
    output_path: Path | None
    success: bool
    stats: ConversionStats
    converted_code: str | None = None
    errors: tuple[str, ...] = ()

    def to_record(self) -> Record:
        """Return a plain mapping using transport field names."""
        record: Record = {
            "filePath": str(self.file_path),
            "outputPath": str(self.output_path) if self.output_path else "",
            "success": self.success,
            "stats": self.stats.to_record(),
        }
        if self.converted_code is not None:
            record["convertedCode"] = self.converted_code
        if self.errors:
            record["errors"] = list(self.errors)
        return record


@dataclass(frozen=True)
class BatchConversionReport:
    """Aggregated outcome of a directory conversion run."""

    directory_path: Path
    output_directory: Path | None
    total_files: int
    successful_conversions: int
    failed_conversions: int
    summary: ConversionStats
    results: tuple[FileConversionResult, ...] = field(default_factory=tuple)

    @property
    def failed_results(self) -> tuple[FileConversionResult, ...]:
        """Return only the failed per-file results, in discovery order."""
        return tuple(result for result in self.results if not result.success)

    def to_record(self) -> Record:
        """Return a plain mapping using transport field names."""
        return {
            "directoryPath": str(self.directory_path),
            "outputDirectory": (
                str(self.output_directory) if self.output_directory else ""
            ),
            "totalFiles": self.total_files,
            "successfulConversions": self.successful_conversions,
            "failedConversions": self.failed_conversions,
            "results": [result.to_record() for result in self.results],
            "summary": self.summary.to_record(),
        }


@dataclass(frozen=True)
class LanguageSupport:
    """One registered converter as reported to callers."""

    source_language: str
    target_language: str
    features: tuple[str, ...] = ()

    @property
    def converter(self) -> str:
        """Registry key in ``<source>-to-<target>`` form."""
        return f"{self.source_language}-to-{self.target_language}"

    def to_record(self) -> Record:
        """Return a plain mapping using transport field names."""
        return {
            "sourceLanguage": self.source_language,
            "targetLanguage": self.target_language,
            "converter": self.converter,
            "supported": True,
            "features": list(self.features),
        }
