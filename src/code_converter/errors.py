"""Exception taxonomy for code conversion."""

from __future__ import annotations

from pathlib import Path


class ConversionError(Exception):
    """Base class for conversion failures.

    Attributes
    ----------
    code : str
        Stable error kind used in reports and logs.
    exit_code : int
        Process exit code used by the CLI.
    """

    code = "ConversionError"
    exit_code = 1


class PluginError(ConversionError):
    """Raised when converter registration or module loading fails."""

    code = "PluginError"


class EmptySourceError(ConversionError):
    """Raised when a unit has no non-whitespace source text."""

    code = "EmptySource"

    def __init__(self) -> None:
        super().__init__("Source code cannot be empty")


class NoConverterError(ConversionError):
    """Raised when no converter is registered for a language pair."""

    code = "NoConverter"

    def __init__(self, source_language: str, target_language: str) -> None:
        self.source_language = source_language
        self.target_language = target_language
        super().__init__(
            f"No converter found for {source_language} to {target_language}"
        )


class ConversionFailedError(ConversionError):
    """Raised when the converter itself fails; the cause is kept."""

    code = "ConversionFailed"

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Conversion failed: {cause}")


class SourceNotFoundError(ConversionError):
    """Raised when a source file does not exist."""

    code = "NotFound"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class FileTooLargeError(ConversionError):
    """Raised when a source file exceeds the configured size limit."""

    code = "TooLarge"

    def __init__(self, path: Path, size: int) -> None:
        self.path = path
        self.size = size
        super().__init__(f"File too large: {path} ({size} bytes)")


class UnitTooLargeError(ConversionError):
    """Raised when in-memory source text exceeds the configured size limit."""

    code = "TooLarge"

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Source too large: {size} bytes (limit {limit})")


class UnsupportedExtensionError(ConversionError):
    """Raised when a file extension maps to no known language."""

    code = "UnsupportedExtension"

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file extension: {extension or '<none>'}")


class DirectoryNotFoundError(ConversionError):
    """Raised when the batch root directory does not exist."""

    code = "DirectoryNotFound"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory not found: {path}")


class NoFilesFoundError(ConversionError):
    """Raised when discovery yields no candidate files."""

    code = "NoFilesFound"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No source files found in directory: {path}")
