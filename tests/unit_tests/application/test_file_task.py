"""Unit tests for single-file conversion and failure capture."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from code_converter.application.file_task import FileConversionTask
from code_converter.application.options import ConversionOptions
from code_converter.application.unit_converter import UnitConverter
from code_converter.plugins.registry import ConverterRegistry


class _UpperConverter:
    """Converter test double upper-casing its input."""

    async def convert(self, source_code: str, options: ConversionOptions) -> str:
        del options
        return source_code.upper()

    def supported_features(self) -> list[str]:
        return []


class _FailingConverter:
    async def convert(self, source_code: str, options: ConversionOptions) -> str:
        raise RuntimeError("boom")

    def supported_features(self) -> list[str]:
        return []


def _task(converter: object | None = None, target: str = "typescript") -> FileConversionTask:
    registry = ConverterRegistry()
    registry.register("csharp", target, converter or _UpperConverter())  # type: ignore[arg-type]
    return FileConversionTask(UnitConverter(registry))


def test_missing_file_is_captured(tmp_path: Path) -> None:
    """Return a failed result instead of raising when the file is absent."""
    missing = tmp_path / "missing.cs"
    result = asyncio.run(_task().convert_file(missing, "typescript"))

    assert result.success is False
    assert result.errors == (f"File not found: {missing}",)
    assert result.converted_code is None
    assert result.output_path is None
    assert (result.stats.source_lines, result.stats.tokens_used) == (0, 0)
    assert result.stats.start_time <= result.stats.end_time


def test_oversized_file_is_captured(tmp_path: Path) -> None:
    """Reject files larger than max_unit_size_bytes before reading them."""
    source = tmp_path / "big.cs"
    source.write_text("0123456789", encoding="utf-8")
    result = asyncio.run(
        _task().convert_file(
            source, "typescript", options=ConversionOptions(max_unit_size_bytes=5)
        )
    )
    assert result.success is False
    assert result.errors == (f"File too large: {source} (10 bytes)",)


def test_unsupported_extension_is_captured(tmp_path: Path) -> None:
    """Report unknown extensions as a failed result."""
    source = tmp_path / "notes.txt"
    source.write_text("hello", encoding="utf-8")
    result = asyncio.run(_task().convert_file(source, "typescript"))
    assert result.success is False
    assert result.errors == ("Unsupported file extension: .txt",)


def test_converter_failure_is_captured(tmp_path: Path) -> None:
    """Capture converter exceptions verbatim without writing output."""
    source = tmp_path / "a.cs"
    source.write_text("class A {}", encoding="utf-8")
    result = asyncio.run(_task(_FailingConverter()).convert_file(source, "typescript"))
    assert result.success is False
    assert result.errors == ("Conversion failed: boom",)
    assert not (tmp_path / "a.ts").exists()


def test_empty_file_is_captured(tmp_path: Path) -> None:
    """Report empty source files as failed conversions."""
    source = tmp_path / "empty.cs"
    source.write_text("  \n", encoding="utf-8")
    result = asyncio.run(_task().convert_file(source, "typescript"))
    assert result.success is False
    assert result.errors == ("Source code cannot be empty",)


def test_default_output_path_is_derived(tmp_path: Path) -> None:
    """Write beside the source with the target language's extension."""
    source = tmp_path / "models" / "User.cs"
    source.parent.mkdir()
    source.write_text("class user {}\n", encoding="utf-8")

    result = asyncio.run(_task().convert_file(source, "typescript"))

    expected = tmp_path / "models" / "User.ts"
    assert result.success is True
    assert result.output_path == expected
    assert result.converted_code == "CLASS USER {}\n"
    assert expected.read_text(encoding="utf-8") == "CLASS USER {}\n"
    assert result.stats.source_lines == 2
    assert result.stats.target_lines == 2
    assert result.stats.tokens_used == 7


def test_explicit_output_path_creates_parents_and_overwrites(tmp_path: Path) -> None:
    """Prefer the caller's path, create ancestors and replace existing files."""
    source = tmp_path / "a.cs"
    source.write_text("x", encoding="utf-8")
    destination = tmp_path / "out" / "deep" / "result.txt"
    destination.parent.mkdir(parents=True)
    destination.write_text("stale", encoding="utf-8")

    result = asyncio.run(_task().convert_file(source, "typescript", destination))

    assert result.output_path == destination
    assert destination.read_text(encoding="utf-8") == "X"
    assert sorted(p.name for p in destination.parent.iterdir()) == ["result.txt"]


@pytest.mark.parametrize(
    ("fallback", "expected_name"), [(".ts", "a.ts"), (".kt", "a.kt")]
)
def test_unknown_target_language_uses_fallback(
    tmp_path: Path, fallback: str, expected_name: str
) -> None:
    """Derive output extensions for unknown targets from fallback_extension."""
    source = tmp_path / "a.cs"
    source.write_text("x", encoding="utf-8")
    result = asyncio.run(
        _task(target="kotlin").convert_file(
            source, "kotlin", options=ConversionOptions(fallback_extension=fallback)
        )
    )
    assert result.output_path == tmp_path / expected_name


def test_undecodable_source_is_captured(tmp_path: Path) -> None:
    """Return a failed result with zeroed stats when the file is not UTF-8."""
    source = tmp_path / "binary.cs"
    source.write_bytes(b"\xff\xfe")

    result = asyncio.run(_task().convert_file(source, "typescript"))

    assert result.success is False
    assert result.converted_code is None
    assert len(result.errors) == 1
    assert "utf-8" in result.errors[0]
    assert (
        result.stats.source_lines,
        result.stats.target_lines,
        result.stats.tokens_used,
    ) == (0, 0, 0)
    assert not (tmp_path / "binary.ts").exists()


def test_unwritable_destination_is_captured(tmp_path: Path) -> None:
    """Return a failed result when the output parent is a regular file."""
    source = tmp_path / "a.cs"
    source.write_text("class A {}", encoding="utf-8")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    output = blocker / "a.ts"

    result = asyncio.run(_task().convert_file(source, "typescript", output))

    assert result.success is False
    assert result.output_path == output
    assert len(result.errors) == 1
    assert blocker.read_text(encoding="utf-8") == "not a directory"
