"""Unit tests for batch partitioning, scheduling and report aggregation."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from code_converter.application.batch import BatchScheduler, partition
from code_converter.application.file_task import FileConversionTask
from code_converter.application.options import ConversionOptions
from code_converter.application.unit_converter import UnitConverter
from code_converter.errors import DirectoryNotFoundError, NoFilesFoundError
from code_converter.plugins.registry import ConverterRegistry


class _EchoConverter:
    async def convert(self, source_code: str, options: ConversionOptions) -> str:
        del options
        return source_code

    def supported_features(self) -> list[str]:
        return []


class _TracingConverter:
    """Converter test double recording start/end events with a delay."""

    def __init__(self, delay: float = 0.02) -> None:
        self.delay = delay
        self.events: list[tuple[str, str]] = []
        self.active = 0
        self.peak = 0

    async def convert(self, source_code: str, options: ConversionOptions) -> str:
        del options
        name = source_code.strip()
        self.events.append(("start", name))
        self.active += 1
        self.peak = max(self.peak, self.active)
        # Later files finish first so completion order differs from discovery.
        await asyncio.sleep(self.delay * (10 - int(name[1:])))
        self.active -= 1
        self.events.append(("end", name))
        return f"// {name}\n"

    def supported_features(self) -> list[str]:
        return ["tracing"]


def _scheduler(converter: object) -> BatchScheduler:
    registry = ConverterRegistry()
    registry.register("csharp", "typescript", converter)  # type: ignore[arg-type]
    return BatchScheduler(FileConversionTask(UnitConverter(registry)))


def _five_files(
    root: Path, write_tree: Callable[..., list[Path]]
) -> list[Path]:
    return write_tree(root, {f"f{index}.cs": f"f{index}\n" for index in range(1, 6)})


def test_partition_sizes() -> None:
    """Split five items into 2, 2 and 1."""
    assert partition([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert partition([], 3) == []
    with pytest.raises(ValueError, match=">= 1"):
        partition([1], 0)


def test_scheduler_rejects_invalid_default() -> None:
    """Refuse a default batch size below one."""
    with pytest.raises(ValueError, match="default_batch_size"):
        BatchScheduler(FileConversionTask(UnitConverter(ConverterRegistry())), 0)


@pytest.mark.parametrize(("configured", "expected"), [(3, 3), (0, 10), (-4, 10)])
def test_effective_batch_size(configured: int, expected: int) -> None:
    """Fall back to the scheduler default for non-positive batch sizes."""
    scheduler = _scheduler(_TracingConverter())
    assert scheduler.effective_batch_size(ConversionOptions(batch_size=configured)) == expected


def test_batches_run_sequentially_and_concurrently_within(
    tmp_path: Path, write_tree: Callable[..., list[Path]]
) -> None:
    """Start batch two only after both tasks of batch one have settled."""
    _five_files(tmp_path, write_tree)
    converter = _TracingConverter()
    report = asyncio.run(
        _scheduler(converter).convert_directory(
            tmp_path, "typescript", tmp_path / "out", ConversionOptions(batch_size=2)
        )
    )

    events = converter.events
    assert converter.peak == 2
    assert {name for kind, name in events[:2]} == {"f1", "f2"}
    assert all(kind == "start" for kind, _ in events[:2])
    first_batch_done = max(events.index(("end", "f1")), events.index(("end", "f2")))
    assert events.index(("start", "f3")) > first_batch_done
    assert events.index(("start", "f4")) > first_batch_done
    second_batch_done = max(events.index(("end", "f3")), events.index(("end", "f4")))
    assert events.index(("start", "f5")) > second_batch_done
    assert events.index(("end", "f2")) < events.index(("end", "f1"))
    assert [r.file_path.name for r in report.results] == [
        "f1.cs",
        "f2.cs",
        "f3.cs",
        "f4.cs",
        "f5.cs",
    ]


def test_report_counts_and_sums(
    tmp_path: Path, write_tree: Callable[..., list[Path]]
) -> None:
    """Keep count and sum invariants across successes and failures."""
    write_tree(
        tmp_path,
        {
            "a.cs": "a\nb\n",
            "b.cs": "   ",
            "nested/c.cs": "c",
            "d.py": "print()",
        },
    )
    report = asyncio.run(
        _scheduler(_EchoConverter()).convert_directory(
            tmp_path, "typescript", tmp_path / "out", ConversionOptions()
        )
    )

    assert report.total_files == len(report.results) == 4
    assert report.successful_conversions + report.failed_conversions == 4
    assert [r.success for r in report.results] == [True, False, False, True]
    assert report.results[1].errors == ("Source code cannot be empty",)
    assert report.results[2].errors == ("No converter found for python to typescript",)
    assert report.summary.source_lines == sum(
        r.stats.source_lines for r in report.results
    )
    assert report.summary.target_lines == sum(
        r.stats.target_lines for r in report.results
    )
    assert report.summary.tokens_used == sum(r.stats.tokens_used for r in report.results)


def test_output_directory_mirrors_tree(
    tmp_path: Path, write_tree: Callable[..., list[Path]]
) -> None:
    """Place outputs under the output root at the source's relative path."""
    root = tmp_path / "src"
    write_tree(root, {"f1.cs": "f1", "pkg/f2.cs": "f2"})
    out = tmp_path / "out"
    report = asyncio.run(
        _scheduler(_TracingConverter(delay=0)).convert_directory(
            root, "typescript", out, ConversionOptions()
        )
    )
    assert [r.output_path for r in report.results] == [out / "f1.ts", out / "pkg" / "f2.ts"]
    assert (out / "pkg" / "f2.ts").read_text(encoding="utf-8") == "// f2\n"


def test_discovery_filters_and_excludes(
    tmp_path: Path, write_tree: Callable[..., list[Path]]
) -> None:
    """Honour source_language and prune dependency/build directories."""
    write_tree(
        tmp_path,
        {
            "b.cs": "",
            "a.java": "",
            "lib/c.cc": "",
            "node_modules/x.js": "",
            "bin/y.cs": "",
            "obj/z.cs": "",
            "dist/w.ts": "",
            "src/build/v.py": "",
            "README.md": "",
        },
    )
    scheduler = _scheduler(_TracingConverter())
    root = tmp_path.resolve()

    everything = asyncio.run(scheduler.discover_files(tmp_path))
    assert everything == [root / "a.java", root / "b.cs", root / "lib" / "c.cc"]

    only_cpp = asyncio.run(scheduler.discover_files(tmp_path, "cpp"))
    assert only_cpp == [root / "lib" / "c.cc"]

    unknown = asyncio.run(scheduler.discover_files(tmp_path, "cobol"))
    assert root / "README.md" in unknown
    assert all("node_modules" not in p.parts for p in unknown)


def test_missing_directory_raises(tmp_path: Path) -> None:
    """Fail the whole call when the root directory does not exist."""
    with pytest.raises(DirectoryNotFoundError) as info:
        asyncio.run(
            _scheduler(_TracingConverter()).convert_directory(
                tmp_path / "nope", "typescript"
            )
        )
    assert info.value.code == "DirectoryNotFound"


def test_no_candidates_raises(tmp_path: Path) -> None:
    """Fail the whole call before touching files when nothing is discovered."""
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
    with pytest.raises(NoFilesFoundError, match="No source files found"):
        asyncio.run(
            _scheduler(_TracingConverter()).convert_directory(tmp_path, "typescript")
        )
