"""Directory conversion: discovery, batching and report aggregation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from code_converter.application.file_task import FileConversionTask
from code_converter.application.options import DEFAULT_BATCH_SIZE, ConversionOptions
from code_converter.application.results import (
    BatchConversionReport,
    FileConversionResult,
)
from code_converter.application.stats import aggregate_stats
from code_converter.errors import DirectoryNotFoundError, NoFilesFoundError
from code_converter.infrastructure import filesystem
from code_converter.languages import extensions_for_language, output_path_for


def partition[T](items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split ``items`` into consecutive batches of at most ``batch_size``."""
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    return [
        list(items[index : index + batch_size])
        for index in range(0, len(items), batch_size)
    ]


class BatchScheduler:
    """Convert every discovered file under a directory in bounded batches.

    Batches run one after another; the files of one batch run concurrently
    and the next batch starts only after all of them have settled.

    Parameters
    ----------
    file_task : FileConversionTask
        Per-file conversion task.
    default_batch_size : int, default=10
        Batch size used when the options carry a value below 1.
    logger : logging.Logger | None, optional
        Logger for batch events. Defaults to the module logger.
    """

    def __init__(
        self,
        file_task: FileConversionTask,
        default_batch_size: int = DEFAULT_BATCH_SIZE,
        logger: logging.Logger | None = None,
    ) -> None:
        if default_batch_size < 1:
            raise ValueError("default_batch_size must be >= 1")
        self._file_task = file_task
        self._default_batch_size = default_batch_size
        self._logger = logger or logging.getLogger(__name__)

    def effective_batch_size(self, options: ConversionOptions) -> int:
        """Return the batch size for ``options``."""
        if options.batch_size >= 1:
            return options.batch_size
        return self._default_batch_size

    async def discover_files(
        self,
        directory_path: Path,
        source_language: str | None = None,
    ) -> list[Path]:
        """List candidate files under ``directory_path`` in path order.

        An unknown ``source_language`` disables extension filtering; the
        resulting files are then reported individually as unsupported.
        """
        extensions = extensions_for_language(source_language)
        return await filesystem.discover(directory_path, extensions)

    async def convert_directory(
        self,
        directory_path: Path,
        target_language: str,
        output_directory: Path | None = None,
        options: ConversionOptions | None = None,
    ) -> BatchConversionReport:
        """Convert every candidate file under ``directory_path``.

        Parameters
        ----------
        directory_path : Path
            Root directory to scan.
        target_language : str
            Target language tag.
        output_directory : Path | None, default=None
            Output root mirroring the source tree. When omitted, outputs are
            written next to their sources.
        options : ConversionOptions | None, default=None
            Conversion options.

        Returns
        -------
        BatchConversionReport
            One result per discovered file in discovery order plus totals.

        Raises
        ------
        DirectoryNotFoundError
            If ``directory_path`` is not a directory.
        NoFilesFoundError
            If discovery finds no candidate files.
        """
        options = options or ConversionOptions()
        self._logger.info("Converting directory: %s", directory_path)
        if not await filesystem.directory_exists(directory_path):
            raise DirectoryNotFoundError(directory_path)

        files = await self.discover_files(directory_path, options.source_language)
        if not files:
            raise NoFilesFoundError(directory_path)
        self._logger.info("Found %d files to convert", len(files))

        root = directory_path.resolve()
        batches = partition(files, self.effective_batch_size(options))
        results: list[FileConversionResult] = []
        for number, batch in enumerate(batches, start=1):
            self._logger.info("Processing batch %d/%d", number, len(batches))
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(
                        self._file_task.convert_file(
                            path,
                            target_language,
                            self._output_path(
                                path, root, output_directory, target_language, options
                            ),
                            options,
                        )
                    )
                    for path in batch
                ]
            results.extend(task.result() for task in tasks)

        report = self._build_report(directory_path, output_directory, results)
        self._logger.info(
            "Directory conversion completed: %d successful, %d failed",
            report.successful_conversions,
            report.failed_conversions,
        )
        return report

    @staticmethod
    def _output_path(
        path: Path,
        root: Path,
        output_directory: Path | None,
        target_language: str,
        options: ConversionOptions,
    ) -> Path | None:
        if output_directory is None:
            return None
        relative = path.relative_to(root)
        return output_directory / output_path_for(
            relative, target_language, options.fallback_extension
        )

    @staticmethod
    def _build_report(
        directory_path: Path,
        output_directory: Path | None,
        results: list[FileConversionResult],
    ) -> BatchConversionReport:
        successful = sum(1 for result in results if result.success)
        return BatchConversionReport(
            directory_path=directory_path,
            output_directory=output_directory,
            total_files=len(results),
            successful_conversions=successful,
            failed_conversions=len(results) - successful,
            summary=aggregate_stats(result.stats for result in results),
            results=tuple(results),
        )
