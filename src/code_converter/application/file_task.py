"""Single-file conversion with failure captured into the result."""

from __future__ import annotations

import logging
from pathlib import Path

from code_converter.application.options import ConversionOptions
from code_converter.application.results import ConversionStats, FileConversionResult
from code_converter.application.stats import utc_now, zeroed_stats
from code_converter.application.unit_converter import ConversionUnit, UnitConverter
from code_converter.errors import FileTooLargeError, SourceNotFoundError
from code_converter.infrastructure import filesystem
from code_converter.languages import language_for_path, output_path_for


class FileConversionTask:
    """Convert one file on disk through a :class:`UnitConverter`.

    Parameters
    ----------
    unit_converter : UnitConverter
        Converter used for the file contents.
    logger : logging.Logger | None, optional
        Logger for file events. Defaults to the module logger.
    """

    def __init__(
        self,
        unit_converter: UnitConverter,
        logger: logging.Logger | None = None,
    ) -> None:
        self._unit_converter = unit_converter
        self._logger = logger or logging.getLogger(__name__)

    async def convert_file(
        self,
        file_path: Path,
        target_language: str,
        output_path: Path | None = None,
        options: ConversionOptions | None = None,
    ) -> FileConversionResult:
        """Convert ``file_path`` and write the output.

        Never raises for conversion problems: missing files, oversized files,
        unknown extensions, read errors and converter failures are all
        reported through ``success=False`` and ``errors``.

        Parameters
        ----------
        file_path : Path
            Source file.
        target_language : str
            Target language tag.
        output_path : Path | None, default=None
            Explicit destination. When omitted, the source path with the
            target language's extension is used.
        options : ConversionOptions | None, default=None
            Conversion options.

        Returns
        -------
        FileConversionResult
            Per-file outcome.
        """
        options = options or ConversionOptions()
        start_time = utc_now()
        self._logger.info("Converting file: %s", file_path)
        try:
            if not await filesystem.path_exists(file_path):
                raise SourceNotFoundError(file_path)
            size = await filesystem.file_size(file_path)
            if size > options.max_unit_size_bytes:
                raise FileTooLargeError(file_path, size)
            source_language = language_for_path(file_path)
            source_code = await filesystem.read_text(file_path)

            result = await self._unit_converter.convert(
                ConversionUnit(
                    source_code=source_code,
                    source_language=source_language,
                    target_language=target_language,
                    options=options,
                )
            )

            final_output = output_path or output_path_for(
                file_path, target_language, options.fallback_extension
            )
            await filesystem.write_text(final_output, result.converted_code)
        except Exception as exc:
            self._logger.error("File conversion failed: %s: %s", file_path, exc)
            return FileConversionResult(
                file_path=file_path,
                output_path=output_path,
                success=False,
                stats=zeroed_stats(start_time),
                errors=(str(exc),),
            )

        self._logger.info(
            "File conversion completed: %s -> %s", file_path, final_output
        )
        return FileConversionResult(
            file_path=file_path,
            output_path=final_output,
            success=True,
            stats=ConversionStats.measured(
                start_time,
                utc_now(),
                source_lines=result.stats.source_lines,
                target_lines=result.stats.target_lines,
                tokens_used=result.stats.tokens_used,
            ),
            converted_code=result.converted_code,
        )
