"""Single-unit conversion: validation, processing and statistics."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from code_converter.application.options import ConversionOptions
from code_converter.application.results import (
    ConversionResult,
    ConversionStats,
    LanguageSupport,
)
from code_converter.application.stats import (
    aggregate_stats,
    measure_conversion,
    utc_now,
)
from code_converter.errors import (
    ConversionFailedError,
    EmptySourceError,
    UnitTooLargeError,
)
from code_converter.plugins.registry import ConverterRegistry
from code_converter.processing import byte_length, postprocess_code, preprocess_code

DEFAULT_MAX_HISTORY = 1000


@dataclass(frozen=True)
class ConversionUnit:
    """One piece of source text submitted for conversion.

    Parameters
    ----------
    source_code : str
        Source text.
    source_language : str
        Source language tag, e.g. ``"csharp"``.
    target_language : str
        Target language tag, e.g. ``"typescript"``.
    options : ConversionOptions
        Conversion options.
    """

    source_code: str
    source_language: str
    target_language: str
    options: ConversionOptions = field(default_factory=ConversionOptions)


def new_conversion_id() -> str:
    """Return an opaque correlation id."""
    return f"conv_{uuid.uuid4().hex[:16]}"


class UnitConverter:
    """Run one registered converter over one unit of source text.

    Parameters
    ----------
    registry : ConverterRegistry
        Registry used to resolve converters by language pair.
    logger : logging.Logger | None, optional
        Logger for conversion events. Defaults to the module logger.
    max_history : int, default=1000
        Number of most recent conversions whose stats stay available through
        :meth:`get_stats` and :meth:`history_summary`. Older entries are
        evicted first.
    """

    def __init__(
        self,
        registry: ConverterRegistry,
        logger: logging.Logger | None = None,
        max_history: int = DEFAULT_MAX_HISTORY,
    ) -> None:
        if max_history < 1:
            raise ValueError("max_history must be >= 1")
        self._registry = registry
        self._logger = logger or logging.getLogger(__name__)
        self._max_history = max_history
        self._history: dict[str, ConversionStats] = {}

    @property
    def registry(self) -> ConverterRegistry:
        """Registry used for converter lookup."""
        return self._registry

    async def convert(self, unit: ConversionUnit) -> ConversionResult:
        """Convert ``unit`` and measure the conversion.

        Parameters
        ----------
        unit : ConversionUnit
            Unit to convert.

        Returns
        -------
        ConversionResult
            Post-processed output, correlation id and statistics.

        Raises
        ------
        EmptySourceError
            If the source text is empty or whitespace only.
        UnitTooLargeError
            If the source exceeds ``options.max_unit_size_bytes``.
        NoConverterError
            If no converter is registered for the language pair.
        ConversionFailedError
            If the converter raises; the original exception is the cause.
        """
        start_time = utc_now()
        conversion_id = new_conversion_id()
        options = unit.options

        if not unit.source_code.strip():
            raise EmptySourceError()
        size = byte_length(unit.source_code)
        if size > options.max_unit_size_bytes:
            raise UnitTooLargeError(size, options.max_unit_size_bytes)

        self._logger.info(
            "Starting conversion %s: %s -> %s",
            conversion_id,
            unit.source_language,
            unit.target_language,
        )
        converter = self._registry.resolve(unit.source_language, unit.target_language)
        prepared = preprocess_code(unit.source_code, options.preserve_comments)
        try:
            raw_output = await converter.convert(prepared, options)
            if not isinstance(raw_output, str):
                raise TypeError(
                    f"converter returned {type(raw_output).__name__}, expected str"
                )
        except Exception as exc:
            self._logger.error("Conversion %s failed: %s", conversion_id, exc)
            raise ConversionFailedError(exc) from exc

        converted_code = postprocess_code(raw_output)
        stats = measure_conversion(
            unit.source_code, converted_code, start_time, utc_now()
        )
        self._remember(conversion_id, stats)
        self._logger.info("Conversion %s completed successfully", conversion_id)
        return ConversionResult(
            converted_code=converted_code,
            conversion_id=conversion_id,
            stats=stats,
        )

    def _remember(self, conversion_id: str, stats: ConversionStats) -> None:
        self._history[conversion_id] = stats
        while len(self._history) > self._max_history:
            del self._history[next(iter(self._history))]

    def get_stats(self, conversion_id: str) -> ConversionStats | None:
        """Return stats recorded for ``conversion_id``, if any."""
        return self._history.get(conversion_id)

    def history_summary(self) -> ConversionStats | None:
        """Aggregate the retained conversions, or ``None`` when empty."""
        if not self._history:
            return None
        return aggregate_stats(self._history.values())

    def supported_languages(self) -> list[LanguageSupport]:
        """Describe the registered converters."""
        return self._registry.list_supported()
