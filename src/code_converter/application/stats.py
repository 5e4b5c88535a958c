"""Statistics measurement and aggregation."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from code_converter.application.results import ConversionStats
from code_converter.processing import count_lines, estimate_tokens


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def measure_conversion(
    source_code: str,
    converted_code: str,
    start_time: datetime,
    end_time: datetime,
) -> ConversionStats:
    """Measure line counts and token volume for one conversion."""
    return ConversionStats.measured(
        start_time,
        end_time,
        source_lines=count_lines(source_code),
        target_lines=count_lines(converted_code),
        tokens_used=estimate_tokens(source_code, converted_code),
    )


def zeroed_stats(
    start_time: datetime, end_time: datetime | None = None
) -> ConversionStats:
    """Return timestamped stats with zero volume, used for failures."""
    return ConversionStats.measured(start_time, end_time or utc_now())


def aggregate_stats(stats: Iterable[ConversionStats]) -> ConversionStats:
    """Fold many stats into one summary.

    The summary spans the earliest start to the latest end, so its duration is
    the wall-clock span of the whole set rather than the sum of durations.
    Line and token counts are summed.

    Parameters
    ----------
    stats : Iterable[ConversionStats]
        Per-conversion statistics.

    Returns
    -------
    ConversionStats
        Aggregate statistics.

    Raises
    ------
    ValueError
        If ``stats`` is empty.
    """
    items = list(stats)
    if not items:
        raise ValueError("Cannot aggregate an empty set of conversion stats.")
    return ConversionStats.measured(
        min(item.start_time for item in items),
        max(item.end_time for item in items),
        source_lines=sum(item.source_lines for item in items),
        target_lines=sum(item.target_lines for item in items),
        tokens_used=sum(item.tokens_used for item in items),
    )
