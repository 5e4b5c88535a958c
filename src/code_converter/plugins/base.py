"""Converter protocol consumed by the orchestrator."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from code_converter.application.options import ConversionOptions


@runtime_checkable
class Converter(Protocol):
    """Protocol implemented by source-to-target code converters.

    The orchestrator treats converters as black boxes: any exception raised
    by ``convert`` is reported as a failed conversion.
    """

    async def convert(self, source_code: str, options: ConversionOptions) -> str:
        """Convert source text into target text.

        Parameters
        ----------
        source_code : str
            Pre-processed source text.
        options : ConversionOptions
            Options of the current conversion request.

        Returns
        -------
        str
            Converted text, before orchestrator post-processing.
        """

    def supported_features(self) -> Sequence[str]:
        """Return feature tags, used only for reporting."""
