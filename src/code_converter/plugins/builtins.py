"""Built-in converters."""

from __future__ import annotations

from collections.abc import Sequence

from code_converter.application.options import ConversionOptions


class IdentityConverter:
    """Return source text unchanged.

    Registered for every known language to itself so that a run can
    normalize files (comment stripping, blank-line collapsing) without a
    real translation backend.
    """

    async def convert(self, source_code: str, options: ConversionOptions) -> str:
        """Return ``source_code`` as is."""
        del options
        return source_code

    def supported_features(self) -> Sequence[str]:
        """Return feature tags."""
        return ["passthrough", "whitespace-normalization"]
