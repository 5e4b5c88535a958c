"""Shared type aliases for converter modules."""

from __future__ import annotations

type LanguageTag = str
type LanguagePair = tuple[LanguageTag, LanguageTag]

# JSON-ready mapping emitted by ``to_record`` methods.
type Record = dict[str, object]
