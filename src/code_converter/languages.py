"""Language/extension tables and output path helpers."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from code_converter.errors import UnsupportedExtensionError

DEFAULT_FALLBACK_EXTENSION = ".ts"

EXTENSION_TO_LANGUAGE: Mapping[str, str] = MappingProxyType(
    {
        ".cs": "csharp",
        ".java": "java",
        ".py": "python",
        ".js": "javascript",
        ".ts": "typescript",
        ".cpp": "cpp",
        ".cc": "cpp",
        ".cxx": "cpp",
        ".c": "c",
    }
)

LANGUAGE_TO_EXTENSION: Mapping[str, str] = MappingProxyType(
    {
        "csharp": ".cs",
        "java": ".java",
        "python": ".py",
        "javascript": ".js",
        "typescript": ".ts",
        "cpp": ".cpp",
        "c": ".c",
    }
)

# Dependency caches and build/binary output trees.
EXCLUDED_DIRECTORIES: frozenset[str] = frozenset(
    {"node_modules", "bin", "obj", "dist", "build"}
)


def known_languages() -> list[str]:
    """Return every language name that has an output extension."""
    return list(LANGUAGE_TO_EXTENSION)


def language_for_path(path: Path) -> str:
    """Resolve the source language of ``path`` from its extension.

    Parameters
    ----------
    path : Path
        Source file path.

    Returns
    -------
    str
        Language tag such as ``"csharp"``.

    Raises
    ------
    UnsupportedExtensionError
        If the extension is not in the table.
    """
    extension = path.suffix.lower()
    try:
        return EXTENSION_TO_LANGUAGE[extension]
    except KeyError as exc:
        raise UnsupportedExtensionError(path.suffix) from exc


def extension_for_language(
    language: str,
    fallback: str = DEFAULT_FALLBACK_EXTENSION,
) -> str:
    """Return the output extension for ``language`` or ``fallback``."""
    return LANGUAGE_TO_EXTENSION.get(language.lower(), fallback)


def extensions_for_language(language: str | None) -> frozenset[str] | None:
    """Return source extensions to discover for ``language``.

    ``None`` as input selects every known extension. ``None`` as output means
    the language is unknown and discovery should not filter by extension.
    """
    if language is None:
        return frozenset(EXTENSION_TO_LANGUAGE)
    wanted = language.lower()
    matches = frozenset(
        ext for ext, name in EXTENSION_TO_LANGUAGE.items() if name == wanted
    )
    return matches or None


def output_path_for(
    source_path: Path,
    target_language: str,
    fallback: str = DEFAULT_FALLBACK_EXTENSION,
) -> Path:
    """Swap the extension of ``source_path`` for the target language's."""
    return source_path.with_name(
        source_path.stem + extension_for_language(target_language, fallback)
    )
