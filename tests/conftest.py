"""Shared pytest configuration, marker assignment and source-tree fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

type TreeWriter = Callable[[Path, Mapping[str, str]], list[Path]]


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def write_tree() -> TreeWriter:
    """Return a helper writing ``{relative_path: content}`` under a root."""

    def _write(root: Path, files: Mapping[str, str]) -> list[Path]:
        written: list[Path] = []
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            written.append(path)
        return written

    return _write
