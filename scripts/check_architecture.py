#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/code_converter"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    for layer in ("application", "plugins", "infrastructure"):
        for path in (PACKAGE / layer).glob("*.py"):
            _assert_no_imports(
                path,
                [
                    "import typer",
                    "from typer",
                    "code_converter.cli",
                ],
            )

    for path in (PACKAGE / "infrastructure").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "code_converter.application",
                "code_converter.plugins",
            ],
        )

    for name in ("errors.py", "languages.py", "processing.py", "types.py"):
        _assert_no_imports(
            PACKAGE / name,
            [
                "code_converter.application",
                "code_converter.plugins",
                "code_converter.cli",
            ],
        )

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
