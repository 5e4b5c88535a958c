#!/usr/bin/env python3
"""
code_converter.cli.cli

Typer-based CLI for converting source files between languages.

Converters are pluggable: load them with ``--converter-module`` pointing at a
module that exposes ``register_converters(registry)``, ``CONVERTERS`` or
``CONVERTER``. Without extra modules only identity (same-language)
converters are available.

Examples
--------
Convert a directory of C# files to TypeScript:

    code-converter --converter-module my_converters convert-directory src/ -t typescript -o out/
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any

import typer

from code_converter.errors import ConversionError, PluginError

app = typer.Typer(
    name="code-converter",
    help="Convert source code between languages in bounded batches.",
    no_args_is_help=True,
)

TARGET_HELP = "Target language (e.g. typescript, python)."
PRESERVE_COMMENTS_HELP = "Keep comments; --no-preserve-comments strips // and /* */."
INCLUDE_TYPES_HELP = "Ask the converter to emit type annotations."
FRAMEWORK_HELP = "Target framework passed through to the converter."
JSON_HELP = "Print the result record as JSON."


def _state(ctx: typer.Context) -> dict[str, Any]:
    return ctx.obj or {}


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _build_registry(ctx: typer.Context) -> Any:
    """Create the default registry plus modules from ``--converter-module``."""
    from code_converter.plugins.registry import create_default_registry

    try:
        return create_default_registry(extra_modules=_state(ctx).get("modules"))
    except PluginError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _build_options(**kwargs: Any) -> Any:
    from code_converter.application.use_cases import build_conversion_options

    try:
        return build_conversion_options(**kwargs)
    except ConversionError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _echo_json(record: dict[str, object]) -> None:
    typer.echo(json.dumps(record, indent=2, default=str))


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
    converter_module: list[str] | None = typer.Option(
        None,
        "--converter-module",
        help="Converter module import path or file path (repeatable).",
    ),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to emit log records to stderr.
    converter_module : list[str] | None, default=None
        Extra converter modules to load into the registry.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="[%(levelname)s] %(name)s: %(message)s",
            stream=sys.stderr,
        )
    ctx.obj = {"debug": debug, "modules": list(converter_module or [])}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert-file")
def convert_file_cmd(
    ctx: typer.Context,
    file_path: Path = typer.Argument(..., help="Source file path."),
    target: str = typer.Option("typescript", "--target", "-t", help=TARGET_HELP),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file path."),
    preserve_comments: bool = typer.Option(
        True, "--preserve-comments/--no-preserve-comments", help=PRESERVE_COMMENTS_HELP
    ),
    include_types: bool = typer.Option(
        True, "--include-types/--no-include-types", help=INCLUDE_TYPES_HELP
    ),
    target_framework: str | None = typer.Option(
        None, "--target-framework", help=FRAMEWORK_HELP
    ),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Convert a single file."""
    debug: bool = bool(_state(ctx).get("debug", False))
    registry = _build_registry(ctx)
    options = _build_options(
        preserve_comments=preserve_comments,
        include_types=include_types,
        target_framework=target_framework,
    )

    try:
        from code_converter.application.use_cases import convert_file

        result = asyncio.run(
            convert_file(
                file_path=file_path,
                target_language=target,
                output_path=output,
                options=options,
                registry=registry,
            )
        )
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    if as_json:
        _echo_json(result.to_record())
    elif result.success:
        typer.echo(f"✓ Saved: {result.output_path}")
        typer.echo(
            f"Stats: {result.stats.source_lines} → {result.stats.target_lines} lines"
        )
    else:
        for message in result.errors:
            typer.echo(f"✗ {message}", err=True)
    if not result.success:
        raise typer.Exit(code=1)


@app.command("convert-directory")
def convert_directory_cmd(
    ctx: typer.Context,
    directory: Path = typer.Argument(..., help="Source directory path."),
    target: str = typer.Option("typescript", "--target", "-t", help=TARGET_HELP),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output directory path."
    ),
    batch_size: int = typer.Option(
        10, "--batch-size", help="Files converted concurrently per batch."
    ),
    source_language: str | None = typer.Option(
        None, "--source-language", "-s", help="Only convert files of this language."
    ),
    preserve_comments: bool = typer.Option(
        True, "--preserve-comments/--no-preserve-comments", help=PRESERVE_COMMENTS_HELP
    ),
    include_types: bool = typer.Option(
        True, "--include-types/--no-include-types", help=INCLUDE_TYPES_HELP
    ),
    target_framework: str | None = typer.Option(
        None, "--target-framework", help=FRAMEWORK_HELP
    ),
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """Convert all supported files in a directory.

    Exits with status 1 when any file failed to convert.
    """
    debug: bool = bool(_state(ctx).get("debug", False))
    registry = _build_registry(ctx)
    options = _build_options(
        preserve_comments=preserve_comments,
        include_types=include_types,
        target_framework=target_framework,
        batch_size=batch_size,
        source_language=source_language,
    )

    try:
        from code_converter.application.use_cases import convert_directory

        report = asyncio.run(
            convert_directory(
                directory_path=directory,
                target_language=target,
                output_directory=output,
                options=options,
                registry=registry,
            )
        )
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))

    if as_json:
        _echo_json(report.to_record())
    else:
        typer.echo("✓ Directory conversion completed")
        typer.echo(f"Total files: {report.total_files}")
        typer.echo(f"Successful: {report.successful_conversions}")
        typer.echo(f"Failed: {report.failed_conversions}")
        typer.echo(f"Duration: {report.summary.duration_ms:.0f}ms")
        for failed in report.failed_results:
            typer.echo(f"✗ {failed.file_path}: {'; '.join(failed.errors)}", err=True)
    if report.failed_conversions:
        raise typer.Exit(code=1)


@app.command("convert-code")
def convert_code_cmd(
    ctx: typer.Context,
    source: str = typer.Option("csharp", "--source", "-s", help="Source language."),
    target: str = typer.Option("typescript", "--target", "-t", help=TARGET_HELP),
    preserve_comments: bool = typer.Option(
        True, "--preserve-comments/--no-preserve-comments", help=PRESERVE_COMMENTS_HELP
    ),
    include_types: bool = typer.Option(
        True, "--include-types/--no-include-types", help=INCLUDE_TYPES_HELP
    ),
    target_framework: str | None = typer.Option(
        None, "--target-framework", help=FRAMEWORK_HELP
    ),
) -> None:
    """Convert a code snippet read from stdin and print the result."""
    debug: bool = bool(_state(ctx).get("debug", False))
    registry = _build_registry(ctx)
    options = _build_options(
        preserve_comments=preserve_comments,
        include_types=include_types,
        target_framework=target_framework,
    )
    source_code = sys.stdin.read()

    try:
        from code_converter.application.use_cases import convert_code

        result = asyncio.run(
            convert_code(
                source_code=source_code,
                source_language=source,
                target_language=target,
                options=options,
                registry=registry,
            )
        )
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    typer.echo(result.converted_code)


@app.command("list-languages")
def list_languages_cmd(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help=JSON_HELP),
) -> None:
    """List supported language conversions."""
    registry = _build_registry(ctx)
    supported = registry.list_supported()
    if as_json:
        typer.echo(json.dumps([item.to_record() for item in supported], indent=2))
        return
    typer.echo("Supported language conversions:")
    for item in supported:
        typer.echo(f"  {item.source_language} → {item.target_language}")
        typer.echo(f"    Features: {', '.join(item.features)}")


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
