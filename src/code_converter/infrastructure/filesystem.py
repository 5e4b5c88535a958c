"""Filesystem adapter: discovery and async file I/O."""

from __future__ import annotations

import asyncio
import os
import stat
import tempfile
import threading
from collections.abc import Collection
from pathlib import Path

from code_converter.languages import EXCLUDED_DIRECTORIES

_UMASK_LOCK = threading.Lock()


def discover_source_files(
    root: Path,
    extensions: Collection[str] | None,
    excluded_directories: Collection[str] = EXCLUDED_DIRECTORIES,
) -> list[Path]:
    """Walk ``root`` and return matching files sorted by full path.

    Parameters
    ----------
    root : Path
        Directory to scan.
    extensions : Collection[str] | None
        Lower-case extensions (with leading dot) to keep. ``None`` keeps
        every file.
    excluded_directories : Collection[str]
        Directory names pruned anywhere in the tree.

    Returns
    -------
    list[Path]
        Absolute file paths in lexicographic order.
    """
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root.resolve()):
        dirnames[:] = [name for name in dirnames if name not in excluded_directories]
        for filename in filenames:
            path = Path(dirpath) / filename
            if extensions is None or path.suffix.lower() in extensions:
                found.append(path)
    return sorted(found, key=str)


def _current_umask() -> int:
    with _UMASK_LOCK:
        mask = os.umask(0)
        os.umask(mask)
    return mask


def _target_mode(path: Path) -> int:
    """Return the permission bits an output at ``path`` should carry.

    An existing file keeps its mode; a new file gets ``0o666`` filtered by
    the process umask, as a plain ``open(path, "w")`` would.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


def write_text_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` through a temporary sibling file.

    Parent directories are created as needed and an existing file is
    replaced, keeping its permission bits. Readers never observe a partially
    written file and a failed write leaves no temporary file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


async def path_exists(path: Path) -> bool:
    """Return whether ``path`` is an existing file."""
    return await asyncio.to_thread(path.is_file)


async def directory_exists(path: Path) -> bool:
    """Return whether ``path`` is an existing directory."""
    return await asyncio.to_thread(path.is_dir)


async def file_size(path: Path) -> int:
    """Return the size of ``path`` in bytes."""
    stat = await asyncio.to_thread(path.stat)
    return stat.st_size


async def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 text."""
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


async def write_text(path: Path, content: str) -> None:
    """Atomically write ``content`` to ``path``."""
    await asyncio.to_thread(write_text_atomic, path, content)


async def discover(
    root: Path,
    extensions: Collection[str] | None,
) -> list[Path]:
    """Run :func:`discover_source_files` off the event loop."""
    return await asyncio.to_thread(discover_source_files, root, extensions)
