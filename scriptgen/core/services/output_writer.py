"""
Output writer — stage rendered text in a temp file, then preview or persist.

The temp file only lives inside ``scratch_file()``.  It is removed on
every way out of that block: normal return, exception, Ctrl-C, and
SIGTERM (converted to ``SystemExit`` while the block is active).
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import stat
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class WriteError(Exception):
    """Raised when the temp file or the destination cannot be written."""


@dataclass
class DryRunPreview:
    """What a dry run would have produced."""

    destination: Path
    line_count: int
    head: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "destination": str(self.destination),
            "line_count": self.line_count,
            "head": self.head,
        }


@dataclass
class WriteResult:
    """A script persisted to its destination."""

    path: Path
    line_count: int
    permissions: str

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "line_count": self.line_count,
            "permissions": self.permissions,
        }


# ── Scratch file ────────────────────────────────────────────────


def _raise_exit(signum, frame) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def scratch_file(content: str, *, suffix: str = ".sh") -> Iterator[Path]:
    """Write *content* to a private temp file and yield its path.

    The file is unlinked when the block exits, whatever the reason.
    """
    try:
        fd, name = tempfile.mkstemp(prefix="scriptgen-", suffix=suffix)
    except OSError as e:
        raise WriteError(f"Cannot create temporary file: {e}") from e
    path = Path(name)

    # signal.signal() is only legal from the main thread
    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGTERM, _raise_exit)

    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
        except OSError as e:
            raise WriteError(f"Cannot write temporary file {path}: {e}") from e
        logger.debug("Staged %d bytes in %s", len(content), path)
        yield path
    finally:
        if previous is not None:
            signal.signal(signal.SIGTERM, previous)
        path.unlink(missing_ok=True)
        logger.debug("Removed scratch file %s", path)


# ── Inspection ──────────────────────────────────────────────────


def count_lines(path: Path) -> int:
    """Count newline characters in *path*, like ``wc -l``."""
    with open(path, "rb") as fh:
        return sum(chunk.count(b"\n") for chunk in iter(lambda: fh.read(65536), b""))


def file_permissions(path: Path) -> str:
    """Permission string for *path* in ``ls -l`` form (e.g. ``-rwxr-xr-x``).

    Returns "File not found" when *path* is not a regular file.
    """
    if not path.is_file():
        return "File not found"
    return stat.filemode(path.stat().st_mode)


def preview_script(scratch: Path, destination: Path, *, lines: int = 20) -> DryRunPreview:
    """Describe the staged script without creating anything permanent.

    Raises:
        WriteError: If the staged script cannot be read back.
    """
    try:
        with open(scratch, encoding="utf-8") as fh:
            head = [line.rstrip("\n") for _, line in zip(range(lines), fh)]
        line_count = count_lines(scratch)
    except OSError as e:
        raise WriteError(f"Cannot read temporary file {scratch}: {e}") from e

    return DryRunPreview(destination=destination, line_count=line_count, head=head)


# ── Persist ─────────────────────────────────────────────────────


def make_executable(path: Path) -> None:
    """Add execute permission for user, group and other."""
    mode = path.stat().st_mode
    path.chmod(mode | _EXEC_BITS)


def write_script(scratch: Path, destination: Path) -> WriteResult:
    """Copy the staged script to *destination* and mark it executable.

    Parent directories are created as needed.  An existing file at
    *destination* is overwritten.

    Raises:
        WriteError: If any filesystem step fails.
    """
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(f"Cannot create directory {destination.parent}: {e}") from e

    try:
        shutil.copyfile(scratch, destination)
        make_executable(destination)
        line_count = count_lines(destination)
    except OSError as e:
        raise WriteError(f"Cannot write {destination}: {e}") from e

    logger.info("Wrote generated script: %s", destination)
    return WriteResult(
        path=destination,
        line_count=line_count,
        permissions=file_permissions(destination),
    )
