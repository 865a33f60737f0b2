"""Destinations for the formatted document.

* :class:`StdoutSink` -- the default; the document is the only thing
  written to stdout.
* :class:`FileSink` -- writes to a path, refusing to replace an existing
  file unless ``force`` is set. The write is atomic (temp file in the same
  directory, then ``os.replace``), so a failed export never leaves a
  half-written file behind.

Use :func:`create_sink` to pick the variant from the ``--out`` option.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from specout.exceptions import OutputError
from specout.output import debug, print_document

STDOUT_MARKER = "-"


class DocumentSink(ABC):
    """Where the formatted document ends up."""

    @abstractmethod
    async def deliver(self, text: str) -> None:
        """Write *text* to the destination.

        Raises:
            OutputError: If the destination cannot be written.
        """


class StdoutSink(DocumentSink):
    """Write the document to standard output."""

    async def deliver(self, text: str) -> None:
        print_document(text)


class FileSink(DocumentSink):
    """Write the document to *path*.

    Args:
        path: Destination file. Missing parent directories are created.
        force: Replace *path* if it already exists.
    """

    def __init__(self, path: Path, force: bool = False) -> None:
        self._path = Path(path)
        self._force = force

    @property
    def path(self) -> Path:
        return self._path

    async def deliver(self, text: str) -> None:
        if self._path.exists() and not self._force:
            raise OutputError(f"{self._path} already exists, use --force to overwrite")
        if not text.endswith("\n"):
            text += "\n"
        try:
            await asyncio.to_thread(_atomic_write, self._path, text)
        except OSError as exc:
            raise OutputError(f"cannot write {self._path}: {exc}") from exc
        debug(f"Wrote {len(text)} characters to {self._path}")


def create_sink(out: Optional[Path], force: bool = False) -> DocumentSink:
    """Return a :class:`FileSink` for *out*, or a :class:`StdoutSink` when
    *out* is ``None`` or ``-``."""
    if out is None or str(out) == STDOUT_MARKER:
        return StdoutSink()
    return FileSink(out, force=force)


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
