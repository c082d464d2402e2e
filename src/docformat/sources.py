"""Uniform access to caller-owned byte sources (paths, buffers, streams)."""

from __future__ import annotations

from contextlib import contextmanager
from io import BytesIO
import os
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from docformat.errors import IncompatibleSourceError

SourceHandle = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO]


class FileSource:
    """Borrowed view over a path, an in-memory buffer or a seekable stream.

    The wrapped handle stays owned by the caller. Every ``open()`` yields a
    stream positioned at the start of the content, and streams handed in by
    the caller are returned to their original position afterwards so that
    several passes (type sniffing, then parsing) can share one handle.
    """

    __slots__ = ("_path", "_data", "_stream")

    def __init__(self, handle: SourceHandle) -> None:
        self._path: Path | None = None
        self._data: bytes | None = None
        self._stream: BinaryIO | None = None

        if isinstance(handle, (str, os.PathLike)):
            self._path = Path(handle)
        elif isinstance(handle, (bytes, bytearray, memoryview)):
            self._data = bytes(handle)
        elif hasattr(handle, "read") and hasattr(handle, "seek"):
            seekable = getattr(handle, "seekable", None)
            if seekable is not None and not seekable():
                raise IncompatibleSourceError("Stream handles must be seekable")
            self._stream = handle
        else:
            raise IncompatibleSourceError(f"Unsupported source handle: {type(handle).__name__}")

    @property
    def path(self) -> Path | None:
        """Filesystem path when the handle is path-based."""

        return self._path

    @property
    def name(self) -> str | None:
        """Best-effort file name (used for extension hints)."""

        if self._path is not None:
            return self._path.name
        stream_name = getattr(self._stream, "name", None)
        if isinstance(stream_name, str):
            return Path(stream_name).name
        return None

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        """Yield a binary stream over the whole content."""

        if self._path is not None:
            with self._path.open("rb") as handle:
                yield handle
            return

        if self._data is not None:
            yield BytesIO(self._data)
            return

        stream = self._stream
        position = stream.tell()
        stream.seek(0)
        try:
            yield stream
        finally:
            stream.seek(position)

    def read_bytes(self) -> bytes:
        """Return the complete content."""

        if self._data is not None:
            return self._data
        with self.open() as handle:
            return handle.read()

    def head(self, size: int) -> bytes:
        """Return up to ``size`` leading bytes for content sniffing."""

        if self._data is not None:
            return self._data[:size]
        with self.open() as handle:
            return handle.read(size)


def as_source(handle: SourceHandle | FileSource) -> FileSource:
    """Wrap ``handle`` unless it already is a :class:`FileSource`."""

    if isinstance(handle, FileSource):
        return handle
    return FileSource(handle)
