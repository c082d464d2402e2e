"""ZIP entry lookup shared by every OCF-style container format."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar
from zipfile import BadZipFile, LargeZipFile, ZipFile, ZipInfo
import zlib

from docformat.config import ExtractionSettings
from docformat.sources import FileSource, SourceHandle, as_source

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_ARCHIVE_ERRORS = (
    BadZipFile,
    LargeZipFile,
    OSError,
    EOFError,
    ValueError,
    RuntimeError,
    NotImplementedError,
    zlib.error,
)


def _source_label(source: FileSource) -> str:
    return source.name or "<buffer>"


def _with_archive(
    handle: SourceHandle | FileSource,
    action: Callable[[ZipFile], _T],
    *,
    default: _T,
    settings: ExtractionSettings | None,
) -> _T:
    """Run ``action`` against the opened archive, or return ``default``.

    I/O and format errors stop here; they are logged and never propagate.
    """

    source = as_source(handle)
    limits = settings or ExtractionSettings()
    try:
        with source.open() as stream, ZipFile(stream) as archive:
            entry_count = len(archive.infolist())
            if entry_count > limits.max_zip_entries:
                logger.warning(
                    "Archive %s has too many entries: %s > %s",
                    _source_label(source),
                    entry_count,
                    limits.max_zip_entries,
                )
                return default
            return action(archive)
    except _ARCHIVE_ERRORS as exc:
        logger.warning("Unable to read archive %s: %s", _source_label(source), exc)
        return default


def _file_names(archive: ZipFile) -> list[str]:
    return [name for name in archive.namelist() if not name.endswith("/")]


def list_entry_paths(
    handle: SourceHandle | FileSource,
    *,
    settings: ExtractionSettings | None = None,
) -> list[str]:
    """Return the logical paths of all file entries (empty if unreadable)."""

    return _with_archive(handle, _file_names, default=[], settings=settings)


def find_entry_path_by_extension(
    extension: str,
    handle: SourceHandle | FileSource,
    *,
    settings: ExtractionSettings | None = None,
) -> str | None:
    """Return the first entry path ending with ``extension`` (case-sensitive)."""

    def _find(archive: ZipFile) -> str | None:
        return next((name for name in _file_names(archive) if name.endswith(extension)), None)

    return _with_archive(handle, _find, default=None, settings=settings)


def has_entry_with_extension(
    extension: str,
    handle: SourceHandle | FileSource,
    *,
    settings: ExtractionSettings | None = None,
) -> bool:
    """Indicate whether any entry path ends with ``extension``."""

    return find_entry_path_by_extension(extension, handle, settings=settings) is not None


def _locate(archive: ZipFile, path: str, recurse: bool) -> ZipInfo | None:
    try:
        return archive.getinfo(path)
    except KeyError:
        pass
    if not recurse:
        return None
    # First match wins when several nested directories carry the same name.
    suffix = "/" + path.lstrip("/")
    return next((info for info in archive.infolist() if info.filename.endswith(suffix)), None)


def read_entry(
    path: str,
    handle: SourceHandle | FileSource,
    *,
    recurse: bool = False,
    settings: ExtractionSettings | None = None,
) -> bytes | None:
    """Return the full content of the entry at ``path`` or ``None``.

    With ``recurse`` an entry whose path ends with ``/<path>`` is accepted
    when the exact lookup fails, which tolerates archives that wrap their
    content in an extra root directory.
    """

    limits = settings or ExtractionSettings()
    recurse = recurse and limits.recursive_lookup

    def _read(archive: ZipFile) -> bytes | None:
        info = _locate(archive, path, recurse)
        if info is None or info.is_dir():
            logger.debug("Archive entry not found: %s", path)
            return None
        if info.file_size > limits.max_entry_bytes:
            logger.warning(
                "Archive entry %s too large: %s > %s bytes",
                info.filename,
                info.file_size,
                limits.max_entry_bytes,
            )
            return None
        return archive.read(info)

    return _with_archive(handle, _read, default=None, settings=limits)
