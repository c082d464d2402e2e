"""Lookup from file-type tag to format descriptor, plus type detection.

Registration happens once at startup; after that the registry is only read
and may be shared between threads. Reverse lookups are computed lazily and
dropped whenever a descriptor is (re-)registered.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Callable, Iterable, Iterator

from docformat.config import ExtractionSettings
from docformat.containers.zip_archive import has_entry_with_extension, list_entry_paths, read_entry
from docformat.errors import UnknownFormatError
from docformat.formats.definitions import build_default_descriptors
from docformat.formats.models import FileType, FormatDescriptor
from docformat.sources import FileSource, SourceHandle, as_source

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF-"
_RTF_MAGIC = b"{\\rtf"
_ZIP_MAGIC = b"PK\x03\x04"
_EPUB_MIMETYPE = b"application/epub+zip"
_AUDIO_EXTENSION = ".mp3"

# Types that share a container layout; the second member is the audio variant.
AMBIGUOUS_GROUPS: tuple[tuple[FileType, FileType], ...] = ((FileType.DAISY, FileType.DAISY_AUDIO),)


def _normalize_extension(extension: str) -> str:
    text = extension.strip().lower()
    if text and not text.startswith("."):
        text = "." + text
    return text


def _normalize_mime(mime_type: str) -> str:
    return mime_type.split(";", 1)[0].strip().lower()


class FormatRegistry:
    """Process-wide table of :class:`FormatDescriptor` objects."""

    def __init__(self, descriptors: Iterable[FormatDescriptor] = ()) -> None:
        self._descriptors: dict[FileType, FormatDescriptor] = {}
        self._by_extension: dict[str, FileType] | None = None
        self._by_mime: dict[str, FileType] | None = None
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: FormatDescriptor) -> None:
        """Add or replace the descriptor for ``descriptor.file_type``."""

        self._descriptors[descriptor.file_type] = descriptor
        self._by_extension = None
        self._by_mime = None

    def __contains__(self, file_type: object) -> bool:
        return file_type in self._descriptors

    def __iter__(self) -> Iterator[FormatDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def file_types(self) -> list[FileType]:
        return list(self._descriptors)

    def descriptor_for(self, file_type: FileType | str | None) -> FormatDescriptor | None:
        resolved = FileType.coerce(file_type) if file_type is not None else None
        if resolved is None:
            return None
        return self._descriptors.get(resolved)

    def require(self, file_type: FileType | str | None) -> FormatDescriptor:
        descriptor = self.descriptor_for(file_type)
        if descriptor is None:
            raise UnknownFormatError(file_type)
        return descriptor

    def _reverse_lookup(self, attribute: str, normalize: Callable[[str], str]) -> dict[str, FileType]:
        table: dict[str, FileType] = {}
        # Registration order decides ties: the first format claiming a value keeps it.
        for descriptor in self._descriptors.values():
            for value in getattr(descriptor, attribute):
                table.setdefault(normalize(value), descriptor.file_type)
        return table

    def class_by_extension(self, extension: str | None) -> FileType | None:
        if not extension:
            return None
        if self._by_extension is None:
            self._by_extension = self._reverse_lookup("file_extensions", _normalize_extension)
        return self._by_extension.get(_normalize_extension(extension))

    def class_by_mime(self, mime_type: str | None) -> FileType | None:
        if not mime_type:
            return None
        if self._by_mime is None:
            self._by_mime = self._reverse_lookup("mime_types", _normalize_mime)
        return self._by_mime.get(_normalize_mime(mime_type))

    def resolve_type(
        self,
        declared: FileType | str | None,
        handle: SourceHandle | FileSource | None = None,
        *,
        settings: ExtractionSettings | None = None,
    ) -> FileType | None:
        """Disambiguate ``declared`` by looking inside the container.

        Only DAISY and DAISY audio are currently ambiguous: any ``.mp3`` entry
        selects the audio variant. This assumes the presence of sound files is
        the only distinction, so a text DAISY book with incidental audio is
        reported as DAISY audio.
        """

        file_type = FileType.coerce(declared) if declared is not None else None
        if file_type is None or handle is None:
            return file_type
        for base, audio in AMBIGUOUS_GROUPS:
            if file_type not in (base, audio):
                continue
            has_audio = has_entry_with_extension(_AUDIO_EXTENSION, handle, settings=settings)
            resolved = audio if has_audio else base
            if resolved is not file_type:
                logger.debug("Declared type %s resolved to %s", file_type.value, resolved.value)
            return resolved
        return file_type

    def detect(
        self,
        handle: SourceHandle | FileSource,
        *,
        filename: str | None = None,
        mime_type: str | None = None,
        settings: ExtractionSettings | None = None,
    ) -> FileType | None:
        """Guess the file type from a filename, a MIME type, or the content."""

        source = as_source(handle)
        name = filename or source.name
        file_type = self.class_by_extension(os.path.splitext(name)[1]) if name else None
        if file_type is None:
            file_type = self.class_by_mime(mime_type)
        if file_type is None:
            file_type = self._sniff(source, settings)
        if file_type is None:
            logger.debug("Unable to detect file type of %s", name or "<buffer>")
            return None
        return self.resolve_type(file_type, source, settings=settings)

    def _sniff(self, source: FileSource, settings: ExtractionSettings | None) -> FileType | None:
        head = source.head(8)
        if head.startswith(_PDF_MAGIC):
            return FileType.PDF
        if head.startswith(_RTF_MAGIC):
            return FileType.RTF
        if not head.startswith(_ZIP_MAGIC):
            return None

        entries = list_entry_paths(source, settings=settings)
        if "docProps/core.xml" in entries:
            return FileType.WORD
        has_package = any(entry.endswith(".opf") for entry in entries)
        if "mimetype" in entries:
            marker = read_entry("mimetype", source, settings=settings) or b""
            if _EPUB_MIMETYPE in marker:
                return FileType.EPUB
        if "META-INF/container.xml" in entries and has_package:
            return FileType.EPUB
        if has_package or any(entry.endswith(".ncx") for entry in entries):
            return FileType.DAISY
        return None


def build_default_registry() -> FormatRegistry:
    """Registry holding every supported format in its canonical order."""

    return FormatRegistry(build_default_descriptors())


@lru_cache(maxsize=1)
def default_registry() -> FormatRegistry:
    """Shared registry used when callers do not supply their own."""

    return build_default_registry()
