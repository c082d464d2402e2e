"""Top-level entrypoint: detect or resolve the type, parse, normalize."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from docformat.config import ExtractionSettings
from docformat.errors import UnknownFormatError
from docformat.formats.models import FileType, FormatDescriptor, RawMetadata
from docformat.formats.registry import FormatRegistry, default_registry
from docformat.normalize.engine import CanonicalMetadata, DisplayMetadata, format_metadata, mapped_metadata
from docformat.sources import FileSource, SourceHandle, as_source

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ParsedDocument:
    """Raw parser output together with the descriptor that produced it."""

    file_type: FileType
    descriptor: FormatDescriptor
    raw: RawMetadata


class MetadataExtractor:
    """Combine the registry, the parsers and the normalization engine.

    Each call is independent; the same handle can be passed again and yields
    the same result as long as its content is unchanged.
    """

    def __init__(
        self,
        registry: FormatRegistry | None = None,
        settings: ExtractionSettings | None = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._settings = settings or ExtractionSettings()

    @property
    def registry(self) -> FormatRegistry:
        return self._registry

    def parse(self, handle: SourceHandle | FileSource, declared_type: FileType | str | None = None) -> ParsedDocument:
        source = as_source(handle)
        if declared_type is None:
            file_type = self._registry.detect(source, settings=self._settings)
        else:
            file_type = self._registry.resolve_type(declared_type, source, settings=self._settings)
        if file_type is None:
            raise UnknownFormatError(declared_type)

        descriptor = self._registry.require(file_type)
        parser = descriptor.parser_factory(source, self._settings)
        raw = parser.parse()
        logger.debug("Parsed %s as %s: %s raw keys", source.name or "<buffer>", file_type.value, len(raw))
        return ParsedDocument(file_type=file_type, descriptor=descriptor, raw=raw)

    def extract(self, handle: SourceHandle | FileSource, declared_type: FileType | str | None = None) -> CanonicalMetadata:
        """Canonical metadata keyed by shared search-record field names."""

        parsed = self.parse(handle, declared_type)
        return mapped_metadata(parsed.raw, parsed.descriptor)

    def display(self, handle: SourceHandle | FileSource, declared_type: FileType | str | None = None) -> DisplayMetadata:
        """Labelled metadata for presentation."""

        parsed = self.parse(handle, declared_type)
        return format_metadata(parsed.raw, parsed.descriptor)


def parse_raw(
    handle: SourceHandle | FileSource,
    declared_type: FileType | str | None = None,
    *,
    registry: FormatRegistry | None = None,
    settings: ExtractionSettings | None = None,
) -> tuple[FileType, RawMetadata]:
    parsed = MetadataExtractor(registry, settings).parse(handle, declared_type)
    return parsed.file_type, parsed.raw


def extract_metadata(
    handle: SourceHandle | FileSource,
    declared_type: FileType | str | None = None,
    *,
    registry: FormatRegistry | None = None,
    settings: ExtractionSettings | None = None,
) -> CanonicalMetadata:
    """Detect (or resolve) the file type of ``handle`` and return canonical metadata.

    Raises :class:`UnknownFormatError` when the type cannot be determined or
    has no registered descriptor. Unreadable content yields ``{}``.
    """

    return MetadataExtractor(registry, settings).extract(handle, declared_type)


def display_metadata(
    handle: SourceHandle | FileSource,
    declared_type: FileType | str | None = None,
    *,
    registry: FormatRegistry | None = None,
    settings: ExtractionSettings | None = None,
) -> DisplayMetadata:
    return MetadataExtractor(registry, settings).display(handle, declared_type)
