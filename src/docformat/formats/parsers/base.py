"""Parser for formats that carry no extractable metadata."""

from __future__ import annotations

from docformat.config import ExtractionSettings
from docformat.formats.models import FormatParser, RawMetadata
from docformat.sources import FileSource, SourceHandle, as_source

__all__ = ["FormatParser", "StubParser"]


class StubParser:
    """Braille, BRF, Kurzweil, RTF and tactile graphics placeholders."""

    def __init__(self, source: SourceHandle | FileSource, settings: ExtractionSettings | None = None) -> None:
        self._source = as_source(source)

    def parse(self) -> RawMetadata:
        return RawMetadata.empty()
