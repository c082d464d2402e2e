"""PDF document-information metadata via PyMuPDF."""

from __future__ import annotations

import logging
import re
from typing import Callable

import pymupdf

from docformat.config import ExtractionSettings
from docformat.formats.models import RawMetadata
from docformat.sources import FileSource, SourceHandle, as_source

logger = logging.getLogger(__name__)

_PDF_DATE_RE = re.compile(
    r"^D:(?P<year>\d{4})(?P<month>\d{2})?(?P<day>\d{2})?"
    r"(?P<hour>\d{2})?(?P<minute>\d{2})?(?P<second>\d{2})?"
    r"(?P<zone>Z|[+-]\d{2}'?\d{2}'?)?"
)
_ZULU_JUNK_RE = re.compile(r"Z.+$")
_KEYWORD_SPLIT_RE = re.compile(r"[,;]")

# PyMuPDF ``doc.metadata`` keys and the raw keys they are exposed under.
_INFO_KEYS = {
    "title": "title",
    "author": "author",
    "subject": "subject",
    "keywords": "keywords",
    "creator": "creator",
    "producer": "producer",
    "creationDate": "creation_date",
    "modDate": "mod_date",
    "trapped": "trapped",
    "encryption": "encryption",
    "format": "format",
}


def clean_pdf_date(value: str) -> str:
    """Rewrite a PDF date string (``D:YYYYMMDDHHmmSS+hh'mm'``) as ISO-8601.

    Trailing garbage after a ``Z`` zone marker is dropped. Values that are
    not PDF dates are returned with only that cleanup applied.
    """

    text = _ZULU_JUNK_RE.sub("Z", value.strip())
    match = _PDF_DATE_RE.match(text)
    if not match:
        return text
    parts = match.groupdict()
    result = f"{parts['year']}-{parts['month'] or '01'}-{parts['day'] or '01'}"
    if parts["hour"]:
        result += f"T{parts['hour']}:{parts['minute'] or '00'}:{parts['second'] or '00'}"
        zone = parts["zone"]
        if zone == "Z":
            result += "+00:00"
        elif zone:
            digits = zone.replace("'", "")
            result += f"{digits[:3]}:{digits[3:5]}"
    return result


def split_keywords(value: str) -> list[str]:
    return [word.strip() for word in _KEYWORD_SPLIT_RE.split(value) if word.strip()]


def _pdf_version(doc: pymupdf.Document) -> str | None:
    # "PDF 1.7" -> "1.7"
    found = (doc.metadata or {}).get("format") or ""
    return found.removeprefix("PDF").strip() or None


def _page_count(doc: pymupdf.Document) -> str | None:
    return str(doc.page_count) if doc.page_count else None


def _info_date(name: str) -> Callable[[pymupdf.Document], str | None]:
    def _read(doc: pymupdf.Document) -> str | None:
        value = (doc.metadata or {}).get(name)
        return clean_pdf_date(value) if value else None

    return _read


def _keywords(doc: pymupdf.Document) -> list[str]:
    return split_keywords((doc.metadata or {}).get("keywords") or "")


# Typed accessors are consulted first; the information dictionary fills in
# every key they do not cover.
TYPED_FIELDS: dict[str, Callable[[pymupdf.Document], str | list[str] | None]] = {
    "pdf_version": _pdf_version,
    "page_count": _page_count,
    "creation_date": _info_date("creationDate"),
    "mod_date": _info_date("modDate"),
    "keywords": _keywords,
}


class PdfParser:
    """Read the document information dictionary of a PDF."""

    def __init__(self, source: SourceHandle | FileSource, settings: ExtractionSettings | None = None) -> None:
        self._source = as_source(source)
        self._settings = settings or ExtractionSettings()

    def parse(self) -> RawMetadata:
        try:
            doc = self._open()
        except (RuntimeError, ValueError, OSError) as exc:
            logger.warning("Unable to open PDF %s: %s", self._source.name or "<buffer>", exc)
            return RawMetadata.empty()

        with doc:
            values: dict[str, str | list[str] | None] = {
                name: accessor(doc) for name, accessor in TYPED_FIELDS.items()
            }
            for info_key, raw_key in _INFO_KEYS.items():
                if values.get(raw_key):
                    continue
                values[raw_key] = (doc.metadata or {}).get(info_key)
        return RawMetadata({name: value for name, value in values.items() if value})

    def _open(self) -> pymupdf.Document:
        if self._source.path is not None:
            return pymupdf.open(self._source.path, filetype="pdf")
        return pymupdf.open(stream=self._source.read_bytes(), filetype="pdf")
