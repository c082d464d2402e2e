from __future__ import annotations

from io import BytesIO
from pathlib import Path
import zipfile

import pymupdf
import pytest

from docformat.errors import UnknownFormatError
from docformat.extraction import MetadataExtractor, display_metadata, extract_metadata, parse_raw
from docformat.formats.definitions import epub_descriptor
from docformat.formats.models import FileType
from docformat.formats.registry import FormatRegistry

_CONTAINER_XML = b"""<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

_OPF = b"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Sample</dc:title>
    <dc:creator role="edt">J. Smith</dc:creator>
    <dc:identifier scheme="ISBN">9780000000002</dc:identifier>
    <dc:language>en</dc:language>
  </metadata>
</package>
"""

_DAISY_OPF = b"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://openebook.org/namespaces/oeb-package/1.0/">
  <metadata>
    <dc-metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
      <dc:Title>Talking Book</dc:Title>
      <dc:Creator>Author Name</dc:Creator>
    </dc-metadata>
    <x-metadata>
      <meta name="dtb:narrator" content="Reader Voice"/>
    </x-metadata>
  </metadata>
</package>
"""


def _build_zip(entries: dict[str, bytes]) -> bytes:
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def _sample_epub() -> bytes:
    return _build_zip(
        {
            "mimetype": b"application/epub+zip",
            "META-INF/container.xml": _CONTAINER_XML,
            "content.opf": _OPF,
        }
    )


def test_epub_end_to_end_display_and_canonical_metadata(tmp_path: Path) -> None:
    epub_path = tmp_path / "sample.epub"
    epub_path.write_bytes(_sample_epub())

    display = display_metadata(epub_path)
    canonical = extract_metadata(epub_path)

    assert display["Title"] == "Sample"
    assert display["Editor"] == "J. Smith"
    assert display["Creator"] == ["J. Smith"]
    assert display["Identifier"] == "isbn:9780000000002"
    assert display["Language"] == "eng"
    assert display["Format Version"] == "2.0"

    assert canonical == {
        "dc_title": "Sample",
        "dc_creator": ["J. Smith"],
        "dc_identifier": ["isbn:9780000000002"],
        "dc_language": ["eng"],
        "emma_formatVersion": "2.0",
    }


def test_year_only_publication_date_is_not_expanded() -> None:
    opf = b"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" xmlns:opf="http://www.idpf.org/2007/opf" version="2.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Sample</dc:title>
    <dc:date opf:event="publication">2004</dc:date>
  </metadata>
</package>
"""
    data = _build_zip({"mimetype": b"application/epub+zip", "content.opf": opf})

    canonical = extract_metadata(data, "epub")
    display = display_metadata(data, "epub")

    assert canonical["emma_publicationDate"] == "2004"
    assert display["Publication Date"] == "2004"


def test_extraction_is_idempotent_for_the_same_handle() -> None:
    stream = BytesIO(_sample_epub())

    first = extract_metadata(stream, "epub")
    second = extract_metadata(stream, FileType.EPUB)

    assert first == second
    assert stream.tell() == 0


def test_declared_type_is_disambiguated() -> None:
    data = _build_zip({"book/package.opf": _DAISY_OPF, "book/audio/chapter1.mp3": b"ID3"})

    file_type, raw = parse_raw(data, "daisy")
    display = display_metadata(data, FileType.DAISY)

    assert file_type is FileType.DAISY_AUDIO
    assert raw.lookup("narrator") == ["Reader Voice"]
    assert display["Narrator"] == "Reader Voice"
    assert extract_metadata(data, "daisy") == {"dc_title": "Talking Book", "dc_creator": ["Author Name"]}


def test_pdf_end_to_end(tmp_path: Path) -> None:
    pdf_path = tmp_path / "report.pdf"
    doc = pymupdf.open()
    doc.new_page().insert_text((72, 72), "Body text.")
    doc.set_metadata(
        {
            "title": "Annual Report",
            "author": "Jane Doe",
            "keywords": "finance, annual",
            "modDate": "D:20210102101500Z00'00'",
        }
    )
    doc.save(str(pdf_path))
    doc.close()

    display = display_metadata(pdf_path)
    canonical = extract_metadata(pdf_path)

    assert display["Title"] == "Annual Report"
    assert display["Keywords"] == ["finance", "annual"]
    assert display["Modified Date"] == "2021-01-02 10:15"
    assert display["Page Count"] == "1"
    assert canonical["dc_title"] == "Annual Report"
    assert canonical["dc_creator"] == ["Jane Doe"]
    assert canonical["dc_subject"] == ["finance", "annual"]


def test_stub_formats_produce_empty_metadata() -> None:
    for file_type in ("brf", "braille", "kurzweil", "rtf", "tactile"):
        assert parse_raw(b"anything", file_type)[1] == {}
        assert extract_metadata(b"anything", file_type) == {}
        assert display_metadata(b"anything", file_type) == {}


def test_unreadable_container_is_accepted_with_blank_metadata() -> None:
    assert extract_metadata(b"PK\x03\x04 corrupt", "epub") == {}
    assert display_metadata(b"", "word") == {}


def test_unknown_types_raise() -> None:
    with pytest.raises(UnknownFormatError):
        extract_metadata(b"plain bytes with no signature")
    with pytest.raises(UnknownFormatError):
        extract_metadata(b"anything", "hologram")

    registry = FormatRegistry([epub_descriptor()])
    with pytest.raises(UnknownFormatError) as excinfo:
        MetadataExtractor(registry).extract(b"%PDF-1.7", "pdf")
    assert excinfo.value.file_type is FileType.PDF
