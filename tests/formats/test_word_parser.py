from __future__ import annotations

from io import BytesIO
import zipfile

from docformat.formats.parsers.word_parser import WordParser

_CORE_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<cp:coreProperties
    xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:dcterms="http://purl.org/dc/terms/"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <dc:title>Quarterly Report</dc:title>
  <dc:creator>Pat Lee</dc:creator>
  <cp:keywords>finance; q3</cp:keywords>
  <cp:lastModifiedBy>Sam Roe</cp:lastModifiedBy>
  <cp:revision>4</cp:revision>
  <dcterms:created xsi:type="dcterms:W3CDTF">2021-07-01T09:30:00Z</dcterms:created>
  <dcterms:modified xsi:type="dcterms:W3CDTF">2021-07-02T00:00:00Z</dcterms:modified>
</cp:coreProperties>
"""

_APP_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
    xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes">
  <Pages>12</Pages>
  <Words>3400</Words>
  <Application>Microsoft Office Word</Application>
  <AppVersion>16.0000</AppVersion>
  <Company>Example Corp</Company>
  <HeadingPairs><vt:vector size="2" baseType="variant"/></HeadingPairs>
</Properties>
"""


def _build_docx(entries: dict[str, bytes]) -> bytes:
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("[Content_Types].xml", b"<Types/>")
        archive.writestr("word/document.xml", b"<w:document/>")
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def test_word_parser_reads_core_and_app_properties() -> None:
    data = _build_docx({"docProps/core.xml": _CORE_XML, "docProps/app.xml": _APP_XML})

    raw = WordParser(data).parse()

    assert raw.lookup("title") == ["Quarterly Report"]
    assert raw.lookup("creator") == ["Pat Lee"]
    assert raw.lookup("keywords") == ["finance; q3"]
    assert raw.lookup("last_modified_by") == ["Sam Roe"]
    assert raw.lookup("created") == ["2021-07-01T09:30:00Z"]
    assert raw.lookup("pages") == ["12"]
    assert raw.lookup("app_version") == ["16.0000"]
    assert raw.lookup("company") == ["Example Corp"]
    assert "heading_pairs" not in raw


def test_word_parser_without_properties_is_empty() -> None:
    assert len(WordParser(_build_docx({})).parse()) == 0
    assert len(WordParser(b"not a zip").parse()) == 0
