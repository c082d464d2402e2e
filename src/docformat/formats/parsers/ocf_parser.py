"""Open Container Format parsing shared by EPUB and DAISY.

Metadata comes from three places inside the ZIP container and is merged in
this order, later sources appending to earlier ones:

1. the package document (``.opf``): ``<metadata>`` elements and ``<meta>`` tags,
2. the navigation control file (``.ncx``): ``<head>`` ``<meta>`` tags,
3. the cover image referenced from the package ``<manifest>``, as a data URI.
"""

from __future__ import annotations

import base64
import logging
import posixpath
from urllib.parse import unquote

from lxml import etree

from docformat.config import ExtractionSettings
from docformat.containers.xml_document import (
    XmlDocument,
    child_elements,
    element_attributes,
    local_name,
    parse_xml,
)
from docformat.containers.zip_archive import find_entry_path_by_extension, read_entry
from docformat.formats.models import RawMetadata
from docformat.formats.parsers.xml_metadata import add_value, is_meta, parse_element, parse_meta, parse_metas
from docformat.sources import FileSource, SourceHandle, as_source

logger = logging.getLogger(__name__)

COVER_KEY = "cover"
COVER_IMAGE_KEY = "cover_image"
COVER_IMAGE_PROPERTY = "cover-image"


def _metadata_elements(section: etree._Element) -> list[etree._Element]:
    """Children of ``<metadata>``, descending into ``<dc-metadata>``/``<x-metadata>``."""

    elements: list[etree._Element] = []
    for element in child_elements(section):
        if "metadata" in local_name(element):
            elements.extend(_metadata_elements(element))
        else:
            elements.append(element)
    return elements


def _refined_roles(elements: list[etree._Element]) -> dict[str, str]:
    """EPUB 3 ``<meta refines="#id" property="role">`` values keyed by target id."""

    roles: dict[str, str] = {}
    for element in elements:
        if not is_meta(element):
            continue
        attrs = element_attributes(element)
        target = attrs.get("refines", "").lstrip("#")
        if target and attrs.get("property") == "role":
            role = attrs.get("content") or "".join(element.itertext()).strip()
            if role:
                roles.setdefault(target, role)
    return roles


class OcfParser:
    """Read EPUB/DAISY package metadata from a ZIP container."""

    manifest_extension = ".opf"
    navigation_extension = ".ncx"

    def __init__(self, source: SourceHandle | FileSource, settings: ExtractionSettings | None = None) -> None:
        self._source = as_source(source)
        self._settings = settings or ExtractionSettings()

    def parse(self) -> RawMetadata:
        opf_path = find_entry_path_by_extension(self.manifest_extension, self._source, settings=self._settings)
        package_document = self._document(opf_path)
        package, cover_id = self._package_metadata(package_document, opf_path)
        navigation = self._navigation_metadata()
        cover = self._cover_metadata(package_document, opf_path, cover_id)
        return RawMetadata(package).merged(navigation).merged(cover)

    def _document(self, entry_path: str | None) -> XmlDocument:
        if not entry_path:
            return XmlDocument(None)
        return parse_xml(read_entry(entry_path, self._source, settings=self._settings))

    def _package_metadata(
        self, document: XmlDocument, opf_path: str | None
    ) -> tuple[dict[str, list[str]], str | None]:
        result: dict[str, list[str]] = {}
        if document.is_empty:
            return result, None
        logger.debug("Reading package metadata from %s", opf_path)

        version = document.root_attribute("version")
        if version and local_name(document.root) == "package":
            result["format_version"] = [version]

        section = document.find_first("metadata")
        if section is None:
            return result, None

        elements = _metadata_elements(section)
        roles = _refined_roles(elements)
        cover_id: str | None = None
        for element in elements:
            attrs = element_attributes(element)
            if not is_meta(element):
                add_value(result, parse_element(element, role=roles.get(attrs.get("id", ""))))
                continue
            if "refines" in attrs:
                continue
            pair = parse_meta(element)
            if pair is not None and pair[0] == COVER_KEY:
                cover_id = cover_id or pair[1]
            else:
                add_value(result, pair)
        return result, cover_id

    def _navigation_metadata(self) -> dict[str, list[str]]:
        ncx_path = find_entry_path_by_extension(self.navigation_extension, self._source, settings=self._settings)
        document = self._document(ncx_path)
        return parse_metas(document.find_all("meta"))

    def _cover_metadata(
        self, document: XmlDocument, opf_path: str | None, cover_id: str | None
    ) -> dict[str, list[str]]:
        images: list[str] = []
        for item in document.find_all("manifest", "item"):
            attrs = element_attributes(item)
            if cover_id is not None:
                if attrs.get("id") != cover_id:
                    continue
            elif COVER_IMAGE_PROPERTY not in attrs.get("properties", "").split():
                continue
            image = self._image_data_uri(opf_path, attrs)
            if image:
                images.append(image)
        return {COVER_IMAGE_KEY: images} if images else {}

    def _image_data_uri(self, opf_path: str | None, attrs: dict[str, str]) -> str | None:
        href = unquote(attrs.get("href", ""))
        if not href:
            return None
        logger.debug("Reading cover image %s", href)
        base = posixpath.dirname(opf_path or "")
        data = read_entry(posixpath.normpath(posixpath.join(base, href)), self._source, settings=self._settings)
        if data is None:
            data = read_entry(href, self._source, recurse=True, settings=self._settings)
        if data is None:
            return None
        media_type = attrs.get("media-type", "application/octet-stream")
        return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


class EpubParser(OcfParser):
    """EPUB 2/3 package metadata."""


class DaisyParser(OcfParser):
    """DAISY 3 (and DAISY audio) package metadata; ``dc-metadata``/``x-metadata`` sections included."""
