"""Namespace-tolerant XML parsing for container manifests."""

from __future__ import annotations

import logging

from lxml import etree

logger = logging.getLogger(__name__)


def _new_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=False,
        recover=True,
        remove_comments=True,
        remove_pis=True,
    )


def local_name(element: etree._Element) -> str:
    """Element tag without its namespace (``{uri}title`` -> ``title``)."""

    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def element_text(element: etree._Element) -> str | None:
    """Stripped text content of ``element`` including descendants."""

    text = "".join(element.itertext()).strip()
    return text or None


def element_attributes(element: etree._Element) -> dict[str, str]:
    """Non-blank attributes keyed by local name (``opf:role`` -> ``role``)."""

    attributes: dict[str, str] = {}
    for name, value in element.attrib.items():
        cleaned = str(value).strip()
        if cleaned:
            attributes[etree.QName(name).localname] = cleaned
    return attributes


def child_elements(element: etree._Element) -> list[etree._Element]:
    """Direct element children (comments and processing instructions skipped)."""

    return [child for child in element if isinstance(child.tag, str)]


class XmlDocument:
    """Parsed XML tree; a malformed input yields an empty document."""

    __slots__ = ("_root",)

    def __init__(self, root: etree._Element | None) -> None:
        self._root = root

    @property
    def root(self) -> etree._Element | None:
        return self._root

    @property
    def is_empty(self) -> bool:
        return self._root is None

    def find_all(self, *path: str) -> list[etree._Element]:
        """Elements matching a chain of local names, ignoring namespaces.

        ``find_all("manifest", "item")`` behaves like ``//xmlns:manifest/xmlns:item``
        while also matching unprefixed or differently-prefixed documents.
        """

        if self._root is None or not path:
            return []
        head, *rest = path
        expression = f"//*[local-name()='{head}']"
        for name in rest:
            expression += f"/*[local-name()='{name}']"
        return self._root.xpath(expression)

    def find_first(self, *path: str) -> etree._Element | None:
        matches = self.find_all(*path)
        return matches[0] if matches else None

    def root_attribute(self, name: str) -> str | None:
        if self._root is None:
            return None
        return element_attributes(self._root).get(name)


def parse_xml(data: bytes | None) -> XmlDocument:
    """Parse raw bytes; malformed or empty input produces an empty document."""

    if not data:
        return XmlDocument(None)
    try:
        root = etree.fromstring(data, parser=_new_parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.warning("Unable to parse XML document: %s", exc)
        return XmlDocument(None)
    if root is None:
        logger.warning("XML document has no recoverable root element")
    return XmlDocument(root)
