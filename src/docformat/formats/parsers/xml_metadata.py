"""Key/value extraction from metadata elements of XML manifests."""

from __future__ import annotations

import re
from typing import Iterable

from lxml import etree

from docformat.containers.xml_document import element_attributes, element_text, local_name

# MARC relator codes grouped by the metadata key they map onto.
# https://www.loc.gov/marc/relators/relacode.html
ROLE_TYPE: dict[str, tuple[str, ...]] = {
    "author": ("adp", "arc", "aus", "aut", "cmp", "cre", "dis", "drt"),
    "contributor": ("ctb",),
    "editor": ("edt", "edc", "edm", "flm"),
}

TYPE_ROLE: dict[str, str] = {code: role for role, codes in ROLE_TYPE.items() for code in codes}

_ROLE_KEYS = frozenset({"author", "creator", "contributor"})
_SCHEME_PREFIX_RE = re.compile(r"^[^:]+:")
_COMPOUND_RE = re.compile(r"^.*\.([^.]+)$")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z\d])([A-Z])")

Pair = tuple[str, str | None]


def make_key(name: str) -> str:
    """Turn an element or ``<meta>`` name into a raw metadata key.

    ``dc:title`` -> ``title``; ``DCTERMS.date.dateCopyrighted`` ->
    ``date_copyrighted``; ``dtb:totalPageCount`` -> ``total_page_count``.
    """

    text = _SCHEME_PREFIX_RE.sub("", name.strip())
    text = _COMPOUND_RE.sub(r"\1", text)
    text = text[:1].lower() + text[1:]
    text = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", text)
    text = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", text)
    return text.replace("-", "_").lower()


def role_type(relator_code: str | None) -> str | None:
    if not relator_code:
        return None
    return TYPE_ROLE.get(relator_code.strip().lower())


def is_meta(element: etree._Element) -> bool:
    return local_name(element) == "meta"


def parse_meta(element: etree._Element) -> Pair | None:
    """``<meta name|property=... content|value=...>``; ``None`` for other elements."""

    if not is_meta(element):
        return None
    attrs = element_attributes(element)
    name = attrs.get("property") or attrs.get("name")
    if not name:
        return None
    value = attrs.get("content") or attrs.get("value") or element_text(element)
    return make_key(name), value


def parse_element(element: etree._Element, role: str | None = None) -> Pair:
    """Key/value for a plain metadata element, honouring role/scheme/event attributes.

    ``role`` overrides the element's own ``role`` attribute (EPUB 3 refinements).
    """

    value = element_text(element)
    attrs = element_attributes(element)
    key = make_key(local_name(element))

    if key in _ROLE_KEYS:
        key = role_type(role or attrs.get("role")) or key
    elif key == "identifier":
        scheme = attrs.get("scheme")
        if scheme and value:
            value = f"{scheme.lower()}:{value}"
    elif key == "date":
        event = attrs.get("event")
        if event == "publication":
            key = "publication_date"
        elif event == "conversion":
            key = "produced_date"
    return key, value


def add_value(result: dict[str, list[str]], pair: Pair | None) -> None:
    if pair is None:
        return
    key, value = pair
    if key and value:
        result.setdefault(key, []).append(value)


def parse_metas(elements: Iterable[etree._Element]) -> dict[str, list[str]]:
    """Collect only ``<meta>`` elements (e.g. the ``<head>`` of an NCX)."""

    result: dict[str, list[str]] = {}
    for element in elements:
        add_value(result, parse_meta(element))
    return result


def parse_elements(elements: Iterable[etree._Element]) -> dict[str, list[str]]:
    """Collect every element as a plain key/value (e.g. ``docProps/core.xml``)."""

    result: dict[str, list[str]] = {}
    for element in elements:
        add_value(result, parse_element(element))
    return result
