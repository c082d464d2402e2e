"""Word (OOXML) document properties.

Core properties (``docProps/core.xml``) carry the Dublin Core fields;
extended properties (``docProps/app.xml``) add page/word counts and the
producing application.
"""

from __future__ import annotations

import logging

from docformat.containers.xml_document import child_elements, local_name
from docformat.formats.models import RawMetadata
from docformat.formats.parsers.ocf_parser import OcfParser
from docformat.formats.parsers.xml_metadata import parse_elements

logger = logging.getLogger(__name__)

CORE_PROPERTIES_PATH = "docProps/core.xml"
APP_PROPERTIES_PATH = "docProps/app.xml"

# Extended properties with structured content (vectors, heading pairs).
_SKIPPED_APP_PROPERTIES = frozenset({"HeadingPairs", "TitlesOfParts", "HLinks", "DigSig"})


class WordParser(OcfParser):
    """OCF variant reading the ``docProps`` parts of a ``.docx`` container."""

    def parse(self) -> RawMetadata:
        core = self._properties(CORE_PROPERTIES_PATH)
        app = self._properties(APP_PROPERTIES_PATH, skip=_SKIPPED_APP_PROPERTIES)
        return RawMetadata(core).merged(app)

    def _properties(self, path: str, skip: frozenset[str] = frozenset()) -> dict[str, list[str]]:
        document = self._document(path)
        if document.is_empty:
            logger.debug("No %s in %s", path, self._source.name or "<buffer>")
            return {}
        elements = [
            element
            for element in child_elements(document.root)
            if local_name(element) not in skip
        ]
        return parse_elements(elements)
