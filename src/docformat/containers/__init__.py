"""Container access: ZIP entry lookup and namespace-tolerant XML parsing."""

from .xml_document import XmlDocument, child_elements, element_attributes, element_text, local_name, parse_xml
from .zip_archive import (
    find_entry_path_by_extension,
    has_entry_with_extension,
    list_entry_paths,
    read_entry,
)

__all__ = [
    "XmlDocument",
    "child_elements",
    "element_attributes",
    "element_text",
    "find_entry_path_by_extension",
    "has_entry_with_extension",
    "list_entry_paths",
    "local_name",
    "parse_xml",
    "read_entry",
]
