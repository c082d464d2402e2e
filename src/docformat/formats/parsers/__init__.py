"""Per-format metadata parsers."""

from .base import FormatParser, StubParser
from .ocf_parser import DaisyParser, EpubParser, OcfParser
from .pdf_parser import PdfParser
from .word_parser import WordParser

__all__ = [
    "FormatParser",
    "StubParser",
    "OcfParser",
    "EpubParser",
    "DaisyParser",
    "PdfParser",
    "WordParser",
]
