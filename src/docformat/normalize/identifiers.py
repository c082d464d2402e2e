"""Standard identifiers for published works (ISBN, ISSN, DOI, OCLC, LCCN, UPC).

An identifier is rendered as ``scheme:number`` with a lowercase scheme, for
example ``isbn:9780000000002``. Dashes and spaces are removed from numeric
schemes; DOI suffixes are kept verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable

import isbnlib

_PREFIX_RE = re.compile(r"^(?:urn:)?([A-Za-z][A-Za-z0-9-]*)\s*:\s*(.+)$")
_DOI_URL_RE = re.compile(r"^(?:https?://)?(?:dx\.)?doi\.org/", re.IGNORECASE)
_DOI_RE = re.compile(r"^10\.\d{4,9}/\S+$")
_OCLC_RE = re.compile(r"^(?:ocm|ocn|on)?(\d{1,12})$", re.IGNORECASE)
_LCCN_RE = re.compile(r"^[a-z]{0,3}\d{8,10}$")
_SEPARATORS_RE = re.compile(r"[\s-]+")

_SCHEME_ALIASES = {
    "isbn10": "isbn",
    "isbn13": "isbn",
    "isbn-10": "isbn",
    "isbn-13": "isbn",
    "eissn": "issn",
}


@dataclass(frozen=True, slots=True)
class PublicationIdentifier:
    """A validated identifier."""

    scheme: str
    number: str

    def __str__(self) -> str:
        return f"{self.scheme}:{self.number}"


def _digits(value: str) -> str:
    return _SEPARATORS_RE.sub("", value).upper()


def _isbn(value: str) -> str | None:
    candidate = _digits(value)
    if isbnlib.is_isbn13(candidate) or isbnlib.is_isbn10(candidate):
        return isbnlib.canonical(candidate)
    return None


def _issn(value: str) -> str | None:
    candidate = _digits(value)
    if len(candidate) != 8 or not candidate[:7].isdigit():
        return None
    total = sum(int(digit) * (8 - index) for index, digit in enumerate(candidate[:7]))
    check = (11 - total % 11) % 11
    expected = "X" if check == 10 else str(check)
    return candidate if candidate[7] == expected else None


def _upc(value: str) -> str | None:
    candidate = _digits(value)
    if len(candidate) != 12 or not candidate.isdigit():
        return None
    digits = [int(digit) for digit in candidate]
    total = 3 * sum(digits[0:11:2]) + sum(digits[1:11:2])
    return candidate if (10 - total % 10) % 10 == digits[11] else None


def _doi(value: str) -> str | None:
    candidate = _DOI_URL_RE.sub("", value.strip())
    return candidate if _DOI_RE.match(candidate) else None


def _oclc(value: str) -> str | None:
    match = _OCLC_RE.match(_digits(value).lower())
    return match.group(1) if match else None


def _lccn(value: str) -> str | None:
    candidate = re.sub(r"\s+", "", value).lower()
    if "-" in candidate:
        year, _, serial = candidate.partition("-")
        candidate = year + serial.zfill(6)
    return candidate if _LCCN_RE.match(candidate) else None


_VALIDATORS: dict[str, Callable[[str], str | None]] = {
    "isbn": _isbn,
    "issn": _issn,
    "upc": _upc,
    "doi": _doi,
    "oclc": _oclc,
    "lccn": _lccn,
}

# Tried in order for values that carry no scheme prefix.
_UNPREFIXED_SCHEMES = ("isbn", "issn", "upc", "doi")


def parse_identifier(value: str) -> PublicationIdentifier | None:
    """Validate ``value``; return ``None`` for anything that is not a known identifier."""

    text = value.strip()
    if not text:
        return None

    if _DOI_URL_RE.match(text):
        number = _doi(text)
        return PublicationIdentifier("doi", number) if number else None

    match = _PREFIX_RE.match(text)
    if match:
        scheme = match.group(1).lower()
        scheme = _SCHEME_ALIASES.get(scheme, scheme)
        validator = _VALIDATORS.get(scheme)
        if validator is None:
            return None
        number = validator(match.group(2))
        return PublicationIdentifier(scheme, number) if number else None

    for scheme in _UNPREFIXED_SCHEMES:
        number = _VALIDATORS[scheme](text)
        if number:
            return PublicationIdentifier(scheme, number)
    return None


def normalize_identifiers(values: list[str]) -> list[str]:
    """Keep only valid identifiers, rendered as ``scheme:number``."""

    result: list[str] = []
    for value in values:
        identifier = parse_identifier(value)
        if identifier is not None and str(identifier) not in result:
            result.append(str(identifier))
    return result
