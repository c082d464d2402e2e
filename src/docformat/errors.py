"""Exceptions raised by format detection, parsing and normalization."""

from __future__ import annotations

from dataclasses import dataclass


class FormatError(Exception):
    """Base class for errors raised by the package."""


@dataclass(slots=True)
class UnknownFormatError(FormatError):
    """No registered descriptor exists for the requested file type."""

    file_type: object
    message: str = "No format registered for file type"

    def __str__(self) -> str:
        return f"{self.message} (type={self.file_type!r})"


class IncompatibleSourceError(FormatError, TypeError):
    """The handle given to a parser is not a path, buffer or seekable stream."""


class ConfigurationError(FormatError, ValueError):
    """Static format configuration or environment settings are invalid."""
