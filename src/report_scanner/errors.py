"""Exceptions raised by the format parsers."""
from __future__ import annotations


class ParseError(ValueError):
    """Raised when raw text cannot be turned into a dataset."""


class EmptyFileError(ParseError):
    pass


class InvalidStructureError(ParseError):
    pass
