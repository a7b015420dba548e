"""Whole-document failures raised by the report scanners."""
from __future__ import annotations

from enum import Enum


class ParseErrorKind(str, Enum):
    SECTION_NOT_FOUND = "section_not_found"
    NO_HEADER_ROW = "no_header_row"
    NO_TRADES_FOUND = "no_trades_found"
    NO_WORKSHEET = "no_worksheet"
    UNSUPPORTED_FORMAT = "unsupported_format"
    PARSE_FAILED = "parse_failed"


class ParseError(ValueError):
    """Raised when an entire report cannot be imported."""

    def __init__(self, kind: ParseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"ParseError(kind={self.kind.name}, message={self.message!r})"
