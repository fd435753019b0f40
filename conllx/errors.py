"""Exceptions raised while reading CoNLL-X data."""

from __future__ import annotations

from typing import Optional


class ConllxError(Exception):
    """Base class for all conllx errors."""


class ParseError(ConllxError, ValueError):
    """A sentence could not be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedRecordError(ParseError):
    """A token line has the wrong number of columns."""


class IntegerParseError(ParseError):
    """ID, HEAD or PHEAD is not a valid integer."""

    def __init__(
        self,
        column: str,
        value: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        expected: str = "non-negative integer",
    ):
        self.column = column
        self.value = value
        super().__init__(f"{column}: expected {expected}, got {value!r}", line_number, line)
