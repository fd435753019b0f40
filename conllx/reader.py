"""
Streaming CoNLL-X reader.

Sentences are separated by one or more blank (or whitespace-only) lines. Token
lines carry the eight mandatory columns ID FORM LEMMA CPOS POS FEATS HEAD
DEPREL, optionally followed by PHEAD and PDEPREL.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import IO, Iterator, List, Optional, Tuple, Union

from .config import ConllxConfig
from .doc import CONLLX_COLUMNS, EMPTY, REQUIRED_COLUMNS, Sentence, Token, TokenBuilder
from .errors import IntegerParseError, MalformedRecordError, ParseError

logger = logging.getLogger(__name__)

# int() would also accept signs, underscores, surrounding spaces and non-ASCII digits
_UNSIGNED_INT = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SentenceResult:
    """Outcome of reading one sentence: either ``sentence`` or ``error`` is set."""
    sentence: Optional[Sentence] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Sentence:
        """Return the sentence, or raise the error it failed with."""
        if self.error is not None:
            raise self.error
        if self.sentence is None:
            raise ValueError("SentenceResult holds neither a sentence nor an error")
        return self.sentence


def _parse_int(value: str, column: str, line_number: int, line: str, positive: bool = False) -> int:
    if not _UNSIGNED_INT.fullmatch(value):
        raise IntegerParseError(
            column,
            value,
            line_number,
            line,
            expected="positive integer" if positive else "non-negative integer",
        )
    number = int(value)
    if positive and number == 0:
        raise IntegerParseError(column, value, line_number, line, expected="positive integer")
    return number


def _optional(cols: List[str], index: int) -> Optional[str]:
    if index >= len(cols) or cols[index] == EMPTY:
        return None
    return cols[index]


def _optional_int(cols: List[str], index: int, line_number: int, line: str) -> Optional[int]:
    value = _optional(cols, index)
    if value is None:
        return None
    return _parse_int(value, CONLLX_COLUMNS[index], line_number, line)


def parse_token_line(line: str, line_number: int = 0) -> Token:
    """
    Parse a single tab-separated token line.

    Surrounding whitespace (stray trailing tabs or spaces) is ignored. The ID
    column is checked before the column count, so a line that is not tabular
    at all is reported as an :class:`IntegerParseError`.
    """
    cols = line.strip().split("\t")
    # ID is implied by the token's position and not kept
    _parse_int(cols[0], "ID", line_number, line, positive=True)
    if not REQUIRED_COLUMNS <= len(cols) <= len(CONLLX_COLUMNS):
        raise MalformedRecordError(
            f"expected {REQUIRED_COLUMNS} to {len(CONLLX_COLUMNS)} tab-separated columns, got {len(cols)}",
            line_number,
            line,
        )
    return (
        TokenBuilder()
        .form(cols[1])
        .lemma(cols[2])
        .cpos(cols[3])
        .pos(cols[4])
        .features(_optional(cols, 5))
        .head(_optional_int(cols, 6, line_number, line))
        .head_rel(_optional(cols, 7))
        .proj_head(_optional_int(cols, 8, line_number, line))
        .proj_rel(_optional(cols, 9))
        .build()
    )


class Reader:
    """
    Read sentences one at a time from a binary or text stream.

    The reader owns the stream: use it as a context manager (or call
    :meth:`close`) to release it. It makes a single forward pass and cannot be
    restarted.
    """

    def __init__(self, stream: IO, config: Optional[ConllxConfig] = None):
        self.stream = stream
        self.config = config or ConllxConfig()
        self.line_number = 0
        self._exhausted = False

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.stream.close()

    def _next_line(self) -> Optional[str]:
        if self._exhausted:
            return None
        raw: Union[bytes, str] = self.stream.readline()
        if not raw:
            self._exhausted = True
            return None
        self.line_number += 1
        if isinstance(raw, bytes):
            raw = raw.decode(self.config.encoding, self.config.errors)
        return raw.rstrip("\r\n")

    def _read_block(self) -> List[Tuple[int, str]]:
        """Collect the numbered lines of the next sentence, skipping separators."""
        block: List[Tuple[int, str]] = []
        while True:
            line = self._next_line()
            if line is None:
                return block
            if not line.strip():
                if block:
                    return block
                continue
            block.append((self.line_number, line))

    def read_sentence(self) -> Optional[Sentence]:
        """
        Read the next sentence.

        Returns ``None`` once the input is exhausted. A malformed sentence
        raises a :class:`ParseError` only after all of its lines have been
        consumed, so the following call starts at the next sentence.
        """
        block = self._read_block()
        if not block:
            return None
        try:
            return Sentence([parse_token_line(line, number) for number, line in block])
        except ParseError as exc:
            logger.debug("Skipping to next sentence after parse error: %s", exc)
            raise

    def sentences(self) -> Iterator[SentenceResult]:
        """Yield a :class:`SentenceResult` per sentence until the input ends."""
        while True:
            try:
                sentence = self.read_sentence()
            except ParseError as exc:
                yield SentenceResult(error=exc)
                continue
            if sentence is None:
                return
            yield SentenceResult(sentence=sentence)

    def __iter__(self) -> Iterator[Sentence]:
        while True:
            sentence = self.read_sentence()
            if sentence is None:
                return
            yield sentence


def conllx_to_sentences(conllx_text: str, config: Optional[ConllxConfig] = None) -> List[Sentence]:
    """Parse a complete CoNLL-X string, raising on the first malformed sentence."""
    with Reader(io.StringIO(conllx_text), config) as reader:
        return list(reader)
