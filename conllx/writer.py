"""
CoNLL-X writers.

:class:`Writer` serializes sentences to a single stream. Every token line gets
all ten columns, with ``_`` for anything the token does not carry, and
sentences are separated by exactly one blank line.

:class:`PartitioningWriter` spreads a sentence stream over several writers,
e.g. to cut train/dev/test splits in one pass. The partition of a sentence is
chosen by a selector, a pure function of the sentence's position in the
stream, the sentence itself and the number of partitions::

    with PartitioningWriter([train, dev, test], selector=weighted([8, 1, 1])) as splitter:
        splitter.write_sentences(reader)
"""

from __future__ import annotations

import codecs
import io
import logging
import zlib
from abc import ABC, abstractmethod
from contextlib import ExitStack
from typing import IO, Callable, Iterable, List, Optional, Sequence, Union

from tabulate import tabulate

from .config import ConllxConfig
from .doc import EMPTY, Sentence, Token

logger = logging.getLogger(__name__)

Selector = Callable[[int, Sentence, int], int]


def _is_text_sink(sink: object) -> bool:
    if isinstance(sink, (io.TextIOBase, codecs.StreamWriter, codecs.StreamReaderWriter)):
        return True
    if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        return False
    # Duck-typed sinks: trust an explicit mode, then an encoding attribute
    mode = getattr(sink, "mode", None)
    if isinstance(mode, str):
        return "b" not in mode
    return getattr(sink, "encoding", None) is not None


def _or_empty(value: object) -> str:
    return EMPTY if value is None else str(value)


def format_token_line(position: int, token: Token) -> str:
    """Format ``token`` as a ten-column line (without terminator)."""
    return "\t".join(
        [
            str(position),
            token.form,
            token.lemma,
            token.cpos,
            token.pos,
            _or_empty(token.features),
            _or_empty(token.head),
            _or_empty(token.head_rel),
            _or_empty(token.proj_head),
            _or_empty(token.proj_rel),
        ]
    )


class SentenceWriter(ABC):
    """Abstract base class for anything sentences can be written to."""

    @abstractmethod
    def write_sentence(self, sentence: Sentence) -> None:
        pass

    def write_sentences(self, sentences: Iterable[Sentence]) -> int:
        """Write all ``sentences`` in order and return how many were written."""
        count = 0
        for sentence in sentences:
            self.write_sentence(sentence)
            count += 1
        return count

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Writer(SentenceWriter):
    """
    Write sentences to a binary or text sink.

    Binary sinks receive text encoded with ``config.encoding``. Each sentence
    is handed to the sink in a single ``write`` call and flushed; errors from
    the sink propagate unchanged and nothing already written is undone.
    """

    def __init__(self, sink: IO, config: Optional[ConllxConfig] = None):
        self._sink = sink
        self.config = config or ConllxConfig()
        self._text = _is_text_sink(sink)
        self._first = True

    @property
    def sink(self) -> IO:
        return self._sink

    def write_sentence(self, sentence: Sentence) -> None:
        newline = self.config.newline
        block = "".join(
            format_token_line(position, token) + newline
            for position, token in enumerate(sentence, start=1)
        )
        if not self._first:
            block = newline + block
        if self._text:
            self._sink.write(block)
        else:
            self._sink.write(block.encode(self.config.encoding, self.config.errors))
        self._first = False
        self._sink.flush()

    def close(self) -> None:
        self._sink.close()


def round_robin(index: int, sentence: Sentence, num_partitions: int) -> int:
    return index % num_partitions


def weighted(weights: Sequence[int]) -> Selector:
    """
    Cycle through partitions in proportion to integer ``weights``.

    ``weighted([8, 1, 1])`` sends positions 0-7 of every block of ten to
    partition 0, position 8 to partition 1 and position 9 to partition 2.
    """
    if not weights:
        raise ValueError("weights must not be empty")
    if any(not isinstance(w, int) or w <= 0 for w in weights):
        raise ValueError(f"weights must be positive integers, got {list(weights)}")
    bounds: List[int] = []
    total = 0
    for weight in weights:
        total += weight
        bounds.append(total)

    def select(index: int, sentence: Sentence, num_partitions: int) -> int:
        if num_partitions != len(bounds):
            raise ValueError(f"{len(bounds)} weights given for {num_partitions} partitions")
        slot = index % total
        for partition, bound in enumerate(bounds):
            if slot < bound:
                return partition
        raise AssertionError("unreachable")

    return select


def _stable_hash(text: str) -> int:
    # hash() is salted per process, crc32 is not
    return zlib.crc32(text.encode("utf-8"))


def hashed(index: int, sentence: Sentence, num_partitions: int) -> int:
    """Select by a checksum of the sentence's word forms, ignoring its position."""
    return _stable_hash("\t".join(token.form for token in sentence)) % num_partitions


def by_key(key_func: Callable[[int, Sentence], str]) -> Selector:
    """Select by a checksum of an externally supplied key such as a document id."""

    def select(index: int, sentence: Sentence, num_partitions: int) -> int:
        return _stable_hash(key_func(index, sentence)) % num_partitions

    return select


class PartitioningWriter(SentenceWriter):
    """
    Route each sentence to exactly one of several writers.

    ``writers`` may mix :class:`SentenceWriter` instances and raw sinks; raw
    sinks are wrapped in a :class:`Writer` using ``config``. Without a
    ``selector`` sentences are distributed round robin.
    """

    def __init__(
        self,
        writers: Sequence[Union[SentenceWriter, IO]],
        selector: Optional[Selector] = None,
        config: Optional[ConllxConfig] = None,
    ):
        if not writers:
            raise ValueError("PartitioningWriter needs at least one writer")
        self.writers: List[SentenceWriter] = [
            w if isinstance(w, SentenceWriter) else Writer(w, config) for w in writers
        ]
        self.selector = selector or round_robin
        self.position = 0
        self.counts = [0] * len(self.writers)
        self.token_counts = [0] * len(self.writers)

    def partition_for(self, sentence: Sentence) -> int:
        """Partition the next sentence would be written to."""
        partition = self.selector(self.position, sentence, len(self.writers))
        if not 0 <= partition < len(self.writers):
            raise ValueError(
                f"Selector returned partition {partition} for {len(self.writers)} writers"
            )
        return partition

    def write_sentence(self, sentence: Sentence) -> None:
        partition = self.partition_for(sentence)
        logger.debug("Sentence %d -> partition %d", self.position, partition)
        self.writers[partition].write_sentence(sentence)
        self.counts[partition] += 1
        self.token_counts[partition] += len(sentence)
        self.position += 1

    def summary(self, names: Optional[Sequence[str]] = None) -> str:
        """Render a table of sentences and tokens written per partition."""
        if names is not None and len(names) != len(self.writers):
            raise ValueError(f"{len(names)} names given for {len(self.writers)} partitions")
        labels = list(names) if names is not None else [str(i) for i in range(len(self.writers))]
        rows = [
            [label, sentences, tokens]
            for label, sentences, tokens in zip(labels, self.counts, self.token_counts)
        ]
        rows.append(["total", sum(self.counts), sum(self.token_counts)])
        return tabulate(rows, headers=["Partition", "Sentences", "Tokens"])

    def close(self) -> None:
        logger.info("Closing %d partitions, sentence counts: %s", len(self.writers), self.counts)
        # Every writer is closed even if another one fails to close; the failure of
        # the lowest-numbered partition is the one raised
        with ExitStack() as stack:
            for writer in self.writers:
                stack.callback(writer.close)


def sentences_to_conllx(sentences: Iterable[Sentence], config: Optional[ConllxConfig] = None) -> str:
    """Render ``sentences`` as a CoNLL-X string."""
    with Writer(io.StringIO(), config) as writer:
        writer.write_sentences(sentences)
        return writer.sink.getvalue()
