"""
conllx: reading and writing CoNLL-X dependency treebanks.

Sentences are read lazily and one at a time, so a malformed sentence is
reported on its own without stopping the rest of the corpus.
"""

__version__ = "1.0.0"

from conllx.config import ConllxConfig
from conllx.doc import Features, Sentence, Token, TokenBuilder
from conllx.errors import ConllxError, IntegerParseError, MalformedRecordError, ParseError
from conllx.reader import Reader, SentenceResult, conllx_to_sentences
from conllx.writer import (
    PartitioningWriter,
    SentenceWriter,
    Writer,
    by_key,
    hashed,
    round_robin,
    sentences_to_conllx,
    weighted,
)

__all__ = [
    'ConllxConfig',
    'ConllxError',
    'Features',
    'IntegerParseError',
    'MalformedRecordError',
    'ParseError',
    'PartitioningWriter',
    'Reader',
    'Sentence',
    'SentenceResult',
    'SentenceWriter',
    'Token',
    'TokenBuilder',
    'Writer',
    'by_key',
    'conllx_to_sentences',
    'hashed',
    'round_robin',
    'sentences_to_conllx',
    'weighted',
    '__version__',
]
