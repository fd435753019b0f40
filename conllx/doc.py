from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

EMPTY = "_"

# CoNLL-X columns in file order
CONLLX_COLUMNS = (
    "ID",
    "FORM",
    "LEMMA",
    "CPOS",
    "POS",
    "FEATS",
    "HEAD",
    "DEPREL",
    "PHEAD",
    "PDEPREL",
)
REQUIRED_COLUMNS = 8


@dataclass(frozen=True)
class Features:
    """
    Morphological feature annotation of a token (the FEATS column).

    Only the raw string is stored and compared. The key/value view returned by
    :meth:`as_map` is derived from it on first use and is never written back,
    so the annotation is reproduced byte for byte on output.
    """

    raw: str

    @classmethod
    def from_string(cls, raw: str) -> "Features":
        return cls(raw)

    @cached_property
    def _mapping(self) -> Dict[str, Optional[str]]:
        parsed: Dict[str, Optional[str]] = {}
        for entry in self.raw.split("|"):
            key, sep, value = entry.partition(":")
            parsed[key] = value if sep else None
        return {key: parsed[key] for key in sorted(parsed)}

    def as_map(self) -> Dict[str, Optional[str]]:
        """Return a fresh ``{key: value or None}`` dict, keys sorted."""
        return dict(self._mapping)

    def as_str(self) -> str:
        return self.raw

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._mapping.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Token:
    form: str
    lemma: str
    cpos: str
    pos: str
    features: Optional[Features] = None
    head: Optional[int] = None
    head_rel: Optional[str] = None
    proj_head: Optional[int] = None
    proj_rel: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        feats = data.get("features")
        return cls(
            form=data.get("form", ""),
            lemma=data.get("lemma", ""),
            cpos=data.get("cpos", ""),
            pos=data.get("pos", ""),
            features=Features(feats) if feats is not None else None,
            head=data.get("head"),
            head_rel=data.get("head_rel"),
            proj_head=data.get("proj_head"),
            proj_rel=data.get("proj_rel"),
        )

    def to_dict(self) -> dict:
        result = {
            "form": self.form,
            "lemma": self.lemma,
            "cpos": self.cpos,
            "pos": self.pos,
        }
        if self.features is not None:
            result["features"] = self.features.raw
        if self.head is not None:
            result["head"] = self.head
        if self.head_rel is not None:
            result["head_rel"] = self.head_rel
        if self.proj_head is not None:
            result["proj_head"] = self.proj_head
        if self.proj_rel is not None:
            result["proj_rel"] = self.proj_rel
        return result


class TokenBuilder:
    """
    Stepwise construction of a :class:`Token`.

    Every setter returns the builder so calls can be chained::

        token = TokenBuilder().form("Die").lemma("die").head(2).head_rel("DET").build()

    Textual columns default to ``""``, all others to ``None``.
    """

    def __init__(self) -> None:
        self._form = ""
        self._lemma = ""
        self._cpos = ""
        self._pos = ""
        self._features: Optional[Features] = None
        self._head: Optional[int] = None
        self._head_rel: Optional[str] = None
        self._proj_head: Optional[int] = None
        self._proj_rel: Optional[str] = None

    @classmethod
    def from_token(cls, token: Token) -> "TokenBuilder":
        return (
            cls()
            .form(token.form)
            .lemma(token.lemma)
            .cpos(token.cpos)
            .pos(token.pos)
            .features(token.features)
            .head(token.head)
            .head_rel(token.head_rel)
            .proj_head(token.proj_head)
            .proj_rel(token.proj_rel)
        )

    def form(self, value: str) -> "TokenBuilder":
        self._form = value
        return self

    def lemma(self, value: str) -> "TokenBuilder":
        self._lemma = value
        return self

    def cpos(self, value: str) -> "TokenBuilder":
        self._cpos = value
        return self

    def pos(self, value: str) -> "TokenBuilder":
        self._pos = value
        return self

    def features(self, value: Union[Features, str, None]) -> "TokenBuilder":
        # Plain strings are accepted as raw annotations
        if isinstance(value, str):
            value = Features(value)
        self._features = value
        return self

    def head(self, value: Optional[int]) -> "TokenBuilder":
        self._head = value
        return self

    def head_rel(self, value: Optional[str]) -> "TokenBuilder":
        self._head_rel = value
        return self

    def proj_head(self, value: Optional[int]) -> "TokenBuilder":
        self._proj_head = value
        return self

    def proj_rel(self, value: Optional[str]) -> "TokenBuilder":
        self._proj_rel = value
        return self

    def build(self) -> Token:
        return Token(
            form=self._form,
            lemma=self._lemma,
            cpos=self._cpos,
            pos=self._pos,
            features=self._features,
            head=self._head,
            head_rel=self._head_rel,
            proj_head=self._proj_head,
            proj_rel=self._proj_rel,
        )


@dataclass(frozen=True)
class Sentence:
    """Non-empty, ordered sequence of tokens; position ``i`` has index ``i + 1``."""

    tokens: Tuple[Token, ...]

    def __init__(self, tokens: Iterable[Token]):
        object.__setattr__(self, "tokens", tuple(tokens))
        if not self.tokens:
            raise ValueError("A sentence must contain at least one token")

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]

    @classmethod
    def from_dict(cls, data: dict) -> "Sentence":
        return cls(Token.from_dict(t) for t in data.get("tokens", []))

    def to_dict(self) -> dict:
        return {"tokens": [tok.to_dict() for tok in self.tokens]}
