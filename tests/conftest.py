"""Shared CoNLL-X fragments and the sentences they encode."""
from __future__ import annotations

from typing import List

import pytest

from conllx import Features, Sentence, TokenBuilder

FRAGMENT = (
    "1\tDie\tdie\tART\tART\tnsf\t2\tDET\n"
    "2\tGroßaufnahme\tGroßaufnahme\tN\tNN\tnsf\t0\tROOT\n"
    "\n"
    "1\tGilles\tGilles\tN\tNE\tnsm\t0\tROOT\n"
    "2\tDeleuze\tDeleuze\tN\tNE\tcase:nominative|number:singular|gender:masculine\t1\tAPP"
)

# Not valid CoNLL-X, but common in real corpora
FRAGMENT_ROBUST = (
    "1\tDie\tdie\tART\tART\tnsf\t2\tDET\n"
    "2\tGroßaufnahme\tGroßaufnahme\tN\tNN\tnsf\t0\tROOT\n"
    "\n"
    "\n"
    "1\tGilles\tGilles\tN\tNE\tnsm\t0\tROOT\n"
    "2\tDeleuze\tDeleuze\tN\tNE\tcase:nominative|number:singular|gender:masculine\t1\tAPP"
)

FRAGMENT_MARKED_EMPTY = (
    "1\tDie\tdie\tART\tART\tnsf\t2\tDET\t_\t_\n"
    "2\tGroßaufnahme\tGroßaufnahme\tN\tNN\tnsf\t0\tROOT\t_\t_\n"
    "\n"
    "1\tGilles\tGilles\tN\tNE\tnsm\t0\tROOT\t_\t_\n"
    "2\tDeleuze\tDeleuze\tN\tNE\tcase:nominative|number:singular|gender:masculine\t1\tAPP\t_\t_\n"
)


def make_sentences() -> List[Sentence]:
    return [
        Sentence([
            TokenBuilder()
            .form("Die")
            .lemma("die")
            .cpos("ART")
            .pos("ART")
            .features(Features.from_string("nsf"))
            .head(2)
            .head_rel("DET")
            .build(),
            TokenBuilder()
            .form("Großaufnahme")
            .lemma("Großaufnahme")
            .cpos("N")
            .pos("NN")
            .features(Features.from_string("nsf"))
            .head(0)
            .head_rel("ROOT")
            .build(),
        ]),
        Sentence([
            TokenBuilder()
            .form("Gilles")
            .lemma("Gilles")
            .cpos("N")
            .pos("NE")
            .features(Features.from_string("nsm"))
            .head(0)
            .head_rel("ROOT")
            .build(),
            TokenBuilder()
            .form("Deleuze")
            .lemma("Deleuze")
            .cpos("N")
            .pos("NE")
            .features(Features.from_string("case:nominative|number:singular|gender:masculine"))
            .head(1)
            .head_rel("APP")
            .build(),
        ]),
    ]


@pytest.fixture
def sentences() -> List[Sentence]:
    return make_sentences()


@pytest.fixture
def fragment() -> str:
    return FRAGMENT


@pytest.fixture
def fragment_robust() -> str:
    return FRAGMENT_ROBUST


@pytest.fixture
def fragment_marked_empty() -> str:
    return FRAGMENT_MARKED_EMPTY


@pytest.fixture(params=[FRAGMENT, FRAGMENT_ROBUST, FRAGMENT_MARKED_EMPTY], ids=["plain", "robust", "marked-empty"])
def any_fragment(request) -> str:
    return request.param
