"""Plus/minus query parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

from text_processing import MINUS_MARKER, split_non_empty_words


@dataclass(frozen=True)
class Query:
    """Parsed query: terms that add relevance and terms that exclude a document."""

    plus_words: frozenset[str]
    minus_words: frozenset[str]

    @property
    def is_empty(self) -> bool:
        return not self.plus_words


def parse_query(text: str, stop_words: AbstractSet[str]) -> Query:
    """Parse an already validated query string.

    A leading ``-`` marks a minus word. Stop words are dropped whether or
    not they carry the marker.
    """
    plus_words: set[str] = set()
    minus_words: set[str] = set()

    for word in split_non_empty_words(text):
        is_minus = word.startswith(MINUS_MARKER)
        if is_minus:
            word = word[len(MINUS_MARKER):]
        if word in stop_words:
            continue
        if is_minus:
            minus_words.add(word)
        else:
            plus_words.add(word)

    return Query(plus_words=frozenset(plus_words), minus_words=frozenset(minus_words))
