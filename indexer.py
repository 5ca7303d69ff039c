"""Document store and inverted index with normalized term frequencies."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Mapping

from text_processing import InvalidTextError, check_text, split_non_empty_words


class DocumentStatus(IntEnum):
    """Lifecycle state of a document, fixed when the document is added."""

    ACTUAL = 0
    IRRELEVANT = 1
    BANNED = 2
    REMOVED = 3


class DocumentIdError(ValueError):
    """Raised for negative, non-integer or already indexed document ids."""


class InvalidDocumentError(ValueError):
    """Raised for a status outside DocumentStatus or non-integer ratings."""


class UnknownDocumentError(KeyError):
    """Raised when a document id is not present in the store."""


@dataclass(frozen=True)
class DocumentRecord:
    """Stored metadata of a single indexed document."""

    rating: int
    status: DocumentStatus


class InvertedIndex:
    """Maps terms to per-document term frequencies and keeps document metadata.

    Documents are only ever added. Every call to :meth:`add_document` either
    fully succeeds or raises before touching any state.
    """

    def __init__(self, stop_words: frozenset[str], logger: logging.Logger) -> None:
        self._stop_words = stop_words
        self._logger = logger
        self._word_to_document_freqs: dict[str, dict[int, float]] = {}
        self._documents: dict[int, DocumentRecord] = {}
        self._document_ids: list[int] = []

    @property
    def stop_words(self) -> frozenset[str]:
        return self._stop_words

    def add_document(
        self,
        document_id: int,
        text: str,
        status: DocumentStatus,
        ratings: Iterable[int],
    ) -> DocumentRecord:
        """Index a document and return its stored record."""
        if isinstance(document_id, bool) or not isinstance(document_id, int):
            raise DocumentIdError(f"Document id must be an integer, got {document_id!r}")
        if document_id < 0:
            raise DocumentIdError(f"Document id must not be negative: {document_id}")
        if document_id in self._documents:
            raise DocumentIdError(f"Document id already exists: {document_id}")

        check_text(text, InvalidTextError, "Document text contains invalid characters")
        status = _check_status(status)
        ratings_list = _check_ratings(ratings)
        record = DocumentRecord(rating=_compute_average_rating(ratings_list), status=status)

        words = [word for word in split_non_empty_words(text) if word not in self._stop_words]
        term_freqs = _compute_term_frequencies(words)
        if not term_freqs:
            self._logger.debug("Document %d has no indexable words", document_id)

        for word, term_freq in term_freqs.items():
            self._word_to_document_freqs.setdefault(word, {})[document_id] = term_freq
        self._documents[document_id] = record
        self._document_ids.append(document_id)

        self._logger.debug(
            "Indexed document %d (%d words, %d distinct)",
            document_id,
            len(words),
            len(term_freqs),
        )
        return record

    def document_count(self) -> int:
        return len(self._documents)

    def get_document_id(self, ordinal: int) -> int:
        if not 0 <= ordinal < len(self._document_ids):
            raise IndexError(
                f"Document ordinal {ordinal} is out of range [0, {len(self._document_ids)})"
            )
        return self._document_ids[ordinal]

    def get_document(self, document_id: int) -> DocumentRecord:
        try:
            return self._documents[document_id]
        except KeyError:
            raise UnknownDocumentError(document_id) from None

    def has_document(self, document_id: int) -> bool:
        return document_id in self._documents

    def postings(self, word: str) -> Mapping[int, float]:
        """Return the document-to-frequency map of a word, empty if the word is unknown."""
        return self._word_to_document_freqs.get(word, {})

    def contains(self, word: str, document_id: int) -> bool:
        return document_id in self.postings(word)

    def compute_idf(self, word: str) -> float:
        """Inverse document frequency ``ln(N / df)`` of an indexed word."""
        postings = self._word_to_document_freqs.get(word)
        if not postings:
            raise KeyError(word)
        return math.log(self.document_count() / len(postings))


def _compute_average_rating(ratings: Iterable[int]) -> int:
    ratings_list = list(ratings)
    if not ratings_list:
        return 0
    return sum(ratings_list) // len(ratings_list)


def _compute_term_frequencies(words: list[str]) -> dict[str, float]:
    if not words:
        return {}

    inv_word_count = 1.0 / len(words)
    term_freqs: dict[str, float] = {}
    for word in words:
        term_freqs[word] = term_freqs.get(word, 0.0) + inv_word_count
    return term_freqs


def _check_status(status: object) -> DocumentStatus:
    if isinstance(status, bool) or not isinstance(status, int):
        raise InvalidDocumentError(f"Document status must be a DocumentStatus, got {status!r}")
    try:
        return DocumentStatus(status)
    except ValueError:
        raise InvalidDocumentError(f"Unknown document status: {status!r}") from None


def _check_ratings(ratings: Iterable[int]) -> list[int]:
    ratings_list = list(ratings)
    for rating in ratings_list:
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InvalidDocumentError(f"Document ratings must be integers, got {rating!r}")
    return ratings_list
