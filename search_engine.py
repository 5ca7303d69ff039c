"""Thread-safe TF-IDF search engine with plus/minus queries."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Iterable, Union

from indexer import DocumentRecord, DocumentStatus, InvertedIndex, UnknownDocumentError
from query_parser import Query, parse_query
from text_processing import (
    InvalidQueryError,
    InvalidStopWordsError,
    check_text,
    is_valid_word,
    split_non_empty_words,
)

MAX_RESULT_DOCUMENT_COUNT = 5
RELEVANCE_EPSILON = 1e-6

DocumentPredicate = Callable[[int, DocumentStatus, int], bool]
StatusOrPredicate = Union[DocumentStatus, DocumentPredicate]

_INVALID_QUERY_MESSAGE = (
    "Query must not contain control characters, a lone '-' or words starting with '--'"
)


@dataclass(frozen=True)
class Document:
    """Single ranked search result."""

    id: int
    relevance: float
    rating: int


class SearchEngine:
    """Ranks indexed documents against plus/minus queries by TF-IDF relevance.

    Stop words are fixed at construction: pass nothing, an iterable of words,
    or a single space-separated string.
    """

    def __init__(
        self,
        stop_words: str | Iterable[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger("search_service.engine")
        self._index = InvertedIndex(_make_stop_words(stop_words), self._logger)
        self._lock = threading.RLock()

    @property
    def stop_words(self) -> frozenset[str]:
        return self._index.stop_words

    def add_document(
        self,
        document_id: int,
        text: str,
        status: DocumentStatus = DocumentStatus.ACTUAL,
        ratings: Iterable[int] = (),
    ) -> None:
        with self._lock:
            self._index.add_document(document_id, text, status, ratings)

    def find_top_documents(
        self,
        raw_query: str,
        status_or_predicate: StatusOrPredicate = DocumentStatus.ACTUAL,
    ) -> list[Document]:
        """Return up to ``MAX_RESULT_DOCUMENT_COUNT`` best documents for a query.

        The filter is either a status to match exactly or a callable taking
        ``(document_id, status, rating)``.
        """
        predicate = _make_predicate(status_or_predicate)
        query = self._parse_query(raw_query)
        if query.is_empty:
            return []

        with self._lock:
            matched_documents = self._find_all_documents(query, predicate)

        matched_documents.sort(key=cmp_to_key(_compare_documents))
        return matched_documents[:MAX_RESULT_DOCUMENT_COUNT]

    def match_document(self, raw_query: str, document_id: int) -> tuple[list[str], DocumentStatus]:
        """Return query plus words found in a document, and the document status.

        The word list is empty if any minus word occurs in the document.
        """
        with self._lock:
            if not self._index.has_document(document_id):
                raise UnknownDocumentError(document_id)
            query = self._parse_query(raw_query)
            record = self._index.get_document(document_id)

            for word in query.minus_words:
                if self._index.contains(word, document_id):
                    return [], record.status

            matched_words = [
                word
                for word in sorted(query.plus_words)
                if self._index.contains(word, document_id)
            ]
            return matched_words, record.status

    def get_document_count(self) -> int:
        with self._lock:
            return self._index.document_count()

    def get_document_id(self, ordinal: int) -> int:
        with self._lock:
            return self._index.get_document_id(ordinal)

    def _parse_query(self, raw_query: str) -> Query:
        check_text(raw_query, InvalidQueryError, _INVALID_QUERY_MESSAGE)
        return parse_query(raw_query, self._index.stop_words)

    def _find_all_documents(self, query: Query, predicate: DocumentPredicate) -> list[Document]:
        document_to_relevance: dict[int, float] = {}
        records: dict[int, DocumentRecord] = {}

        for word in sorted(query.plus_words):
            postings = self._index.postings(word)
            if not postings:
                continue
            inverse_document_freq = self._index.compute_idf(word)
            for document_id, term_freq in postings.items():
                record = self._index.get_document(document_id)
                if predicate(document_id, record.status, record.rating):
                    records[document_id] = record
                    document_to_relevance[document_id] = (
                        document_to_relevance.get(document_id, 0.0)
                        + term_freq * inverse_document_freq
                    )

        for word in query.minus_words:
            for document_id in self._index.postings(word):
                document_to_relevance.pop(document_id, None)

        return [
            Document(id=document_id, relevance=relevance, rating=records[document_id].rating)
            for document_id, relevance in sorted(document_to_relevance.items())
        ]


def _compare_documents(lhs: Document, rhs: Document) -> int:
    if abs(lhs.relevance - rhs.relevance) < RELEVANCE_EPSILON:
        return rhs.rating - lhs.rating
    return -1 if lhs.relevance > rhs.relevance else 1


def _make_predicate(status_or_predicate: StatusOrPredicate) -> DocumentPredicate:
    if isinstance(status_or_predicate, DocumentStatus):
        status = status_or_predicate
        return lambda _document_id, document_status, _rating: document_status == status
    if callable(status_or_predicate):
        return status_or_predicate
    raise TypeError(
        f"Expected a DocumentStatus or a predicate, got {type(status_or_predicate).__name__}"
    )


def _make_stop_words(stop_words: str | Iterable[str] | None) -> frozenset[str]:
    if stop_words is None:
        return frozenset()

    if isinstance(stop_words, str):
        check_text(stop_words, InvalidStopWordsError, "Stop words must not contain invalid characters")
        return frozenset(split_non_empty_words(stop_words))

    unique_words: set[str] = set()
    for word in stop_words:
        if not isinstance(word, str) or not is_valid_word(word):
            raise InvalidStopWordsError(f"Stop word contains invalid characters: {word!r}")
        if word:
            unique_words.add(word)
    return frozenset(unique_words)
