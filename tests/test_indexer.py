import math

import pytest

from indexer import (
    DocumentIdError,
    DocumentRecord,
    DocumentStatus,
    InvertedIndex,
    UnknownDocumentError,
    _compute_average_rating,
    _compute_term_frequencies,
)
from text_processing import InvalidTextError


class DummyLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, msg: str, *args: object) -> None:
        self.records.append(("info", msg % args if args else msg))

    def warning(self, msg: str, *args: object) -> None:
        self.records.append(("warning", msg % args if args else msg))

    def debug(self, msg: str, *args: object) -> None:
        self.records.append(("debug", msg % args if args else msg))


def _build_index(stop_words: frozenset[str] = frozenset()) -> InvertedIndex:
    return InvertedIndex(stop_words, DummyLogger())


def test_compute_average_rating_floors_mean() -> None:
    assert _compute_average_rating([2, 61, 42]) == 35
    assert _compute_average_rating([7, 2, 7]) == 5


def test_compute_average_rating_empty_is_zero() -> None:
    assert _compute_average_rating([]) == 0


def test_compute_average_rating_floors_negative_mean() -> None:
    assert _compute_average_rating([-1, -2]) == -2


def test_compute_term_frequencies_sum_to_one() -> None:
    freqs = _compute_term_frequencies(["пушистый", "кот", "пушистый", "хвост"])

    assert freqs == {"пушистый": 0.5, "кот": 0.25, "хвост": 0.25}
    assert math.isclose(sum(freqs.values()), 1.0)


def test_compute_term_frequencies_empty() -> None:
    assert _compute_term_frequencies([]) == {}


def test_add_document_stores_record_and_postings() -> None:
    index = _build_index(frozenset({"и"}))

    record = index.add_document(5, "пушистый кот пушистый хвост и", DocumentStatus.ACTUAL, [7, 2, 7])

    assert record == DocumentRecord(rating=5, status=DocumentStatus.ACTUAL)
    assert index.get_document(5) == record
    assert index.postings("пушистый") == {5: 0.5}
    assert index.postings("и") == {}
    assert index.document_count() == 1
    assert index.get_document_id(0) == 5


def test_add_document_keeps_insertion_order() -> None:
    index = _build_index()
    for document_id in (7, 2, 9):
        index.add_document(document_id, "dog", DocumentStatus.ACTUAL, [])

    assert [index.get_document_id(ordinal) for ordinal in range(3)] == [7, 2, 9]


@pytest.mark.parametrize("document_id", [-1, True, "3", 1.0])
def test_add_document_rejects_bad_ids(document_id: object) -> None:
    index = _build_index()

    with pytest.raises(DocumentIdError):
        index.add_document(document_id, "cat", DocumentStatus.ACTUAL, [])

    assert index.document_count() == 0


def test_add_document_rejects_duplicate_id_without_mutation() -> None:
    index = _build_index()
    index.add_document(1, "cat", DocumentStatus.ACTUAL, [1])

    with pytest.raises(DocumentIdError, match="already exists"):
        index.add_document(1, "dog", DocumentStatus.BANNED, [5])

    assert index.postings("dog") == {}
    assert index.get_document(1).status == DocumentStatus.ACTUAL
    assert index.document_count() == 1


def test_add_document_rejects_invalid_text_without_mutation() -> None:
    index = _build_index()

    with pytest.raises(InvalidTextError):
        index.add_document(3, "большой пёс скво\x12рец евгений", DocumentStatus.ACTUAL, [1])

    assert index.document_count() == 0
    assert not index.has_document(3)
    assert index.postings("большой") == {}


def test_add_document_only_stop_words_has_no_postings() -> None:
    logger = DummyLogger()
    index = InvertedIndex(frozenset({"и", "в"}), logger)

    index.add_document(0, "и в", DocumentStatus.ACTUAL, [])

    assert index.document_count() == 1
    assert index.postings("и") == {}
    assert any("no indexable words" in msg for level, msg in logger.records if level == "debug")


def test_add_document_ignores_empty_tokens() -> None:
    index = _build_index()

    index.add_document(0, " cat  dog ", DocumentStatus.ACTUAL, [])

    assert index.postings("cat") == {0: 0.5}
    assert index.postings("") == {}


def test_get_document_id_out_of_range() -> None:
    index = _build_index()
    index.add_document(4, "dog", DocumentStatus.ACTUAL, [])

    with pytest.raises(IndexError):
        index.get_document_id(1)
    with pytest.raises(IndexError):
        index.get_document_id(-1)


def test_get_document_unknown_id() -> None:
    with pytest.raises(UnknownDocumentError):
        _build_index().get_document(10)


def test_compute_idf() -> None:
    index = _build_index()
    index.add_document(0, "cat", DocumentStatus.ACTUAL, [])
    index.add_document(1, "cat dog", DocumentStatus.ACTUAL, [])
    index.add_document(2, "bird", DocumentStatus.ACTUAL, [])

    assert index.compute_idf("cat") == pytest.approx(math.log(3 / 2))
    assert index.compute_idf("dog") == pytest.approx(math.log(3))


def test_compute_idf_unknown_word_raises() -> None:
    with pytest.raises(KeyError):
        _build_index().compute_idf("ghost")
