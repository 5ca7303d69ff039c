from query_parser import parse_query


def test_parse_query_splits_plus_and_minus_words() -> None:
    query = parse_query("cat -fur city", frozenset())

    assert query.plus_words == {"cat", "city"}
    assert query.minus_words == {"fur"}


def test_parse_query_drops_stop_words_from_both_sets() -> None:
    query = parse_query("cat in -the", frozenset({"in", "the"}))

    assert query.plus_words == {"cat"}
    assert query.minus_words == frozenset()


def test_parse_query_deduplicates_words() -> None:
    query = parse_query("cat cat -dog -dog", frozenset())

    assert query.plus_words == {"cat"}
    assert query.minus_words == {"dog"}


def test_parse_query_skips_empty_tokens() -> None:
    query = parse_query("  cat  ", frozenset())

    assert query.plus_words == {"cat"}


def test_parse_query_only_stop_words_is_empty() -> None:
    query = parse_query("и в на", frozenset({"и", "в", "на"}))

    assert query.is_empty
    assert not parse_query("кот", frozenset()).is_empty
