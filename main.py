"""Demonstration of the search logic without starting the HTTP server."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from config_loader import load_config
from corpus_loader import build_engine
from indexer import UnknownDocumentError
from search_engine import SearchEngine
from text_processing import InvalidQueryError

LOGGER = logging.getLogger("search_service.demo")

DEMO_SEARCH_QUERIES = [
    "и в на",
    "пушистый -пёс",
    "пушистый --кот",
    "пушистый -",
]

DEMO_MATCH_QUERIES = [
    "пушистый пёс",
    "модный -кот",
    "модный --пёс",
    "пушистый - хвост",
]


def search_payload(engine: SearchEngine, query: str) -> dict[str, object]:
    try:
        results = engine.find_top_documents(query)
    except InvalidQueryError as exc:
        return {"query": query, "error": str(exc)}

    return {
        "query": query,
        "results": [
            {"id": item.id, "relevance": item.relevance, "rating": item.rating}
            for item in results
        ],
    }


def match_payload(engine: SearchEngine, query: str) -> dict[str, object]:
    """Match every indexed document, in insertion order, against the query."""
    matches: list[dict[str, object]] = []
    try:
        for ordinal in range(engine.get_document_count()):
            document_id = engine.get_document_id(ordinal)
            words, status = engine.match_document(query, document_id)
            matches.append(
                {"document_id": document_id, "status": status.name.lower(), "words": words}
            )
    except (InvalidQueryError, UnknownDocumentError) as exc:
        return {"query": query, "error": str(exc)}

    return {"query": query, "matches": matches}


def run_demo() -> None:
    """Index the configured corpus and print search and match results."""
    base_dir = Path(__file__).resolve().parent
    config = load_config(base_dir / "config.yml")
    engine = build_engine(config, LOGGER)

    for query in DEMO_SEARCH_QUERIES:
        print(json.dumps(search_payload(engine, query), ensure_ascii=False, indent=2))

    for query in DEMO_MATCH_QUERIES:
        print(json.dumps(match_payload(engine, query), ensure_ascii=False, indent=2))

    try:
        engine.get_document_id(engine.get_document_count())
    except IndexError as exc:
        print(json.dumps({"error": str(exc)}, ensure_ascii=False, indent=2))


def main() -> None:
    """Entry point of the demonstration mode."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_demo()


if __name__ == "__main__":
    main()
