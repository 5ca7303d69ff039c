"""Loading a YAML document corpus into a search engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from config_loader import AppConfig
from indexer import DocumentIdError, DocumentStatus, InvalidDocumentError
from search_engine import SearchEngine
from text_processing import InvalidTextError


@dataclass(frozen=True)
class DocumentSeed:
    """A document as described in the corpus file, before indexing."""

    id: int
    text: str
    status: DocumentStatus = DocumentStatus.ACTUAL
    ratings: list[int] = field(default_factory=list)


def parse_status(name: str) -> DocumentStatus:
    """Resolve a case-insensitive status name such as ``actual`` or ``BANNED``."""
    try:
        return DocumentStatus[name.strip().upper()]
    except KeyError:
        allowed = ", ".join(status.name.lower() for status in DocumentStatus)
        raise ValueError(f"Unknown document status {name!r}, expected one of: {allowed}") from None


def load_documents(documents_path: Path) -> list[DocumentSeed]:
    """Read and validate the corpus file structure."""
    if not documents_path.exists():
        raise FileNotFoundError(f"Documents file not found: {documents_path}")

    with documents_path.open("r", encoding="utf-8") as file:
        raw: dict[str, Any] = yaml.safe_load(file) or {}

    entries = raw.get("documents")
    if not isinstance(entries, list):
        raise ValueError("'documents' must be a list in the documents file")

    seeds: list[DocumentSeed] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Document #{position} must be a mapping")

        document_id = entry.get("id")
        if isinstance(document_id, bool) or not isinstance(document_id, int):
            raise ValueError(f"Document #{position}: 'id' must be an integer")

        text = entry.get("text")
        if not isinstance(text, str):
            raise ValueError(f"Document #{position}: 'text' must be a string")

        status_raw = entry.get("status", "actual")
        if not isinstance(status_raw, str):
            raise ValueError(f"Document #{position}: 'status' must be a string")

        ratings = entry.get("ratings", [])
        if not isinstance(ratings, list) or not all(
            isinstance(rating, int) and not isinstance(rating, bool) for rating in ratings
        ):
            raise ValueError(f"Document #{position}: 'ratings' must be a list of integers")

        seeds.append(
            DocumentSeed(
                id=document_id,
                text=text,
                status=parse_status(status_raw),
                ratings=ratings,
            )
        )

    return seeds


def populate_engine(engine: SearchEngine, seeds: list[DocumentSeed], logger: logging.Logger) -> int:
    """Add seeds in order, skipping the ones the engine rejects. Returns the number added."""
    added = 0
    for seed in seeds:
        try:
            engine.add_document(seed.id, seed.text, seed.status, seed.ratings)
        except (DocumentIdError, InvalidDocumentError, InvalidTextError) as exc:
            logger.warning("Failed to add document %d: %s", seed.id, exc)
            continue
        added += 1

    logger.info("Indexed %d of %d documents", added, len(seeds))
    return added


def build_engine(config: AppConfig, logger: logging.Logger) -> SearchEngine:
    """Create an engine with the configured stop words and index the configured corpus."""
    engine = SearchEngine(config.stop_words, logger=logger)
    seeds = load_documents(config.documents_file)
    populate_engine(engine, seeds, logger)
    return engine
