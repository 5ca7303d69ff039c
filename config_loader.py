"""Configuration loading utilities for the document search service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml

StopWordsConfig = Union[str, list[str]]


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from YAML."""

    documents_file: Path
    stop_words: StopWordsConfig = ""
    host: str = "127.0.0.1"
    port: int = 8000


def load_config(config_path: Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as file:
        raw: dict[str, Any] = yaml.safe_load(file) or {}

    documents_file_raw = raw.get("documents_file")
    if not isinstance(documents_file_raw, str) or not documents_file_raw.strip():
        raise ValueError("'documents_file' must be a non-empty string in config.yml")

    documents_file = Path(documents_file_raw)
    if not documents_file.is_absolute():
        documents_file = (config_path.parent / documents_file).resolve()

    stop_words = raw.get("stop_words", "")
    if stop_words is None:
        stop_words = ""
    if isinstance(stop_words, list):
        if not all(isinstance(word, str) for word in stop_words):
            raise ValueError("Each entry in 'stop_words' must be a string")
    elif not isinstance(stop_words, str):
        raise ValueError("'stop_words' must be a string or a list of strings")

    host = raw.get("host", "127.0.0.1")
    port = raw.get("port", 8000)

    if not isinstance(host, str) or not host:
        raise ValueError("'host' must be a non-empty string")
    if isinstance(port, bool) or not isinstance(port, int) or not (1 <= port <= 65535):
        raise ValueError("'port' must be an integer between 1 and 65535")

    return AppConfig(
        documents_file=documents_file,
        stop_words=stop_words,
        host=host,
        port=port,
    )
