"""Tokenizing and validation helpers shared by the index and the query parser."""

from __future__ import annotations

WORD_SEPARATOR = " "
MINUS_MARKER = "-"


class InvalidTextError(ValueError):
    """Raised when text contains control characters or malformed minus markers."""


class InvalidQueryError(InvalidTextError):
    """Raised when a search query fails validation."""


class InvalidStopWordsError(InvalidTextError):
    """Raised when stop words fail validation at engine construction."""


def split_into_words(text: str) -> list[str]:
    """Split text on single spaces, keeping empty tokens between adjacent spaces."""
    return text.split(WORD_SEPARATOR)


def split_non_empty_words(text: str) -> list[str]:
    return [word for word in split_into_words(text) if word]


def is_valid_word(word: str) -> bool:
    """Return False if the word contains a control character."""
    return not any(ord(char) < 0x20 for char in word)


def is_valid_text(text: str) -> bool:
    """Check a document, query or stop-word string.

    Text is invalid when any token is a lone ``-``, starts with ``--``,
    or contains a control character.
    """
    for word in split_into_words(text):
        if word == MINUS_MARKER:
            return False
        if word.startswith(MINUS_MARKER * 2):
            return False
        if not is_valid_word(word):
            return False
    return True


def check_text(text: str, error_cls: type[InvalidTextError], message: str) -> None:
    if not isinstance(text, str):
        raise error_cls(f"{message}: expected str, got {type(text).__name__}")
    if not is_valid_text(text):
        raise error_cls(message)
