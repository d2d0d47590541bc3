"""Shared helpers for word and clue normalization."""

from __future__ import annotations

import re
import unicodedata

from ..core.constants import MAX_WORD_LENGTH, MIN_WORD_LENGTH

WORD_RE = re.compile(r"[^A-Za-z]")
VALID_WORD_RE = re.compile(rf"^[A-Z]{{{MIN_WORD_LENGTH},{MAX_WORD_LENGTH}}}$")
PLAIN_WORD_RE = re.compile(r"^[A-Za-z]+$")


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    ascii_word = WORD_RE.sub("", decomposed.encode("ascii", "ignore").decode("ascii"))
    return ascii_word.upper()


def is_playable_word(word: str) -> bool:
    """True for uppercase A-Z words within the playable length range."""

    return bool(word) and VALID_WORD_RE.match(word) is not None


def clean_clue(definition: str) -> str:
    """Turn a raw definition into a one-sentence clue.

    Datamuse definitions look like ``"n\\tthe path of a body in space; ..."``:
    the part-of-speech prefix and anything after the first semicolon are
    dropped and the first letter is capitalized.
    """

    if not definition:
        return ""
    text = definition.split("\t")[-1].strip()
    text = text.split(";")[0].strip()
    if not text:
        return ""
    return text[0].upper() + text[1:]


__all__ = ["clean_word", "clean_clue", "is_playable_word", "PLAIN_WORD_RE"]
