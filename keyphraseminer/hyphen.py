"""
hyphen.py

Split hyphenated compounds ("fast-growing", "state-of-the-art") into their
sub-words so that each part is stemmed on its own.
"""

from __future__ import annotations

from typing import Iterable, List

from .lexicon import HYPHENATED_RE


def is_hyphenated(word: str) -> bool:
    """
    True for two or more alphanumeric segments joined by single hyphens,
    each segment starting with a letter ("covid-19" does not qualify).
    """
    return HYPHENATED_RE.match(word) is not None


def expand_hyphenated(word: str) -> List[str]:
    """Return the sub-words of a hyphenated compound, or ``[word]``."""
    if is_hyphenated(word):
        return word.split("-")
    return [word]


def expand_phrases(phrases: Iterable[List[str]]) -> List[List[str]]:
    """Expand every word of every phrase in place, preserving order."""
    return [
        [sub for word in phrase for sub in expand_hyphenated(word)]
        for phrase in phrases
    ]
