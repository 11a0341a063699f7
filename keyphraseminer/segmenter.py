"""
segmenter.py

Boundary segmentation of a token stream into phrase spans.

Two passes are applied:

1. :func:`group_into_phrases` splits the token stream at punctuation marks
   (punctuation tokens themselves are dropped).
2. :func:`split_on_stop_words` further splits each punctuation-bounded
   phrase at stop words (which are dropped as well).

Neither pass ever yields an empty phrase, and no phrase ever spans a
punctuation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List

from .lexicon import NUMBER_RE, PUNCTUATIONS, STOP_WORDS


@dataclass(frozen=True)
class Token:
    text: str
    is_punctuation: bool

    @classmethod
    def from_text(cls, text: str) -> "Token":
        """Classify ``text`` against the fixed punctuation set."""
        return cls(text=text, is_punctuation=text in PUNCTUATIONS)


def _is_dimension_suffix(word: str, previous: str) -> bool:
    # Tokenizers split "3D" into "3" + "D"; glue the letter back on.
    return word in ("D", "d") and NUMBER_RE.match(previous) is not None


def group_into_phrases(tokens: Iterable[Token]) -> List[List[str]]:
    """
    Group word tokens into maximal runs between punctuation tokens.

    Parameters
    ----------
    tokens:
        Token stream from a tokenizer adapter.

    Returns
    -------
    List[List[str]]
        Punctuation-bounded phrases, each a non-empty list of word texts.
        A "D"/"d" token directly following a purely numeric word in the
        same phrase is merged onto it as a lowercase "d" suffix.
    """
    phrases: List[List[str]] = []
    current: List[str] = []

    for token in tokens:
        if token.is_punctuation:
            if current:
                phrases.append(current)
                current = []
            continue

        if current and _is_dimension_suffix(token.text, current[-1]):
            current[-1] = current[-1] + "d"
        else:
            current.append(token.text)

    if current:
        phrases.append(current)
    return phrases


def split_on_stop_words(
    phrases: Iterable[List[str]],
    stop_words: FrozenSet[str] = STOP_WORDS,
) -> List[List[str]]:
    """
    Split punctuation-bounded phrases further at stop words.

    Stop words are dropped; boundaries from the punctuation pass are kept,
    so two words separated by punctuation never end up in the same
    sub-phrase even with no stop word between them.
    """
    result: List[List[str]] = []

    for phrase in phrases:
        current: List[str] = []
        for word in phrase:
            if word in stop_words:
                if current:
                    result.append(current)
                    current = []
            else:
                current.append(word)
        if current:
            result.append(current)

    return result
