"""
normalizer.py

Per-word lexical normalization applied before stop-word segmentation:

- roman numerals are rewritten as arabic numerals ("xiv" -> "14"),
- words are lowercased unless they look like a true abbreviation
  ("NASA", "URLs").

Both steps are total: a word that does not qualify is returned as-is.
"""

from __future__ import annotations

from .lexicon import ROMAN_CHARS_RE, ROMAN_MAGNITUDES


def roman_to_arabic(word: str) -> str:
    """
    Convert a roman numeral to its decimal string.

    The word is parsed greedily, magnitude by magnitude: any number of
    leading "m" for the thousands, then at most one entry from each of the
    hundreds/tens/ones tables. The conversion only happens if the parser
    consumes the *entire* word; otherwise the original word is returned.

    Examples
    --------
    >>> roman_to_arabic("XIV")
    '14'
    >>> roman_to_arabic("villi")
    'villi'
    """
    if not ROMAN_CHARS_RE.match(word):
        return word

    text = word.lower()
    num_chars = len(text)
    pos = 0
    value = 0

    while pos < num_chars and text[pos] == "m":
        value += 1000
        pos += 1

    for table, place in ROMAN_MAGNITUDES:
        for idx, part in enumerate(table):
            if text.startswith(part, pos):
                pos += len(part)
                value += (9 - idx) * place
                break

    if pos != num_chars:
        return word
    return str(value)


def is_abbreviation(word: str) -> bool:
    """
    True if ``word`` has more than one character and is written in capitals,
    optionally followed by a single lowercase plural "s" ("URLs").
    """
    if len(word) <= 1:
        return False
    if word == word.upper():
        return True
    head = word[:-1]
    return word[-1] == "s" and head == head.upper()


def normalize_case(word: str) -> str:
    """Lowercase ``word`` unless it is an abbreviation."""
    if is_abbreviation(word):
        return word
    return word.lower()


def normalize_word(word: str) -> str:
    """Roman-numeral conversion followed by abbreviation-aware case folding."""
    return normalize_case(roman_to_arabic(word))
