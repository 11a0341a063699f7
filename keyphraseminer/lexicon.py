"""
lexicon.py

Fixed lookup tables shared by the candidate extraction pipeline.

Everything here is immutable (frozensets, tuples, compiled regexes) and
built once at import time, so the tables can be shared freely between
builders and threads.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Tuple


# ---------------------------------------------------------------------------
# Phrase boundaries
# ---------------------------------------------------------------------------

#: ASCII, full-width and typographic punctuation marks that close a phrase.
#: "``", "''", "--" and "..." are the forms NLTK's Treebank tokenizer
#: produces for double quotes, dashes and ellipses. A lone "-" is a dash
#: token; hyphens inside a compound never reach the tokenizer output alone.
PUNCTUATIONS: FrozenSet[str] = frozenset(
    {
        "、", ",", "，",
        ":", "：",
        ".", "。", "‧",
        "!", "！",
        "?", "？",
        ";", "；",
        "(", "（", ")", "）",
        "[", "]", "{", "}",
        "'", "‘", "’",
        '"', "「", "」", "“", "”",
        "`", "…", "...",
        "-", "``", "''", "--",
    }
)

#: Function words that never appear inside a candidate phrase.
#: Matching is exact and case-sensitive (lowercase only).
STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "a", "an", "and", "as",
        "based", "by",
        "for", "from",
        "in", "on", "of",
        "that", "the", "this", "to",
        "via", "with", "without",
    }
)


# ---------------------------------------------------------------------------
# Roman numerals
# ---------------------------------------------------------------------------

# Subtractive-notation tables, ordered from 9x down to 1x so that a greedy
# scan always tries the longest valid spelling of each digit first.
ROMAN_HUNDREDS: Tuple[str, ...] = ("cm", "dccc", "dcc", "dc", "d", "cd", "ccc", "cc", "c")
ROMAN_TENS: Tuple[str, ...] = ("xc", "lxxx", "lxx", "lx", "l", "xl", "xxx", "xx", "x")
ROMAN_ONES: Tuple[str, ...] = ("ix", "viii", "vii", "vi", "v", "iv", "iii", "ii", "i")

#: (table, place value) for every magnitude below the thousands.
ROMAN_MAGNITUDES: Tuple[Tuple[Tuple[str, ...], int], ...] = (
    (ROMAN_HUNDREDS, 100),
    (ROMAN_TENS, 10),
    (ROMAN_ONES, 1),
)


# ---------------------------------------------------------------------------
# Token shapes
# ---------------------------------------------------------------------------

NUMBER_RE = re.compile(r"^[0-9]+$")
ROMAN_CHARS_RE = re.compile(r"^[iIvVxXlLcCdDmM]+$")
HYPHENATED_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9]*(-[a-zA-Z][a-zA-Z0-9]*)+$")
