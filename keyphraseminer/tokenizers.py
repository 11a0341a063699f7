"""
tokenizers.py

Adapters around the external tokenizer and stemmer collaborators.

Tokenizers turn raw text into a flat list of :class:`Token` objects
(word vs punctuation); stemmers map one normalized word to its stem.
Both backends are loaded lazily so that the heavy imports stay optional
until a builder actually needs them.
"""

from __future__ import annotations

from typing import Any, Callable, List

from .segmenter import Token


TokenizeFn = Callable[[str], List[Token]]
StemFn = Callable[[str], str]


# ---------------------------------------------------------------------------
# NLTK tokenizer
# ---------------------------------------------------------------------------


class NLTKTokenizer:
    """
    Punkt sentence splitting + Treebank word tokenization.

    Punkt data is fetched quietly on first use. If it still cannot be
    found (e.g. offline), the whole text is tokenized in one pass, which
    only affects where the Treebank tokenizer detaches sentence-final
    periods.
    """

    def __init__(self) -> None:
        self._word_tokenizer = self._load_nltk_tokenizer()
        self._punkt_checked = False

    def __call__(self, text: str) -> List[Token]:
        return [
            Token.from_text(word)
            for sentence in self._split_sentences(text)
            for word in self._word_tokenizer.tokenize(sentence)
        ]

    def _split_sentences(self, text: str) -> List[str]:
        import nltk

        try:
            return nltk.sent_tokenize(text)
        except LookupError:
            if self._punkt_checked:
                return [text]

        # Newer NLTK releases ship the Punkt tables as "punkt_tab".
        self._punkt_checked = True
        nltk.download("punkt", quiet=True)
        nltk.download("punkt_tab", quiet=True)
        try:
            return nltk.sent_tokenize(text)
        except LookupError:
            return [text]

    @staticmethod
    def _load_nltk_tokenizer():
        try:
            from nltk.tokenize import TreebankWordTokenizer
        except ImportError as e:
            raise ImportError(
                "NLTK is required for method='nltk'. Install with 'pip install nltk'."
            ) from e
        return TreebankWordTokenizer()


# ---------------------------------------------------------------------------
# spaCy tokenizer
# ---------------------------------------------------------------------------


class SpacyTokenizer:
    """
    Rule-based tokenization with a blank English spaCy pipeline.

    spaCy splits hyphenated compounds on the infix ("fast", "-", "growing").
    Runs of word-hyphen-word with no whitespace in between are glued back
    together so the hyphen expander still sees the compound.
    """

    def __init__(self, nlp: Any = None) -> None:
        self._nlp = nlp if nlp is not None else self._load_blank_pipeline()

    def __call__(self, text: str) -> List[Token]:
        doc = self._nlp.make_doc(text)

        pieces: List[List[str]] = []  # [text, trailing whitespace]
        for token in doc:
            if token.is_space:
                continue
            if pieces and not pieces[-1][1] and self._continues_compound(pieces[-1][0], token.text):
                pieces[-1][0] += token.text
                pieces[-1][1] = token.whitespace_
            else:
                pieces.append([token.text, token.whitespace_])

        return [Token.from_text(text) for text, _ in pieces]

    @staticmethod
    def _continues_compound(previous: str, current: str) -> bool:
        if current == "-":
            return previous[-1].isalnum()
        return previous.endswith("-") and len(previous) > 1 and current[0].isalnum()

    @staticmethod
    def _load_blank_pipeline():
        try:
            import spacy
        except ImportError as e:
            raise ImportError(
                "spaCy is required for method='spacy'. Install with 'pip install spacy'."
            ) from e
        return spacy.blank("en")


# ---------------------------------------------------------------------------
# Stemmers
# ---------------------------------------------------------------------------


def load_stemmer(name: str) -> StemFn:
    """
    Return a word -> stem function for ``name``.

    ``"snowball"`` is NLTK's English Snowball (Porter2) stemmer,
    ``"porter"`` the original Porter stemmer.
    """
    name = name.lower()
    if name not in ("snowball", "porter"):
        raise ValueError("stemmer must be 'snowball' or 'porter'")

    try:
        from nltk.stem import PorterStemmer, SnowballStemmer
    except ImportError as e:
        raise ImportError(
            "NLTK is required for the built-in stemmers. Install with 'pip install nltk'."
        ) from e

    if name == "snowball":
        return SnowballStemmer("english").stem
    return PorterStemmer().stem


def load_tokenizer(method: str) -> TokenizeFn:
    """Return the tokenizer adapter for ``method`` ("nltk" or "spacy")."""
    method = method.lower()
    if method == "nltk":
        return NLTKTokenizer()
    if method == "spacy":
        return SpacyTokenizer()
    raise ValueError("method must be 'nltk' or 'spacy'")
