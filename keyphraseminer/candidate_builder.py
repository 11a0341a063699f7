"""
candidate_builder.py

KeyphraseCandidateBuilder: turns raw text into an ordered list of stemmed
keyphrase candidates.

Pipeline
--------
1. (Optionally) clean Markdown artifacts.
2. Tokenize (NLTK Treebank or blank spaCy pipeline, or a custom callable).
3. Group words into punctuation-bounded phrases ("3 D" -> "3d").
4. Normalize each word (roman numerals -> arabic, abbreviation-aware
   lowercasing).
5. Split phrases further at stop words.
6. Split hyphenated compounds into sub-words.
7. Stem every word and join each phrase's stems with single spaces.

Quick usage
-----------
    from keyphraseminer import KeyphraseCandidateBuilder

    builder = KeyphraseCandidateBuilder(method="nltk", stemmer="snowball")
    builder.extract_candidates("Based on a fast-growing model, researchers found X.")
    # ['fast grow model', 'research found 10']

The output is not deduplicated: a phrase repeated in the text is repeated
in the candidate list, in order of appearance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import re

from .hyphen import expand_phrases
from .normalizer import normalize_word
from .segmenter import group_into_phrases, split_on_stop_words
from .tokenizers import StemFn, TokenizeFn, load_stemmer, load_tokenizer


@dataclass
class CandidateRecord:
    phrase: str        # stemmed candidate (what frequency maps are keyed by)
    surface: str       # normalized words before stemming
    n_words: int
    doc_index: int
    phrase_index: int  # position within the document's candidate list


# ---------------------------------------------------------------------------
# ---------- Main builder class – rule-based candidate extraction ----------
# ---------------------------------------------------------------------------


class KeyphraseCandidateBuilder:
    """
    Rule-based keyphrase candidate extraction for English text.

    This class is responsible for:
      * Tokenization (NLTK or spaCy backend, or any callable producing
        :class:`~keyphraseminer.segmenter.Token` lists)
      * Segmenting tokens at punctuation marks and stop words
      * Converting roman numerals and case-folding non-abbreviations
      * Splitting hyphenated compounds before stemming
      * Stemming (Snowball/Porter from NLTK, or any callable)

    The builder holds only its configured collaborators, so a single
    instance can be reused across any number of documents.
    """

    def __init__(
        self,
        method: str = "nltk",
        stemmer: str = "snowball",
        tokenize_fn: Optional[TokenizeFn] = None,
        stem_fn: Optional[StemFn] = None,
        clean_markdown: bool = False,
        logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Parameters
        ----------
        method:
            Either ``"nltk"`` (default) or ``"spacy"``. Ignored when
            ``tokenize_fn`` is given.
        stemmer:
            Either ``"snowball"`` (default, Porter2) or ``"porter"``.
            Ignored when ``stem_fn`` is given.
        tokenize_fn:
            Custom tokenizer: ``text -> List[Token]``.
        stem_fn:
            Custom stemmer: ``word -> stem``. Must be deterministic.
        clean_markdown:
            If ``True``, each input document is converted from Markdown to
            plain text before tokenization.
        logger:
            Optional callback receiving progress messages when a
            ``verbose=True`` call is made. Falls back to ``print``.
        """
        self.method = method.lower()
        self.stemmer = stemmer.lower()
        self.clean_markdown = clean_markdown
        self.logger = logger

        if tokenize_fn is not None:
            self._tokenize = tokenize_fn
        else:
            self._tokenize = load_tokenizer(self.method)

        if stem_fn is not None:
            self._stem = stem_fn
        else:
            self._stem = load_stemmer(self.stemmer)

        # Lightweight patterns for Markdown footnotes / references
        self._md_footnote_ref_re = re.compile(r"\[\^?[0-9a-zA-Z_-]+\]")
        self._md_footnote_def_re = re.compile(
            r"^\[\^?[0-9a-zA-Z_-]+\]:\s+.*$", re.MULTILINE
        )
        self._md_reference_def_re = re.compile(
            r"^\[[^\]]+\]:\s+.*$", re.MULTILINE
        )

    def _log(self, message: str, verbose: bool = True) -> None:
        if not verbose:
            return
        if self.logger is not None:
            self.logger(message)
        else:
            print(message)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract_candidates(self, text: str) -> List[str]:
        """
        Extract the stemmed keyphrase candidates of one document.

        Returns
        -------
        List[str]
            Candidate phrases in order of appearance, stems joined by a
            single space. Never contains empty strings, stop words or
            punctuation.
        """
        return [phrase for phrase, _ in self._build_phrases(text)]

    def extract_candidate_groups(
        self,
        texts: List[str],
        verbose: bool = False,
    ) -> List[List[str]]:
        """
        Run :meth:`extract_candidates` on every document.

        The result is a list of document groups, directly usable as input
        to the IDF / SimIDF functions.
        """
        groups: List[List[str]] = []
        for doc_index, text in enumerate(texts):
            groups.append(self.extract_candidates(text))
            self._log(
                f"[KeyphraseCandidateBuilder] doc {doc_index + 1}/{len(texts)}: "
                f"{len(groups[-1])} candidates",
                verbose,
            )
        return groups

    def extract_with_records(
        self,
        texts: List[str],
    ) -> Tuple[List[List[str]], List[CandidateRecord]]:
        """
        Extended variant of :meth:`extract_candidate_groups` that also
        returns one :class:`CandidateRecord` per extracted candidate.

        Returns
        -------
        groups:
            Per-document candidate lists (same as
            :meth:`extract_candidate_groups`).
        records:
            Flat list of records across all documents, in document order
            then appearance order.
        """
        groups: List[List[str]] = []
        records: List[CandidateRecord] = []

        for doc_index, text in enumerate(texts):
            group: List[str] = []
            for phrase_index, (phrase, words) in enumerate(self._build_phrases(text)):
                group.append(phrase)
                records.append(
                    CandidateRecord(
                        phrase=phrase,
                        surface=" ".join(words),
                        n_words=len(words),
                        doc_index=doc_index,
                        phrase_index=phrase_index,
                    )
                )
            groups.append(group)

        return groups, records

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _build_phrases(self, text: str) -> List[Tuple[str, List[str]]]:
        """
        Run the full pipeline on one document.

        Returns (stemmed phrase, unstemmed sub-words) pairs so callers can
        keep the surface form alongside the candidate.
        """
        text = self._preprocess_document_text(text)
        tokens = self._tokenize(text)

        phrases = group_into_phrases(tokens)
        phrases = [[normalize_word(word) for word in phrase] for phrase in phrases]
        phrases = split_on_stop_words(phrases)
        phrases = expand_phrases(phrases)

        return [
            (" ".join(self._stem(word) for word in phrase), phrase)
            for phrase in phrases
        ]

    # ---------------------------------------
    # Document-level Markdown preprocessing
    # ---------------------------------------
    def _preprocess_document_text(self, text: str) -> str:
        if not self.clean_markdown:
            return text
        return self._clean_markdown_text(text)

    def _clean_markdown_text(self, text: str) -> str:
        """
        Convert Markdown-ish text to plain text.

        - Strips reference-style link and footnote definition lines, e.g.:
            [ref]: https://example.com
            [^1]: Some note
        - Removes inline footnote markers: [^1], [1], [note-id]
        - Renders with 'markdown', then drops code blocks and tags with
          BeautifulSoup.

        Block boundaries (headings, paragraphs, list items) are kept as
        newlines. Newlines are not phrase boundaries by themselves, so a
        heading without trailing punctuation still joins the next line.
        """
        import markdown as _markdown
        from bs4 import BeautifulSoup

        # Remove definition lines (link refs, footnote defs)
        without_defs = self._md_reference_def_re.sub("", text)
        without_defs = self._md_footnote_def_re.sub("", without_defs)

        # Remove inline footnote/reference markers like [^1], [1], [note-id]
        without_defs = self._md_footnote_ref_re.sub("", without_defs)

        without_defs = re.sub(r"\n{3,}", "\n\n", without_defs)

        html = _markdown.markdown(without_defs, output_format="html")
        soup = BeautifulSoup(html, "html.parser")

        # Drop code/pre blocks (often noise for NLP)
        for tag in soup.find_all(["code", "pre"]):
            tag.decompose()

        text_out = soup.get_text(separator="\n")
        text_out = re.sub(r"[ \t]+", " ", text_out)
        text_out = re.sub(r"\n{3,}", "\n\n", text_out)
        return text_out.strip()


def extract_candidates(text: str) -> List[str]:
    """
    Extract candidates with the default NLTK tokenizer + Snowball stemmer.

    Builds a fresh :class:`KeyphraseCandidateBuilder` per call; reuse a
    builder instance when processing many documents.
    """
    return KeyphraseCandidateBuilder().extract_candidates(text)
