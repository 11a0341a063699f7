"""
frequency.py

Exact and similarity-weighted frequency statistics over stemmed keyphrase
candidates.

All statistics are computed over *n-grams*: every contiguous run of words
inside one candidate phrase, keyed by its space-joined text. N-grams never
cross a candidate boundary.

Functions
---------
- term_frequency (TF)
    Counts, inside ``aux_phrases``, the n-grams of a fixed vocabulary taken
    from ``candidates``.
- inverse_document_frequency (IDF)
    ``ln(N / df)`` over document groups.
- sim_term_frequency (SimTF)
    Like TF, but every occurrence spreads its similarity scores onto the
    vocabulary n-grams it is similar to.
- sim_inverse_document_frequency (SimIDF)
    Fuzzy document frequency: within a document, each term keeps the
    *maximum* similarity reached by any occurring n-gram, so one document
    never contributes more than its best match per term.

The similarity relation is a sparse two-level mapping
``{ngram: {similar_ngram: score}}``. A missing row and a row lacking the
target are both "no known similarity"; only SimTF distinguishes them
(a missing row stops extension to longer n-grams from that position).

Every function is pure: inputs are never mutated and a fresh map is built
per call.
"""

from __future__ import annotations

from collections import Counter
from typing import (
    Callable,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
)

import numpy as np
import pandas as pd


SimilarityRelation = Mapping[str, Mapping[str, float]]


# ---------------------------------------------------------------------------
# N-gram helpers
# ---------------------------------------------------------------------------


def _ngrams_from(words: Sequence[str], start: int) -> Iterator[str]:
    """Yield the n-grams starting at ``start``, shortest first."""
    text = words[start]
    yield text
    for word in words[start + 1 :]:
        text += " " + word
        yield text


def iter_ngrams(phrase: str) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(start, ngram)`` for every contiguous n-gram of ``phrase``.

    N-grams are produced by position, grouped by start index in increasing
    length, so an n-gram text repeated inside the phrase is yielded once
    per position.

    Example
    -------
    >>> list(iter_ngrams("deep learn model"))
    [(0, 'deep'), (0, 'deep learn'), (0, 'deep learn model'),
     (1, 'learn'), (1, 'learn model'), (2, 'model')]
    """
    words = phrase.split()
    for start in range(len(words)):
        for ngram in _ngrams_from(words, start):
            yield start, ngram


def ngram_vocabulary(phrases: Iterable[str]) -> Set[str]:
    """Return the set of all n-gram keys occurring in ``phrases``."""
    return {ngram for phrase in phrases for _, ngram in iter_ngrams(phrase)}


def _log_ratio(n: int, frequencies: Mapping[str, float]) -> Dict[str, float]:
    """``ln(n / f)`` for every term with a strictly positive frequency."""
    terms = [term for term, freq in frequencies.items() if freq > 0]
    if not terms:
        return {}
    freqs = np.array([frequencies[term] for term in terms], dtype=float)
    idf = np.log(float(n) / freqs)
    return dict(zip(terms, idf.tolist()))


# ---------------------------------------------------------------------------
# Exact statistics
# ---------------------------------------------------------------------------


def term_frequency(candidates: Iterable[str], aux_phrases: Iterable[str]) -> Dict[str, int]:
    """
    Term frequencies of the candidates' n-grams measured in ``aux_phrases``.

    Parameters
    ----------
    candidates:
        Candidate phrases defining the vocabulary. Every n-gram of every
        candidate starts with a count of 0.
    aux_phrases:
        Phrases in which occurrences are counted. Each n-gram occurrence
        (by position) increments its count if it is in the vocabulary;
        n-grams outside the vocabulary are ignored and never added.

    Returns
    -------
    Dict[str, int]
        n-gram -> count, with exactly the vocabulary as keys.
    """
    counts: Counter = Counter(dict.fromkeys(ngram_vocabulary(candidates), 0))

    for phrase in aux_phrases:
        words = phrase.split()
        for start in range(len(words)):
            for ngram in _ngrams_from(words, start):
                # The vocabulary holds every sub-n-gram of its entries, so
                # nothing longer from this start can be known either.
                if ngram not in counts:
                    break
                counts[ngram] += 1

    return dict(counts)


def document_frequency(document_groups: Iterable[Iterable[str]]) -> Counter:
    """Number of document groups containing each n-gram."""
    df: Counter = Counter()
    for group in document_groups:
        df.update(ngram_vocabulary(group))
    return df


def inverse_document_frequency(document_groups: Sequence[Iterable[str]]) -> Dict[str, float]:
    """
    ``idf(t) = ln(N / df(t))`` over ``N`` document groups.

    A group is one document's list of candidate phrases; an n-gram present
    several times in one group counts once for that group. Terms never
    observed are absent from the result, so the ratio is always defined.
    """
    return _log_ratio(len(document_groups), document_frequency(document_groups))


# ---------------------------------------------------------------------------
# Similarity-weighted statistics
# ---------------------------------------------------------------------------


def _spread_similarity(
    weights: Dict[str, float],
    row: Mapping[str, float],
) -> None:
    for target, score in row.items():
        if target in weights:
            weights[target] += score


def sim_term_frequency(
    candidates: Iterable[str],
    aux_phrases: Iterable[str],
    similarity: SimilarityRelation,
) -> Dict[str, float]:
    """
    Similarity-weighted term frequency.

    The vocabulary comes from ``candidates`` (all weights start at 0.0).
    For each n-gram occurrence ``a`` in ``aux_phrases`` with a row in
    ``similarity``, every vocabulary n-gram ``b`` listed in that row gains
    ``similarity[a][b]``. An occurrence with no row contributes nothing
    and ends the scan of longer n-grams from the same start position.
    """
    weights: Dict[str, float] = dict.fromkeys(ngram_vocabulary(candidates), 0.0)

    for phrase in aux_phrases:
        words = phrase.split()
        for start in range(len(words)):
            for ngram in _ngrams_from(words, start):
                row = similarity.get(ngram)
                if row is None:
                    break
                _spread_similarity(weights, row)

    return weights


def _group_sim_weights(
    group: Sequence[str],
    similarity: SimilarityRelation,
    global_vocab: Set[str],
) -> Dict[str, float]:
    """
    Per-document fuzzy presence of every term relevant to ``group``.

    The working set is the group's own n-grams plus every n-gram of
    ``global_vocab`` that one of them is similar to. Each term keeps the
    maximum similarity reached by any n-gram occurring in the group.
    """
    # max() is idempotent, so repeated occurrences need only be seen once.
    occurring = list(dict.fromkeys(ngram for phrase in group for _, ngram in iter_ngrams(phrase)))

    working: Dict[str, float] = dict.fromkeys(occurring, 0.0)
    for ngram in occurring:
        for target in similarity.get(ngram, {}):
            if target in global_vocab:
                working[target] = 0.0

    for ngram in occurring:
        for target, score in similarity.get(ngram, {}).items():
            if target in working and score > working[target]:
                working[target] = score

    return working


def sim_document_frequency(
    document_groups: Sequence[Sequence[str]],
    similarity: SimilarityRelation,
    on_group_done: Optional[Callable[[int, int], None]] = None,
) -> Dict[str, float]:
    """
    Fuzzy document frequency: sum over groups of each term's per-group
    maximum similarity.

    Keys are every n-gram observed in any group; terms never reached by a
    similarity score keep 0.0. ``on_group_done(done, total)`` is called
    after each group when given.
    """
    global_vocab = ngram_vocabulary(phrase for group in document_groups for phrase in group)
    accumulated: Dict[str, float] = dict.fromkeys(global_vocab, 0.0)

    total = len(document_groups)
    for idx, group in enumerate(document_groups):
        for term, weight in _group_sim_weights(group, similarity, global_vocab).items():
            accumulated[term] += weight
        if on_group_done is not None:
            on_group_done(idx + 1, total)

    return accumulated


def sim_inverse_document_frequency(
    document_groups: Sequence[Sequence[str]],
    similarity: SimilarityRelation,
) -> Dict[str, float]:
    """
    ``idf(t) = ln(N / sdf(t))`` with ``sdf`` from :func:`sim_document_frequency`.

    Terms whose fuzzy document frequency is 0 (no occurring n-gram is
    similar to them, not even the term itself) are left out.
    """
    return _log_ratio(len(document_groups), sim_document_frequency(document_groups, similarity))


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def frequency_frame(weights: Mapping[str, float], value_name: str = "weight") -> pd.DataFrame:
    """
    Convert a frequency map into a DataFrame.

    Columns: ``ngram``, ``n_words`` and ``value_name``. Rows are sorted by
    value (descending) then n-gram (ascending) so the output is stable.
    """
    rows = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
    return pd.DataFrame(
        {
            "ngram": [ngram for ngram, _ in rows],
            "n_words": [len(ngram.split()) for ngram, _ in rows],
            value_name: [value for _, value in rows],
        }
    )


# ---------------------------------------------------------------------------
# FrequencyEngine – logger-aware facade
# ---------------------------------------------------------------------------


class FrequencyEngine:
    """
    Thin facade over the frequency functions with optional progress output.

    The engine keeps no state between calls apart from its logging
    configuration, so one instance can serve any number of corpora.
    """

    def __init__(
        self,
        logger: Optional[Callable[[str], None]] = None,
        progress_every: int = 1000,
    ) -> None:
        """
        Parameters
        ----------
        logger:
            Optional logging callback (``str -> None``); ``print`` is used
            when omitted. Only called for ``verbose=True`` calls.
        progress_every:
            SimIDF reports progress after every ``progress_every`` groups.
        """
        if progress_every <= 0:
            raise ValueError("progress_every must be a positive integer")
        self.logger = logger
        self.progress_every = progress_every

    def _log(self, message: str, verbose: bool = True) -> None:
        if not verbose:
            return
        if self.logger is not None:
            self.logger(message)
        else:
            print(message)

    def tf(self, candidates: Iterable[str], aux_phrases: Iterable[str], verbose: bool = False) -> Dict[str, int]:
        counts = term_frequency(candidates, aux_phrases)
        self._log(f"[FrequencyEngine] TF computed for {len(counts)} n-grams.", verbose)
        return counts

    def idf(self, document_groups: Sequence[Iterable[str]], verbose: bool = False) -> Dict[str, float]:
        result = inverse_document_frequency(document_groups)
        self._log(
            f"[FrequencyEngine] IDF computed for {len(result)} n-grams "
            f"over {len(document_groups)} groups.",
            verbose,
        )
        return result

    def sim_tf(
        self,
        candidates: Iterable[str],
        aux_phrases: Iterable[str],
        similarity: SimilarityRelation,
        verbose: bool = False,
    ) -> Dict[str, float]:
        weights = sim_term_frequency(candidates, aux_phrases, similarity)
        self._log(f"[FrequencyEngine] SimTF computed for {len(weights)} n-grams.", verbose)
        return weights

    def sim_idf(
        self,
        document_groups: Sequence[Sequence[str]],
        similarity: SimilarityRelation,
        verbose: bool = False,
    ) -> Dict[str, float]:
        def report(done: int, total: int) -> None:
            if done % self.progress_every == 0:
                self._log(f"{done} of {total} groups of sim IDF computed", verbose)

        sdf = sim_document_frequency(document_groups, similarity, on_group_done=report)
        result = _log_ratio(len(document_groups), sdf)
        self._log(
            f"[FrequencyEngine] SimIDF computed for {len(result)} n-grams "
            f"({len(sdf) - len(result)} without similarity mass dropped).",
            verbose,
        )
        return result
