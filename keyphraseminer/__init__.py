"""
KeyphraseMiner

Keyphrase candidate extraction + exact and similarity-weighted
TF / IDF statistics.

High-level API
--------------
- KeyphraseCandidateBuilder → raw text to ordered stemmed candidates
- extract_candidates        → one-shot extraction with default backends
- term_frequency / inverse_document_frequency        → exact TF / IDF
- sim_term_frequency / sim_inverse_document_frequency → fuzzy TF / IDF
- FrequencyEngine           → the four statistics with progress logging
- frequency_frame           → frequency map as a sorted DataFrame
"""

from importlib.metadata import PackageNotFoundError, version


# Core APIs
from .candidate_builder import (
    CandidateRecord,
    KeyphraseCandidateBuilder,
    extract_candidates,
)
from .frequency import (
    FrequencyEngine,
    document_frequency,
    frequency_frame,
    inverse_document_frequency,
    iter_ngrams,
    ngram_vocabulary,
    sim_document_frequency,
    sim_inverse_document_frequency,
    sim_term_frequency,
    term_frequency,
)

# Pipeline building blocks
from .hyphen import expand_hyphenated, is_hyphenated
from .normalizer import normalize_case, normalize_word, roman_to_arabic
from .segmenter import Token, group_into_phrases, split_on_stop_words
from .tokenizers import NLTKTokenizer, SpacyTokenizer


# ---------------------------------------------------------------------
# Runtime version (single source of truth = pyproject.toml)
# ---------------------------------------------------------------------
try:
    __version__ = version("keyphraseminer")
except PackageNotFoundError:
    # Fallback when running directly from a clone without installation
    __version__ = "0.0.0"

__all__ = [
    "KeyphraseCandidateBuilder",
    "CandidateRecord",
    "extract_candidates",
    "FrequencyEngine",
    "term_frequency",
    "document_frequency",
    "inverse_document_frequency",
    "sim_term_frequency",
    "sim_document_frequency",
    "sim_inverse_document_frequency",
    "iter_ngrams",
    "ngram_vocabulary",
    "frequency_frame",
    "Token",
    "group_into_phrases",
    "split_on_stop_words",
    "roman_to_arabic",
    "normalize_case",
    "normalize_word",
    "is_hyphenated",
    "expand_hyphenated",
    "NLTKTokenizer",
    "SpacyTokenizer",
    "__version__",
]
