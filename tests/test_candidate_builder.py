import pytest

from keyphraseminer import KeyphraseCandidateBuilder, Token, extract_candidates, ngram_vocabulary
from keyphraseminer.tokenizers import NLTKTokenizer, SpacyTokenizer

from .conftest import regex_tokenize


SENTENCE = "Based on a fast-growing model, researchers found X."


def test_pipeline_order(builder):
    assert builder.extract_candidates(SENTENCE) == [
        "fast growing model",
        "researchers found 10",
    ]


def test_stop_words_and_punctuation_never_reach_candidates(builder):
    candidates = builder.extract_candidates(SENTENCE)
    words = {word for phrase in candidates for word in phrase.split()}
    assert "based" not in words
    assert "a" not in words
    assert "on" not in words
    assert "," not in words
    assert not any("model research" in phrase for phrase in candidates)


def test_dimension_merge_and_roman_numerals(builder):
    text = "3 D printing of the Part II prototype"
    assert builder.extract_candidates(text) == ["3d printing", "part 2 prototype"]


def test_abbreviations_survive_normalization(builder):
    assert builder.extract_candidates("NASA publishes URLs.") == ["NASA publishes URLs"]


def test_repeated_phrases_are_not_deduplicated(builder):
    text = "Deep learning. Deep learning!"
    assert builder.extract_candidates(text) == ["deep learning", "deep learning"]


def test_empty_inputs(builder):
    assert builder.extract_candidates("") == []
    assert builder.extract_candidates("The, of; a.") == []


def test_each_word_is_stemmed_once_after_hyphen_expansion():
    seen = []

    def stem(word):
        seen.append(word)
        return word.upper()

    builder = KeyphraseCandidateBuilder(tokenize_fn=regex_tokenize, stem_fn=stem)
    assert builder.extract_candidates("a well-known trick") == ["WELL KNOWN TRICK"]
    assert seen == ["well", "known", "trick"]


def test_candidate_groups(builder):
    groups = builder.extract_candidate_groups(["deep nets.", "", "the shallow nets"])
    assert groups == [["deep nets"], [], ["shallow nets"]]


def test_candidate_groups_verbose_uses_logger():
    messages = []
    builder = KeyphraseCandidateBuilder(
        tokenize_fn=regex_tokenize,
        stem_fn=lambda word: word,
        logger=messages.append,
    )
    builder.extract_candidate_groups(["deep nets", "shallow nets"], verbose=True)
    assert len(messages) == 2
    assert messages[0].startswith("[KeyphraseCandidateBuilder] doc 1/2")

    builder.extract_candidate_groups(["deep nets"])
    assert len(messages) == 2


def test_extract_with_records(builder):
    groups, records = builder.extract_with_records(["Fast-growing model, II nets", "deep nets"])
    assert groups == [["fast growing model", "2 nets"], ["deep nets"]]
    assert [(r.doc_index, r.phrase_index) for r in records] == [(0, 0), (0, 1), (1, 0)]
    assert records[0].surface == "fast growing model"
    assert records[0].n_words == 3
    assert records[1].phrase == "2 nets"


def test_custom_tokenizer_decides_punctuation(builder):
    def tokenize(text):
        return [Token("alpha", False), Token("|", True), Token("beta", False)]

    custom = KeyphraseCandidateBuilder(tokenize_fn=tokenize, stem_fn=lambda word: word)
    assert custom.extract_candidates("ignored") == ["alpha", "beta"]


def test_unknown_backends_are_rejected():
    with pytest.raises(ValueError, match="method must be"):
        KeyphraseCandidateBuilder(method="stanza", stem_fn=lambda word: word)
    with pytest.raises(ValueError, match="stemmer must be"):
        KeyphraseCandidateBuilder(tokenize_fn=regex_tokenize, stemmer="lancaster")


def test_tokenizer_errors_propagate():
    def broken(text):
        raise RuntimeError("tokenizer failed")

    builder = KeyphraseCandidateBuilder(tokenize_fn=broken, stem_fn=lambda word: word)
    with pytest.raises(RuntimeError, match="tokenizer failed"):
        builder.extract_candidates("anything")


# ---------------------------------------------------------------------------
# Real backends
# ---------------------------------------------------------------------------


def test_treebank_and_snowball_pipeline():
    pytest.importorskip("nltk")
    from nltk.tokenize import TreebankWordTokenizer

    treebank = TreebankWordTokenizer()
    builder = KeyphraseCandidateBuilder(
        tokenize_fn=lambda text: [Token.from_text(word) for word in treebank.tokenize(text)],
        stemmer="snowball",
    )
    candidates = builder.extract_candidates(SENTENCE)
    assert candidates == ["fast grow model", "research found 10"]

    vocab = ngram_vocabulary(candidates[:1])
    assert {"fast", "grow", "fast grow"} <= vocab


def test_treebank_quotes_are_boundaries():
    pytest.importorskip("nltk")
    from nltk.tokenize import TreebankWordTokenizer

    words = TreebankWordTokenizer().tokenize('the "neural network" model')
    tokens = [Token.from_text(word) for word in words]
    assert [t.text for t in tokens if t.is_punctuation] == ["``", "''"]


BRACKETED = "We waited... then results [1] improved - slightly {really}"


def test_treebank_brackets_ellipsis_and_dashes_are_boundaries():
    pytest.importorskip("nltk")
    from nltk.tokenize import TreebankWordTokenizer

    treebank = TreebankWordTokenizer()
    builder = KeyphraseCandidateBuilder(
        tokenize_fn=lambda text: [Token.from_text(word) for word in treebank.tokenize(text)],
        stemmer="snowball",
    )
    candidates = builder.extract_candidates(BRACKETED)
    assert candidates == ["we wait", "then result", "1", "improv", "slight", "realli"]

    words = {word for phrase in candidates for word in phrase.split()}
    assert not words & {"...", "[", "]", "{", "}", "-"}


def test_spacy_brackets_ellipsis_and_dashes_are_boundaries():
    pytest.importorskip("spacy")
    builder = KeyphraseCandidateBuilder(method="spacy", stem_fn=lambda word: word)
    candidates = builder.extract_candidates(BRACKETED + " on a fast-growing model")
    words = {word for phrase in candidates for word in phrase.split()}
    assert not words & {"...", "[", "]", "{", "}", "-"}
    assert "fast growing model" in candidates


def test_default_extract_candidates_entry_point():
    pytest.importorskip("nltk")
    assert extract_candidates(SENTENCE) == ["fast grow model", "research found 10"]


def test_default_builder_with_porter_stemmer():
    pytest.importorskip("nltk")
    builder = KeyphraseCandidateBuilder(stemmer="porter")
    assert builder.extract_candidates(SENTENCE) == ["fast grow model", "research found 10"]


def test_sentence_initial_as_is_kept_like_an_abbreviation(builder):
    # "As" has the shape of a plural abbreviation, so it is not folded to
    # the stop word "as" and survives as its own candidate.
    assert builder.extract_candidates("As a result, models improved") == [
        "As",
        "result",
        "models improved",
    ]


def test_nltk_tokenizer_falls_back_without_punkt(monkeypatch):
    nltk = pytest.importorskip("nltk")

    def missing(text):
        raise LookupError("punkt")

    monkeypatch.setattr(nltk, "sent_tokenize", missing)
    monkeypatch.setattr(nltk, "download", lambda *args, **kwargs: False)

    tokens = NLTKTokenizer()("deep nets, wide nets.")
    assert [t.text for t in tokens] == ["deep", "nets", ",", "wide", "nets", "."]
    assert [t.is_punctuation for t in tokens] == [False, False, True, False, False, True]


def test_spacy_tokenizer_keeps_hyphenated_compounds():
    pytest.importorskip("spacy")
    tokens = SpacyTokenizer()("a fast-growing model, 3 D")
    assert [t.text for t in tokens] == ["a", "fast-growing", "model", ",", "3", "D"]


def test_markdown_cleanup():
    pytest.importorskip("markdown")
    pytest.importorskip("bs4")

    text = (
        "Some *emphasised* claim[^1].\n"
        "\n"
        "    code block here\n"
        "\n"
        "[^1]: footnote definition\n"
    )
    builder = KeyphraseCandidateBuilder(
        tokenize_fn=regex_tokenize,
        stem_fn=lambda word: word,
        clean_markdown=True,
    )
    candidates = builder.extract_candidates(text)
    words = {word for phrase in candidates for word in phrase.split()}
    assert "emphasised" in words
    assert "code" not in words
    assert "footnote" not in words
    assert "1" not in words
