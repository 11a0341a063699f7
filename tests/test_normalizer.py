import pytest

from keyphraseminer import normalize_case, normalize_word, roman_to_arabic
from keyphraseminer.normalizer import is_abbreviation


def to_roman(n: int) -> str:
    numerals = [
        (1000, "m"), (900, "cm"), (500, "d"), (400, "cd"),
        (100, "c"), (90, "xc"), (50, "l"), (40, "xl"),
        (10, "x"), (9, "ix"), (5, "v"), (4, "iv"), (1, "i"),
    ]
    out = []
    for value, symbol in numerals:
        while n >= value:
            out.append(symbol)
            n -= value
    return "".join(out)


def test_roman_round_trip_full_range():
    for n in range(1, 4000):
        assert roman_to_arabic(to_roman(n)) == str(n)


@pytest.mark.parametrize("word, expected", [("XIV", "14"), ("MCMXCIV", "1994"), ("Xii", "12")])
def test_roman_is_case_insensitive(word, expected):
    assert roman_to_arabic(word) == expected


@pytest.mark.parametrize("word", ["villi", "did", "civic", "iiii", "vv", "mcmm", "lil"])
def test_partial_roman_parse_returns_word_unchanged(word):
    assert roman_to_arabic(word) == word


@pytest.mark.parametrize("word", ["apple", "", "3", "x1", "mix-up"])
def test_non_roman_characters_are_untouched(word):
    assert roman_to_arabic(word) == word


def test_valid_english_numeral_is_converted():
    # "mix" spells 1009 in canonical notation.
    assert roman_to_arabic("mix") == "1009"


def test_abbreviations_are_preserved():
    assert normalize_case("NASA") == "NASA"
    assert normalize_case("URLs") == "URLs"
    assert normalize_case("Apple") == "apple"
    assert normalize_case("I") == "i"


@pytest.mark.parametrize("word", ["As", "Is"])
def test_capitalized_two_letter_word_ending_in_s_reads_as_plural_abbreviation(word):
    # One capital followed by "s" has the shape of "URLs"; it is kept as-is.
    assert is_abbreviation(word)
    assert normalize_case(word) == word


@pytest.mark.parametrize("word", ["A", "s", "X"])
def test_single_characters_are_never_abbreviations(word):
    assert not is_abbreviation(word)
    assert normalize_case(word) == word.lower()


def test_mixed_case_is_lowercased():
    assert normalize_case("iPhone") == "iphone"
    assert normalize_case("URLS") == "URLS"
    assert normalize_case("UrLs") == "urls"


def test_normalize_word_converts_before_case_folding():
    assert normalize_word("XIV") == "14"
    assert normalize_word("I") == "1"
    assert normalize_word("NASA") == "NASA"
    assert normalize_word("Villi") == "villi"
