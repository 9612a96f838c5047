import sys

import pytest

from textmark.normalizer.text_normalizer import (
    CodepointSpan,
    TextNormalizer,
    normalize,
    normalize_query,
)


def test_case_and_accents():
    assert normalize("Référents") == "referents"
    assert normalize("féé") == "fee"
    assert normalize("ÉCOLE") == "ecole"
    assert normalize("žluťoučký") == "zlutoucky"


def test_latin_transliteration():
    assert normalize("Straße") == "strasse"
    assert normalize("Ærø") == "aero"
    assert normalize("Łódź") == "lodz"


def test_compatibility_forms():
    # Full-width letters and ligatures fold to plain ASCII
    assert normalize("ＡＢＣ") == "abc"
    assert normalize("ﬁne") == "fine"


def test_other_scripts_pass_through():
    assert normalize("Однако") == "однако"
    assert normalize("ΣΟΦΙΑ") == "σοφια"
    assert normalize("東京") == "東京"


def test_whitespace_runs_collapse():
    assert normalize("foo \t\n bar") == "foo bar"
    assert normalize("   ") == " "


def test_empty_string():
    result = TextNormalizer.build("")
    assert result.text == ""
    assert result.position_map == ()
    assert normalize("") == ""


@pytest.mark.parametrize("text", [
    "Référents",
    "Straße und Strasse",
    "İstanbul",
    "e\u0301\u0301cole",
    " ¨ ´ x",
    "Не следует, однако, забывать",
    "ＡＢＣ ﬁ",
    "",
])
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


@pytest.mark.parametrize("text", [
    "Référents",
    "Straße",
    "e\u0301cole",
    "a\u0300\u0301\u0302b",
    "foo   bar",
    "Ærø ﬁ",
])
def test_position_map_invariants(text):
    result = TextNormalizer.build(text)

    # 1. One entry per normalized character
    assert len(result.position_map) == len(result.text)

    # 2. Never reordered
    assert list(result.position_map) == sorted(result.position_map)

    # 3. Always inside the original
    assert all(0 <= index < len(text) for index in result.position_map)


def test_position_map_with_combining_marks():
    # "e" + COMBINING ACUTE + "cole"
    result = TextNormalizer.build("e\u0301cole")

    assert result.text == "ecole"
    assert result.position_map == (0, 2, 3, 4, 5)


def test_position_map_with_expansion():
    result = TextNormalizer.build("Straße")

    assert result.text == "strasse"
    assert result.position_map == (0, 1, 2, 3, 4, 4, 5)


def test_position_map_with_collapsed_whitespace():
    result = TextNormalizer.build("a  \n b")

    assert result.text == "a b"
    assert result.position_map == (0, 1, 5)


def test_to_original_includes_trailing_marks():
    result = TextNormalizer.build("cafe\u0301 noir")

    span = result.to_original(0, 4)

    assert span == CodepointSpan(start=0, length=5)
    assert span.end == 5


def test_to_original_covers_whole_expanded_character():
    # "stras" ends inside the expansion of "ß"
    result = TextNormalizer.build("Straße")

    assert result.to_original(0, 5) == CodepointSpan(start=0, length=5)
    assert result.to_original(0, 7) == CodepointSpan(start=0, length=6)


def test_to_original_empty_range():
    result = TextNormalizer.build("abc")
    assert result.to_original(1, 0).length == 0
    assert result.to_original(3, 1) == CodepointSpan(start=3, length=0)


def test_normalize_query():
    assert normalize_query("  Léky  ") == "leky"
    assert normalize_query("Ústí  nad\tLabem") == "usti nad labem"
    assert normalize_query("") == ""
    assert normalize_query("   ") == ""
    assert normalize_query("léky") == normalize_query("LEKY")


def test_normalize_is_idempotent_for_every_codepoint():
    failures = []

    for block_start in range(0, sys.maxunicode + 1, 4096):
        chars = [
            chr(cp) for cp in range(block_start, min(block_start + 4096, sys.maxunicode + 1))
            if not 0xD800 <= cp <= 0xDFFF
        ]
        once = normalize("a".join(chars))
        if normalize(once) == once:
            continue

        # Narrow the block down to the offending codepoints
        for ch in chars:
            single = normalize("a" + ch + "b")
            if normalize(single) != single:
                failures.append((hex(ord(ch)), single, normalize(single)))

    assert failures == []


@pytest.mark.parametrize("codepoint", [
    0x2C6D, 0x2C70, 0x2C7E, 0xA78D,
    0xA7AA, 0xA7AB, 0xA7AC, 0xA7AD, 0xA7AE, 0xA7B0, 0xA7B1, 0xA7B2,
    0xA7C5, 0xA7C6,
])
def test_uppercase_and_lowercase_fold_alike(codepoint):
    upper = chr(codepoint)
    lower = upper.lower()

    assert normalize(upper + "lpha") == normalize(lower + "lpha")
    assert normalize(normalize(upper)) == normalize(upper)


def test_fold_char_is_stable():
    # Unidecode has no entry for 'Ɑ' but does for its lowercase 'ɑ'
    assert TextNormalizer.fold_char("Ɑ") == TextNormalizer.fold_char("ɑ")
    assert TextNormalizer.fold_char("\u0301") == ""
