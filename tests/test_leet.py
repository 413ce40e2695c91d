import pytest

from passval.leet import LEET_MAP, MAX_AMBIGUOUS_POSITIONS, leet_normalize, leet_variants


@pytest.mark.parametrize("text, expected", [
    ("p@ssw0rd", "password"),
    ("h3ll0", "hello"),
    ("$up3r", "super"),
    ("normal", "normal"),
    ("1337", "ieet"),
    ("", ""),
])
def test_leet_normalize(text, expected):
    assert leet_normalize(text) == expected


@pytest.mark.parametrize("text", ["password", "correcthorse", "abc xyz", "ünïcode"])
def test_normalize_is_idempotent_on_canonical_text(text):
    assert leet_normalize(text) == text
    assert leet_normalize(leet_normalize(text)) == leet_normalize(text)


def test_canonical_letter_is_first_mapping():
    for char, letters in LEET_MAP.items():
        assert leet_normalize(char) == letters[0]


def test_variants_cover_ambiguous_mapping():
    variants = leet_variants("p@ss1")
    assert len(variants) >= 2
    assert "passi" in variants
    assert "passl" in variants


def test_variants_without_ambiguity_is_just_canonical():
    assert leet_variants("p@ssw0rd") == ["password"]


def test_variants_are_sorted_and_unique():
    variants = leet_variants("|9x")
    assert variants == sorted(set(variants))
    assert variants == ["igx", "iqx", "lgx", "lqx"]


def test_variants_only_expand_first_two_ambiguous_positions():
    # third '1' stays canonical ('i')
    variants = leet_variants("111")
    assert len(variants) == 2 ** MAX_AMBIGUOUS_POSITIONS
    assert all(v.endswith("i") for v in variants)
    assert set(variants) == {"iii", "ili", "lii", "lli"}


def test_variants_include_canonical_form():
    text = "9|7|1"
    assert leet_normalize(text) in leet_variants(text)
