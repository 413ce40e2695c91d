from passval.dictionary import (
    MIN_SUBSTRING_LENGTH,
    Dictionary,
    default_dictionary,
    load_dictionary,
)


def test_default_dictionary_loaded(dictionary):
    assert len(dictionary) > 0
    assert dictionary.contains("password")
    assert dictionary.contains("123456")


def test_default_dictionary_is_shared():
    assert default_dictionary() is default_dictionary()


def test_entries_are_trimmed_and_lowercased():
    d = load_dictionary("  PassWord  \n\n\t\nHello\r\n")
    assert d.words() == ("password", "hello")
    assert len(d) == 2


def test_contains_is_case_insensitive(small_dictionary):
    assert small_dictionary.contains("PASSWORD")
    assert "Qwerty" in small_dictionary
    assert not small_dictionary.contains("passwor")
    assert 42 not in small_dictionary


def test_duplicates_are_dropped():
    d = Dictionary.from_text("admin\nADMIN\nadmin \n")
    assert d.words() == ("admin",)


def test_short_entries_match_exactly_but_not_as_substrings(small_dictionary):
    assert small_dictionary.contains("abc")
    assert "abc" not in small_dictionary.substring_candidates()
    assert all(len(w) >= MIN_SUBSTRING_LENGTH for w in small_dictionary.substring_candidates())


def test_substring_candidates_longest_first():
    d = Dictionary.from_text("love\nsunshine\nbeta\nlovely\nalpha\n")
    assert d.substring_candidates() == ("sunshine", "lovely", "alpha", "beta", "love")


def test_empty_text_gives_empty_dictionary():
    d = Dictionary.from_text("")
    assert len(d) == 0
    assert not d.contains("")
