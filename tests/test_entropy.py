import math

import pytest

from passval.entropy import (
    calculate_entropy,
    effective_pool_size,
    entropy_to_score,
    raw_score,
    strength_label,
)


@pytest.mark.parametrize("password, pool", [
    ("", 0),
    ("abc", 26),
    ("ABC", 26),
    ("123", 10),
    ("!!!", 33),
    ("aB", 52),
    ("aB1", 62),
    ("aB1!", 95),
    ("a b", 59),
])
def test_effective_pool_size(password, pool):
    assert effective_pool_size(password) == pool


def test_entropy_empty_is_zero():
    assert calculate_entropy("") == 0.0


def test_entropy_formula():
    assert calculate_entropy("abcdefgh") == pytest.approx(8 * math.log2(26))
    assert calculate_entropy("Xk9$mP2!vLq") == pytest.approx(11 * math.log2(95))


def test_entropy_counts_code_points():
    assert calculate_entropy("ééé") == pytest.approx(3 * math.log2(26))


@pytest.mark.parametrize("bits, low, high", [
    (0, 0, 0),
    (20, 30, 50),
    (40, 55, 70),
    (60, 70, 85),
    (80, 80, 92),
    (128, 93, 100),
])
def test_entropy_to_score_bands(bits, low, high):
    assert low <= entropy_to_score(bits) <= high


def test_entropy_to_score_negative_and_huge():
    assert entropy_to_score(-5) == 0
    assert entropy_to_score(10_000) == 100


def test_entropy_to_score_is_monotonic():
    scores = [entropy_to_score(b / 2) for b in range(0, 400)]
    assert scores == sorted(scores)


def test_raw_score_grows_with_length_and_pool():
    assert raw_score("xkqm") <= raw_score("xkqmzv")
    assert raw_score("xkqmzv") <= raw_score("xkqmzV")
    assert raw_score("xkqmzV") <= raw_score("xkqmzV9")
    assert raw_score("xkqmzV9") <= raw_score("xkqmzV9%")


@pytest.mark.parametrize("score, label", [
    (0, "Very Weak"),
    (19, "Very Weak"),
    (20, "Weak"),
    (59, "Moderate"),
    (79, "Strong"),
    (80, "Very Strong"),
    (100, "Very Strong"),
])
def test_strength_label(score, label):
    assert strength_label(score) == label
