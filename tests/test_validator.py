from concurrent.futures import ThreadPoolExecutor

import pytest

from passval.config import ValidatorConfig
from passval.errors import PolicyViolation
from passval.penalties import PenaltyRule
from passval.validator import PasswordValidator, char_classes


SAMPLE_PASSWORDS = [
    "", "a", "password", "p@ssw0rd", "qwerty", "aaaaaa", "Xk9$mP2!vLq",
    "12345678", "abcdefg", "Summer2024$", "!@#$%^&*", "aB3!aB3!",
    "Tr0ub4dor&3", "11111111", "ünïcødé", "\x00\x01\x02",
]


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------

def test_constructor_keeps_valid_values():
    v = PasswordValidator(8, 64, True, True, True, True, 50)
    assert v.config == ValidatorConfig(8, 64, True, True, True, True, 50)


@pytest.mark.parametrize("args, expected", [
    ((0, 10, 50), (1, 10, 50)),
    ((-4, -9, 50), (1, 1, 50)),
    ((10, 5, 50), (10, 10, 50)),
    ((8, 64, 150), (8, 64, 100)),
    ((8, 64, -3), (8, 64, 0)),
])
def test_config_is_clamped(args, expected):
    min_length, max_length, complexity = args
    config = ValidatorConfig(min_length=min_length, max_length=max_length, complexity=complexity)
    assert (config.min_length, config.max_length, config.complexity) == expected


def test_config_is_frozen():
    config = ValidatorConfig()
    with pytest.raises(AttributeError):
        config.min_length = 3


def test_empty_custom_dictionary_uses_default(dictionary):
    assert PasswordValidator(custom_dictionary="").dictionary is dictionary


def test_from_config_shares_dictionary(small_dictionary):
    config = ValidatorConfig(min_length=4, complexity=10)
    v = PasswordValidator.from_config(config, small_dictionary)
    assert v.config == config
    assert v.dictionary is small_dictionary


# ------------------------------------------------------------------
# Rule checks
# ------------------------------------------------------------------

@pytest.mark.parametrize("password, want_pass", [
    ("Ab1!", False),                     # too short
    ("Abcdefghijklmnopqrstu1!", False),  # too long
    ("abcdefg1!", False),                # missing upper
    ("ABCDEFG1!", False),                # missing lower
    ("Abcdefgh!", False),                # missing number
    ("Abcdefg1h", False),                # missing symbol
    ("Abcdefg1!", True),
])
def test_rule_checks(password, want_pass):
    v = PasswordValidator(8, 20, True, True, True, True, 0)
    passed, _ = v.validate(password)
    assert passed is want_pass


def test_every_failed_rule_is_reported():
    v = PasswordValidator(8, 20, True, True, True, True, 0)
    outcome = v.evaluate("   ")
    assert outcome.rule_failures == (
        "too short: minimum 8 characters",
        "missing lowercase letter",
        "missing uppercase letter",
        "missing number",
        "missing symbol",
    )


def test_too_long_message():
    v = PasswordValidator(4, 6, complexity=0)
    assert v.evaluate("Xk9$mP2!vLq").rule_failures == ("too long: maximum 6 characters",)


def test_length_counts_code_points():
    v = PasswordValidator(4, 4, complexity=0)
    assert v.evaluate("éèêë").rule_failures == ()


@pytest.mark.parametrize("password, expected", [
    ("", (False, False, False, False)),
    ("aZ", (True, True, False, False)),
    ("9", (False, False, True, False)),
    ("€", (False, False, False, True)),
    ("-", (False, False, False, True)),
    (" \t", (False, False, False, False)),
])
def test_char_classes(password, expected):
    assert char_classes(password) == expected


# ------------------------------------------------------------------
# Scoring scenarios
# ------------------------------------------------------------------

def test_common_password_scenario(strict_validator):
    passed, score, violation = strict_validator.validate_verbose("password")

    assert passed is False
    assert score == 1
    assert violation.rule_failures == (
        "missing uppercase letter",
        "missing number",
        "missing symbol",
        "complexity 1 below threshold 60",
    )
    assert [(p.rule, p.factor) for p in violation.penalties] == [
        (PenaltyRule.COMMON_PASSWORD, 0.1),
        (PenaltyRule.DICTIONARY_SUBSTRING, 0.2),
    ]


def test_strong_password_scenario():
    v = PasswordValidator(8, 64, True, True, True, True, 0)
    outcome = v.evaluate("Xk9$mP2!vLq")
    assert outcome.passed
    assert outcome.penalties == ()
    assert outcome.score >= 80
    assert outcome.score == outcome.raw_score


def test_leet_scenario():
    v = PasswordValidator(4, 64, False, False, False, False, 30)
    passed, score, violation = v.validate_verbose("p@ssw0rd")
    assert not passed
    assert [p.rule for p in violation.penalties] == [
        PenaltyRule.COMMON_PASSWORD_LEET,
        PenaltyRule.DICTIONARY_SUBSTRING,
    ]
    assert "(password)" in violation.penalties[0].description
    assert score < 20


@pytest.mark.parametrize("weak", ["aaaaaa", "abcdef", "qwerty"])
def test_patterns_score_lower_than_random(open_validator, weak):
    _, good = open_validator.validate("xK9mP2")
    _, bad = open_validator.validate(weak)
    assert bad < good


def test_complexity_threshold():
    _, score = PasswordValidator(6, 64, complexity=10).validate("simple")
    passed, _ = PasswordValidator(6, 64, complexity=80).validate("simple")
    assert not passed
    assert score < 80


def test_threshold_failure_is_appended_last():
    v = PasswordValidator(4, 64, require_upper=True, complexity=100)
    outcome = v.evaluate("abcd")
    assert outcome.rule_failures[0] == "missing uppercase letter"
    assert outcome.rule_failures[-1].startswith("complexity ")
    assert outcome.rule_failures[-1].endswith("below threshold 100")


def test_custom_dictionary_replaces_default():
    custom = "password\n123456\nqwerty\nadmin\nletmein\nsuperman\n"
    v = PasswordValidator(8, 64, True, True, True, True, 60, custom_dictionary=custom)

    _, _, violation = v.validate_verbose("superman123!")
    assert [p.rule for p in violation.penalties] == [
        PenaltyRule.SEQUENTIAL_CHARS,
        PenaltyRule.DICTIONARY_SUBSTRING,
    ]

    # "sunshine" is only in the bundled list
    assert PenaltyRule.COMMON_PASSWORD not in [p.rule for p in v.evaluate("sunshine").penalties]
    assert PenaltyRule.COMMON_PASSWORD in [
        p.rule for p in PasswordValidator().evaluate("sunshine").penalties
    ]


def test_violation_string(strict_validator):
    _, _, violation = strict_validator.validate_verbose("password")
    assert str(violation) == (
        "rule: missing uppercase letter; "
        "rule: missing number; "
        "rule: missing symbol; "
        "rule: complexity 1 below threshold 60; "
        "penalty(common_password, x0.10): password is in the common passwords list; "
        "penalty(dictionary_substring, x0.20): password is mostly the dictionary word 'password'"
    )


def test_empty_violation_is_falsy():
    assert not PolicyViolation()


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------

@pytest.mark.parametrize("password", SAMPLE_PASSWORDS)
def test_terse_and_verbose_agree(strict_validator, password):
    passed, score = strict_validator.validate(password)
    v_passed, v_score, violation = strict_validator.validate_verbose(password)
    assert (passed, score) == (v_passed, v_score)
    assert (violation is None) == passed


@pytest.mark.parametrize("password", SAMPLE_PASSWORDS)
def test_score_in_range_and_reproducible(open_validator, password):
    outcome = open_validator.evaluate(password)
    assert 0 <= outcome.score <= outcome.raw_score <= 100
    assert outcome == open_validator.evaluate(password)


def test_adversarial_input_does_not_raise(open_validator):
    for password in ["a" * 5000, "\udcff\x00", "👍" * 50, "1|9" * 40]:
        passed, score = open_validator.validate(password)
        assert 0 <= score <= 100


def test_concurrent_validation(strict_validator):
    passwords = SAMPLE_PASSWORDS * 10
    expected = [strict_validator.validate(p) for p in passwords]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(strict_validator.validate, passwords))
    assert results == expected
