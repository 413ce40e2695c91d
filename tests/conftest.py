import pytest

from passval.dictionary import Dictionary, default_dictionary
from passval.validator import PasswordValidator


@pytest.fixture
def dictionary():
    return default_dictionary()


@pytest.fixture
def small_dictionary():
    return Dictionary.from_text("password\n123456\nqwerty\nadmin\nletmein\nsuperman\nabc\n")


@pytest.fixture
def open_validator():
    """No class requirements, threshold 0: only the score matters."""
    return PasswordValidator(6, 64, False, False, False, False, 0)


@pytest.fixture
def strict_validator():
    return PasswordValidator(8, 64, True, True, True, True, 60)
