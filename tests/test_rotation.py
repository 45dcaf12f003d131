import string

import pytest

from streamlit_cookie_jar.rotation import rotate_digits, rotate_letters


def test_rotate_letters_preserves_case():
    assert rotate_letters("Hello, World!") == "Uryyb, Jbeyq!"


def test_rotate_letters_wraps_alphabet():
    assert rotate_letters("xyzXYZ") == "klmKLM"


def test_rotate_letters_leaves_digits_and_unicode():
    assert rotate_letters("123 é ü 日本") == "123 é ü 日本"


def test_rotate_digits_table():
    assert rotate_digits("0123456789") == "5678901234"


def test_rotate_digits_leaves_letters():
    assert rotate_digits("abc-9") == "abc-4"


@pytest.mark.parametrize("func", [rotate_letters, rotate_digits])
def test_none_is_empty(func):
    assert func(None) == ""


@pytest.mark.parametrize("func", [rotate_letters, rotate_digits])
def test_self_inverse(func):
    assert func(func(string.printable)) == string.printable
