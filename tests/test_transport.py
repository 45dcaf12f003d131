import string

import pytest

from streamlit_cookie_jar.transport import decode_value, encode_value


def test_reserved_characters_are_encoded():
    assert encode_value("a b;c=d,e") == "a%20b%3Bc%3Dd%2Ce"


def test_json_punctuation_is_kept():
    assert encode_value('{"a":[1,2]}') == "{%22a%22:[1%2C2]}"


def test_unreserved_characters_are_kept():
    assert encode_value("Az09-_.!~*'()") == "Az09-_.!~*'()"


def test_non_ascii_is_utf8_encoded():
    assert encode_value("é") == "%C3%A9"


def test_decode_value():
    assert decode_value("{%22a%22:[1%2C2]}") == '{"a":[1,2]}'


@pytest.mark.parametrize(
    "value",
    ["", "plain", "with space", "100% sure", "a+b", "[rot13n]Frperg678", '{"first":"Joe"}', "naïve ☃"],
)
def test_round_trip(value):
    assert decode_value(encode_value(value)) == value


def test_round_trip_printable_ascii_and_non_bmp():
    value = string.printable + "😀𝄞𠀀"
    assert decode_value(encode_value(value)) == value


def test_non_bmp_is_utf8_encoded():
    assert encode_value("😀") == "%F0%9F%98%80"
