"""
Cookie value transport encoding.

Cookie values cannot contain commas, semicolons, equals signs or whitespace, so values are
percent-encoded. Encoding everything bloats JSON payloads, so the characters ``{ } : [ ]``
(safe in the cookie grammar and frequent in JSON) are kept literal.
"""

from urllib.parse import quote, unquote

# Characters left alone by encodeURIComponent.
_UNRESERVED = "-_.!~*'()"
_JSON_PUNCTUATION = "{}:[]"


def encode_value(value: str) -> str:
    """
    Percent-encode a value for storage in a cookie.

    Returns:
        str: The encoded value.

    """
    return quote(value, safe=_UNRESERVED + _JSON_PUNCTUATION)


def decode_value(value: str) -> str:
    """Decode a value produced by ``encode_value`` (or any percent-encoded cookie value)."""
    return unquote(value)
