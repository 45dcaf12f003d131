"""
Character rotation primitives used by the built-in scramblers.

Only ASCII letters and digits are affected; every other character passes through untouched.
"""

import string

_LOWER = string.ascii_lowercase
_UPPER = string.ascii_uppercase

_ROT13 = str.maketrans(_LOWER + _UPPER, _LOWER[13:] + _LOWER[:13] + _UPPER[13:] + _UPPER[:13])

# Add five to 0-4, subtract five from 5-9.
_ROT5 = str.maketrans("0123456789", "5678901234")


def rotate_letters(text: str | None) -> str:
    """
    Rotate ASCII letters by 13 places, preserving case.

    Applying the rotation twice returns the original text.

    Returns:
        str: The rotated text. ``None`` is treated as an empty string.

    """
    return (text or "").translate(_ROT13)


def rotate_digits(text: str | None) -> str:
    """
    Rotate ASCII digits by 5 places.

    Returns:
        str: The rotated text. ``None`` is treated as an empty string.

    """
    return (text or "").translate(_ROT5)
