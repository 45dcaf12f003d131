"""
Fernet scramble algorithm.

Provides `FernetScrambler`, which encrypts cookie values with a key derived from a password,
and `install_fernet_scrambler`, which registers it with a `CookieJar`. Unlike the built-in
rot13 algorithms this actually encrypts values at rest.
"""

import base64
import os
import warnings
from typing import TYPE_CHECKING, cast

import streamlit as st
from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

if TYPE_CHECKING:
    from .cookie_jar import CookieJar

# Recommended iterations for PBKDF2HMAC as per OWASP.
PBKDF2_ITERATIONS = 600_000

KEY_PARAMS_COOKIE = "CookieJar.key_params"


# The derivation is deliberately slow and deterministic, so cache it across reruns.
@st.cache_data
def derive_key_from_password(salt: bytes, iterations: int, password: str) -> bytes:
    """
    Derive a cryptographic key from a password using PBKDF2HMAC.

    Returns:
        bytes: URL-safe base64-encoded key suitable for Fernet.

    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,  # 256 bits, suitable for Fernet
        salt=salt,
        iterations=iterations,
    )
    return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))


class FernetScrambler:
    """Encrypt and decrypt strings with Fernet. Tokens are URL-safe base64 text."""

    def __init__(self, key: bytes) -> None:
        self._fernet = Fernet(key)

    @classmethod
    def from_password(cls, password: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> "FernetScrambler":
        """Create a scrambler with a key derived from ``password``."""
        return cls(derive_key_from_password(salt=salt, iterations=iterations, password=password))

    def encode(self, text: str) -> str:
        return cast("bytes", self._fernet.encrypt(text.encode("utf-8"))).decode("ascii")

    def decode(self, text: str) -> str:
        """
        Decrypt a token produced by ``encode``.

        Raises:
            cryptography.fernet.InvalidToken: If the token was tampered with or the password is wrong.

        """
        return cast("bytes", self._fernet.decrypt(text.encode("ascii"))).decode("utf-8")


def _get_key_params(jar: "CookieJar", key_params_cookie: str) -> tuple[bytes, int] | None:
    """
    Retrieve the key derivation parameters from a cookie.

    Returns:
        tuple[bytes, int] | None: (salt, iterations) or None if not found/invalid.

    """
    raw_key_params = jar.get(key_params_cookie, scramble=False)
    if not raw_key_params:
        return None

    try:
        # We expect a string formatted as "base64_salt:iterations"
        raw_salt, raw_iterations_str = raw_key_params.split(":")
        iterations = int(raw_iterations_str)
        salt = base64.b64decode(raw_salt, validate=True)
    except (ValueError, TypeError) as e:
        warnings.warn(
            f"Failed to parse key parameters from cookie '{key_params_cookie}'. Cookie content: '{raw_key_params}'. Error: {e}",
            UserWarning,
            stacklevel=3,
        )
        return None
    else:
        return salt, iterations


def _initialize_new_key_params(jar: "CookieJar", key_params_cookie: str, iterations: int) -> tuple[bytes, int]:
    """
    Generate new key derivation parameters and store them in a cookie.

    Returns:
        tuple[bytes, int]: A tuple of (salt, iterations).

    """
    salt = os.urandom(16)
    jar.set(key_params_cookie, f"{base64.b64encode(salt).decode('ascii')}:{iterations}", scramble=False, expires=365)
    return salt, iterations


def install_fernet_scrambler(
    jar: "CookieJar",
    *,
    password: str,
    name: str = "fer",
    key_params_cookie: str = KEY_PARAMS_COOKIE,
    iterations: int = PBKDF2_ITERATIONS,
) -> FernetScrambler:
    """
    Register a Fernet scramble algorithm with ``jar``.

    The salt and iteration count are kept in a plain cookie so the same key can be derived on
    later visits. If that cookie is missing or malformed, new parameters are generated, and
    values encrypted with the old ones can no longer be read.

    Args:
        jar: The cookie jar to register the algorithm with.
        password: Secret used to derive the key. This must be known only to the app.
        name: Name of the algorithm, stored as the ``[name]`` prefix of encrypted values.
        key_params_cookie: Name of the cookie holding the key derivation parameters.
        iterations: PBKDF2 iterations used when generating new parameters.

    Returns:
        FernetScrambler: The registered scrambler.

    """
    key_params = _get_key_params(jar, key_params_cookie)
    if not key_params:
        key_params = _initialize_new_key_params(jar, key_params_cookie, iterations)

    salt, stored_iterations = key_params
    scrambler = FernetScrambler.from_password(password, salt, stored_iterations)
    jar.register_scrambler(name, scrambler.encode, scrambler.decode)
    return scrambler
