"""
Cookie jar: get, set and delete cookies with optional scrambling.

Provides `CookieJar`, which reads and writes cookies through a `CookieStore`, percent-encodes
values, and scrambles/unscrambles them with algorithms from a `ScrambleRegistry`.
"""

import dataclasses
import json
import warnings
from collections.abc import Callable, Iterator, MutableMapping
from datetime import datetime
from typing import Any

from . import scramblers
from .options import EXPIRED, CookieOptions, format_attributes
from .scramblers import ROT13, ScrambleRegistry
from .stores import CookieStore, iter_cookie_pairs
from .tags import add_tag, read_tag, strip_tag
from .transport import decode_value, encode_value

# Distinguishes "no value given" (read) from None (delete).
_MISSING: Any = object()


class CookieJar(MutableMapping[str, str]):
    """
    Read and write cookies, optionally scrambling their values.

    Acts as a dictionary-like interface over the cookies visible in the store. The
    dictionary interface never scrambles; use `get` and `set` with ``scramble`` for that.
    """

    def __init__(
        self,
        store: CookieStore,
        *,
        path: str | None = None,
        prefix: str = "",
        registry: ScrambleRegistry | None = None,
        defaults: CookieOptions | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the CookieJar.

        Args:
            store: The cookie channel to read from and write to.
            path: Default path for the cookies. None means '/', an empty string means the
                directory of the current page.
            prefix: A prefix for all cookie names to avoid conflicts with other cookies.
            registry: Scramble algorithms to use. Defaults to the process-wide registry.
            defaults: Default options applied to every call. ``path`` overrides its path.
            clock: Returns the current time, used for relative expiry dates.

        """
        self._store = store
        self._prefix = prefix
        self._registry = registry if registry is not None else scramblers.registry
        defaults = defaults if defaults is not None else CookieOptions()
        if path is not None:
            defaults = dataclasses.replace(defaults, path=path)
        self._defaults = defaults
        self._clock = clock

    @property
    def registry(self) -> ScrambleRegistry:
        """The scramble algorithms used by this jar."""
        return self._registry

    @property
    def default_algorithm_name(self) -> str:
        """Scramble algorithm used for ``scramble=True`` or an unknown algorithm name."""
        return self._registry.default_algorithm

    @default_algorithm_name.setter
    def default_algorithm_name(self, name: str) -> None:
        self._registry.default_algorithm = name

    def register_scrambler(self, name: str, encode: Callable[[str], str], decode: Callable[[str], str]) -> None:
        """
        Add a scramble algorithm.

        Args:
            name: Short alphanumeric name stored as a ``[name]`` prefix on scrambled values.
            encode: Function that scrambles a string.
            decode: Function that reverses ``encode``.

        """
        self._registry.register(name, encode, decode)

    def _options(self, options: CookieOptions | None, overrides: dict[str, Any]) -> CookieOptions:
        base = options if options is not None else self._defaults
        return dataclasses.replace(base, **overrides) if overrides else base

    def cookie(self, name: str, value: str | None = _MISSING, options: CookieOptions | None = None) -> str | None:
        """
        Get, set or delete a cookie.

        If ``value`` is given the cookie is written (``None`` deletes it), otherwise it is read.

        Args:
            name: Name of the cookie, without the jar's prefix.
            value: Value to store, or None to delete the cookie.
            options: Cookie options. Defaults to the jar's default options.

        Returns:
            str | None: When writing, the stored value (scrambled and tagged if requested, but
            not percent-encoded). When reading, the unscrambled value, or None if there is no
            such cookie.

        Raises:
            UnknownScrambleAlgorithm: If a scrambled cookie names an algorithm that is not registered.

        """
        options = options if options is not None else self._defaults
        if value is _MISSING:
            return self._read(name, options)
        return self._write(name, value, options)

    def _write(self, name: str, value: str | None, options: CookieOptions) -> str:
        if value is None:
            value = ""
            options = dataclasses.replace(options, expires=EXPIRED)

        if options.scramble:
            # Unknown names fall back to the default algorithm.
            algorithm_name = self._registry.resolve_name(options.scramble)
            encoded = self._registry[algorithm_name].encode(value)
            value = add_tag(algorithm_name, encoded)

        now = self._clock() if self._clock is not None else None
        attributes = format_attributes(options, now)
        self._store.write(f"{self._prefix}{name}={encode_value(value)}{attributes}")
        return value

    def _read(self, name: str, options: CookieOptions) -> str | None:
        raw_value = self._find(self._prefix + name)
        if raw_value is None:
            return None

        value = decode_value(raw_value)
        if options.scramble:
            # Values written before tags existed were always rot13.
            algorithm_name = read_tag(value) or ROT13
            algorithm = self._registry[algorithm_name]
            value = algorithm.decode(strip_tag(value))
        return value

    def _find(self, full_name: str) -> str | None:
        for cookie_name, raw_value in iter_cookie_pairs(self._store.read_all()):
            if cookie_name == full_name:
                return raw_value
        return None

    def get(  # type: ignore[override]
        self,
        name: str,
        default: str = "",
        *,
        options: CookieOptions | None = None,
        **overrides: Any,
    ) -> str:
        """
        Get the value of a cookie.

        To get the value of a scrambled cookie, pass ``scramble=True``. As with ``dict.get``,
        ``default`` is returned when the cookie does not exist.

        Returns:
            str: The cookie value, or ``default`` (an empty string unless given) if the cookie does not exist.

        """
        value = self.cookie(name, options=self._options(options, overrides))
        return default if value is None else value

    def set(self, name: str, value: object, *, options: CookieOptions | None = None, **overrides: Any) -> str:
        """
        Set the value of a cookie.

        Non-string values are converted with ``str()``; None deletes the cookie.

        Returns:
            str: The stored value. If scrambling was requested this is the scrambled, tagged value.

        """
        if value is not None and not isinstance(value, str):
            value = str(value)
        return self._write(name, value, self._options(options, overrides))

    def get_json(self, name: str, *, options: CookieOptions | None = None, **overrides: Any) -> Any:
        """
        Get the value of a cookie parsed as JSON.

        Returns:
            Any: The decoded data, or an empty dict if the cookie does not exist or is not valid JSON.

        """
        value = self.cookie(name, options=self._options(options, overrides))
        if value is None:
            return {}
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            warnings.warn(
                f"Failed to parse cookie '{name}' as JSON. Cookie content: '{value}'. Error: {e}",
                UserWarning,
                stacklevel=2,
            )
            return {}

    def set_json(self, name: str, data: Any, *, options: CookieOptions | None = None, **overrides: Any) -> str:
        """
        Set the value of a cookie to the JSON encoding of ``data``.

        Returns:
            str: The stored value.

        """
        return self._write(name, json.dumps(data, separators=(",", ":")), self._options(options, overrides))

    def exists(self, name: str) -> bool:
        """Return True if the cookie exists."""
        return self._find(self._prefix + name) is not None

    def remove(self, name: str, *, options: CookieOptions | None = None, **overrides: Any) -> str:
        """
        Delete (expire) a cookie.

        Use the same path and domain options that were used to create the cookie.
        Removing a cookie that does not exist is not an error.

        Returns:
            str: An empty string.

        """
        options = dataclasses.replace(self._options(options, overrides), expires=EXPIRED, scramble=False)
        return self._write(name, "", options)

    def __repr__(self) -> str:
        return f"<CookieJar: {dict(self)!r}>"

    def __getitem__(self, k: str) -> str:
        """
        Get the value of a cookie by name.

        Raises:
            KeyError: If the cookie is not present.

        """
        value = self.cookie(k, options=dataclasses.replace(self._defaults, scramble=False))
        if value is None:
            msg = f"Cookie '{k}' not found."
            raise KeyError(msg)
        return value

    def __iter__(self) -> Iterator[str]:
        """Iterate over the names of the cookies visible to this jar."""
        seen = set()
        for cookie_name, _ in iter_cookie_pairs(self._store.read_all()):
            if cookie_name.startswith(self._prefix) and cookie_name not in seen:
                seen.add(cookie_name)
                yield cookie_name[len(self._prefix) :]

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value, scramble=False)

    def __delitem__(self, key: str) -> None:
        """
        Delete a cookie.

        Raises:
            KeyError: If the cookie is not present.

        """
        if not self.exists(key):
            msg = f"Cookie '{key}' not found."
            raise KeyError(msg)
        self.remove(key)
