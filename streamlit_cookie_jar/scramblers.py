"""
Plug-in registry of reversible scramble algorithms.

A scramble algorithm is a pair of ``encode``/``decode`` functions registered under a short name
(5 characters or less, alphanumeric). The name is stored with the scrambled value as a
``[name]`` prefix, for example ``[rot13]fhcre``.

Two algorithms are registered by default:

- ``rot13``: scrambles letters a-z and A-Z.
- ``rot13n``: scrambles letters and the digits 0-9. This is the default algorithm.

These obfuscate values; they do not encrypt them.
"""

import warnings
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .errors import UnknownScrambleAlgorithm
from .rotation import rotate_digits, rotate_letters

ROT13 = "rot13"
ROT13N = "rot13n"


@dataclass(frozen=True)
class ScrambleAlgorithm:
    """An ``encode``/``decode`` pair. ``decode(encode(x))`` must return ``x``."""

    encode: Callable[[str], str]
    decode: Callable[[str], str]


def _rot13n(text: str) -> str:
    return rotate_digits(rotate_letters(text))


class ScrambleRegistry:
    """
    Map algorithm names to scramble algorithms.

    The registry always has a default algorithm, used when scrambling is requested
    without a name or with a name that is not registered.
    """

    def __init__(self, default_algorithm: str = ROT13N) -> None:
        """
        Initialize the registry with the built-in algorithms.

        Args:
            default_algorithm: Name of the algorithm used when none (or an unknown one) is requested.

        """
        self._algorithms: dict[str, ScrambleAlgorithm] = {}
        # Both built-ins are involutions.
        self.register(ROT13, rotate_letters, rotate_letters)
        self.register(ROT13N, _rot13n, _rot13n)
        self._default = ROT13N
        self.default_algorithm = default_algorithm

    @property
    def default_algorithm(self) -> str:
        """Name of the algorithm used when scrambling is requested without a valid name."""
        return self._default

    @default_algorithm.setter
    def default_algorithm(self, name: str) -> None:
        if name not in self._algorithms:
            raise UnknownScrambleAlgorithm(name)
        self._default = name

    def register(self, name: str, encode: Callable[[str], str], decode: Callable[[str], str]) -> None:
        """
        Add a scramble algorithm, replacing any algorithm already registered under ``name``.

        Args:
            name: Short alphanumeric name, stored as a prefix with each scrambled value.
            encode: Function that scrambles a string.
            decode: Function that reverses ``encode``.

        """
        if not name or not name.isalnum() or not name.isascii():
            # Brackets in particular would break prefix parsing on read.
            warnings.warn(
                f"Scramble algorithm name '{name}' should only contain alphanumeric characters.",
                UserWarning,
                stacklevel=2,
            )
        self._algorithms[name] = ScrambleAlgorithm(encode=encode, decode=decode)

    def resolve_name(self, name: str | bool | None) -> str:
        """
        Return ``name`` if it is registered, otherwise the default algorithm name.

        ``True`` and other non-string values select the default.
        """
        if isinstance(name, str) and name in self._algorithms:
            return name
        return self._default

    def resolve(self, name: str | bool | None) -> ScrambleAlgorithm:
        """Return the algorithm for ``name``, falling back to the default."""
        return self._algorithms[self.resolve_name(name)]

    def __getitem__(self, name: str) -> ScrambleAlgorithm:
        """
        Return the algorithm registered under ``name``.

        Raises:
            UnknownScrambleAlgorithm: If ``name`` is not registered.

        """
        try:
            return self._algorithms[name]
        except KeyError:
            raise UnknownScrambleAlgorithm(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._algorithms

    def __iter__(self) -> Iterator[str]:
        return iter(self._algorithms)

    def __len__(self) -> int:
        return len(self._algorithms)

    def __repr__(self) -> str:
        return f"<ScrambleRegistry: {list(self._algorithms)!r}, default={self._default!r}>"


# Process-wide registry used by jars that are not given one explicitly.
registry = ScrambleRegistry()


def register_scrambler(name: str, encode: Callable[[str], str], decode: Callable[[str], str]) -> None:
    """Register a scramble algorithm in the process-wide registry."""
    registry.register(name, encode, decode)
