"""Exceptions raised by the cookie jar."""


class CookieJarError(Exception):
    """Base class for cookie jar errors."""


class UnknownScrambleAlgorithm(CookieJarError, KeyError):  # noqa: N818
    """Raise when a scramble algorithm name is not present in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot unscramble cookie with prefix '{name}'.")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class CookiesNotReady(CookieJarError):  # noqa: N818
    """Raise when the cookie store has not yet synced cookies from the browser."""
