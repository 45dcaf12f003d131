"""
Storage collaborators for the cookie jar.

A store exposes the browser's cookie channel the way ``document.cookie`` does: reading returns
every visible cookie as ``"name=value; name2=value2"``, and writing takes a single cookie string
with attributes, such as ``"name=value; expires=...; path=/"``.
"""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import NamedTuple, Protocol


class CookieStore(Protocol):
    """The read/write surface of a browser cookie channel."""

    def read_all(self) -> str:
        """Return all visible cookies as ``"name=value"`` pairs separated by ``"; "``."""
        ...

    def write(self, entry: str) -> None:
        """Write a single cookie string, including its attributes."""
        ...


class CookieEntry(NamedTuple):
    """A parsed cookie string as written to a store."""

    name: str
    value: str
    expires: datetime | None = None
    path: str | None = None
    domain: str | None = None
    secure: bool = False

    def expired(self, now: datetime) -> bool:
        """Return True if the entry's expiry is not after ``now``."""
        return self.expires is not None and self.expires <= now


def iter_cookie_pairs(raw_cookie: str) -> Iterator[tuple[str, str]]:
    """
    Split a raw cookie header into ``(name, value)`` pairs, in order.

    Values are returned still encoded. Parts without an ``=`` are skipped.
    """
    if not raw_cookie:
        return

    for part_raw in raw_cookie.split(";"):
        part = part_raw.strip()
        if not part:
            continue
        name, sep, value = part.partition("=")
        if not sep:
            # Handle malformed cookies like "name"
            continue
        yield name, value


def parse_entry(entry: str) -> CookieEntry:
    """
    Parse a cookie string with attributes.

    Unknown attributes and unparseable ``expires`` dates are ignored, as browsers do.

    Returns:
        CookieEntry: The parsed entry.

    Raises:
        ValueError: If the cookie string has no ``name=value`` part.

    """
    first, *attributes = entry.split(";")
    name, sep, value = first.strip().partition("=")
    if not sep:
        msg = f"Malformed cookie string: {entry!r}"
        raise ValueError(msg)

    fields: dict[str, object] = {}
    for attribute_raw in attributes:
        key, _, attr_value = attribute_raw.strip().partition("=")
        key = key.lower()
        if key == "expires":
            try:
                expires = parsedate_to_datetime(attr_value)
            except (TypeError, ValueError):
                continue
            fields["expires"] = expires if expires.tzinfo is not None else expires.replace(tzinfo=UTC)
        elif key in ("path", "domain"):
            fields[key] = attr_value
        elif key == "secure":
            fields["secure"] = True

    return CookieEntry(name, value, **fields)


class MemoryCookieStore:
    """
    In-process cookie store that behaves like ``document.cookie``.

    Cookies are keyed by name only: writing a name replaces the existing cookie in place, and
    writing an expired cookie deletes it. Useful for tests and scripts that run outside a browser.
    """

    def __init__(self, raw_cookie: str = "", *, clock: Callable[[], datetime] | None = None) -> None:
        """
        Initialize the store.

        Args:
            raw_cookie: Initial cookies, as a raw ``"name=value; ..."`` header.
            clock: Returns the current time; used to decide whether written cookies have expired.

        """
        self._clock = clock if clock is not None else lambda: datetime.now(tz=UTC)
        self._entries: dict[str, CookieEntry] = {
            name: CookieEntry(name, value) for name, value in iter_cookie_pairs(raw_cookie)
        }

    def read_all(self) -> str:
        now = self._clock()
        return "; ".join(
            f"{entry.name}={entry.value}" for entry in self._entries.values() if not entry.expired(now)
        )

    def write(self, entry: str) -> None:
        parsed = parse_entry(entry)
        if parsed.expired(self._clock()):
            self._entries.pop(parsed.name, None)
        else:
            self._entries[parsed.name] = parsed

    def entry(self, name: str) -> CookieEntry | None:
        """Return the stored entry for ``name``, including its attributes."""
        return self._entries.get(name)

    def __repr__(self) -> str:
        return f"<MemoryCookieStore: {self.read_all()!r}>"
