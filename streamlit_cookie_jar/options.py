"""
Cookie options and attribute formatting.

Turns `CookieOptions` into the attribute suffix of a cookie string, for example
``"; expires=Fri, 31 Dec 9999 23:59:59 GMT; path=/; secure"``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from email.utils import format_datetime


@dataclass(frozen=True)
class Session:
    """Cookie expires at the end of the browser session (no ``expires`` attribute)."""


@dataclass(frozen=True)
class Never:
    """Cookie never expires in practice (expires at the end of year 9999)."""


@dataclass(frozen=True)
class RelativeDays:
    """Cookie expires a number of days from now. Negative values delete the cookie."""

    days: float


@dataclass(frozen=True)
class AbsoluteInstant:
    """Cookie expires at a fixed point in time."""

    at: datetime


Expiry = Session | Never | RelativeDays | AbsoluteInstant

FAR_FUTURE = datetime(9999, 12, 31, 23, 59, 59, tzinfo=UTC)

# Expiry forced on deleted cookies.
EXPIRED = RelativeDays(-1)


def coerce_expiry(value: Expiry | float | datetime | None) -> Expiry:
    """
    Convert a loosely typed ``expires`` option to an `Expiry`.

    ``None`` means a session cookie, a number is a number of days from now, and a
    datetime is used as-is (naive datetimes are taken to be UTC).

    Returns:
        Expiry: The expiry variant.

    Raises:
        TypeError: If the value cannot be interpreted as an expiry.

    """
    if value is None:
        return Session()
    if isinstance(value, Session | Never | RelativeDays | AbsoluteInstant):
        return value
    # bool is an int subclass but "expires=True" has no sensible meaning.
    if isinstance(value, bool):
        msg = "expires must be a number of days, a datetime or None, not a bool."
        raise TypeError(msg)
    if isinstance(value, int | float):
        return RelativeDays(value)
    if isinstance(value, datetime):
        return AbsoluteInstant(value)
    msg = f"expires must be a number of days, a datetime or None, not {type(value).__name__}."
    raise TypeError(msg)


def expires_at(expiry: Expiry, now: datetime | None = None) -> datetime | None:
    """
    Return the moment a cookie with this expiry expires.

    Returns:
        datetime | None: An aware UTC datetime, or None for session cookies.

    """
    if isinstance(expiry, Session):
        return None
    if isinstance(expiry, Never):
        return FAR_FUTURE
    if isinstance(expiry, RelativeDays):
        now = now if now is not None else datetime.now(tz=UTC)
        return (now + timedelta(days=expiry.days)).astimezone(UTC)
    at = expiry.at
    if at.tzinfo is None:
        return at.replace(tzinfo=UTC)
    return at.astimezone(UTC)


@dataclass(frozen=True)
class CookieOptions:
    """
    Options used when reading or writing a cookie.

    Attributes:
        expires: Number of days from now, a datetime, an `Expiry`, or None for a session cookie.
        path: None for the whole site ('/'), an empty string for the directory of the current
            page (no path attribute), or an explicit path.
        domain: Domain attribute, omitted if None.
        secure: Require secure transmission of the cookie.
        scramble: True to scramble with the default algorithm, or the name of an algorithm.
            When reading, any truthy value unscrambles using the algorithm named in the value.

    """

    expires: Expiry | float | datetime | None = None
    path: str | None = None
    domain: str | None = None
    secure: bool = False
    scramble: bool | str | None = False


def format_attributes(options: CookieOptions, now: datetime | None = None) -> str:
    """
    Build the attribute suffix for a cookie string.

    Returns:
        str: Attributes, each starting with ``"; "``, or an empty string.

    """
    parts = []

    when = expires_at(coerce_expiry(options.expires), now)
    if when is not None:
        parts.append(f"; expires={format_datetime(when, usegmt=True)}")

    if options.path is None:
        parts.append("; path=/")
    elif options.path:
        parts.append(f"; path={options.path}")

    if options.domain:
        parts.append(f"; domain={options.domain}")
    if options.secure:
        parts.append("; secure")

    return "".join(parts)
