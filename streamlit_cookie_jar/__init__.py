"""
Cookie jar for Streamlit with pluggable, reversible value scrambling.

This package exposes:
- `CookieJar`: get/set/delete cookies, with optional scrambling and JSON helpers.
- `ScrambleRegistry` and `register_scrambler`: the scramble algorithm plug-in registry.
- `MemoryCookieStore` and `StreamlitCookieStore`: cookie channels a jar reads and writes.
"""

from .cookie_jar import CookieJar
from .errors import CookieJarError, CookiesNotReady, UnknownScrambleAlgorithm
from .options import AbsoluteInstant, CookieOptions, Expiry, Never, RelativeDays, Session
from .scramblers import ScrambleAlgorithm, ScrambleRegistry, register_scrambler
from .stores import CookieStore, MemoryCookieStore
from .streamlit_store import StreamlitCookieStore

__all__ = [
    "AbsoluteInstant",
    "CookieJar",
    "CookieJarError",
    "CookieOptions",
    "CookieStore",
    "CookiesNotReady",
    "Expiry",
    "MemoryCookieStore",
    "Never",
    "RelativeDays",
    "ScrambleAlgorithm",
    "ScrambleRegistry",
    "Session",
    "StreamlitCookieStore",
    "UnknownScrambleAlgorithm",
    "register_scrambler",
]
