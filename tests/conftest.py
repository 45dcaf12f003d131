from datetime import UTC, datetime

import pytest

from streamlit_cookie_jar import CookieJar, MemoryCookieStore, ScrambleRegistry

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def registry():
    return ScrambleRegistry()


@pytest.fixture
def store():
    return MemoryCookieStore(clock=fixed_clock)


@pytest.fixture
def jar(store, registry):
    return CookieJar(store, registry=registry, clock=fixed_clock)
