from datetime import UTC, datetime

import pytest

from conftest import fixed_clock
from streamlit_cookie_jar.stores import CookieEntry, MemoryCookieStore, iter_cookie_pairs, parse_entry


def test_iter_cookie_pairs():
    raw = "a=1; b=x=y;  ;broken; c="
    assert list(iter_cookie_pairs(raw)) == [("a", "1"), ("b", "x=y"), ("c", "")]


def test_iter_cookie_pairs_empty():
    assert list(iter_cookie_pairs("")) == []


def test_parse_entry():
    entry = parse_entry("a=%20b; expires=Fri, 02 Jan 2026 00:00:00 GMT; Path=/x; domain=example.com; secure")
    assert entry == CookieEntry(
        name="a",
        value="%20b",
        expires=datetime(2026, 1, 2, tzinfo=UTC),
        path="/x",
        domain="example.com",
        secure=True,
    )


def test_parse_entry_ignores_bad_dates():
    assert parse_entry("a=b; expires=someday").expires is None


def test_parse_entry_requires_name_value():
    with pytest.raises(ValueError, match="Malformed"):
        parse_entry("justaname; path=/")


def test_memory_store_initial_cookies():
    store = MemoryCookieStore("a=1; b=2")
    assert store.read_all() == "a=1; b=2"


def test_memory_store_replaces_in_place():
    store = MemoryCookieStore("a=1; b=2", clock=fixed_clock)
    store.write("a=3; path=/")
    assert store.read_all() == "a=3; b=2"
    assert store.entry("a").path == "/"


def test_memory_store_expired_write_deletes():
    store = MemoryCookieStore("a=1; b=2", clock=fixed_clock)
    store.write("a=; expires=Wed, 31 Dec 2025 00:00:00 GMT; path=/")
    assert store.read_all() == "b=2"
    assert store.entry("a") is None


def test_memory_store_hides_cookies_that_expire_later():
    now = [datetime(2026, 1, 1, tzinfo=UTC)]
    store = MemoryCookieStore(clock=lambda: now[0])
    store.write("a=1; expires=Fri, 02 Jan 2026 00:00:00 GMT")
    assert store.read_all() == "a=1"

    now[0] = datetime(2026, 1, 3, tzinfo=UTC)
    assert store.read_all() == ""
