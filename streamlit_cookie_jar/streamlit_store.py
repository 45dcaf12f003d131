"""
Streamlit component backend for the cookie jar.

Provides StreamlitCookieStore, a `CookieStore` that reads ``document.cookie`` through a
Streamlit custom component and queues writes until `StreamlitCookieStore.save` is called.

The frontend component is called with:

- ``queue``: a list of cookie strings such as ``"name=value; expires=...; path=/"``, at most one per
  cookie name, in write order. Each string is assigned to ``document.cookie`` as-is.
- ``saveOnly``: when true, apply the queue; when false, only report cookies.

It returns ``document.cookie`` (``"name=value; name2=value2"``) after applying the queue.
"""

from collections.abc import Callable, MutableMapping
from datetime import UTC, datetime
from functools import cache
from pathlib import Path
from typing import Any, cast

import streamlit as st
from streamlit.components.v1 import declare_component

from .errors import CookiesNotReady
from .stores import iter_cookie_pairs, parse_entry

build_path = Path(__file__).parent / "build"


@cache
def _component_func() -> Callable[..., Any]:
    """
    Declare the cookie sync component on first use.

    Raises:
        RuntimeError: If the frontend build directory is missing.

    """
    if not build_path.is_dir():
        message = (
            "Could not find the component's 'build' directory at "
            f"'{build_path}'. Make sure to run 'npm run build' in your frontend "
            "directory and ensure that the 'build' folder is included in your package data."
        )
        raise RuntimeError(message)
    return declare_component("CookieJar.sync_cookies", path=str(build_path))


class StreamlitCookieStore:
    """
    Cookie store backed by the browser, for use in a Streamlit application.

    The component returns ``document.cookie`` on every run and assigns each queued cookie
    string to ``document.cookie`` when saving. Reads see queued writes immediately.
    """

    # Define session state keys to avoid magic strings and potential typos.
    _QUEUE_KEY_PREFIX = "CookieJar.queue."
    _SYNC_KEY_PREFIX = "CookieJar.sync_cookies."
    _SAVE_KEY_PREFIX = "CookieJar.sync_cookies.save."

    def __init__(
        self,
        *,
        key: str = "",
        state: MutableMapping[str, Any] | None = None,
        component: Callable[..., Any] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the store and sync cookies from the browser.

        Args:
            key: Distinguishes several stores in the same app.
            state: Where the write queue is kept between reruns. Defaults to ``st.session_state``.
            component: The component function. Defaults to the packaged frontend component.
            clock: Returns the current time, used to tell deletions from writes.

        """
        self._key = key
        self._component = component
        self._clock = clock if clock is not None else lambda: datetime.now(tz=UTC)

        state = state if state is not None else st.session_state
        # Queue of cookie strings not yet applied by the browser, in write order.
        self._queue: list[str] = state.setdefault(self._QUEUE_KEY_PREFIX + key, [])

        raw_cookie = self._run_component(save_only=False, key=self._SYNC_KEY_PREFIX + key)
        if raw_cookie is None:
            # The component is not yet ready or has not returned data.
            self._raw_cookie = None
        else:
            self._raw_cookie = raw_cookie
            self._clean_queue()

    def ready(self) -> bool:
        """
        Return whether the component has synced cookies from the browser.

        Returns:
            bool: True if cookies from the browser are available.

        """
        return self._raw_cookie is not None

    def save(self) -> None:
        """
        Send queued cookie strings to the browser.

        This must be called for writes to take effect.
        """
        if self._queue:
            self._run_component(save_only=True, key=self._SAVE_KEY_PREFIX + self._key)

    def _run_component(self, *, save_only: bool, key: str) -> str | None:
        component = self._component if self._component is not None else _component_func()
        return cast("str | None", component(queue=list(self._queue), saveOnly=save_only, key=key))

    def _clean_queue(self) -> None:
        """Remove queued cookie strings the browser has already applied."""
        cookies = dict(iter_cookie_pairs(self._raw_cookie or ""))
        now = self._clock()

        # Iterate over a copy; the queue is mutated in place so session state sees the change.
        for entry in list(self._queue):
            parsed = parse_entry(entry)
            if parsed.expired(now):
                if parsed.name not in cookies:
                    self._queue.remove(entry)
            elif cookies.get(parsed.name) == parsed.value:
                self._queue.remove(entry)

    def read_all(self) -> str:
        """
        Return the browser's cookies with queued writes applied.

        Raises:
            CookiesNotReady: If the component hasn't synced with the browser yet.

        """
        if self._raw_cookie is None:
            msg = (
                "StreamlitCookieStore is not ready. The component has not synced with the browser yet. "
                "You need to wait for a rerun after initialization or check `ready()` first."
            )
            raise CookiesNotReady(msg)

        cookies = dict(iter_cookie_pairs(self._raw_cookie))
        now = self._clock()
        for entry in self._queue:
            parsed = parse_entry(entry)
            if parsed.expired(now):
                cookies.pop(parsed.name, None)
            else:
                cookies[parsed.name] = parsed.value
        return "; ".join(f"{name}={value}" for name, value in cookies.items())

    def write(self, entry: str) -> None:
        """Queue a cookie string. Call ``save()`` to apply it in the browser."""
        name = parse_entry(entry).name
        # A later write to the same name replaces the queued one. Mutate in place so
        # session state sees the change.
        self._queue[:] = [queued for queued in self._queue if parse_entry(queued).name != name]
        self._queue.append(entry)

    def __repr__(self) -> str:
        if self.ready():
            return f"<StreamlitCookieStore: {self.read_all()!r}>"
        return "<StreamlitCookieStore: not ready>"
