"""Themed Session — per-page state isolated from the process-wide Theme.

A Session holds everything that must accumulate across the component
builds of one page render and then be thrown away:

    - the header/footer asset queues (``AssetAggregator``)
    - the set of components whose CSS/JS was already loaded (``AssetLoader``)
    - framework metadata (``get_meta`` / ``set_meta``)

Sessions live in a ContextVar. Each thread and each asyncio task sees its
own current session, so concurrent requests never share queues. Parameter
and SVG caches are not session state; they live on the Theme.

Example:
    with theme.session() as session:
        body = theme.make("buttons/button").text("Save").render()
        head = session.drain("header")
        foot = session.drain("footer")

Outside an explicit ``with`` block, ``Theme.current_session()`` creates a
session on first use and binds it to the current context. A long-lived
context reuses that session page after page; draining both queues ends a
page and clears the loaded-component memo.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from themed.assets.aggregator import LOCATIONS, AssetAggregator, Location
from themed.assets.loader import AssetLoader

if TYPE_CHECKING:
    from themed.environment.core import Theme


@dataclass
class Session:
    """Per-page asset state.

    Attributes:
        theme: The Theme this session renders with
        aggregator: Header/footer queues
        loader: Theme/component asset loader feeding ``aggregator``
    """

    theme: Theme
    aggregator: AssetAggregator = field(init=False)
    loader: AssetLoader = field(init=False)
    _meta: dict[str, object] = field(default_factory=dict)
    _drained: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.aggregator = AssetAggregator(sink=self.theme.script_callback)
        self.loader = AssetLoader(self.theme.config, self.aggregator)
        self.aggregator.preload = self.loader.load_scripts

    def load_scripts(self, component: str = "") -> None:
        self.loader.load_scripts(component)

    def push(
        self,
        location: Location,
        script: str,
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> None:
        self.aggregator.push(location, script, kind, attributes)

    def drain(self, location: Location) -> str:
        """Drain one queue; once both have been drained the page is over.

        Ending the page forgets which components were loaded, so the next
        page rendered in this session queues their CSS/JS again.
        """
        scripts = self.aggregator.drain(location)
        self._drained.add(location)
        if self._drained.issuperset(LOCATIONS):
            self.end_page()
        return scripts

    def end_page(self) -> None:
        self.loader.reset()
        self._drained.clear()

    def header_scripts(
        self,
        script: str = "",
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> str | None:
        if not script:
            return self.drain("header")
        self.aggregator.push("header", script, kind, attributes)
        return None

    def footer_scripts(
        self,
        script: str = "",
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> str | None:
        if not script:
            return self.drain("footer")
        self.aggregator.push("footer", script, kind, attributes)
        return None

    def get_meta(self, key: str, default: object = None) -> object:
        """Get framework-specific metadata (request id, CSP nonce, ...)."""
        return self._meta.get(key, default)

    def set_meta(self, key: str, value: object) -> None:
        self._meta[key] = value


_session: ContextVar[Session | None] = ContextVar("themed_session", default=None)


def get_session() -> Session | None:
    """Get the current session (None if none is bound)."""
    return _session.get()


def get_session_required() -> Session:
    """Get the current session, raise if none is bound.

    Raises:
        RuntimeError: If no session is bound to the current context
    """
    session = _session.get()
    if session is None:
        raise RuntimeError("Not in a Themed session")
    return session


def set_session(session: Session | None) -> Token[Session | None]:
    """Bind ``session`` to the current context and return the reset token."""
    return _session.set(session)


def reset_session(token: Token[Session | None]) -> None:
    _session.reset(token)


@contextmanager
def session_scope(theme: Theme) -> Iterator[Session]:
    """Bind a fresh Session for the duration of the ``with`` block.

    The previous session (if any) is restored on exit, so scopes nest.
    """
    session = Session(theme)
    token = _session.set(session)
    try:
        yield session
    finally:
        _session.reset(token)
