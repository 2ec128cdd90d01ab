"""Session-scoped header/footer asset queues.

Components push the CSS and JavaScript they need while they render; the
page layout drains both queues once, after the body has been built:

    >>> agg = AssetAggregator()
    >>> agg.push("header", "<style>.x{color:red}</style>")
    >>> agg.push("header", "<style>.x{color:red}</style>")  # duplicate, ignored
    >>> agg.push("footer", "/static/app.js", attributes={"defer": "defer"})
    >>> agg.drain("header")
    '<style>.x{color:red}</style>'
    >>> agg.drain("footer")
    '<script type="text/javascript" src="/static/app.js" defer="defer"></script>'

Entries are keyed by the SHA-256 digest of the final snippet, so pushing
identical content twice leaves one entry. A queue is only ever emptied by
``drain()``.

Custom sink:
    When a sink is set, every non-empty push is forwarded to
    ``sink(script, kind, location)`` verbatim and nothing is queued. This
    lets frameworks route assets into their own pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from hashlib import sha256
from pathlib import PurePosixPath
from typing import Literal
from urllib.parse import urlsplit

from markupsafe import escape

from themed.environment.log import notice

logger = logging.getLogger(__name__)

Location = Literal["header", "footer"]
LOCATIONS: tuple[Location, ...] = ("header", "footer")

ScriptCallback = Callable[[str, str, str], None]


def detect_kind(script: str) -> str:
    """Guess the asset kind from the extension of a script reference.

    Already-wrapped HTML (``<style>``, ``<script>``, ``<link>``...) has no
    kind and is stored as given.

    Example:
        >>> detect_kind("/static/app.js?v=2")
        'js'
        >>> detect_kind("<style>.a{}</style>")
        ''
    """
    candidate = script.strip()
    if not candidate or candidate.startswith("<") or "\n" in candidate:
        return ""
    return PurePosixPath(urlsplit(candidate).path).suffix.lstrip(".").lower()


def format_attributes(attributes: Mapping[str, object] | None) -> str:
    if not attributes:
        return ""
    return "".join(f' {key}="{escape(value)}"' for key, value in attributes.items())


def wrap(script: str, kind: str, attributes: Mapping[str, object] | None = None) -> str:
    """Wrap a script reference in the tag for its kind."""
    attrs = format_attributes(attributes)
    if kind == "js":
        return f'<script type="text/javascript" src="{escape(script)}"{attrs}></script>'
    if kind == "css":
        return f'<link rel="stylesheet" href="{escape(script)}"{attrs}>'
    return script


class AssetAggregator:
    """Deduplicated header and footer queues for one page render.

    Attributes:
        sink: Optional ``(script, kind, location)`` callback replacing the queues
        preload: Optional hook run at the start of every drain, used to
            pick up theme-global assets
    """

    __slots__ = ("_queues", "preload", "sink")

    def __init__(
        self,
        sink: ScriptCallback | None = None,
        preload: Callable[[], None] | None = None,
    ):
        self._queues: dict[str, dict[str, str]] = {location: {} for location in LOCATIONS}
        self.sink = sink
        self.preload = preload

    def _queue(self, location: str) -> dict[str, str]:
        try:
            return self._queues[location]
        except KeyError:
            raise ValueError(
                f"Unknown asset location {location!r}; expected one of {', '.join(LOCATIONS)}"
            ) from None

    def push(
        self,
        location: Location,
        script: str,
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> None:
        """Queue ``script`` for ``location``.

        Args:
            location: "header" or "footer"
            script: URL/path of a .js/.css file, or an already-wrapped
                ``<style>``/``<script>`` block
            kind: "auto" to detect from the extension, or "js"/"css"
            attributes: Extra attributes for generated ``<script>``/``<link>`` tags

        Raises:
            ValueError: If ``location`` is not "header" or "footer"
        """
        queue = self._queue(location)
        if not script:
            return

        resolved_kind = detect_kind(script) if kind == "auto" else kind
        if self.sink is not None:
            self.sink(script, resolved_kind, location)
            notice(logger, "%s script processed by custom callback", location.capitalize())
            return

        logger.info("Adding %s script: %s", location, script)
        snippet = wrap(script, resolved_kind, attributes)
        digest = sha256(snippet.encode()).hexdigest()
        queue.setdefault(digest, snippet)

    def drain(self, location: Location) -> str:
        """Return all queued snippets for ``location`` and empty the queue.

        Runs the ``preload`` hook first, so theme-global assets are
        included in the first drain of a session.

        Returns:
            Snippets joined by newlines in insertion order, or "" if empty
        """
        queue = self._queue(location)
        if self.preload is not None:
            self.preload()
        logger.info("%s scripts: %s", location.capitalize(), list(queue.values()))
        scripts = "\n".join(queue.values())
        queue.clear()
        return scripts

    def pending(self, location: Location) -> tuple[str, ...]:
        """Snapshot of the queued snippets, without draining."""
        return tuple(self._queue(location).values())

    def __len__(self) -> int:
        return sum(len(queue) for queue in self._queues.values())

    def header_scripts(
        self,
        script: str = "",
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> str | None:
        """Push ``script`` to the header, or drain the header when empty."""
        if not script:
            return self.drain("header")
        self.push("header", script, kind, attributes)
        return None

    def footer_scripts(
        self,
        script: str = "",
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> str | None:
        """Push ``script`` to the footer, or drain the footer when empty."""
        if not script:
            return self.drain("footer")
        self.push("footer", script, kind, attributes)
        return None
