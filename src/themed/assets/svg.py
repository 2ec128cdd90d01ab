"""Inline SVG icon lookup.

Icons are looked up under the theme root in this order:

1. ``icons/<name>.svg``
2. ``<name>.svg``

The markup is cleaned (XML declaration, comments and inter-tag whitespace
removed) and cached by name. The first successful resolution wins for the
lifetime of the cache; misses are not cached so an icon added later is
still picked up.
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path

from themed.environment.paths import resolve, validate_name

logger = logging.getLogger(__name__)

_XML_DECLARATION = re.compile(r"<\?xml.*?\?>", re.DOTALL)
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_INTER_TAG_WHITESPACE = re.compile(r">\s+<")


def clean_svg(svg: str) -> str:
    """Remove the XML declaration, comments and whitespace between tags."""
    svg = _XML_DECLARATION.sub("", svg)
    svg = _COMMENT.sub("", svg)
    svg = _INTER_TAG_WHITESPACE.sub("><", svg)
    return svg.strip()


class SvgCache:
    """Process-wide cache of cleaned SVG markup, keyed by icon name.

    Thread-Safety:
        Reads are plain dict lookups; writes take a lock and never replace
        an entry that another thread stored first.
    """

    __slots__ = ("_entries", "_lock", "_root")

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> str | None:
        """Return the cleaned markup for icon ``name``.

        Raises:
            InvalidAssetNameError: If ``name`` is not a valid asset name

        Returns:
            The SVG markup, or None if the icon does not exist or cannot be read
        """
        cached = self._entries.get(name)
        if cached is not None:
            return cached

        validate_name(name, kind="asset")
        path = self._locate(name)
        if path is None:
            logger.warning("Icon not found: %s", name)
            return None

        try:
            svg = clean_svg(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Unable to read icon %s: %s", path, e)
            return None

        with self._lock:
            return self._entries.setdefault(name, svg)

    def _locate(self, name: str) -> Path | None:
        for candidate in (f"icons/{name}.svg", f"{name}.svg"):
            path = resolve(self._root, candidate)
            if path is not None and path.is_file():
                return path
            logger.info("Icon not at %s", self._root / candidate)
        return None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
