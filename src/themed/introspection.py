"""Component parameter introspection.

Each component template documents its accepted content fields in a
leading comment block:

    {#
      Button component
      - text: string - The button label
      - variant: string - Bootstrap variant (primary, secondary, ...) (optional)
      - href: string - Render as a link when set (optional)
    #}
    <button class="btn btn-{{ content.variant }}">...</button>

``ParameterIntrospector.describe()`` turns that block into a
``{name: description}`` map, adds the builder's own methods, and caches the
result per template path so a template file is read at most once:

    >>> introspector.describe("/theme/components/buttons/button.jinja")
    {'addAttribute': ..., 'addCss': ..., ..., 'text': 'string - The button label', ...}

Only the first comment block is honoured, and only when it is the first
thing in the file (leading whitespace aside).
"""

from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from markupsafe import escape

from themed.environment.exceptions import TemplateNotFoundError, UnreadableFileError
from themed.environment.log import notice

if TYPE_CHECKING:
    from themed.environment.config import ThemeConfiguration

logger = logging.getLogger(__name__)

_DOC_BLOCK = re.compile(r"\A\s*\{#([\s\S]*?)#\}")
_PARAMETER_LINE = re.compile(r"^[ \t]*-[ \t]*(\w+):[ \t]*(.*?)[ \t]*$", re.MULTILINE)

CONTENT_SUFFIX = " (always set this first)"
HIDDEN_PARAMETERS = frozenset({"attributes"})

BUILTIN_PARAMETERS: dict[str, str] = {
    "id": (
        "string - The id of the element. If no id is supplied, "
        "a random one will be generated (optional)"
    ),
    "canSee": "bool - Whether the component should be visible or not (optional)",
    "addAttribute": (
        "Add an attribute to the element. This is a name and a value like "
        "addAttribute('data-foo', 'bar') (optional)"
    ),
    "addJavaScript": str(
        escape(
            "string - Add a script to the element. This is a string like "
            "'<script>console.log('Hello World!')</script>' (optional)"
        )
    ),
    "addCss": str(
        escape(
            "string - Add css styles to the element. "
            "This should be '<style> custom-class {...} </style>' (optional)"
        )
    ),
}


def parse_doc_block(source: str) -> dict[str, str]:
    """Extract ``- name: description`` entries from the leading comment block."""
    match = _DOC_BLOCK.match(source)
    if match is None:
        return {}
    return {name: description for name, description in _PARAMETER_LINE.findall(match.group(1))}


def build_parameters(parsed: dict[str, str]) -> dict[str, str]:
    """Merge builtins into ``parsed`` and apply ordering rules.

    Builtins win over parsed entries of the same name, hidden keys are
    dropped, keys are sorted, and ``content`` (when present) is moved to
    the front with a reminder appended.
    """
    merged = {**parsed, **BUILTIN_PARAMETERS}
    for hidden in HIDDEN_PARAMETERS:
        merged.pop(hidden, None)

    parameters: dict[str, str] = {}
    if "content" in merged:
        parameters["content"] = merged.pop("content") + CONTENT_SUFFIX
    parameters.update(sorted(merged.items()))
    return parameters


class ParameterIntrospector:
    """Parse and cache the documented parameters of component templates.

    The cache is keyed by the exact template path and shared by every
    session of a Theme. Failed reads are cached too (as the builtin-only
    map) outside debug mode.

    Thread-Safety:
        Parsing happens outside the lock; the first result stored for a
        path wins.
    """

    __slots__ = ("_cache", "_config", "_lock", "reads")

    def __init__(self, config: ThemeConfiguration):
        self._config = config
        self._cache: dict[str, dict[str, str]] = {}
        self._lock = threading.Lock()
        self.reads = 0

    def __contains__(self, path: object) -> bool:
        return str(path) in self._cache

    def describe(self, template_path: str | Path) -> dict[str, str]:
        """Return the parameter map for the template at ``template_path``.

        Raises:
            TemplateNotFoundError: Template missing, debug mode only
            UnreadableFileError: Template unreadable, debug mode only
        """
        key = str(template_path)
        cached = self._cache.get(key)
        if cached is not None:
            return dict(cached)

        parsed: dict[str, str] = {}
        try:
            parsed = parse_doc_block(self._read(Path(key)))
        except (TemplateNotFoundError, UnreadableFileError) as e:
            logger.error("Error parsing docblock: %s", e.message)
            if self._config.debug:
                raise

        parameters = build_parameters(parsed)
        with self._lock:
            parameters = self._cache.setdefault(key, parameters)
        if self._config.debug_level > 1:
            notice(logger, "parameters: %s : %s", key, json.dumps(parameters))
        return dict(parameters)

    def _read(self, path: Path) -> str:
        self.reads += 1
        if not path.is_file():
            raise TemplateNotFoundError(path.name, path)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableFileError(path, str(e)) from e

    def clear(self) -> None:
        """Forget every cached parameter map."""
        with self._lock:
            self._cache.clear()
