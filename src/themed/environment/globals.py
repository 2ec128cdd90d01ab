"""Template globals and filters registered on every Theme's engine.

Nested components:
    Templates can render other components in the same session, so the
    nested component's assets land in the same page queues:

        {{ component('icons/icon', {'name': 'star'}) }}

Filters:
    ``regex_replace(value, pattern, replacement)`` applies ``re.sub``:

        {{ content.label | regex_replace('\\s+', '-') | lower }}
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

if TYPE_CHECKING:
    from themed.environment.core import Theme


def component_function(theme: Theme) -> Callable[..., Markup]:
    """Build the ``component(name, content)`` global bound to ``theme``."""

    def component(name: str, content: Mapping[str, Any] | str | None = None) -> Markup:
        builder = theme.make(name)
        if content is not None:
            builder.content(content)
        return Markup(builder.render())

    return component


def regex_replace(value: object, pattern: str, replacement: str) -> str:
    return re.sub(pattern, replacement, str(value))


def default_globals(theme: Theme) -> dict[str, Callable[..., Any]]:
    return {"component": component_function(theme)}


DEFAULT_FILTERS: dict[str, Callable[..., Any]] = {
    "regex_replace": regex_replace,
}
