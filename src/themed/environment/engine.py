"""Template engine adapter.

Themed only needs two things from a template engine: render a named
template with a context, and tell whether a named template exists. The
``TemplateEngine`` protocol captures that; ``JinjaEngine`` implements it on
top of Jinja2.

Search Order:
    Template identifiers are component names plus ``TEMPLATE_SUFFIX``.
    The loader searches the theme root first, then ``components/``:

        JinjaEngine("/srv/theme").exists("buttons/button.jinja")
        # looks for /srv/theme/buttons/button.jinja,
        # then /srv/theme/components/buttons/button.jinja

Custom Engines:
    Any object with matching ``render`` and ``exists`` methods can be
    passed to ``Theme(engine=...)``:

        class StaticEngine:
            def __init__(self, templates: dict[str, str]):
                self.templates = templates

            def exists(self, identifier: str) -> bool:
                return identifier in self.templates

            def render(self, identifier: str, context: dict) -> str:
                return self.templates[identifier].format(**context["content"])
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import jinja2

TEMPLATE_SUFFIX = ".jinja"


@runtime_checkable
class TemplateEngine(Protocol):
    def render(self, identifier: str, context: Mapping[str, Any]) -> str: ...

    def exists(self, identifier: str) -> bool: ...


def template_identifier(component: str) -> str:
    return f"{component}{TEMPLATE_SUFFIX}"


class JinjaEngine:
    """Render component templates with Jinja2.

    Autoescaping is off: component templates produce trusted markup and
    escape user values explicitly with ``|e``. Compiled templates are
    cached on disk outside debug mode; in debug mode templates are reloaded
    when they change.

    Attributes:
        environment: The underlying ``jinja2.Environment``
    """

    __slots__ = ("environment",)

    def __init__(
        self,
        root: str | Path,
        *,
        debug: bool = False,
        globals: Mapping[str, Callable[..., Any]] | None = None,
        filters: Mapping[str, Callable[..., Any]] | None = None,
    ):
        root = Path(root)
        self.environment = jinja2.Environment(
            loader=jinja2.FileSystemLoader([str(root), str(root / "components")]),
            autoescape=False,
            auto_reload=debug,
            bytecode_cache=None if debug else jinja2.FileSystemBytecodeCache(),
        )
        if globals:
            self.environment.globals.update(globals)
        if filters:
            self.environment.filters.update(filters)

    def exists(self, identifier: str) -> bool:
        """Check for a template without compiling it."""
        try:
            self.environment.loader.get_source(self.environment, identifier)
        except jinja2.TemplateNotFound:
            return False
        return True

    def render(self, identifier: str, context: Mapping[str, Any]) -> str:
        return self.environment.get_template(identifier).render(context)
