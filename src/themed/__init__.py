"""Themed — server-side HTML components with page-level asset aggregation.

Build named components from a theme directory, render them through Jinja2,
and collect the CSS/JS they need into deduplicated header/footer queues.

Quickstart:
    >>> import themed
    >>> html = themed.make("buttons/button").text("Save").variant("primary").render()
    >>> head = themed.header_scripts()   # theme + component CSS, once
    >>> foot = themed.footer_scripts()   # component JS, once

Explicit theme and session:
    >>> from themed import Theme, ThemeConfiguration
    >>> theme = Theme(ThemeConfiguration(template_path="/srv/theme"))
    >>> with theme.session() as session:
    ...     body = theme.make("feedback/alert").message("Saved").render()
    ...     header = session.drain("header")

Architecture:
make(name) → load component assets (per session) + parse parameters (per theme)
           → chained setters → render() → session queues + Jinja2 template

Theme directory layout:
    components/<group>/<name>.jinja   component template (leading {# #} block documents params)
    components/<group>/<name>.css     component styles (header)
    components/<group>/<name>.js      component script (footer)
    css/*.css, js/*.js                theme-global assets (header)
    js/footer/*.js                    theme-global scripts (footer)
    icons/<name>.svg                  inline icons for icons/* components

Configuration (environment):
    THEMED_TEMPLATE_PATH, THEMED_DEBUG, THEMED_DEBUG_LEVEL, THEMED_DEBUG_LOG

Thread-Safety:
The Theme (configuration, engine, parameter and SVG caches) is shared and
safe to use from many threads. Sessions are bound to a ContextVar, so
every thread and asyncio task renders into its own asset queues.

"""

from __future__ import annotations

import threading
from collections.abc import Mapping

from themed.assets import AssetAggregator, AssetLoader, SvgCache, embed_fonts, minify_css, minify_js
from themed.component import BuildState, ComponentBuilder
from themed.environment import (
    ErrorCode,
    InvalidAssetNameError,
    InvalidComponentNameError,
    InvalidNameError,
    JinjaEngine,
    MissingComponentError,
    PathEscapesRootError,
    TemplateEngine,
    TemplateNotFoundError,
    ThemeConfiguration,
    ThemedError,
    UnreadableFileError,
    resolve,
)
from themed.environment.core import Theme
from themed.introspection import ParameterIntrospector
from themed.render_context import Session, get_session

__version__ = "0.3.0"

__all__ = [
    "AssetAggregator",
    "AssetLoader",
    "BuildState",
    "ComponentBuilder",
    "ErrorCode",
    "InvalidAssetNameError",
    "InvalidComponentNameError",
    "InvalidNameError",
    "JinjaEngine",
    "MissingComponentError",
    "ParameterIntrospector",
    "PathEscapesRootError",
    "Session",
    "SvgCache",
    "TemplateEngine",
    "TemplateNotFoundError",
    "Theme",
    "ThemeConfiguration",
    "ThemedError",
    "UnreadableFileError",
    "__version__",
    "embed_fonts",
    "footer_scripts",
    "get_default_theme",
    "get_session",
    "header_scripts",
    "make",
    "minify_css",
    "minify_js",
    "resolve",
    "set_default_theme",
]

_default_theme: Theme | None = None
_default_lock = threading.Lock()


def get_default_theme() -> Theme:
    """Return the module-level Theme, building it from the environment on first use."""
    global _default_theme
    if _default_theme is None:
        with _default_lock:
            if _default_theme is None:
                _default_theme = Theme()
    return _default_theme


def set_default_theme(theme: Theme | None) -> None:
    """Replace the module-level Theme (None resets it to lazy construction)."""
    global _default_theme
    with _default_lock:
        _default_theme = theme


def make(name: str) -> ComponentBuilder:
    """Start building component ``name`` with the default theme."""
    return get_default_theme().make(name)


def header_scripts(
    script: str = "",
    kind: str = "auto",
    attributes: Mapping[str, object] | None = None,
) -> str | None:
    """Push a header asset, or drain the header queue when called empty."""
    return get_default_theme().header_scripts(script, kind, attributes)


def footer_scripts(
    script: str = "",
    kind: str = "auto",
    attributes: Mapping[str, object] | None = None,
) -> str | None:
    """Push a footer asset, or drain the footer queue when called empty."""
    return get_default_theme().footer_scripts(script, kind, attributes)
