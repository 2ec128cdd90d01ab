"""Theme: process-wide owner of configuration, caches and the template engine.

A Theme is created once per application (or once per theme directory) and
shared by every request. Per-request state lives in a Session.

Shared (Theme):
    - ThemeConfiguration
    - template engine (Jinja2 by default)
    - ParameterIntrospector cache
    - SvgCache

Per page render (Session):
    - header/footer asset queues
    - loaded-component memo

Example:
    >>> theme = Theme(ThemeConfiguration(template_path="/srv/theme"))
    >>> with theme.session() as session:
    ...     body = theme.make("feedback/alert").message("Saved").variant("success").render()
    ...     page = f"<head>{session.drain('header')}</head><body>{body}{session.drain('footer')}</body>"
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from themed.assets.aggregator import Location, ScriptCallback
from themed.assets.svg import SvgCache
from themed.component import ComponentBuilder
from themed.environment.config import ThemeConfiguration
from themed.environment.engine import JinjaEngine, TemplateEngine, template_identifier
from themed.environment.globals import DEFAULT_FILTERS, default_globals
from themed.environment.log import LoggerCallback, configure_logging, notice
from themed.introspection import ParameterIntrospector
from themed.render_context import Session, get_session, session_scope, set_session

logger = logging.getLogger(__name__)


class Theme:
    """Component renderer bound to one theme directory.

    Logging goes through the single ``themed`` logger. Each Theme installs
    its handler on construction and on ``configure()``, replacing the one a
    previous Theme installed, so the most recently configured Theme decides
    the log destination for the whole process.

    Attributes:
        engine: Template engine used to render components
        introspector: Parameter cache for component templates
        svg: Icon cache
        script_callback: Optional ``(script, kind, location)`` sink that
            replaces the session queues
    """

    def __init__(
        self,
        config: ThemeConfiguration | None = None,
        *,
        engine: TemplateEngine | None = None,
        script_callback: ScriptCallback | None = None,
        logger_callback: LoggerCallback | None = None,
    ):
        self._config = config if config is not None else ThemeConfiguration.from_env()
        self._custom_engine = engine
        self._logger_callback = logger_callback
        self.script_callback = script_callback
        self._build()

    def _build(self) -> None:
        configure_logging(self._config, self._logger_callback)
        self.introspector = ParameterIntrospector(self._config)
        self.svg = SvgCache(self._config.template_path)
        self.engine: TemplateEngine = self._custom_engine or JinjaEngine(
            self._config.template_path,
            debug=self._config.debug,
            globals=default_globals(self),
            filters=DEFAULT_FILTERS,
        )
        logger.info("Theme ready: %s", self._config.template_path)

    def __repr__(self) -> str:
        return f"<Theme {str(self._config.template_path)!r} debug={self._config.debug}>"

    @property
    def config(self) -> ThemeConfiguration:
        return self._config

    @property
    def template_path(self) -> Path:
        return self._config.template_path

    def configure(self, **overrides: object) -> ThemeConfiguration:
        """Apply configuration overrides and rebuild caches and engine.

        The session bound to the current context picks up the new
        configuration for the assets it loads from here on.

        Raises:
            TypeError: If an override is not a configuration field
        """
        self._config = self._config.with_overrides(**overrides)
        self._build()
        session = get_session()
        if session is not None and session.theme is self:
            session.loader.config = self._config
        return self._config

    # -- Sessions ------------------------------------------------------------

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Bind a fresh Session to the current context for one page render."""
        with session_scope(self) as session:
            yield session

    def current_session(self) -> Session:
        """Return the session bound to the current context, creating one if needed."""
        session = get_session()
        if session is None or session.theme is not self:
            session = Session(self)
            set_session(session)
        return session

    # -- Components ----------------------------------------------------------

    def make(self, name: str = "") -> ComponentBuilder:
        """Start building component ``name`` in the current session.

        Raises:
            InvalidComponentNameError: If ``name`` has characters outside ``[A-Za-z0-9_/-]``
            TemplateNotFoundError: If the template is missing (debug mode only)
        """
        return ComponentBuilder(self, self.current_session(), name)

    def template_file(self, name: str) -> Path:
        return self._config.template_path / "components" / template_identifier(name)

    def describe(self, name: str) -> dict[str, str]:
        """Documented parameters of component ``name``."""
        return self.introspector.describe(self.template_file(name))

    def get_svg_content(self, name: str) -> str | None:
        return self.svg.get(name)

    # -- Assets --------------------------------------------------------------

    def load_scripts(self, component: str = "") -> None:
        self.current_session().load_scripts(component)

    def push(
        self,
        location: Location,
        script: str,
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> None:
        self.current_session().aggregator.push(location, script, kind, attributes)

    def drain(self, location: Location) -> str:
        return self.current_session().drain(location)

    def header_scripts(
        self,
        script: str = "",
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> str | None:
        """Push a header asset, or drain the header queue when called empty."""
        return self.current_session().header_scripts(script, kind, attributes)

    def footer_scripts(
        self,
        script: str = "",
        kind: str = "auto",
        attributes: Mapping[str, object] | None = None,
    ) -> str | None:
        """Push a footer asset, or drain the footer queue when called empty."""
        return self.current_session().footer_scripts(script, kind, attributes)

    # -- Callbacks -----------------------------------------------------------

    def set_script_callback(self, callback: ScriptCallback | None) -> None:
        """Route pushed assets to ``callback`` instead of the session queues.

        Applies to sessions created afterwards and to the session bound to
        the current context.
        """
        self.script_callback = callback
        session = get_session()
        if session is not None and session.theme is self:
            session.aggregator.sink = callback
        notice(logger, "Custom script callback registered")

    def set_logger_callback(self, callback: LoggerCallback | None) -> None:
        """Send log messages to ``callback`` instead of the log file."""
        self._logger_callback = callback
        configure_logging(self._config, callback)
        notice(logger, "Custom logger callback registered")
