"""ComponentBuilder: chainable construction and rendering of one component.

Builders are created by ``Theme.make()`` (or ``themed.make()``):

    >>> html = (
    ...     theme.make("buttons/button")
    ...     .text("Save")
    ...     .variant("primary")
    ...     .add_class("w-100")
    ...     .add_attribute("data-action", "save")
    ...     .render()
    ... )

Content fields:
    Component data has no fixed schema. ``set(key, value)`` and
    ``set_many(mapping)`` are the explicit setters; any other public method
    name is routed to them, so ``.text("Save")`` is ``.set("text", "Save")``
    and ``.set_many({...})`` can be spelled ``.anything({...})``. The
    documented fields of a component are available from ``.parameters``.

Lifecycle:
    CREATED -> CONFIGURING -> RENDERED | FAILED

    Creating a builder loads the component's CSS/JS into the current
    session (once per session) and reads its parameter block (once per
    theme). ``render()`` pushes the builder's own CSS/JS into the session
    queues and renders the template with ``{"content": ...}``. A builder is
    meant to be rendered once.
"""

from __future__ import annotations

import functools
import json
import logging
import uuid
from collections.abc import Callable, Mapping
from enum import Enum
from hashlib import sha256
from typing import TYPE_CHECKING, Any, Self

from themed.environment.engine import template_identifier
from themed.environment.exceptions import (
    MissingComponentError,
    TemplateNotFoundError,
    ThemedError,
)

if TYPE_CHECKING:
    from themed.environment.core import Theme
    from themed.render_context import Session

logger = logging.getLogger(__name__)

ICON_NAMESPACE = "icons/"


class BuildState(Enum):
    CREATED = "created"
    CONFIGURING = "configuring"
    RENDERED = "rendered"
    FAILED = "failed"


def generate_id() -> str:
    return uuid.uuid4().hex[:13]


def placeholder(error: ThemedError) -> str:
    """Inert HTML comment shown in place of a component that failed."""
    message = error.message.replace("--", "- -")
    return f"<!-- themed: {message} -->"


class ComponentBuilder:
    """Accumulates attributes, classes, assets and content for one component.

    Only ``set``, ``set_many``, the named builder methods, ``render`` and
    the ``component_*``/``build_state``/``content_data``/``parameters``
    accessors are real attributes; every other public name is a content
    field setter.
    """

    __slots__ = (
        "_attributes",
        "_classes",
        "_content",
        "_css",
        "_id",
        "_javascript",
        "_name",
        "_parameters",
        "_session",
        "_state",
        "_theme",
        "_visible",
    )

    def __init__(self, theme: Theme, session: Session, name: str):
        self._theme = theme
        self._session = session
        self._name = name
        self._state = BuildState.CREATED
        self._id = generate_id()
        self._attributes: dict[str, str] = {}
        self._classes: list[str] = []
        self._css: dict[str, str] = {}
        self._javascript: dict[str, str] = {}
        self._content: dict[str, Any] = {}
        self._visible = True
        self._parameters: dict[str, str] = {}

        if name:
            logger.info("Loading scripts for component: %s, id: %s", name, self._id)
            session.load_scripts(name)
            self._parameters = theme.describe(name)

    def __repr__(self) -> str:
        return f"<ComponentBuilder {self._name!r} id={self._id!r} state={self._state.value}>"

    def __getattr__(self, name: str) -> Callable[..., Self]:
        # Only reached for names that are not real attributes.
        if name.startswith("_"):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return functools.partial(self._set_field, name)

    def _set_field(self, name: str, *args: Any) -> Self:
        value = args[0] if args and args[0] else ""
        if self._theme.config.debug_level > 2:
            logger.info("Content: %s : %s", self._name, json.dumps(args, default=str))
        if isinstance(value, Mapping):
            return self.set_many(value)
        return self.set(name, value)

    def _touch(self) -> None:
        if self._state is BuildState.CREATED:
            self._state = BuildState.CONFIGURING

    @property
    def parameters(self) -> dict[str, str]:
        """Documented parameters of this component (see ``themed.introspection``)."""
        return dict(self._parameters)

    @property
    def component_id(self) -> str:
        return self._id

    @property
    def component_name(self) -> str:
        return self._name

    @property
    def build_state(self) -> BuildState:
        return self._state

    @property
    def content_data(self) -> dict[str, Any]:
        """Current content map (a copy)."""
        return dict(self._content)

    # -- Setters -------------------------------------------------------------

    def set(self, key: str, value: Any) -> Self:
        """Set content field ``key``."""
        self._touch()
        self._content[key] = value
        return self

    def set_many(self, values: Mapping[str, Any]) -> Self:
        """Merge ``values`` into the content map."""
        self._touch()
        self._content.update(values)
        return self

    def id(self, value: str) -> Self:
        self._touch()
        self._id = value
        return self

    def content(self, value: Mapping[str, Any] | str | bool | None) -> Self:
        """Replace the content map.

        A mapping becomes the whole content; anything else is stored as
        ``{"content": value}`` so simple components can take their body
        directly.
        """
        self._touch()
        if isinstance(value, Mapping):
            self._content = dict(value)
        else:
            self._content = {"content": value}
        return self

    def add_attribute(self, name: str, value: str) -> Self:
        self._touch()
        self._attributes[name] = value
        return self

    def add_class(self, classes: str) -> Self:
        """Add one class, or several separated by spaces. Duplicates are ignored."""
        self._touch()
        for cls in classes.split():
            if cls not in self._classes:
                self._classes.append(cls)
        return self

    def add_css(self, css: str) -> Self:
        """Add a ``<style>`` block (or stylesheet URL) for the page header."""
        self._touch()
        self._css[sha256(css.encode()).hexdigest()] = css
        return self

    def add_javascript(self, script: str) -> Self:
        """Add a ``<script>`` block (or script URL) for the page footer."""
        self._touch()
        self._javascript[sha256(script.encode()).hexdigest()] = script
        return self

    def can_see(self, visible: bool) -> Self:
        self._touch()
        self._visible = bool(visible)
        return self

    # Names used in component documentation blocks.
    addAttribute = add_attribute
    addClass = add_class
    addCss = add_css
    addJavaScript = add_javascript
    canSee = can_see

    # -- Rendering -----------------------------------------------------------

    def render(self) -> str:
        """Render the component to HTML.

        Returns:
            The rendered HTML; "" when hidden with ``can_see(False)``; an
            HTML comment placeholder when the component is missing and
            debug mode is off.

        Raises:
            MissingComponentError: No component name (debug mode only)
            TemplateNotFoundError: No template for the name (debug mode only)
            InvalidAssetNameError: Icon component with an invalid icon name
        """
        if not self._visible:
            return ""
        if not self._name:
            return self._fail(MissingComponentError())

        self._preprocess()

        for css in self._css.values():
            self._session.push("header", css)
        for script in self._javascript.values():
            self._session.push("footer", script)

        content = self._content
        if not content.get("id"):
            content["id"] = self._id
        if not content.get("classes"):
            content["classes"] = " ".join(self._classes)
        if not content.get("attributes"):
            content["attributes"] = dict(self._attributes)

        identifier = template_identifier(self._name)
        engine = self._theme.engine
        if not engine.exists(identifier):
            error = TemplateNotFoundError(identifier, self._theme.template_file(self._name))
            return self._fail(error)

        html = engine.render(identifier, {"content": content})
        self._state = BuildState.RENDERED
        return html

    def _preprocess(self) -> None:
        if self._name.startswith(ICON_NAMESPACE) and self._content.get("name"):
            self._content["svg"] = self._theme.svg.get(str(self._content["name"]))

    def _fail(self, error: ThemedError) -> str:
        self._state = BuildState.FAILED
        if self._theme.config.debug:
            raise error
        logger.error("%s", error.message)
        return placeholder(error)
