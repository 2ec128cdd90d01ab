"""Pytest configuration and fixtures for Themed tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from themed import Session, Theme, ThemeConfiguration, set_default_theme
from themed.environment.log import LOGGER_NAME
from themed.render_context import reset_session, set_session

BUTTON_TEMPLATE = """\
{#
  Button
  - text: string - The button label
  - variant: string - Bootstrap variant (optional)
  - attributes: dict - Set through addAttribute
#}
<button id="{{ content.id }}" class="btn btn-{{ content.variant }}{% if content.classes %} {{ content.classes }}{% endif %}"
{%- for name, value in content.attributes.items() %} {{ name }}="{{ value|e }}"{% endfor %}>{{ content.text|e }}</button>
"""

ALERT_TEMPLATE = """\
{#
  - content: string - Alert body
  - variant: string - Bootstrap variant
#}
<div class="alert alert-{{ content.variant or 'info' }}">{{ content.content }}</div>
"""

ICON_TEMPLATE = """\
{# - name: string - Icon name #}
<span class="icon">{{ content.svg }}</span>
"""

PANEL_TEMPLATE = """\
{# - title: string - Panel title #}
<section>{{ content.title }} {{ component('icons/icon', {'name': 'star'}) }}</section>
"""

STAR_SVG = """\
<?xml version="1.0" encoding="UTF-8"?>
<!-- star -->
<svg viewBox="0 0 16 16">
  <path d="M8 0l2 6h6l-5 4 2 6-5-4-5 4 2-6-5-4h6z"/>
</svg>
"""

# The autouse session fixture is function scoped; it only resets context state.
settings.register_profile("themed", suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.load_profile("themed")

FILES: dict[str, str] = {
    "components/buttons/button.jinja": BUTTON_TEMPLATE,
    "components/buttons/button.css": ".btn {\n    padding: 1px;\n}\n",
    "components/buttons/button.js": "// buttons\nconsole.log('button');\n",
    "components/feedback/alert.jinja": ALERT_TEMPLATE,
    "components/icons/icon.jinja": ICON_TEMPLATE,
    "components/layout/panel.jinja": PANEL_TEMPLATE,
    "components/plain.jinja": "<p>{{ content.text }}</p>\n",
    "css/a-base.css": "body {\n    margin: 0;\n}\n",
    "css/b-theme.css": ".theme { color: red; }\n",
    "js/site.js": "window.site = {};\n",
    "js/footer/late.js": "console.log('late');\n",
    "icons/star.svg": STAR_SVG,
}


def build_theme(root: Path, files: dict[str, str] | None = None) -> Path:
    """Write a theme tree under ``root`` and return it."""
    for relative, source in (FILES if files is None else files).items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
    return root


@pytest.fixture
def theme_dir(tmp_path: Path) -> Path:
    """A small theme with buttons, alerts, icons and global assets."""
    return build_theme(tmp_path / "theme")


@pytest.fixture
def config(theme_dir: Path, tmp_path: Path) -> ThemeConfiguration:
    """Non-debug configuration for ``theme_dir``."""
    return ThemeConfiguration(template_path=theme_dir, debug_log=tmp_path / "logs" / "themed.log")


@pytest.fixture
def debug_config(config: ThemeConfiguration) -> ThemeConfiguration:
    return config.with_overrides(debug=True, debug_level=3)


@pytest.fixture
def theme(config: ThemeConfiguration) -> Theme:
    return Theme(config)


@pytest.fixture
def debug_theme(debug_config: ThemeConfiguration) -> Theme:
    return Theme(debug_config)


@pytest.fixture
def session(theme: Theme) -> Iterator[Session]:
    """An explicit session bound for the duration of the test."""
    with theme.session() as active:
        yield active


@pytest.fixture
def log_messages(theme: Theme) -> list[str]:
    """Messages logged by ``theme``, captured through a logger callback."""
    messages: list[str] = []
    theme.set_logger_callback(messages.append)
    return messages


@pytest.fixture(autouse=True)
def isolated_session() -> Iterator[None]:
    """Start every test without a bound session, default theme or log handlers."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    token = set_session(None)
    yield
    reset_session(token)
    set_default_theme(None)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


def assert_contains(html: str, *expected_parts: str) -> None:
    """Assert rendered HTML contains all expected parts.

    Args:
        html: The actual rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in html, (
            f"Rendered output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {html!r}"
        )


def assert_once(html: str, part: str) -> None:
    """Assert ``part`` occurs exactly once in ``html``."""
    count = html.count(part)
    assert count == 1, f"Expected {part!r} once, found {count} times in {html!r}"
