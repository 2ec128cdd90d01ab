"""Tests for the Theme object and the Jinja engine adapter."""

from __future__ import annotations

from pathlib import Path

import pytest

from themed import JinjaEngine, TemplateEngine, Theme, ThemeConfiguration
from themed.environment.globals import regex_replace

from tests.conftest import assert_contains


class TestTheme:
    def test_repr(self, theme: Theme, theme_dir: Path) -> None:
        assert repr(theme) == f"<Theme {str(theme_dir)!r} debug=False>"

    def test_template_file(self, theme: Theme, theme_dir: Path) -> None:
        assert theme.template_file("buttons/button") == theme_dir / "components" / "buttons" / "button.jinja"

    def test_configure_rebuilds_caches(self, theme: Theme) -> None:
        theme.describe("buttons/button")
        introspector = theme.introspector
        config = theme.configure(debug=True)
        assert config.debug is True
        assert theme.config is config
        assert theme.introspector is not introspector

    def test_configure_inside_session(self, theme: Theme) -> None:
        with theme.session() as session:
            theme.configure(debug=True)
            theme.make("buttons/button")
            assert session.loader.config is theme.config
            assert_contains(session.drain("header"), "<!-- button.css -->", ".btn {\n    padding: 1px;\n}")

    def test_configure_rejects_unknown_keys(self, theme: Theme) -> None:
        with pytest.raises(TypeError):
            theme.configure(verbose=True)

    def test_get_svg_content(self, theme: Theme) -> None:
        assert theme.get_svg_content("star").startswith("<svg")
        assert theme.get_svg_content("missing") is None

    def test_load_scripts_and_drain(self, theme: Theme) -> None:
        theme.load_scripts("buttons/button")
        assert_contains(theme.drain("header"), ".btn{padding:1px}", ".theme{color:red}")
        assert_contains(theme.footer_scripts(), "console.log('button');", "console.log('late');")

    def test_minification_off_in_debug(self, debug_theme: Theme) -> None:
        debug_theme.load_scripts("buttons/button")
        assert_contains(debug_theme.drain("header"), "<!-- button.css -->", ".btn {\n    padding: 1px;\n}")


class TestJinjaEngine:
    def test_is_template_engine(self, theme_dir: Path) -> None:
        assert isinstance(JinjaEngine(theme_dir), TemplateEngine)

    def test_searches_components_directory(self, theme_dir: Path) -> None:
        engine = JinjaEngine(theme_dir)
        assert engine.exists("buttons/button.jinja")
        assert engine.exists("components/buttons/button.jinja")
        assert not engine.exists("buttons/missing.jinja")

    def test_render(self, theme_dir: Path) -> None:
        engine = JinjaEngine(theme_dir, debug=True)
        assert engine.render("plain.jinja", {"content": {"text": "hi"}}) == "<p>hi</p>"

    def test_autoescape_off(self, theme_dir: Path) -> None:
        engine = JinjaEngine(theme_dir)
        assert engine.render("plain.jinja", {"content": {"text": "<b>x</b>"}}) == "<p><b>x</b></p>"

    def test_regex_replace_filter(self, theme: Theme, theme_dir: Path) -> None:
        (theme_dir / "components" / "slug.jinja").write_text(
            "{{ content.label | regex_replace('\\\\s+', '-') | lower }}"
        )
        assert theme.make("slug").label("Hello  Big World").render() == "hello-big-world"

    def test_regex_replace(self) -> None:
        assert regex_replace("a1b22", r"\d+", "#") == "a#b#"


class TestCustomEngineConfiguration:
    def test_engine_kept_across_configure(self, config: ThemeConfiguration) -> None:
        class Static:
            def exists(self, identifier: str) -> bool:
                return True

            def render(self, identifier: str, context: dict) -> str:
                return identifier

        engine = Static()
        theme = Theme(config, engine=engine)
        theme.configure(debug_level=1)
        assert theme.engine is engine
        assert theme.make("plain").render() == "plain.jinja"
