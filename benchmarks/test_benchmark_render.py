"""Component rendering benchmarks: Themed vs bare Jinja2.

Themed renders go through the full builder: name validation, the
per-session asset memo, the cached parameter map, the asset queues and
the Jinja2 render. The Jinja2 baseline renders the same bundled template
with a prepared context, so the difference is Themed's own overhead.

Groups:
- "render:button": one button per iteration
- "render:page": twenty components plus a header/footer drain
- "cold:session": first render in a fresh session (loads component CSS/JS)

Run with: pytest benchmarks/test_benchmark_render.py --benchmark-only
Compare: pytest benchmarks/test_benchmark_render.py --benchmark-compare
"""

from __future__ import annotations

import pytest
from jinja2 import Environment as Jinja2Environment
from pytest_benchmark.fixture import BenchmarkFixture

from themed import Theme


@pytest.mark.benchmark(group="render:button")
def test_render_button_themed(
    benchmark: BenchmarkFixture, theme: Theme, button_content: dict[str, object]
) -> None:
    def render() -> str:
        return theme.make("buttons/button").set_many(button_content).render()

    with theme.session():
        html = benchmark(render)
    assert "Save changes" in html


@pytest.mark.benchmark(group="render:button")
def test_render_button_jinja2(
    benchmark: BenchmarkFixture, jinja2_env: Jinja2Environment, button_content: dict[str, object]
) -> None:
    template = jinja2_env.get_template("buttons/button.jinja")
    html = benchmark(template.render, content=button_content)
    assert "Save changes" in html


@pytest.mark.benchmark(group="render:page")
def test_render_page_themed(benchmark: BenchmarkFixture, theme: Theme) -> None:
    def render() -> str:
        with theme.session() as session:
            body = [
                theme.make("buttons/button").text(f"Button {i}").variant("secondary").render()
                for i in range(10)
            ]
            body += [
                theme.make("feedback/alert").message(f"Alert {i}").variant("info").render()
                for i in range(10)
            ]
            return session.drain("header") + "".join(body) + session.drain("footer")

    html = benchmark(render)
    assert html.count("btn-secondary") == 10


@pytest.mark.benchmark(group="render:page")
def test_render_page_jinja2(benchmark: BenchmarkFixture, jinja2_env: Jinja2Environment) -> None:
    button = jinja2_env.get_template("buttons/button.jinja")
    alert = jinja2_env.get_template("feedback/alert.jinja")

    def render() -> str:
        body = [
            button.render(content={"id": f"b{i}", "text": f"Button {i}", "variant": "secondary", "attributes": {}})
            for i in range(10)
        ]
        body += [
            alert.render(content={"id": f"a{i}", "message": f"Alert {i}", "variant": "info", "attributes": {}})
            for i in range(10)
        ]
        return "".join(body)

    html = benchmark(render)
    assert html.count("btn-secondary") == 10


@pytest.mark.benchmark(group="cold:session")
def test_first_render_in_session(benchmark: BenchmarkFixture, theme: Theme) -> None:
    def render() -> str:
        with theme.session():
            return theme.make("form/new-password").label("Password").render()

    html = benchmark(render)
    assert "initPasswordComponent" in html
