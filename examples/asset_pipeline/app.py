"""Hand assets to a framework instead of the built-in queues.

A script callback receives every asset a component pushes, already
classified as "js", "css" or "" (inline markup), so a web framework can
feed them into its own bundling or CSP pipeline. A logger callback
collects Themed's log messages the same way.

Run:
    python app.py
"""

from collections import defaultdict

from themed import Theme, ThemeConfiguration

manifest: dict[str, list[tuple[str, str]]] = defaultdict(list)
log: list[str] = []


def collect(script: str, kind: str, location: str) -> None:
    manifest[location].append((kind, script))


theme = Theme(ThemeConfiguration(), script_callback=collect, logger_callback=log.append)

with theme.session() as session:
    session.set_meta("nonce", "r4nd0m")
    html = (
        theme.make("buttons/button")
        .text("Download")
        .addJavaScript("/static/download.js")
        .addCss("/static/download.css")
        .render()
    )
    theme.footer_scripts("https://cdn.example.com/analytics.js", attributes={"async": "async"})
    queued = session.drain("header") + session.drain("footer")
    nonce = session.get_meta("nonce")


def main() -> None:
    print(html)
    for location, entries in manifest.items():
        print(f"[{location}]")
        for kind, script in entries:
            print(f"  {kind or 'inline'}: {script[:60]!r}")
    print(f"{len(log)} log messages")


if __name__ == "__main__":
    main()
