"""Load theme and component CSS/JS files into the asset queues.

Two modes:

Theme-global (``load_scripts()``):
    ``css/*.css``      -> header, as ``<style>``
    ``js/*.js``        -> header, as ``<script>``
    ``js/footer/*.js`` -> footer, as ``<script>``

Component (``load_scripts("forms/login")``):
    ``components/forms/login.css`` -> header
    ``components/forms/login.js``  -> footer

Each file is resolved against the theme root (anything that escapes it is
skipped), stylesheets get their fonts embedded, and both kinds are
minified unless debug mode is on. Missing files are not an error; files
that exist but cannot be read are logged and skipped.

Loading is memoized per page: asking for the same component twice in
one page is a no-op the second time. ``reset()`` starts the next page.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from themed.assets.fonts import embed_fonts
from themed.assets.minify import minify_css, minify_js, size_report
from themed.environment.log import notice
from themed.environment.paths import resolve, validate_name

if TYPE_CHECKING:
    from themed.assets.aggregator import AssetAggregator, Location
    from themed.environment.config import ThemeConfiguration

logger = logging.getLogger(__name__)

# (directory, glob pattern, location) in load order
GLOBAL_ASSET_DIRS: tuple[tuple[str, str, Location], ...] = (
    ("css", "*.css", "header"),
    ("js", "*.js", "header"),
    ("js/footer", "*.js", "footer"),
)


class AssetLoader:
    """Reads theme asset files and pushes them into an ``AssetAggregator``.

    Attributes:
        config: Theme configuration (root path, debug flag)
        aggregator: Queues receiving the wrapped snippets
        loaded: Component names already loaded in this session ("" is the
            theme-global set)
    """

    __slots__ = ("aggregator", "config", "loaded")

    def __init__(self, config: ThemeConfiguration, aggregator: AssetAggregator):
        self.config = config
        self.aggregator = aggregator
        self.loaded: set[str] = set()

    @property
    def root(self) -> Path:
        return self.config.template_path

    def load_scripts(self, component: str = "") -> None:
        """Queue the CSS/JS belonging to ``component`` (or the theme when empty).

        Raises:
            InvalidComponentNameError: If ``component`` contains characters
                outside ``[A-Za-z0-9_/-]``
        """
        if component:
            validate_name(component)
        if component in self.loaded:
            return
        self.loaded.add(component)

        if component:
            self._load_component(component)
        else:
            self._load_global()

    def reset(self) -> None:
        """Forget loaded components; the next page reloads their assets."""
        self.loaded.clear()

    def _load_global(self) -> None:
        for directory, pattern, location in GLOBAL_ASSET_DIRS:
            resolved_dir = resolve(self.root, directory)
            if resolved_dir is None or not resolved_dir.is_dir():
                continue
            for file in sorted(resolved_dir.glob(pattern)):
                # Globbed entries may be symlinks; re-check each one against the root.
                path = resolve(self.root, file)
                if path is None or not path.is_file():
                    continue
                self._push_file(path, location)

    def _load_component(self, component: str) -> None:
        for suffix, location in ((".css", "header"), (".js", "footer")):
            path = resolve(self.root, f"components/{component}{suffix}")
            if path is None or not path.is_file():
                continue
            self._push_file(path, location)

    def _push_file(self, path: Path, location: Location) -> None:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read file: %s (%s)", path, e)
            return

        if path.suffix == ".css":
            body = self._process_css(source, path.parent)
            snippet = f"<style>\n{body}\n</style>"
        else:
            body = self._process_js(source)
            snippet = f"<script>\n{body}\n</script>"

        if self.config.debug:
            snippet = f"<!-- {path.name} -->\n{snippet}"
        self.aggregator.push(location, snippet)

    def _process_css(self, css: str, base_dir: Path) -> str:
        css = embed_fonts(css, base_dir)
        if not self.config.minify:
            return css
        minified = minify_css(css)
        report = size_report(css, minified)
        if report:
            notice(logger, "CSS minified: %s", report)
        return minified

    def _process_js(self, js: str) -> str:
        if not self.config.minify:
            return js
        minified = minify_js(js)
        report = size_report(js, minified)
        if report:
            notice(logger, "JS minified: %s", report)
        return minified
