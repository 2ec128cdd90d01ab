"""Asset handling: minification, font inlining, SVG icons and the page queues."""

from themed.assets.aggregator import LOCATIONS, AssetAggregator, detect_kind
from themed.assets.fonts import MIME_TYPES, embed_fonts, mime_type_for
from themed.assets.loader import AssetLoader
from themed.assets.minify import minify_css, minify_js
from themed.assets.svg import SvgCache, clean_svg

__all__ = [
    "LOCATIONS",
    "MIME_TYPES",
    "AssetAggregator",
    "AssetLoader",
    "SvgCache",
    "clean_svg",
    "detect_kind",
    "embed_fonts",
    "mime_type_for",
    "minify_css",
    "minify_js",
]
