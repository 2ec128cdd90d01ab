"""Best-effort CSS and JavaScript minification.

Regex passes that strip comments and collapse whitespace. The output is
meant to still work, not to be the smallest possible: strings containing
comment markers or significant whitespace are not protected. The loader
skips these functions entirely in debug mode so served assets stay 1:1
with their sources.
"""

from __future__ import annotations

import re

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_JS_COMMENT = re.compile(r"/\*[\s\S]*?\*/|(?<![:\\])//.*$", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")
_CSS_PUNCTUATION = re.compile(r"\s*([{}:;,>])\s*")
_JS_PUNCTUATION = re.compile(r"\s*([{}()\[\];,:=+\-<>!&|?])\s*")
_CSS_TRAILING_SEMICOLON = re.compile(r";}")
_REPEATED_SPACES = re.compile(r" {2,}")


def minify_css(css: str) -> str:
    """Strip comments and redundant whitespace from a stylesheet.

    Example:
        >>> minify_css(".a {\\n  color: red;\\n}\\n/* note */")
        '.a{color:red}'
    """
    css = _BLOCK_COMMENT.sub("", css)
    css = _WHITESPACE.sub(" ", css)
    css = _CSS_PUNCTUATION.sub(r"\1", css)
    css = _CSS_TRAILING_SEMICOLON.sub("}", css)
    return _REPEATED_SPACES.sub(" ", css).strip()


def minify_js(js: str) -> str:
    """Strip comments and redundant whitespace from a script.

    Line comments are only recognised when not preceded by ``:`` so that
    ``https://`` inside string literals survives.

    Example:
        >>> minify_js("let a = 1; // one\\nlet b = a + 1;")
        'let a=1;let b=a+1;'
    """
    js = _JS_COMMENT.sub("", js)
    js = _WHITESPACE.sub(" ", js)
    js = _JS_PUNCTUATION.sub(r"\1", js)
    return _REPEATED_SPACES.sub(" ", js).strip()


def size_report(original: str, minified: str) -> str | None:
    """Describe the size reduction, or None if nothing was saved."""
    before = len(original.encode())
    after = len(minified.encode())
    if not before or after >= before:
        return None
    return f"{before} bytes -> {after} bytes ({round(after / before * 100)}% of original)"
