"""Inline local font files into stylesheets as base64 data URIs.

Theme stylesheets reference their fonts with relative ``url(...)``
values. Since the CSS is emitted inline into the page, those relative
references would break, so each local file is embedded instead:

    url(fonts/inter.woff2?v=3)  ->  url('data:font/woff2;base64,d09GMgABAAAA...')

Remote references (``http://``, ``https://``, ``//``) and existing
``data:`` URIs are left alone. A reference that cannot be resolved or
read is logged and left as written; one bad font never aborts the sheet.
"""

from __future__ import annotations

import base64
import logging
import re
from pathlib import Path

from themed.environment.exceptions import PathEscapesRootError, UnreadableFileError
from themed.environment.log import notice
from themed.environment.paths import resolve_strict

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    "woff2": "font/woff2",
    "woff": "font/woff",
    "ttf": "font/ttf",
    "eot": "application/vnd.ms-fontobject",
    "svg": "image/svg+xml",
}
DEFAULT_MIME_TYPE = "application/octet-stream"

_URL_PATTERN = re.compile(r"""url\(\s*["']?([^"')]+?)["']?\s*\)""", re.IGNORECASE)
_REMOTE_PATTERN = re.compile(r"^(https?:)?//", re.IGNORECASE)


def mime_type_for(path: str | Path) -> str:
    """Map a file extension to its font MIME type."""
    ext = Path(path).suffix.lstrip(".").lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def data_uri(path: Path) -> str:
    """Read ``path`` and encode it as a ``data:`` URI.

    Raises:
        UnreadableFileError: If the file cannot be read
    """
    try:
        payload = path.read_bytes()
    except OSError as e:
        raise UnreadableFileError(path, e.strerror or str(e)) from e
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type_for(path)};base64,{encoded}"


def _strip_query(reference: str) -> str:
    return re.split(r"[?#]", reference, maxsplit=1)[0]


def embed_fonts(css: str, base_dir: str | Path) -> str:
    """Replace local ``url(...)`` references in ``css`` with data URIs.

    Args:
        css: Stylesheet source
        base_dir: Directory the stylesheet lives in; references are resolved
            against it and may not escape it

    Returns:
        The stylesheet with every resolvable local reference embedded
    """

    def replace(match: re.Match[str]) -> str:
        reference = match.group(1).strip()
        if not reference or reference.startswith("data:"):
            return match.group(0)

        path = _strip_query(reference)
        if not path:
            return match.group(0)
        if _REMOTE_PATTERN.match(path):
            notice(logger, "Skipping remote font: %s", path)
            return match.group(0)
        if path.startswith("./"):
            path = path[2:]

        try:
            uri = data_uri(resolve_strict(base_dir, path))
        except (PathEscapesRootError, UnreadableFileError) as e:
            logger.error("Error processing font URL '%s': %s", reference, e.message)
            return match.group(0)

        notice(logger, "Embedded font file: %s", path)
        return f"url('{uri}')"

    return _URL_PATTERN.sub(replace, css)
