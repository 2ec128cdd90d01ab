"""ANSI color helpers for Themed diagnostics.

Used by ``ThemedError.format_compact()`` so that errors printed to a
terminal highlight the error code, the offending path and the hint.
Colors honour ``NO_COLOR`` / ``FORCE_COLOR`` and are only emitted on a TTY.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "dim", "cyan", "green", "bright_red"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    """Check if terminal supports colors and user allows them.

    Respects:
        - NO_COLOR environment variable (https://no-color.org/)
        - FORCE_COLOR environment variable (overrides NO_COLOR)
        - sys.stderr.isatty() for TTY detection
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    return _USE_COLORS


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in ANSI codes, or return it unchanged without color support."""
    if not _USE_COLORS or not colors:
        return text
    prefix = "".join(_COLORS.get(color, "") for color in colors)
    return f"{prefix}{text}{_COLORS['reset']}"


def strip_colors(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def hint(text: str) -> str:
    return colorize(text, "green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """Format an error header with an optional code.

    Example:
        >>> format_error_header("T-SEC-001", "Invalid component name")
        'T-SEC-001: Invalid component name'  # without color support
    """
    if code:
        return f"{error_code(code)}: {message}"
    return message
