"""Theme environment: configuration, errors, paths, logging and the engine adapter."""

from themed.environment.config import ThemeConfiguration, bundled_theme_path
from themed.environment.engine import TEMPLATE_SUFFIX, JinjaEngine, TemplateEngine
from themed.environment.exceptions import (
    ErrorCode,
    InvalidAssetNameError,
    InvalidComponentNameError,
    InvalidNameError,
    MissingComponentError,
    PathEscapesRootError,
    TemplateNotFoundError,
    ThemedError,
    UnreadableFileError,
)
from themed.environment.log import NOTICE, configure_logging
from themed.environment.paths import resolve, resolve_strict, validate_name

# Theme is loaded lazily: it depends on themed.assets, which itself imports
# from this package.
_LAZY = frozenset({"Theme"})

__all__ = [
    "NOTICE",
    "TEMPLATE_SUFFIX",
    "ErrorCode",
    "InvalidAssetNameError",
    "InvalidComponentNameError",
    "InvalidNameError",
    "JinjaEngine",
    "MissingComponentError",
    "PathEscapesRootError",
    "TemplateEngine",
    "TemplateNotFoundError",
    "Theme",
    "ThemeConfiguration",
    "ThemedError",
    "UnreadableFileError",
    "bundled_theme_path",
    "configure_logging",
    "resolve",
    "resolve_strict",
    "validate_name",
]


def __getattr__(name: str) -> object:
    """Module-level getattr for lazy imports."""
    if name in _LAZY:
        from themed.environment.core import Theme

        globals()["Theme"] = Theme
        return Theme
    raise AttributeError(f"module 'themed.environment' has no attribute {name!r}")
