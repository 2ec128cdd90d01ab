"""Theme configuration.

Configuration is resolved once per Theme from the process environment and
is immutable afterwards; ``with_overrides()`` produces a modified copy.

Environment variables:
    THEMED_TEMPLATE_PATH: Theme root (must contain ``components/``)
    THEMED_DEBUG: Enables debug mode (disables minification, enables logging)
    THEMED_DEBUG_LEVEL: Log verbosity, 0 (errors only) to 3 (everything)
    THEMED_DEBUG_LOG: Log file path

Example:
    >>> config = ThemeConfiguration.from_env({"THEMED_DEBUG": "1"})
    >>> config.debug
    True
    >>> config.with_overrides(debug_level=2).debug_level
    2
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import logging
import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_TEMPLATE_PATH = "THEMED_TEMPLATE_PATH"
ENV_DEBUG = "THEMED_DEBUG"
ENV_DEBUG_LEVEL = "THEMED_DEBUG_LEVEL"
ENV_DEBUG_LOG = "THEMED_DEBUG_LOG"

MAX_DEBUG_LEVEL = 3

_TRUTHY = frozenset({"true", "yes", "on"})


def bundled_theme_path() -> Path:
    """Path of the default ``bs5`` theme shipped with the package."""
    return Path(str(importlib.resources.files("themed").joinpath("templates", "bs5")))


def default_log_path() -> Path:
    return Path(tempfile.gettempdir()) / "themed.log"


def _parse_flag(value: str | None) -> bool:
    if not value:
        return False
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    try:
        return int(value) > 0
    except ValueError:
        return False


def _parse_level(value: str | None) -> int:
    try:
        level = int(value or 0)
    except ValueError:
        return 0
    return max(0, min(MAX_DEBUG_LEVEL, level))


def _is_theme_root(path: Path) -> bool:
    return (path / "components").is_dir()


@dataclass(frozen=True, slots=True)
class ThemeConfiguration:
    """Resolved, read-only theme settings.

    Attributes:
        template_path: Theme root containing components/, css/, js/, icons/
        debug: Debug mode; disables minification and enables logging
        debug_level: Verbosity 0-3 (ERROR, WARN, NOTICE, INFO)
        debug_log: Target file for the rotating debug log
    """

    template_path: Path = field(default_factory=bundled_theme_path)
    debug: bool = False
    debug_level: int = 0
    debug_log: Path = field(default_factory=default_log_path)

    def __post_init__(self) -> None:
        object.__setattr__(self, "template_path", Path(self.template_path))
        object.__setattr__(self, "debug_log", Path(self.debug_log))
        object.__setattr__(
            self, "debug_level", max(0, min(MAX_DEBUG_LEVEL, int(self.debug_level)))
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ThemeConfiguration:
        """Build a configuration from environment variables.

        A ``THEMED_TEMPLATE_PATH`` that is unset, or that has no
        ``components/`` directory, falls back to the bundled theme.
        """
        env = os.environ if environ is None else environ

        template_path = bundled_theme_path()
        override = env.get(ENV_TEMPLATE_PATH, "")
        if override:
            candidate = Path(override)
            if _is_theme_root(candidate):
                template_path = candidate
            else:
                logger.error(
                    "Unable to find components/ in the theme folder: %s, using %s",
                    candidate,
                    template_path,
                )

        return cls(
            template_path=template_path,
            debug=_parse_flag(env.get(ENV_DEBUG)),
            debug_level=_parse_level(env.get(ENV_DEBUG_LEVEL)),
            debug_log=Path(env.get(ENV_DEBUG_LOG) or default_log_path()),
        )

    def with_overrides(self, **changes: object) -> ThemeConfiguration:
        """Return a copy with ``changes`` applied.

        Raises:
            TypeError: If a key is not a configuration field
        """
        return dataclasses.replace(self, **changes)

    @property
    def minify(self) -> bool:
        return not self.debug
