"""Theme-root path resolution.

Every filesystem lookup (templates, CSS/JS assets, fonts, icons) goes
through this module. It is the only place where user-controlled names
meet the filesystem, so all checks operate on canonical paths:

    >>> resolve("/srv/theme", "css/site.css")
    PosixPath('/srv/theme/css/site.css')
    >>> resolve("/srv/theme", "../../etc/passwd") is None
    True

Containment is tested component-wise with ``Path.is_relative_to`` on the
fully resolved paths (symlinks followed), never with a string prefix, so
``/srv/theme-evil`` is not inside ``/srv/theme``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from themed.environment.exceptions import (
    InvalidAssetNameError,
    InvalidComponentNameError,
    PathEscapesRootError,
    UnreadableFileError,
)

NAME_PATTERN = re.compile(r"[A-Za-z0-9_/-]+")


def canonical(root: str | Path) -> Path | None:
    """Return the canonical form of ``root``, or None if it does not exist."""
    try:
        return Path(root).resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def _locate(root: str | Path, relative: str | Path) -> tuple[Path | None, Path | None]:
    """Return ``(canonical_root, canonical_target)``; either may be None."""
    base = canonical(root)
    if base is None:
        return None, None
    try:
        target = (base / relative).resolve(strict=True)
    except (OSError, RuntimeError):
        return base, None
    return base, target


def resolve(root: str | Path, relative: str | Path) -> Path | None:
    """Resolve ``relative`` against ``root`` without ever leaving it.

    Returns:
        The canonical path if it exists and lies inside the canonical root,
        otherwise None. Traversal attempts are indistinguishable from
        missing files.
    """
    base, target = _locate(root, relative)
    if base is None or target is None or not target.is_relative_to(base):
        return None
    return target


def resolve_strict(root: str | Path, relative: str | Path) -> Path:
    """Resolve ``relative`` against ``root``, raising on failure.

    Raises:
        PathEscapesRootError: The target lies, or would lie, outside the root.
        UnreadableFileError: The root or the target does not exist.
    """
    base, target = _locate(root, relative)
    if base is None:
        raise UnreadableFileError(root, "directory does not exist")
    if target is None:
        # A missing target can still be a traversal attempt; report the escape first.
        lexical = Path(os.path.normpath(base / relative))
        if not lexical.is_relative_to(base):
            raise PathEscapesRootError(relative, base)
        raise UnreadableFileError(Path(base, relative), "file does not exist")
    if not target.is_relative_to(base):
        raise PathEscapesRootError(relative, base)
    return target


def is_valid_name(name: str) -> bool:
    return bool(NAME_PATTERN.fullmatch(name))


def validate_name(name: str, *, kind: str = "component") -> str:
    """Check a component or asset name against ``[A-Za-z0-9_/-]+``.

    Args:
        name: Name to check
        kind: "component" or "asset", selects the exception type

    Returns:
        The name, unchanged

    Raises:
        InvalidComponentNameError: kind is "component" and the name is invalid
        InvalidAssetNameError: kind is "asset" and the name is invalid
    """
    if not is_valid_name(name):
        if kind == "asset":
            raise InvalidAssetNameError(name)
        raise InvalidComponentNameError(name)
    return name
