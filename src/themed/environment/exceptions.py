"""Exceptions for the Themed component renderer.

Exception Hierarchy:
ThemedError (base)
├── InvalidNameError              # Name fails the allowed-character pattern (also ValueError)
│   ├── InvalidComponentNameError # Component name passed to make()/load_scripts()
│   └── InvalidAssetNameError     # Icon or other asset name
├── PathEscapesRootError          # Resolved path lies outside its root
├── MissingComponentError         # render() called without a component name
├── TemplateNotFoundError         # Component template does not exist
└── UnreadableFileError           # Font, icon, template or asset could not be read

Error Policy:
Security errors (``InvalidNameError``, ``PathEscapesRootError`` on direct
lookups) are always raised, whatever the debug setting. Authoring errors
(``MissingComponentError``, ``TemplateNotFoundError``) are raised in debug
mode and otherwise logged and replaced by an HTML comment placeholder.
``UnreadableFileError`` is raised by single-file helpers and handled per
item by the bulk loaders.

Example:
    ```
    T-CMP-002: Template 'buttons/buton.jinja' not found
      Path: /srv/theme/components/buttons/buton.jinja
      Hint: Check the component name or add the template to the theme
    ```

"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from themed.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for Themed errors.

    Format: T-{CATEGORY}-{NUMBER}
    Categories: SEC (security boundary), CMP (component authoring), IO (file access)
    """

    # Security boundary (T-SEC-xxx)
    INVALID_COMPONENT_NAME = "T-SEC-001"
    INVALID_ASSET_NAME = "T-SEC-002"
    PATH_ESCAPES_ROOT = "T-SEC-003"

    # Component authoring (T-CMP-xxx)
    MISSING_COMPONENT = "T-CMP-001"
    TEMPLATE_NOT_FOUND = "T-CMP-002"

    # File access (T-IO-xxx)
    UNREADABLE_FILE = "T-IO-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'security', 'component', 'io')."""
        prefix = self.value.split("-")[1]
        return {
            "SEC": "security",
            "CMP": "component",
            "IO": "io",
        }.get(prefix, "unknown")


class ThemedError(Exception):
    """Base exception for all Themed errors.

    Enables broad handling at the page level:

        >>> try:
        ...     html = theme.make("cards/card").title("Hi").render()
        ... except ThemedError as e:
        ...     log.error(e.format_compact())

    Attributes:
        code: ErrorCode identifying the failure.
        path: Filesystem path or name involved, when known.
        suggestion: Actionable hint for fixing the problem.
    """

    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.path = str(path) if path is not None else None
        self.suggestion = suggestion
        super().__init__(message)

    @property
    def is_security_error(self) -> bool:
        return self.code is not None and self.code.category == "security"

    def format_compact(self) -> str:
        """Format error as a short diagnostic without traceback noise.

        Returns:
            Multi-line string with error code, message, path and hint.
        """
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.path:
            parts.append(f"  {terminal.dim_text('Path:')} {terminal.location(self.path)}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Hint:')} {self.suggestion}")
        return "\n".join(parts)


class InvalidNameError(ThemedError, ValueError):
    """A component or asset name contains characters outside ``[A-Za-z0-9_/-]``."""

    def __init__(self, name: str, kind: str = "component"):
        self.name = name
        super().__init__(
            f"Invalid {kind} name {name!r}. Only alphanumeric characters, "
            "hyphens, underscores and forward slashes are allowed.",
            path=name,
            suggestion="Use a slash-separated name such as 'buttons/button'",
        )


class InvalidComponentNameError(InvalidNameError):
    code: ErrorCode | None = ErrorCode.INVALID_COMPONENT_NAME

    def __init__(self, name: str):
        super().__init__(name, "component")


class InvalidAssetNameError(InvalidNameError):
    code: ErrorCode | None = ErrorCode.INVALID_ASSET_NAME

    def __init__(self, name: str):
        super().__init__(name, "asset")


class PathEscapesRootError(ThemedError):
    """A resolved path does not lie inside the directory it was scoped to.

    Covers ``..`` segments, absolute overrides and symlinks whose target is
    outside the root.
    """

    code: ErrorCode | None = ErrorCode.PATH_ESCAPES_ROOT

    def __init__(self, relative: str | Path, root: str | Path):
        self.root = str(root)
        super().__init__(
            f"Path {str(relative)!r} resolves outside of {self.root}",
            path=relative,
        )


class MissingComponentError(ThemedError):
    """``render()`` was called on a builder without a component name."""

    code: ErrorCode | None = ErrorCode.MISSING_COMPONENT

    def __init__(self, message: str = "Component group and name must be set before rendering"):
        super().__init__(message, suggestion="Create components with make('group/name')")


class TemplateNotFoundError(ThemedError):
    """The template for a component does not exist in the theme."""

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(self, template: str, path: str | Path | None = None):
        self.template = template
        super().__init__(
            f"Template {template!r} not found",
            path=path,
            suggestion="Check the component name or add the template to the theme",
        )


class UnreadableFileError(ThemedError):
    """A font, icon, template or asset file is missing or could not be read."""

    code: ErrorCode | None = ErrorCode.UNREADABLE_FILE

    def __init__(self, path: str | Path, reason: str | None = None):
        message = f"Unable to read {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message, path=path)
