"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from JtlUserError.

Programming errors and bugs should NOT inherit from JtlUserError:
they propagate with full tracebacks.
"""

from __future__ import annotations


class JtlUserError(Exception):
    """
    Base class for all user-facing errors in JTL.

    These errors indicate problems that the user can fix:
    configuration issues, missing templates, bad data files.
    """
    pass


class TemplateNotFoundError(JtlUserError, FileNotFoundError):
    """Template could not be located by the asset builder."""

    def __init__(self, location: str, searched: list[str] | None = None):
        self.location = location
        self.searched = list(searched or [])
        message = f"Template not found: {location}"
        if self.searched:
            message += f" (searched: {', '.join(self.searched)})"
        super().__init__(message)


class ConfigLoadError(JtlUserError, ValueError):
    """Configuration file is unreadable or contains invalid values."""
    pass


__all__ = ["JtlUserError", "TemplateNotFoundError", "ConfigLoadError"]
