"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from RouteGenUserError.

Programming errors and bugs should NOT inherit from RouteGenUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .diagnostics import Diagnostic
    from .params import Param


class RouteGenUserError(Exception):
    """
    Base class for all user-facing errors in routegen.

    These errors indicate problems that the user can fix:
    malformed route templates, broken route files, etc.
    """
    pass


class MalformedParamsError(RouteGenUserError):
    """A route template contains malformed parameter brackets."""

    def __init__(self, template: str, diagnostics: List[Diagnostic], params: List[Param]):
        super().__init__(f"malformed parameters in route template {template!r}")
        self.template = template
        self.diagnostics = diagnostics
        # Parameters scanned before the malformed token
        self.params = params


class RoutesConfigError(RouteGenUserError):
    """Route file cannot be read or has an unexpected shape."""
    pass


__all__ = ["RouteGenUserError", "MalformedParamsError", "RoutesConfigError"]
