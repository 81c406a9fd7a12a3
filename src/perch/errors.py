"""Perch exception hierarchy.

Shared across Router, App and the hosting layer so every module raises
and catches the same types.

"No route matched" is deliberately absent here: the router reports it as
a ``RouteNotFound`` result (see ``perch.routing.route``), and the hosting
layer turns that into ``NotFound``.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when routes or app configuration are invalid.

    Always raised during setup, never while serving requests.
    """


class MalformedPattern(ConfigurationError):
    """A route pattern that cannot be registered.

    Raised by ``Router.register()`` the moment the pattern is parsed, so a
    bad route table aborts wire-up instead of failing on first request.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Malformed route pattern {pattern!r}: {reason}")


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers or by the hosting layer. ``handle_request`` catches
    these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched, or the addressed resource does not exist."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request body or parameters could not be accepted."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)
