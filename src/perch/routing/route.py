"""Route, RouteMatch and RouteNotFound frozen dataclasses."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from perch._internal.types import Handler

# Methods a route may be registered under
HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}
)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal: ``/login``  (is_param=False)
    Capture: ``/{id}`` or ``/:id``  (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """One registration: an HTTP method, a parsed pattern and its handler.

    Created during setup and never mutated afterwards.
    """

    method: str
    path: str
    handler: Handler
    segments: tuple[PathSegment, ...]
    name: str | None = None

    def match(self, parts: Sequence[str]) -> dict[str, str] | None:
        """Match already-split path *parts* against this route's pattern.

        *parts* come from the raw, still percent-encoded path, so an
        encoded ``%2F`` stays inside its segment. Captured values are
        decoded after matching.

        Returns the captured parameters in pattern order, or ``None``.
        Segment counts must be equal and captures never bind an empty
        segment.
        """
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts, strict=True):
            if segment.is_param:
                if not part:
                    return None
                params[segment.param_name or ""] = unquote(part)
            elif segment.value != part:
                return None
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]

    def invoke(self, context: Any) -> Any:
        """Call the bound handler once with ``(context, params)``."""
        return self.route.handler(context, self.params)


@dataclass(frozen=True, slots=True)
class RouteNotFound:
    """No registration matched the request's method and path.

    An ordinary result, not an exception: the hosting layer decides what
    response it becomes (usually 404).
    """

    method: str
    path: str

    def __str__(self) -> str:
        return f"No route matches {self.method} {self.path!r}"
