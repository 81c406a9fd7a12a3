"""Ordered router with first-match-wins dispatch.

Routes are registered during setup and compiled into per-method tuples
when the app freezes. After ``compile()`` the router holds no mutable
state, so any number of requests may match concurrently without locks.
"""

import logging
from typing import Any

from perch._internal.types import Handler
from perch.errors import ConfigurationError
from perch.routing.pattern import parse_path, split_path
from perch.routing.route import HTTP_METHODS, Route, RouteMatch, RouteNotFound

logger = logging.getLogger("perch.routing")


class Router:
    """Ordered route table.

    Registrations are tried in the order they were added; the first one
    whose method and pattern match wins. Specific literals get no priority
    over captures: register them first if both could match.

    Usage::

        router = Router()
        router.get("/{id}", get_user_by_id)
        router.get("/login/{id}", logged_user)
        router.put("/{id}", update_user)
        router.compile()

        result = router.dispatch("GET", "/login/42", request)
    """

    __slots__ = ("_by_method", "_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._by_method: dict[str, tuple[Route, ...]] = {}
        self._compiled = False

    # -- Registration --

    def add(self, route: Route) -> None:
        """Append a pre-built route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if route.method not in HTTP_METHODS:
            allowed = ", ".join(sorted(HTTP_METHODS))
            msg = (
                f"Unsupported HTTP method {route.method!r} for {route.path!r}. "
                f"Use one of: {allowed}"
            )
            raise ConfigurationError(msg)
        self._routes.append(route)

    def register(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> None:
        """Register *handler* for *method* and the pattern *path*.

        The pattern is parsed here, so ``MalformedPattern`` surfaces at
        wire-up time rather than on the first request.
        """
        route = Route(
            method=method.upper(),
            path=path,
            handler=handler,
            segments=parse_path(path),
            name=name,
        )
        self.add(route)

    def get(self, path: str, handler: Handler, *, name: str | None = None) -> None:
        """Register a GET route."""
        self.register("GET", path, handler, name=name)

    def post(self, path: str, handler: Handler, *, name: str | None = None) -> None:
        """Register a POST route."""
        self.register("POST", path, handler, name=name)

    def put(self, path: str, handler: Handler, *, name: str | None = None) -> None:
        """Register a PUT route."""
        self.register("PUT", path, handler, name=name)

    def patch(self, path: str, handler: Handler, *, name: str | None = None) -> None:
        """Register a PATCH route."""
        self.register("PATCH", path, handler, name=name)

    def delete(self, path: str, handler: Handler, *, name: str | None = None) -> None:
        """Register a DELETE route."""
        self.register("DELETE", path, handler, name=name)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        if self._compiled:
            return
        grouped: dict[str, list[Route]] = {}
        for route in self._routes:
            grouped.setdefault(route.method, []).append(route)
        self._by_method = {method: tuple(routes) for method, routes in grouped.items()}
        self._compiled = True
        logger.debug(
            "Compiled %d routes across %d methods", len(self._routes), len(self._by_method)
        )

    # -- Matching --

    def match(self, method: str, path: str) -> RouteMatch | RouteNotFound:
        """Find the first route registered for *method* that matches *path*.

        Returns a ``RouteMatch`` on success, ``RouteNotFound`` otherwise.
        Raises ``RuntimeError`` if called before ``compile()``.
        """
        if not self._compiled:
            msg = "Router must be compiled before matching requests."
            raise RuntimeError(msg)

        parts = split_path(path)
        for route in self._by_method.get(method.upper(), ()):
            params = route.match(parts)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return RouteNotFound(method=method, path=path)

    def dispatch(self, method: str, path: str, context: Any) -> Any:
        """Match the request and invoke the bound handler.

        Returns the handler's return value untouched (a coroutine for
        ``async def`` handlers), or ``RouteNotFound`` without calling
        anything. Exceptions raised by the handler propagate.
        """
        result = self.match(method, path)
        if isinstance(result, RouteNotFound):
            return result
        return result.invoke(context)
