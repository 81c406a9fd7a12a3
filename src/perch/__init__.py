"""Perch — method and path request dispatch.

An ordered router maps (method, path) to a handler, extracts the
positional identifiers embedded in the path and hands them to the
handler together with the request.

Basic usage::

    from perch import App

    app = App()

    @app.route("/{id}")
    def get_user_by_id(request, params):
        return {"id": params["id"]}

    app.run()

Standalone router::

    from perch import Router, RouteNotFound

    router = Router()
    router.get("/login/{id}", logged_user)
    router.compile()
    result = router.dispatch("GET", "/login/42", request)
    if isinstance(result, RouteNotFound):
        ...
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "HTTPError",
    "MalformedPattern",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
    "Route",
    "RouteMatch",
    "RouteNotFound",
    "Router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in ("Route", "RouteMatch", "RouteNotFound", "Router"):
        from perch import routing as _routing

        return getattr(_routing, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "HTTPError",
        "MalformedPattern",
        "NotFound",
        "PerchError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
