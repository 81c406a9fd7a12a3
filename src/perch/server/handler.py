"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI for HTTP requests. Builds the
Request, hands it to the router, turns the outcome into a Response and
sends it back through ASGI send().
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch.errors import HTTPError, NotFound
from perch.http.request import Request
from perch.routing.route import RouteNotFound
from perch.routing.router import Router
from perch.server.errors import handle_http_error, handle_internal_error
from perch.server.negotiation import negotiate
from perch.server.sender import send_response

logger = logging.getLogger("perch.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline.

    ``RouteNotFound`` becomes a 404, ``HTTPError`` keeps its status and
    anything else a handler raises becomes a 500.

    Routing uses the raw path, so ``/login%2F42`` is one segment whose
    captured value is ``"login/42"``.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    start = time.perf_counter()

    try:
        result = await invoke(router.dispatch, request.method, request.raw_path, request)
        if isinstance(result, RouteNotFound) and request.method == "HEAD":
            # HEAD is answered by the GET route unless one is registered for HEAD
            fallback = await invoke(router.dispatch, "GET", request.raw_path, request)
            if not isinstance(fallback, RouteNotFound):
                result = fallback
        if isinstance(result, RouteNotFound):
            raise NotFound(str(result))
        response = negotiate(result)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.path,
        response.status,
        (time.perf_counter() - start) * 1000,
    )
    await send_response(response, send, head=request.method == "HEAD")
