"""Invoke helpers — call sync or async callables uniformly.

Route handlers, error handlers and lifecycle hooks can all be ``def`` or
``async def``. The sync/async check lives here and nowhere else.

Usage::

    from perch._internal.invoke import invoke

    result = await invoke(router.dispatch, request.method, request.path, request)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    ``Router.dispatch`` returns whatever the handler returned, so an
    ``async def`` handler comes back as a coroutine and is awaited here::

        async def update_user(request, params):
            body = await request.json()
            ...
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
