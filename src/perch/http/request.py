"""Immutable HTTP request.

Frozen metadata with async body access. This is the request context
the router hands to every handler, together with the path parameters.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from perch._internal.asgi import Receive, Scope
from perch.errors import BadRequest
from perch.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. The body is
    read lazily via ``.body()``, ``.text()`` or ``.json()`` and cached.
    """

    method: str
    path: str
    # Percent-encoded path as sent by the client; routing matches on this
    raw_path: str
    headers: Headers
    query_string: bytes
    http_version: str
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: body cache (the dict is mutable, the field reference is not)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return
        the cached bytes.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON.

        Raises ``BadRequest`` when the body is empty or not valid JSON, so
        handlers can call this without their own error handling.
        """
        raw = await self.body()
        if not raw:
            raise BadRequest("Request body must be a JSON document")
        try:
            return json_module.loads(raw)
        except (UnicodeDecodeError, json_module.JSONDecodeError) as exc:
            raise BadRequest(f"Invalid JSON body: {exc}") from exc

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        if raw_path:
            raw = raw_path.decode("latin-1").partition("?")[0]
        else:
            # Servers may omit raw_path; re-encode so decoding captures is lossless
            raw = quote(scope["path"])
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            raw_path=raw,
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
