"""User handlers.

Every handler follows the router's contract: ``handler(request, params)``.
Failures are raised as ``HTTPError`` subclasses and turned into responses
by the hosting layer.
"""

import logging
from collections.abc import Mapping
from typing import Any

from perch.errors import BadRequest, NotFound
from perch.http.request import Request
from perch.users.store import User, UserStore

logger = logging.getLogger("perch.users")

# Fields a client may change through PUT
UPDATABLE_FIELDS: frozenset[str] = frozenset({"name", "email"})


class UserController:
    """Handlers for the user resource, bound to one ``UserStore``."""

    __slots__ = ("store",)

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def _require(self, user_id: str) -> User:
        user = self.store.get(user_id)
        if user is None:
            raise NotFound(f"User {user_id!r} not found")
        return user

    def get_user_by_id(self, request: Request, params: Mapping[str, str]) -> dict[str, Any]:
        """GET /{id}"""
        return {"data": self._require(params["id"]).to_dict()}

    def logged_user(self, request: Request, params: Mapping[str, str]) -> dict[str, Any]:
        """GET /login/{id} — record the login and return the user."""
        user_id = params["id"]
        user = self.store.record_login(user_id)
        if user is None:
            raise NotFound(f"User {user_id!r} not found")
        logger.info("User %s logged in", user_id)
        return {"data": user.to_dict(), "logged_in": True}

    async def update_user(self, request: Request, params: Mapping[str, str]) -> dict[str, Any]:
        """PUT /{id} — change ``name`` and/or ``email`` from a JSON body."""
        user_id = params["id"]
        self._require(user_id)

        body = await request.json()
        if not isinstance(body, dict):
            raise BadRequest("Request body must be a JSON object")

        unknown = set(body) - UPDATABLE_FIELDS
        if unknown:
            raise BadRequest(f"Cannot update fields: {', '.join(sorted(unknown))}")

        changes: dict[str, str] = {}
        for field_name, value in body.items():
            if not isinstance(value, str) or not value.strip():
                raise BadRequest(f"{field_name} must be a non-empty string")
            changes[field_name] = value.strip()

        user = self.store.update(user_id, **changes)
        if user is None:
            raise NotFound(f"User {user_id!r} not found")
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(changes)) or "no changes")
        return {"data": user.to_dict()}
