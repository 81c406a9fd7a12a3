"""Route table for the user resource.

Registration order is dispatch order. ``/login/{id}`` has two segments and
``/{id}`` has one, so they never compete for the same path.
"""

from perch.routing.router import Router
from perch.users.handlers import UserController


def user_router(controller: UserController) -> Router:
    """Build the (uncompiled) user router; mount it with ``App.include``."""
    router = Router()
    router.get("/{id}", controller.get_user_by_id, name="getUserById")
    router.get("/login/{id}", controller.logged_user, name="loggedUser")
    router.put("/{id}", controller.update_user, name="updateUser")
    return router
