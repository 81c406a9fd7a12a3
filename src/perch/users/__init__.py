"""The user resource — route table plus the collaborators it delegates to."""

from perch.users.app import create_app
from perch.users.handlers import UserController
from perch.users.routes import user_router
from perch.users.store import User, UserStore

__all__ = [
    "User",
    "UserController",
    "UserStore",
    "create_app",
    "user_router",
]
