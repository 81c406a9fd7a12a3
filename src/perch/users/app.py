"""App factory for the user service.

Run:
    perch run perch.users.app:create_app
"""

from perch.app import App
from perch.config import AppConfig
from perch.errors import HTTPError
from perch.http.request import Request
from perch.users.handlers import UserController
from perch.users.routes import user_router
from perch.users.store import UserStore


def create_app(config: AppConfig | None = None, store: UserStore | None = None) -> App:
    """Wire the user router into a fresh App.

    The router is built here and handed to the App explicitly; nothing is
    registered at import time.
    """
    app = App(config)
    controller = UserController(store if store is not None else UserStore())
    app.include(user_router(controller), prefix=app.config.users_prefix)

    @app.error(404)
    def not_found(request: Request, exc: HTTPError):
        return {"error": exc.detail or "Not found", "status": 404}

    @app.error(500)
    def internal_error(request: Request):
        return {"error": "Internal Server Error", "status": 500}

    return app
