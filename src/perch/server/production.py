"""Production server.

Starts a multi-worker pounce server. The router is compiled before the
first worker accepts a connection, so workers only ever read it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.app import App


def run_production_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 8000,
    workers: int = 0,  # 0 = auto-detect from CPU count
    *,
    log_format: str = "json",
    log_level: str = "info",
    keep_alive_timeout: float = 5.0,
    request_timeout: float = 30.0,
) -> None:
    """Run a perch app under pounce in production mode.

    Args:
        app: Perch App instance.
        host: Bind address (default: 0.0.0.0 for all interfaces).
        port: Bind port (default: 8000).
        workers: Worker count (0 = auto-detect from CPU count).
        log_format: Access/lifecycle log format (``"json"`` or ``"text"``).
        log_level: Minimum log level for server output.
        keep_alive_timeout: Idle keep-alive connection timeout in seconds.
        request_timeout: Per-request timeout in seconds, enforced by pounce.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    app._ensure_frozen()

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_format=log_format,
        log_level=log_level,
        keep_alive_timeout=keep_alive_timeout,
        request_timeout=request_timeout,
    )
    server = Server(config, app)
    server.run()
