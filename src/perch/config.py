"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, users_prefix="/user")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode — requires debug=True)
    reload_dirs: tuple[str, ...] = ()

    # Production
    workers: int = 0  # 0 = auto-detect from CPU count
    log_format: str = "json"
    log_level: str = "info"
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    # Mount point of the user resource ("" serves it at the root)
    users_prefix: str = ""
