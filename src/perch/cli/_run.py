"""``perch run`` — development or production server command."""

import argparse
import sys

from perch.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Start the perch server.

    Resolves ``args.app`` to an App, then delegates to
    ``run_dev_server()`` when the app config has ``debug=True`` (unless
    ``--production`` is given) and to ``run_production_server()`` otherwise.
    CLI flags override the app config.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = args.host or app.config.host
    port = args.port or app.config.port

    if args.production or not app.config.debug:
        from perch.server.production import run_production_server

        run_production_server(
            app,
            host=host,
            port=port,
            workers=args.workers if args.workers is not None else app.config.workers,
            log_format=app.config.log_format,
            log_level=app.config.log_level,
            keep_alive_timeout=app.config.keep_alive_timeout,
            request_timeout=app.config.request_timeout,
        )
    else:
        from perch.server.dev import run_dev_server

        run_dev_server(
            app,
            host,
            port,
            reload=True,
            reload_dirs=app.config.reload_dirs,
            app_path=args.app,
        )
