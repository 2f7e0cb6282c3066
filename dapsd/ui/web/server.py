"""
Directory server — Flask app factory.

Creates the Flask application that fronts the DirectoryService:
registration at ``/register/dir``, file serving at
``http://<language>.docs/<project>/<path>``, and a small JSON API
under ``/api``.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify

from dapsd.core.config.loader import DapsdConfig, seed_registry
from dapsd.core.errors import ResolveError
from dapsd.core.services.directory import DirectoryService

logger = logging.getLogger(__name__)

# Key under app.extensions
EXTENSION_KEY = "dapsd"


def create_app(
    service: DirectoryService | None = None,
    config: DapsdConfig | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        service: Directory service to serve from. Defaults to the
            process-wide one from ``dapsd.core.context``.
        config: Optional loaded config; its projects are registered
            before the app is returned.

    Returns:
        Configured Flask application.
    """
    if service is None:
        from dapsd.core.context import get_directory_service

        service = get_directory_service()

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = service

    if config is not None:
        seeded = seed_registry(config, service)
        app.config["SERVER_HOST"] = config.server.host
        app.config["SERVER_PORT"] = config.server.port
        logger.info("Seeded %d project(s) from config", seeded)

    # Register blueprints
    from dapsd.ui.web.routes_api import api_bp
    from dapsd.ui.web.routes_register import register_bp
    from dapsd.ui.web.routes_serve import serve_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(register_bp)
    app.register_blueprint(serve_bp)

    @app.errorhandler(ResolveError)
    def _resolve_error(e: ResolveError):  # type: ignore[no-untyped-def]
        return jsonify(e.to_dict()), e.status

    logger.info("Directory app created (%d project(s) registered)", len(service.registry))
    return app


def run_server(
    app: Flask,
    host: str = "127.0.10.1",
    port: int = 8080,
    debug: bool = False,
) -> None:
    """Run the Flask development server (threaded)."""
    logger.info("Serving docs on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)
