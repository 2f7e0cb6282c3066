"""
Serving routes — stream files out of registered project directories.

Blueprint: serve_bp
Routes:
    GET /<project>/           — the project's index.html
    GET /<project>/<path>     — any file below the project directory

The language comes from the request host (``<language>.docs``).
DirectoryService decides which path may be read; this module only
opens it and maps filesystem failures onto the error taxonomy.

The service counts resolve_total{outcome=resolved} once a path is
computed; serve_total{outcome=ok|not_found|internal} counts what
happened when the file was opened.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from flask import Blueprint, request, send_file

from dapsd.core.errors import InternalError, NotFoundError

from .helpers import directory_service

logger = logging.getLogger(__name__)

serve_bp = Blueprint("serve", __name__)

INDEX_FILE = "index.html"


@serve_bp.route("/<project_name>/", defaults={"requested": ""})
@serve_bp.route("/<project_name>/<path:requested>")
def serve_file(project_name: str, requested: str):  # type: ignore[no-untyped-def]
    """Serve ``requested`` from the project's registered directory."""
    path = directory_service().resolve_request(
        request.headers.get("Host"), project_name, requested,
    )
    return _send(path)


def _count(outcome: str) -> None:
    directory_service().metrics.counter("serve_total", outcome=outcome).inc()


def _send(path: Path):  # type: ignore[no-untyped-def]
    """Open ``path`` (or its index.html) and stream it."""
    target = path.absolute()
    if target.is_dir():
        target = target / INDEX_FILE

    try:
        fh = target.open("rb")
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as e:
        _count("not_found")
        raise NotFoundError(f"File not found: {path}", reason="missing-file") from e
    except OSError as e:
        _count("internal")
        logger.error("Cannot read %s: %s", target, e)
        raise InternalError(f"Cannot read {path.name}") from e

    _count("ok")
    mimetype = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
    return send_file(fh, mimetype=mimetype, download_name=target.name)
