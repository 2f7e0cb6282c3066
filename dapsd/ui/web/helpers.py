"""
Shared helpers for the route blueprints.
"""

from __future__ import annotations

from flask import current_app

from dapsd.core.services.directory import DirectoryService


def directory_service() -> DirectoryService:
    """The DirectoryService bound to the current app."""
    from dapsd.ui.web.server import EXTENSION_KEY

    return current_app.extensions[EXTENSION_KEY]
