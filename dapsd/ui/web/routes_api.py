"""
API routes — JSON endpoints for operators.

All endpoints return JSON. Grouped under /api/ prefix.
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify

from dapsd import __version__

from .helpers import directory_service

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


# ── Health ───────────────────────────────────────────────────────────


@api_bp.route("/health")
def api_health():  # type: ignore[no-untyped-def]
    """Liveness plus registry size."""
    registry = directory_service().registry
    return jsonify({
        "status": "healthy",
        "version": __version__,
        "projects": len(registry),
        "languages": len(registry.languages()),
    })


# ── Projects ─────────────────────────────────────────────────────────


@api_bp.route("/projects")
def api_projects():  # type: ignore[no-untyped-def]
    """Every registered project, sorted by language then name."""
    entries = directory_service().list_projects()
    return jsonify({
        "projects": [e.to_dict() for e in entries],
        "total": len(entries),
    })


# ── Metrics ──────────────────────────────────────────────────────────


@api_bp.route("/metrics")
def api_metrics():  # type: ignore[no-untyped-def]
    """Registration and resolution counters."""
    return jsonify(directory_service().metrics.to_dict())
