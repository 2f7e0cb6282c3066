"""
Registration route — record a project directory.

Blueprint: register_bp
Routes:
    POST /register/dir   — JSON {"language", "project-name", "directory"}
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from dapsd.core.errors import RegistrationError
from dapsd.core.models.project import RegistrationRequest

from .helpers import directory_service

logger = logging.getLogger(__name__)

register_bp = Blueprint("register", __name__)


@register_bp.route("/register/dir", methods=["POST"])
def register_dir():  # type: ignore[no-untyped-def]
    """Register (or re-register) a project directory.

    JSON body:
        language: language scope, addressed as ``<language>.docs``
        project-name: project name, unique within the language
        directory: directory to serve
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    try:
        payload = RegistrationRequest.model_validate(data)
    except ValidationError as e:
        details = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        return jsonify({"error": "Invalid registration", "details": details}), 400

    try:
        entry = directory_service().register_project(
            payload.language, payload.project_name, payload.directory,
        )
    except RegistrationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "success": True,
        "message": (
            f"Registered {entry.project_name} with language {entry.language} "
            f"located at {entry.directory}"
        ),
        "project": entry.to_dict(),
    })
