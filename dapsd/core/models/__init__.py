"""
Domain models — Pydantic types for the directory server.

    from dapsd.core.models import ProjectEntry, RegistrationRequest
"""

from dapsd.core.models.project import ProjectEntry, RegistrationRequest

__all__ = [
    "ProjectEntry",
    "RegistrationRequest",
]
