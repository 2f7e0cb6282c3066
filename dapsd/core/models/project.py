"""
Project models — the registered unit and its transport record.

A ProjectEntry is what the registry stores: frozen, so a reader
holding one can never observe it changing underneath. The
RegistrationRequest is the wire shape used by the HTTP adapter and
the config file, with the hyphenated field names clients send.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectEntry(BaseModel):
    """A registered (language, project name, base directory) tuple.

    ``directory`` is the trust boundary for every path resolved
    under this project.
    """

    model_config = ConfigDict(frozen=True)

    language: str
    project_name: str
    directory: Path

    @property
    def key(self) -> tuple[str, str]:
        """Registry key: (language, project_name)."""
        return (self.language, self.project_name)

    def to_dict(self) -> dict[str, str]:
        return {
            "language": self.language,
            "project-name": self.project_name,
            "directory": str(self.directory),
        }


class RegistrationRequest(BaseModel):
    """Registration payload as received at the transport boundary.

    Example::

        {"language": "rust", "project-name": "daps", "directory": "/srv/daps"}
    """

    model_config = ConfigDict(populate_by_name=True)

    language: str
    project_name: str = Field(alias="project-name")
    directory: Path

    @field_validator("directory", mode="before")
    @classmethod
    def _directory_not_blank(cls, value: object) -> object:
        # Path("") is Path("."), which would serve the working directory
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("directory must not be empty")
        return value
