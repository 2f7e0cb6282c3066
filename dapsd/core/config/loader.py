"""
Configuration loader — reads dapsd.yml into settings models.

The config file sets the listen address and may seed the registry
with projects at startup. Runtime registrations are never written
back to it.

Example::

    server:
      host: 127.0.10.1
      port: 8080
    projects:
      - language: rust
        project-name: daps
        directory: /srv/daps
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from dapsd.core.errors import RegistrationError
from dapsd.core.models.project import RegistrationRequest
from dapsd.core.services.directory import DirectoryService

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "dapsd.yml"

DEFAULT_HOST = "127.0.10.1"
DEFAULT_PORT = 8080


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


class ServerSettings(BaseModel):
    """Listen address for the HTTP adapter."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)


class DapsdConfig(BaseModel):
    """Root of dapsd.yml."""

    server: ServerSettings = Field(default_factory=ServerSettings)
    projects: list[RegistrationRequest] = Field(default_factory=list)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for dapsd.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to dapsd.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> DapsdConfig:
    """Load and validate configuration.

    A missing file is not an error when no explicit path was given:
    the server then starts with defaults and an empty registry.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return DapsdConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = DapsdConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    # Relative project directories are relative to the config file
    base = path.parent.resolve()
    for project in config.projects:
        if not project.directory.is_absolute():
            project.directory = base / project.directory

    logger.info("Loaded config with %d project(s)", len(config.projects))
    return config


def seed_registry(config: DapsdConfig, service: DirectoryService) -> int:
    """Register every project listed in the config.

    Returns:
        Number of projects registered.

    Raises:
        ConfigError: If a listed project is rejected.
    """
    for project in config.projects:
        try:
            service.register_project(project.language, project.project_name, project.directory)
        except RegistrationError as e:
            raise ConfigError(f"Invalid project in config: {e}") from e
    return len(config.projects)
