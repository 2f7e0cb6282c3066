"""
Directory service — the single entry point adapters talk to.

Combines the registry with the path resolver:

    register_project(language, project, directory)   → ProjectEntry
    resolve_request(host, project, requested_path)   → safe Path

Every failure is raised as one of the errors in ``dapsd.core.errors``.
The service holds no per-request state; each resolve is a function of
the registry contents at the moment of the lookup.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dapsd.core.errors import (
    BadAddressingError,
    ForbiddenError,
    NotFoundError,
    RegistrationError,
)
from dapsd.core.models.project import ProjectEntry
from dapsd.core.observability.metrics import MetricsRegistry
from dapsd.core.services.addressing import language_from_host, normalize_language
from dapsd.core.services.path_resolver import resolve_path
from dapsd.core.services.registry import ProjectRegistry

logger = logging.getLogger(__name__)


class DirectoryService:
    """Registration and safe path resolution over a ProjectRegistry."""

    def __init__(
        self,
        registry: ProjectRegistry | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ProjectRegistry()
        self._metrics = metrics if metrics is not None else MetricsRegistry()

    @property
    def registry(self) -> ProjectRegistry:
        return self._registry

    @property
    def metrics(self) -> MetricsRegistry:
        return self._metrics

    def register_project(
        self,
        language: str,
        project_name: str,
        directory: Path | str,
    ) -> ProjectEntry:
        """Record a project under its language, replacing any previous entry.

        Args:
            language: Language scope; matched case-insensitively against
                the ``<language>.docs`` host.
            project_name: Unique within the language; a single path segment.
            directory: Base directory served for this project.

        Returns:
            The stored entry.

        Raises:
            RegistrationError: Empty language or project name, or a name
                that cannot be addressed. The registry is left untouched.
        """
        language = normalize_language(language or "")
        project_name = (project_name or "").strip()

        if not language:
            raise RegistrationError("Missing 'language'")
        if not project_name:
            raise RegistrationError("Missing 'project-name'")
        if "/" in language or ":" in language or any(c.isspace() for c in language):
            raise RegistrationError(f"Invalid language: {language!r}")
        if "/" in project_name or project_name in (".", ".."):
            raise RegistrationError(f"Invalid project name: {project_name!r}")
        if not str(directory).strip():
            raise RegistrationError("Missing 'directory'")

        entry = ProjectEntry(
            language=language,
            project_name=project_name,
            directory=Path(directory),
        )
        self._registry.register(entry)
        self._metrics.counter("register_total").inc()
        logger.info(
            "Registered %s under %s at %s",
            entry.project_name, entry.language, entry.directory,
        )
        return entry

    def resolve_request(self, host: str | None, project_name: str, requested_path: str) -> Path:
        """Turn a serve request into a path inside the project's directory.

        The caller opens the file. A missing file should be reported as
        NotFoundError and any other I/O failure as InternalError.

        Raises:
            BadAddressingError: Host missing or not ``<language>.docs``.
            NotFoundError: Unknown language or project.
            ForbiddenError: The path escapes the project directory.
        """
        try:
            path = self._resolve(host, project_name, requested_path)
        except ForbiddenError:
            self._count("forbidden")
            logger.warning(
                "Blocked traversal attempt: host=%r project=%r path=%r",
                host, project_name, requested_path,
            )
            raise
        except NotFoundError as e:
            self._count("not_found")
            logger.debug("Not found (%s): host=%r project=%r", e.reason, host, project_name)
            raise
        except BadAddressingError:
            self._count("bad_addressing")
            raise

        self._count("resolved")
        return path

    def list_projects(self) -> list[ProjectEntry]:
        """All registered projects, sorted by language then name."""
        return self._registry.entries()

    # ── Internals ───────────────────────────────────────────────

    def _resolve(self, host: str | None, project_name: str, requested_path: str) -> Path:
        language = language_from_host(host)

        snapshot = self._registry.snapshot()
        projects = snapshot.get(language)
        if projects is None:
            raise NotFoundError(
                f"No projects registered for language '{language}'",
                reason="unknown-language",
            )
        entry = projects.get(project_name)
        if entry is None:
            raise NotFoundError(
                f"No project '{project_name}' registered under '{language}'",
                reason="unknown-project",
            )

        return resolve_path(entry.directory, requested_path)

    def _count(self, outcome: str) -> None:
        self._metrics.counter("resolve_total", outcome=outcome).inc()
