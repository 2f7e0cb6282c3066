"""
Project registry — language → project name → ProjectEntry.

Thread safety model
───────────────────
- The registry's state is one reference to an immutable two-level
  snapshot (``MappingProxyType`` of ``MappingProxyType``).
- Readers take no lock: they load the current reference once and
  work against that snapshot. Any number of lookups run in parallel
  and never wait on a writer.
- Writers serialize on ``_write_lock``, copy the snapshot, apply the
  change to the copy and publish it with a single reference swap.
  A reader therefore sees either the old snapshot or the new one,
  never a language map without its project.
- Readers never hold anything a writer waits for, so writers cannot
  be starved by continuous read load.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from dapsd.core.models.project import ProjectEntry

logger = logging.getLogger(__name__)

Snapshot = Mapping[str, Mapping[str, ProjectEntry]]

_EMPTY: Snapshot = MappingProxyType({})


class ProjectRegistry:
    """Concurrent store of registered projects.

    Entries are keyed by (language, project_name). Registering an
    existing key replaces the entry as a whole. There is no removal.
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()
        self._snapshot: Snapshot = _EMPTY

    def register(self, entry: ProjectEntry) -> None:
        """Insert or replace ``entry``."""
        with self._write_lock:
            current = self._snapshot
            projects = dict(current.get(entry.language, {}))
            replaced = entry.project_name in projects
            projects[entry.project_name] = entry

            languages = dict(current)
            languages[entry.language] = MappingProxyType(projects)
            self._snapshot = MappingProxyType(languages)

        if replaced:
            logger.info("Replaced project %s/%s", entry.language, entry.project_name)
        else:
            logger.debug("Registered project %s/%s", entry.language, entry.project_name)

    def lookup(self, language: str, project_name: str) -> ProjectEntry | None:
        """Find the entry for (language, project_name), or None."""
        return self._snapshot.get(language, _EMPTY).get(project_name)

    def snapshot(self) -> Snapshot:
        """Current consistent view of the whole registry.

        Later registrations never modify a snapshot already handed out.
        """
        return self._snapshot

    def languages(self) -> list[str]:
        """Sorted names of all languages with at least one project."""
        return sorted(self._snapshot)

    def entries(self) -> list[ProjectEntry]:
        """All entries of one snapshot, sorted by (language, project)."""
        snapshot = self._snapshot
        return [
            snapshot[language][name]
            for language in sorted(snapshot)
            for name in sorted(snapshot[language])
        ]

    def __len__(self) -> int:
        return sum(len(projects) for projects in self._snapshot.values())

    def __repr__(self) -> str:
        return f"<ProjectRegistry projects={len(self)}>"
