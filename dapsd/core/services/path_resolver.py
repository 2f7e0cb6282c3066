"""
Path resolver — map an untrusted request path into a registered directory.

Resolution is purely lexical. The request path is walked segment by
segment on top of the base directory:

    .       → ignored
    ..      → drops the last appended segment; dropping past the
              base directory is an escape
    ""      → ignored (leading "/" or "//" never re-roots the path)
    other   → appended verbatim

The result is then checked component-wise against the base, so a
sibling such as ``/srv/docs-evil`` can never pass for ``/srv/docs``.

The filesystem is never consulted. A symlink inside the registered
tree that points outside of it is served as-is; only ``..`` escapes
in the request path are defended against here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dapsd.core.errors import ForbiddenError

logger = logging.getLogger(__name__)

SEPARATOR = "/"
CURRENT_DIR = "."
PARENT_DIR = ".."


def resolve_path(base: Path | str, requested: str) -> Path:
    """Resolve ``requested`` against ``base`` without leaving ``base``.

    Args:
        base: Trusted base directory (a registered project directory).
        requested: Attacker-controlled, slash-delimited relative path.

    Returns:
        A path equal to or below ``base``. Nothing is checked on disk.

    Raises:
        ForbiddenError: If the path would escape ``base``.
    """
    base = Path(base)
    segments: list[str] = []

    for segment in requested.split(SEPARATOR):
        if segment in ("", CURRENT_DIR):
            continue
        if "\x00" in segment:
            raise ForbiddenError(f"NUL byte in request path: {requested!r}")
        if segment == PARENT_DIR:
            if not segments:
                raise ForbiddenError(f"Path escapes its directory: {requested!r}")
            segments.pop()
            continue
        segments.append(segment)

    candidate = base.joinpath(*segments)
    if not is_within(base, candidate):
        raise ForbiddenError(f"Path escapes its directory: {requested!r}")
    return candidate


def is_within(base: Path | str, candidate: Path | str) -> bool:
    """Whether ``candidate`` equals ``base`` or lies below it.

    Compared component by component, never as a string prefix. A
    parent marker left anywhere below the base counts as outside.
    """
    base_parts = Path(base).parts
    candidate_parts = Path(candidate).parts
    if candidate_parts[: len(base_parts)] != base_parts:
        return False
    return PARENT_DIR not in candidate_parts[len(base_parts):]
