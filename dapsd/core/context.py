"""
Process context — the directory service every entry point shares.

The registry lives for the lifetime of the process: created empty the
first time it is asked for, seeded from config by whichever entry
point starts the app, and never persisted.

    - Web server:   server.py → context.get_directory_service()
    - CLI:          main.py  → context.get_directory_service()
    - Tests:        pass a fresh DirectoryService, or reset_directory_service()

Module-level singleton (not a class).
"""

from __future__ import annotations

import threading
from typing import Optional

from dapsd.core.services.directory import DirectoryService

_lock = threading.Lock()
_service: Optional[DirectoryService] = None


def get_directory_service() -> DirectoryService:
    """Return the process-wide directory service, creating it on first use."""
    global _service
    with _lock:
        if _service is None:
            _service = DirectoryService()
        return _service


def reset_directory_service() -> None:
    """Drop the process-wide service; the next call starts from empty."""
    global _service
    with _lock:
        _service = None
