"""
Tests for the project registry — storage, overwrite and concurrency.
"""

import threading
from pathlib import Path

import pytest

from dapsd.core.models.project import ProjectEntry
from dapsd.core.services.registry import ProjectRegistry


def _entry(language: str, name: str, directory: str) -> ProjectEntry:
    return ProjectEntry(language=language, project_name=name, directory=Path(directory))


class TestRegisterLookup:
    def test_empty(self):
        reg = ProjectRegistry()
        assert len(reg) == 0
        assert reg.lookup("rust", "daps") is None
        assert reg.entries() == []

    def test_register_then_lookup(self):
        reg = ProjectRegistry()
        e = _entry("rust", "daps", "/srv/daps")
        reg.register(e)
        assert reg.lookup("rust", "daps") == e

    def test_unknown_project_under_known_language(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/daps"))
        assert reg.lookup("rust", "nope") is None

    def test_same_name_in_two_languages(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "app", "/srv/rust-app"))
        reg.register(_entry("python", "app", "/srv/py-app"))
        assert reg.lookup("rust", "app").directory == Path("/srv/rust-app")
        assert reg.lookup("python", "app").directory == Path("/srv/py-app")
        assert len(reg) == 2

    def test_overwrite_replaces_whole_entry(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/old"))
        reg.register(_entry("rust", "daps", "/srv/new"))
        found = reg.lookup("rust", "daps")
        assert found == _entry("rust", "daps", "/srv/new")
        assert len(reg) == 1

    def test_entries_sorted(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "b", "/b"))
        reg.register(_entry("go", "z", "/z"))
        reg.register(_entry("rust", "a", "/a"))
        assert [e.key for e in reg.entries()] == [("go", "z"), ("rust", "a"), ("rust", "b")]
        assert reg.languages() == ["go", "rust"]

    def test_repr(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/daps"))
        assert "projects=1" in repr(reg)


class TestSnapshot:
    def test_snapshot_unchanged_by_later_writes(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/daps"))
        snap = reg.snapshot()
        reg.register(_entry("rust", "other", "/srv/other"))
        reg.register(_entry("go", "tool", "/srv/tool"))
        assert set(snap) == {"rust"}
        assert set(snap["rust"]) == {"daps"}

    def test_snapshot_is_read_only(self):
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/daps"))
        snap = reg.snapshot()
        with pytest.raises(TypeError):
            snap["go"] = {}  # type: ignore[index]
        with pytest.raises(TypeError):
            snap["rust"]["x"] = _entry("rust", "x", "/x")  # type: ignore[index]

    def test_entry_is_frozen(self):
        e = _entry("rust", "daps", "/srv/daps")
        with pytest.raises(Exception):
            e.directory = Path("/elsewhere")  # type: ignore[misc]


class TestConcurrency:
    def test_readers_never_see_torn_entries(self):
        """Readers racing a writer see either version of an entry, whole."""
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/v0"))
        stop = threading.Event()
        errors: list[str] = []

        def writer():
            for i in range(1, 500):
                reg.register(_entry("rust", "daps", f"/srv/v{i}"))
                reg.register(_entry(f"lang{i % 7}", f"p{i}", f"/srv/p{i}"))
            stop.set()

        def reader():
            while not stop.is_set():
                e = reg.lookup("rust", "daps")
                if e is None or e.language != "rust" or e.project_name != "daps":
                    errors.append(repr(e))
                for lang, projects in reg.snapshot().items():
                    for name, entry in projects.items():
                        if entry.key != (lang, name):
                            errors.append(repr(entry))

        readers = [threading.Thread(target=reader) for _ in range(4)]
        w = threading.Thread(target=writer)
        for t in readers:
            t.start()
        w.start()
        w.join(timeout=30)
        stop.set()
        for t in readers:
            t.join(timeout=30)

        assert errors == []
        assert reg.lookup("rust", "daps").directory == Path("/srv/v499")

    def test_concurrent_writers_all_land(self):
        reg = ProjectRegistry()

        def register_many(lang: str):
            for i in range(200):
                reg.register(_entry(lang, f"p{i}", f"/srv/{lang}/{i}"))

        threads = [threading.Thread(target=register_many, args=(f"l{n}",)) for n in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert len(reg) == 6 * 200
        assert reg.lookup("l3", "p150").directory == Path("/srv/l3/150")

    def test_lookups_do_not_wait_for_writer(self):
        """A lookup completes while a registration holds the write lock."""
        reg = ProjectRegistry()
        reg.register(_entry("rust", "daps", "/srv/daps"))
        results = []

        with reg._write_lock:
            t = threading.Thread(target=lambda: results.append(reg.lookup("rust", "daps")))
            t.start()
            t.join(timeout=5)
            assert not t.is_alive()

        assert results == [_entry("rust", "daps", "/srv/daps")]
