"""
Tests for configuration loading — dapsd.yml parsing and registry seeding.
"""

import textwrap
from pathlib import Path

import pytest

from dapsd.core.config.loader import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    ConfigError,
    DapsdConfig,
    find_config_file,
    load_config,
    seed_registry,
)
from dapsd.core.services.directory import DirectoryService


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    """Create a valid dapsd.yml in a temp directory."""
    content = textwrap.dedent("""\
        server:
          host: 0.0.0.0
          port: 9090
        projects:
          - language: rust
            project-name: daps
            directory: /srv/daps
          - language: python
            project-name: tool
            directory: sites/tool
    """)
    path = tmp_path / "dapsd.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_load_valid(self, valid_config: Path):
        config = load_config(valid_config)
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9090
        assert len(config.projects) == 2
        assert config.projects[0].project_name == "daps"
        assert config.projects[0].directory == Path("/srv/daps")

    def test_relative_directory_anchored_at_config(self, valid_config: Path):
        config = load_config(valid_config)
        assert config.projects[1].directory == valid_config.parent.resolve() / "sites" / "tool"

    def test_defaults(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("")
        config = load_config(path)
        assert config.server.host == DEFAULT_HOST
        assert config.server.port == DEFAULT_PORT
        assert config.projects == []

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_no_file_found_uses_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            "dapsd.core.config.loader.find_config_file", lambda start_dir=None: None,
        )
        assert load_config() == DapsdConfig()

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("server: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_project_missing_field(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("projects:\n  - language: rust\n    directory: /srv\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_blank_project_directory(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("projects:\n  - language: rust\n    project-name: x\n    directory: ''\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_bad_port(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("server:\n  port: 70000\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestFindConfigFile:
    def test_finds_in_parent(self, valid_config: Path):
        nested = valid_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config.resolve()

    def test_finds_in_start_dir(self, valid_config: Path):
        assert find_config_file(valid_config.parent) == valid_config.resolve()


class TestSeedRegistry:
    def test_seeds_all(self, valid_config: Path):
        svc = DirectoryService()
        count = seed_registry(load_config(valid_config), svc)
        assert count == 2
        assert svc.registry.lookup("rust", "daps").directory == Path("/srv/daps")
        assert svc.registry.lookup("python", "tool") is not None

    def test_rejected_project(self, tmp_path: Path):
        path = tmp_path / "dapsd.yml"
        path.write_text("projects:\n  - language: ''\n    project-name: x\n    directory: /srv\n")
        with pytest.raises(ConfigError, match="Invalid project"):
            seed_registry(load_config(path), DirectoryService())
