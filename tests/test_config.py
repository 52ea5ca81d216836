"""Tests for YAML configuration."""

from pathlib import Path

import pytest
import yaml

from dependency_diagram.config import Config, get_config, renderer_from_config, validate_setting
from dependency_diagram.renderer import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home and working directories at temporary locations."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    return home


def test_set_and_get_roundtrip(home: Path) -> None:
    """Test that values persist to the local config file."""
    config = get_config()
    config.set("renderer.style", "scruffy")

    assert config.get("renderer.style") == "scruffy"
    saved = yaml.safe_load((Path.cwd() / ".dependency-diagram" / "config.yaml").read_text())
    assert saved == {"renderer.style": "scruffy"}
    assert get_config().get("renderer.style") == "scruffy"


def test_local_falls_back_to_global(home: Path) -> None:
    """Test global fallback and local precedence."""
    get_config(use_global=True).set("renderer.style", "scruffy")
    get_config(use_global=True).set("renderer.timeout", "5")

    local = get_config()
    local.set("renderer.timeout", "10")

    assert local.get("renderer.style") == "scruffy"
    assert local.get("renderer.timeout") == "10"
    assert local.list() == {"renderer.style": "scruffy", "renderer.timeout": "10"}
    assert get_config(use_global=True).list() == {"renderer.style": "scruffy", "renderer.timeout": "5"}


def test_unset(home: Path) -> None:
    """Test removing a value."""
    config = get_config()
    config.set("renderer.style", "plain")
    config.unset("renderer.style")
    config.unset("missing")

    assert config.get("renderer.style", "default") == "default"


def test_reading_does_not_create_directory(home: Path) -> None:
    """Test that a read-only session leaves no files behind."""
    get_config().get("anything")
    assert not (Path.cwd() / ".dependency-diagram").exists()


def test_invalid_config_file(tmp_path: Path) -> None:
    """Test that an unparsable config file is reported."""
    (tmp_path / "config.yaml").write_text("key: [unterminated\n")
    with pytest.raises(ValueError, match="Failed to load config"):
        Config(use_global=True, config_dir=tmp_path)


def test_renderer_from_config(tmp_path: Path) -> None:
    """Test building a renderer from settings."""
    config = Config(use_global=True, config_dir=tmp_path)
    renderer = renderer_from_config(config)
    assert renderer.base_url == DEFAULT_BASE_URL
    assert renderer.timeout == DEFAULT_TIMEOUT

    config.set("renderer.base_url", "http://localhost/TYPE/")
    config.set("renderer.timeout", "2.5")
    renderer = renderer_from_config(config)
    assert renderer.base_url == "http://localhost/TYPE/"
    assert renderer.timeout == 2.5


def test_renderer_from_config_invalid_timeout(tmp_path: Path) -> None:
    """Test that a non-numeric timeout is rejected."""
    config = Config(use_global=True, config_dir=tmp_path)
    config.set("renderer.timeout", "soon")
    with pytest.raises(ValueError, match="renderer.timeout"):
        renderer_from_config(config)


def test_global_config_that_is_not_a_mapping_is_ignored(home: Path) -> None:
    """Test that a list in the global file does not break local reads."""
    global_dir = home / ".dependency-diagram"
    global_dir.mkdir()
    (global_dir / "config.yaml").write_text("- renderer.style\n- scruffy\n")

    config = get_config()
    config.set("renderer.timeout", "3")

    assert config.get("renderer.style") is None
    assert config.list() == {"renderer.timeout": "3"}


def test_validate_setting() -> None:
    """Test checking settings before they are stored."""
    assert validate_setting("renderer.style", "scruffy") == "scruffy"
    assert validate_setting("renderer.timeout", "2.5") == "2.5"
    assert validate_setting("renderer.base_url", "http://localhost/TYPE/") == "http://localhost/TYPE/"
    with pytest.raises(ValueError, match="Unknown setting"):
        validate_setting("renderer.colour", "red")
    with pytest.raises(ValueError, match="Unknown style"):
        validate_setting("renderer.style", "fancy")
