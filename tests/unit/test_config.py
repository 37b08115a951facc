"""Tests for visions_gallery.core.config - configuration management.

Tests cover:
- Default values for configuration fields.
- Environment variable overrides via the VISIONS_ prefix.
- Automatic creation of the database directory.
- Pydantic validation constraints (port range, log level).
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from visions_gallery.core.config import GalleryConfig


class TestConfigDefaults:
    """Verify that GalleryConfig provides sensible defaults."""

    def test_default_server_port(self, monkeypatch, temp_dir):
        monkeypatch.delenv("VISIONS_SERVER_PORT", raising=False)
        cfg = GalleryConfig(_env_file=None, database_path=temp_dir / "gallery.db")
        assert cfg.server_port == 3000
        assert cfg.server_host == "0.0.0.0"

    def test_default_database_path(self, monkeypatch, temp_dir):
        monkeypatch.delenv("VISIONS_DATABASE_PATH", raising=False)
        monkeypatch.chdir(temp_dir)
        cfg = GalleryConfig(_env_file=None)
        assert cfg.database_path == Path("data/gallery.db")

    def test_not_found_is_silent_by_default(self, test_config: GalleryConfig):
        assert test_config.strict_not_found is False

    def test_default_client_settings(self, monkeypatch, temp_dir):
        monkeypatch.delenv("VISIONS_API_BASE_URL", raising=False)
        cfg = GalleryConfig(_env_file=None, database_path=temp_dir / "gallery.db")
        assert cfg.api_base_url == "http://localhost:3000"
        assert cfg.request_timeout == 10.0

    def test_default_gradio_settings(self, test_config: GalleryConfig):
        assert test_config.gradio_server_port == 7860
        assert test_config.gradio_share is False


class TestConfigDirectoryCreation:
    """Verify that GalleryConfig creates the database directory."""

    def test_database_parent_created(self, test_config: GalleryConfig):
        assert test_config.database_path.parent.is_dir()

    def test_memory_database_creates_nothing(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        cfg = GalleryConfig(_env_file=None, database_path=":memory:")
        assert cfg.uses_memory_database is True
        assert list(temp_dir.iterdir()) == []

    def test_file_database_is_not_memory(self, test_config: GalleryConfig):
        assert test_config.uses_memory_database is False


class TestConfigEnvironment:
    """Environment variable overrides."""

    def test_env_overrides(self, monkeypatch, temp_dir):
        monkeypatch.setenv("VISIONS_DATABASE_PATH", str(temp_dir / "env" / "g.db"))
        monkeypatch.setenv("VISIONS_SERVER_PORT", "8080")
        monkeypatch.setenv("VISIONS_STRICT_NOT_FOUND", "true")
        cfg = GalleryConfig(_env_file=None)
        assert cfg.database_path == temp_dir / "env" / "g.db"
        assert cfg.server_port == 8080
        assert cfg.strict_not_found is True

    def test_env_prefix_is_case_insensitive(self, monkeypatch, temp_dir):
        monkeypatch.setenv("visions_log_level", "DEBUG")
        cfg = GalleryConfig(_env_file=None, database_path=temp_dir / "gallery.db")
        assert cfg.log_level == "DEBUG"


class TestConfigValidation:
    """Pydantic constraints."""

    def test_port_below_range_rejected(self, temp_dir):
        with pytest.raises(ValidationError):
            GalleryConfig(_env_file=None, database_path=temp_dir / "g.db", server_port=80)

    def test_unknown_log_level_rejected(self, temp_dir):
        with pytest.raises(ValidationError):
            GalleryConfig(_env_file=None, database_path=temp_dir / "g.db", log_level="LOUD")

    def test_non_positive_timeout_rejected(self, temp_dir):
        with pytest.raises(ValidationError):
            GalleryConfig(_env_file=None, database_path=temp_dir / "g.db", request_timeout=0)
