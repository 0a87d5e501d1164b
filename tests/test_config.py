"""Tests for configuration management."""

import tempfile
from pathlib import Path

import pytest
import yaml

from work_scheduler.core.config import ConfigManager
from work_scheduler.core.models import SyncConfig


@pytest.fixture
def temp_config_path():  # type: ignore[no-untyped-def]
    """Create a temporary config file path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config.yml"


class TestConfigManager:
    """Test ConfigManager."""

    def test_creates_default_config(self, temp_config_path: Path) -> None:
        """Test that a missing file is created with defaults."""
        config = ConfigManager(temp_config_path)

        assert temp_config_path.exists()
        assert config.get("version") == "1.0"
        assert config.get("api.port") == 3001
        assert config.get("sync.base_url") == "https://api.notion.com/v1"
        assert config.get("sync.notion_version") == "2022-06-28"
        assert config.get("sync.push_on_log") is True
        assert config.get("advanced.log_file") is None

    def test_get_with_default(self, temp_config_path: Path) -> None:
        """Test default values for missing keys."""
        config = ConfigManager(temp_config_path)

        assert config.get("nonexistent.key", "fallback") == "fallback"
        assert config.get("sync.api_token") is None

    def test_set_persists_value(self, temp_config_path: Path) -> None:
        """Test that set writes through to the file."""
        config = ConfigManager(temp_config_path)
        config.set("api.port", 8080)

        reloaded = ConfigManager(temp_config_path)
        assert reloaded.get("api.port") == 8080

    def test_set_invalid_value_raises(self, temp_config_path: Path) -> None:
        """Test that schema violations are rejected."""
        config = ConfigManager(temp_config_path)

        with pytest.raises(ValueError, match="Invalid configuration"):
            config.set("api.port", 70000)

        with pytest.raises(ValueError):
            config.set("advanced.log_level", "LOUD")

    def test_merges_partial_file_with_defaults(self, temp_config_path: Path) -> None:
        """Test that keys missing from the file fall back to defaults."""
        temp_config_path.write_text(yaml.dump({"version": "1.0", "api": {"port": 9000}}))

        config = ConfigManager(temp_config_path)

        assert config.get("api.port") == 9000
        assert config.get("api.host") == "localhost"
        assert config.get("sync.timeout_seconds") == 30

    def test_invalid_file_is_backed_up(self, temp_config_path: Path) -> None:
        """Test that an invalid file is replaced by defaults and kept as backup."""
        temp_config_path.write_text(yaml.dump({"version": "1.0", "api": {"port": "high"}}))

        with pytest.raises(ValueError, match="backed up"):
            ConfigManager(temp_config_path)

        assert temp_config_path.with_suffix(".yml.backup").exists()
        assert ConfigManager(temp_config_path).get("api.port") == 3001

    def test_reset(self, temp_config_path: Path) -> None:
        """Test resetting to defaults."""
        config = ConfigManager(temp_config_path)
        config.set("api.port", 8080)

        config.reset()

        assert config.get("api.port") == 3001

    def test_get_all_keys(self, temp_config_path: Path) -> None:
        """Test flattening keys into dot notation."""
        keys = ConfigManager(temp_config_path).get_all_keys()

        assert "sync.database_id" in keys
        assert "api.cors.origins" in keys
        assert "api" not in keys


class TestSyncSettings:
    """Test storing Notion credentials in the config."""

    def test_not_connected_by_default(self, temp_config_path: Path) -> None:
        """Test that no credentials are stored initially."""
        assert ConfigManager(temp_config_path).get_sync_config() is None

    def test_save_and_load_sync_config(self, temp_config_path: Path) -> None:
        """Test that saved credentials survive a reload."""
        ConfigManager(temp_config_path).save_sync_config(SyncConfig("secret", "db-1"))

        sync_config = ConfigManager(temp_config_path).get_sync_config()

        assert sync_config == SyncConfig("secret", "db-1")

    def test_clear_sync_config(self, temp_config_path: Path) -> None:
        """Test forgetting credentials."""
        config = ConfigManager(temp_config_path)
        config.save_sync_config(SyncConfig("secret", "db-1"))

        config.clear_sync_config()

        assert config.get_sync_config() is None
        assert ConfigManager(temp_config_path).get_sync_config() is None
