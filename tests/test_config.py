"""Unit tests for plexpurchases_builder.config module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from plexpurchases_builder.config import Config, load_config


class TestConfig:
    """Tests for Config dataclass."""

    def test_basic_init(self):
        """Test default Config values."""
        config = Config()

        assert config.log_level == "INFO"
        assert config.output_dir == Path("output")
        assert config.archive_name == "plex-purchases-configs.zip"

    def test_log_file_property(self):
        config = Config(output_dir=Path("/var/log"))
        assert config.log_file == Path("/var/log/plexpurchases_builder.log")

    def test_archive_path_property(self):
        config = Config(output_dir=Path("/srv/out"), archive_name="a.zip")
        assert config.archive_path == Path("/srv/out/a.zip")

    def test_numeric_log_level(self):
        assert Config(log_level="DEBUG").numeric_log_level == 10


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_from_env(self, mock_env_vars):
        config = load_config()

        assert config.log_level == "DEBUG"
        assert config.output_dir == Path("/tmp/plexpurchases_output")
        assert config.archive_name == "server-configs.zip"

    def test_load_config_defaults(self):
        with patch("plexpurchases_builder.config.load_dotenv"):
            with patch.dict(os.environ, {}, clear=True):
                config = load_config()

        assert config.log_level == "INFO"
        assert config.output_dir == Path("output")
        assert config.archive_name == "plex-purchases-configs.zip"

    def test_invalid_log_level_exits(self):
        with patch("plexpurchases_builder.config.load_dotenv"):
            with patch.dict(os.environ, {"PLEXPURCHASES_LOG_LEVEL": "loud"}, clear=True):
                with pytest.raises(SystemExit) as exc_info:
                    load_config()
                assert exc_info.value.code == 1
