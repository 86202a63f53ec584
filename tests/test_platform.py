"""
Platform module tests: environment settings and logging setup.
"""

import io
import json

import pytest
import structlog

from rulenet.platform.config import Settings, load_settings
from rulenet.platform.logging import configure_logging


ENV_VARS = ("RULENET_LOG_LEVEL", "RULENET_LOG_FORMAT")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Unset rulenet variables (restored afterwards) and run from an empty dir."""
    for name in ENV_VARS:
        # setenv first so monkeypatch also undoes values written by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestLoadSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings == Settings(log_level="INFO", log_format="console")

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("RULENET_LOG_LEVEL", "debug")
        monkeypatch.setenv("RULENET_LOG_FORMAT", "JSON")

        settings = load_settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"

    def test_reads_env_file(self, clean_env):
        env_file = clean_env / "custom.env"
        env_file.write_text("RULENET_LOG_FORMAT=json\nRULENET_LOG_LEVEL=warning\n")

        settings = load_settings(env_file)

        assert settings.log_format == "json"
        assert settings.log_level == "WARNING"

    def test_environment_wins_over_env_file(self, clean_env, monkeypatch):
        env_file = clean_env / ".env"
        env_file.write_text("RULENET_LOG_LEVEL=ERROR\n")
        monkeypatch.setenv("RULENET_LOG_LEVEL", "DEBUG")

        assert load_settings().log_level == "DEBUG"

    def test_invalid_level_names_variable(self, clean_env, monkeypatch):
        monkeypatch.setenv("RULENET_LOG_LEVEL", "loud")
        with pytest.raises(ValueError, match="RULENET_LOG_LEVEL"):
            load_settings()

    def test_invalid_format_names_variable(self):
        with pytest.raises(ValueError, match="RULENET_LOG_FORMAT"):
            Settings(log_format="xml")


class TestConfigureLogging:
    """Tests for structlog configuration."""

    def test_json_output_and_level_filter(self, capsys, reset_structlog):
        configure_logging(Settings(log_level="INFO", log_format="json"))
        logger = structlog.get_logger("rulenet.test")

        logger.debug("hidden")
        logger.info("node_created", node_id="a")

        lines = [line for line in capsys.readouterr().out.splitlines() if line]
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "node_created"
        assert record["node_id"] == "a"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_returns_loaded_settings(self, clean_env, monkeypatch, reset_structlog):
        monkeypatch.setenv("RULENET_LOG_LEVEL", "WARNING")
        settings = configure_logging()
        assert settings.log_level == "WARNING"

    def test_stream_receives_output(self, capsys, reset_structlog):
        buffer = io.StringIO()
        configure_logging(Settings(log_level="DEBUG", log_format="json"), stream=buffer)

        structlog.get_logger("rulenet.test").debug("node_removed", node_id="a")

        assert capsys.readouterr().out == ""
        assert json.loads(buffer.getvalue())["event"] == "node_removed"
