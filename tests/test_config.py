# Area: Shared Tests
"""Tests for settings loading and package configuration."""

import logging

import pytest

import carebody
from carebody._config import (
    DEFAULT_SETTINGS,
    ENV_MAPPINGS,
    load_settings,
    validate_settings,
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_MAPPINGS:
        # setenv first so values written by load_dotenv are undone too
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults(self, clean_env, tmp_path):
        settings = load_settings(str(tmp_path / "missing.env"))
        assert settings == DEFAULT_SETTINGS

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("CAREBODY_TICK_SECONDS", "0.5")
        clean_env.setenv("CAREBODY_CONSULTATION_MINUTES", "45")
        clean_env.setenv("CAREBODY_LOG_LEVEL", "debug")
        settings = load_settings(str(tmp_path / "missing.env"))
        assert settings["tick_seconds"] == 0.5
        assert settings["consultation_minutes"] == 45
        assert settings["log_level"] == "debug"

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CAREBODY_CONSULTATION_MINUTES=20\nCAREBODY_LOG_FILE=logs/care.log\n")
        settings = load_settings(str(env_file))
        assert settings["consultation_minutes"] == 20
        assert settings["log_file"] == "logs/care.log"

    def test_unparseable_number(self, clean_env, tmp_path):
        clean_env.setenv("CAREBODY_TICK_SECONDS", "fast")
        with pytest.raises(ValueError, match="CAREBODY_TICK_SECONDS"):
            load_settings(str(tmp_path / "missing.env"))

    def test_non_positive_rejected(self, clean_env, tmp_path):
        clean_env.setenv("CAREBODY_CONSULTATION_MINUTES", "0")
        with pytest.raises(ValueError, match="consultation_minutes"):
            load_settings(str(tmp_path / "missing.env"))


class TestValidateSettings:
    """Tests for validate_settings()."""

    def test_defaults_valid(self):
        # Should not raise
        validate_settings(dict(DEFAULT_SETTINGS))

    def test_missing_key(self):
        settings = dict(DEFAULT_SETTINGS)
        del settings["log_file"]
        with pytest.raises(ValueError, match="Missing"):
            validate_settings(settings)

    def test_unknown_log_level(self):
        settings = dict(DEFAULT_SETTINGS, log_level="CHATTY")
        with pytest.raises(ValueError, match="log level"):
            validate_settings(settings)


class TestConfigure:
    """Tests for carebody.configure()."""

    def test_configure_sets_up_logging(self, clean_env, tmp_path):
        clean_env.setenv("CAREBODY_LOG_FILE", str(tmp_path / "care.log"))
        clean_env.setenv("CAREBODY_LOG_LEVEL", "WARNING")
        settings = carebody.configure(str(tmp_path / "missing.env"))
        pkg_logger = logging.getLogger("carebody")
        try:
            assert settings["log_level"] == "WARNING"
            assert pkg_logger.level == logging.WARNING
            assert len(pkg_logger.handlers) == 2
        finally:
            for handler in list(pkg_logger.handlers):
                pkg_logger.removeHandler(handler)
                handler.close()
            pkg_logger.propagate = True
            pkg_logger.setLevel(logging.NOTSET)
