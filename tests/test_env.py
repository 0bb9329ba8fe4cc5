"""
Tests for environment configuration.
"""

import os
from pathlib import Path

import pytest

from g2client.env import DEFAULT_SERVER_URL, Settings, load_env

ENV_VARS = [
    "G2CLIENT_SERVER_URL",
    "G2CLIENT_LOG_LEVEL",
    "G2CLIENT_LOG_DIR",
    "G2CLIENT_MODULE_NAME",
    "G2CLIENT_INI_PARAMS",
    "G2CLIENT_VERBOSE_LOGGING",
    "G2CLIENT_TIMEOUT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so monkeypatch restores whatever load_env writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings.server_url == DEFAULT_SERVER_URL
        assert settings.log_level == "INFO"
        assert settings.log_dir is None
        assert settings.module_name == "g2client"
        assert settings.ini_params == "{}"
        assert settings.verbose_logging == 0
        assert settings.timeout is None

    def test_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("G2CLIENT_SERVER_URL", "http://senzing:9000")
        monkeypatch.setenv("G2CLIENT_LOG_LEVEL", "trace")
        monkeypatch.setenv("G2CLIENT_LOG_DIR", "/var/log/g2client")
        monkeypatch.setenv("G2CLIENT_VERBOSE_LOGGING", "1")
        monkeypatch.setenv("G2CLIENT_TIMEOUT", "2.5")

        settings = Settings.from_env()

        assert settings.server_url == "http://senzing:9000"
        assert settings.log_level == "TRACE"
        assert settings.log_dir == Path("/var/log/g2client")
        assert settings.verbose_logging == 1
        assert settings.timeout == 2.5

    def test_blank_timeout_means_none(self, clean_env, monkeypatch):
        monkeypatch.setenv("G2CLIENT_TIMEOUT", " ")
        assert Settings.from_env().timeout is None


class TestLoadEnv:
    def test_loads_dotenv_file(self, clean_env):
        (clean_env / ".env").write_text("G2CLIENT_MODULE_NAME=from-dotenv\n# comment\n")

        load_env()

        assert os.environ["G2CLIENT_MODULE_NAME"] == "from-dotenv"

    def test_existing_variables_win(self, clean_env, monkeypatch):
        monkeypatch.setenv("G2CLIENT_SERVER_URL", "http://already-set:1")
        (clean_env / ".env").write_text("G2CLIENT_SERVER_URL=http://from-file:2\n")

        load_env()

        assert os.environ["G2CLIENT_SERVER_URL"] == "http://already-set:1"

    def test_missing_file_is_fine(self, clean_env):
        load_env()
        assert "G2CLIENT_MODULE_NAME" not in os.environ
