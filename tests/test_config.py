# Area: Shared Tests
"""Tests for runner configuration loading."""

import json
import logging

import pytest
from naval_referee._config import (
    DEFAULT_CONFIG,
    ENV_MAPPINGS,
    load_config,
    log_level,
    validate_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_MAPPINGS:
        monkeypatch.delenv(key, raising=False)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self):
        assert load_config(use_dotenv=False) == DEFAULT_CONFIG

    def test_defaults_not_shared(self):
        config = load_config(use_dotenv=False)
        config["db_path"] = "other.db"
        assert DEFAULT_CONFIG["db_path"] == "naval_referee.db"

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"db_path": "games.db", "log_level": "DEBUG"}))
        config = load_config(str(path), use_dotenv=False)
        assert config["db_path"] == "games.db"
        assert config["log_level"] == "DEBUG"
        assert config["contract_address"] == "naval-referee"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"db_path": "games.db"}))
        monkeypatch.setenv("NAVAL_DB_PATH", "env.db")
        monkeypatch.setenv("NAVAL_CALLER", "alice")
        config = load_config(str(path), use_dotenv=False)
        assert config["db_path"] == "env.db"
        assert config["caller"] == "alice"

    def test_missing_file_keeps_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "absent.json"), use_dotenv=False)
        assert config == DEFAULT_CONFIG

    def test_dotenv_file_loaded(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("NAVAL_CONTRACT_ADDRESS=from-dotenv\n")
        monkeypatch.chdir(tmp_path)
        # registers the variable for removal at teardown
        monkeypatch.setenv("NAVAL_CONTRACT_ADDRESS", "placeholder")
        monkeypatch.delenv("NAVAL_CONTRACT_ADDRESS")
        config = load_config()
        assert config["contract_address"] == "from-dotenv"


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_defaults_valid(self):
        validate_config(dict(DEFAULT_CONFIG))

    def test_missing_db_path(self):
        with pytest.raises(ValueError, match="db_path"):
            validate_config({**DEFAULT_CONFIG, "db_path": ""})

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            validate_config({**DEFAULT_CONFIG, "log_level": "LOUD"})

    def test_log_level_case_insensitive(self):
        assert log_level({"log_level": "debug"}) == logging.DEBUG
