"""Tests for trace_journal.core.config."""

import json
import os
from pathlib import Path

import pytest
import yaml

from trace_journal.core.config import Config, get_config, reset_config
from trace_journal.core.exceptions import ConfigurationError, FileIOError


@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


class TestConfig:
    def test_defaults(self):
        config = Config(env_prefix="")
        assert config.get("codec.policy") == "lenient"
        assert config.get("journal.extension") == ".md"
        assert config.get("paths") is None
        assert config.get_journal_root() is None

    def test_custom_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MYJOURNAL_CODEC__POLICY", "warn")
        config = Config(env_prefix="MYJOURNAL_")
        assert config.get("codec.policy") == "warn"

    def test_yaml_config_file(self, tmp_config_file, tmp_dir):
        config = Config(config_file=tmp_config_file)
        assert config.get("journal.root") == os.path.join(tmp_dir, "journal")
        assert config.get_journal_root() == Path(tmp_dir) / "journal"

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"codec": {"policy": "strict"}}, f)
        assert Config(config_file=config_path).get("codec.policy") == "strict"

    def test_env_overrides_file(self, tmp_config_file, monkeypatch):
        monkeypatch.setenv("TRACE_JOURNAL_JOURNAL__ROOT", "/elsewhere")
        config = Config(config_file=tmp_config_file)
        assert config.get("journal.root") == "/elsewhere"

    def test_invalid_yaml_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("journal: [unclosed\n")
        with pytest.raises(ConfigurationError):
            Config(config_file=config_path)

    def test_non_mapping_file_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump(["a", "b"], f)
        with pytest.raises(ConfigurationError, match="mapping"):
            Config(config_file=config_path)

    def test_unreadable_file_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        os.mkdir(config_path)
        with pytest.raises(FileIOError):
            Config(config_file=config_path)

    def test_missing_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "nope.yaml"), env_prefix="")
        assert config.get("codec.policy") == "lenient"

    def test_get_missing_key(self):
        config = Config()
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self):
        config = Config()
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_journal_root_expands_user(self):
        config = Config()
        config.set("journal.root", "~/Journal")
        assert config.get_journal_root() == Path.home() / "Journal"

    def test_blank_journal_root_is_none(self):
        config = Config()
        config.set("journal.root", "   ")
        assert config.get_journal_root() is None

    def test_extra_defaults(self):
        config = Config(defaults={"custom": {"key": "value"}})
        assert config.get("custom.key") == "value"


class TestGetConfig:
    def test_singleton(self):
        c1 = get_config()
        c2 = get_config()
        assert c1 is c2

    def test_reset_clears_singleton(self):
        c1 = get_config()
        reset_config()
        c2 = get_config()
        assert c1 is not c2
