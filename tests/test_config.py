"""Tests for configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from safelog.config import (
    DEFAULT_CONFIG_TEMPLATE,
    DEFAULT_HEADER_GROUPS,
    SerializerConfig,
    get_config_file,
    load_config,
    parse_paths_string,
)
from safelog.config.models import ENV_CONFIG_PATH, ENV_REDACT_PATHS
from safelog.exceptions import ConfigError


class TestSerializerConfig:
    def test_defaults(self):
        config = SerializerConfig()
        assert config.redact_paths == ()
        assert config.excluded_header_groups == DEFAULT_HEADER_GROUPS
        assert config.max_depth == 64
        assert config.max_causes == 32

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            SerializerConfig(redact_path=["typo"])

    def test_is_frozen(self):
        config = SerializerConfig()
        with pytest.raises(ValidationError):
            config.max_depth = 3


class TestLoadConfig:
    def test_missing_default_file_gives_defaults(self):
        assert load_config() == SerializerConfig()

    def test_reads_yaml(self, tmp_path):
        config_file = tmp_path / "safelog.yaml"
        config_file.write_text("redact_paths:\n  - password\n  - user.token\nmax_depth: 10\n")

        config = load_config(config_file)

        assert config.redact_paths == ("password", "user.token")
        assert config.max_depth == 10

    def test_env_config_path(self, tmp_path, monkeypatch):
        config_file = tmp_path / "env.yaml"
        config_file.write_text("redact_paths: [secret]\n")
        monkeypatch.setenv(ENV_CONFIG_PATH, str(config_file))

        assert get_config_file() == config_file
        assert load_config().redact_paths == ("secret",)

    def test_env_paths_are_appended(self, tmp_path, monkeypatch):
        config_file = tmp_path / "safelog.yaml"
        config_file.write_text("redact_paths: [password]\n")
        monkeypatch.setenv(ENV_REDACT_PATHS, "a, b.c,")

        assert load_config(config_file).redact_paths == ("password", "a", "b.c")

    def test_template_is_valid(self, tmp_path):
        config_file = tmp_path / "template.yaml"
        config_file.write_text(DEFAULT_CONFIG_TEMPLATE)

        config = load_config(config_file)

        assert config.redact_paths == ("password", "user.token")
        assert config.excluded_header_groups == DEFAULT_HEADER_GROUPS

    @pytest.mark.parametrize(
        "content",
        [
            "redact_paths: [unclosed\n",
            "- just\n- a list\n",
            "max_depth: 0\n",
            "unknown_key: 1\n",
        ],
    )
    def test_invalid_files(self, tmp_path, content):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text(content)
        with pytest.raises(ConfigError):
            load_config(config_file)

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")


def test_parse_paths_string():
    assert parse_paths_string(" password , user.token,,") == ["password", "user.token"]
    assert parse_paths_string("") == []
