"""Tests for YAML settings loading."""

import pytest

from dbgate.config.loader import load_settings_yaml


class TestLoadSettingsYaml:
    def test_valid(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("concurrency_limit: 6\nlog_level: info\n")
        settings = load_settings_yaml(path)
        assert settings.concurrency_limit == 6
        assert settings.log_level == "INFO"

    def test_partial_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("log_level: ERROR\n")
        assert load_settings_yaml(path).concurrency_limit == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings_yaml(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("just a string\n")
        with pytest.raises(ValueError, match="Expected YAML mapping"):
            load_settings_yaml(path)
