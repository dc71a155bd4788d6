"""Tests for confscope.yaml settings loading."""

from __future__ import annotations

import os

import pytest
import yaml

from confscope.core.errors import SettingsError
from confscope.core.settings import EngineSettings, find_settings_file, load_settings


class TestFindSettingsFile:
    """Test locating confscope.yaml."""

    def test_in_start_directory(self, tmp_path):
        """Test finding the file in the start directory itself."""
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("cache: {}")
        assert find_settings_file(tmp_path) == settings_file

    def test_in_parent_directory(self, tmp_path, monkeypatch):
        """Test finding confscope.yaml in a parent of the working directory."""
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("cache: {}")
        subdir = tmp_path / "a" / "b"
        subdir.mkdir(parents=True)
        monkeypatch.chdir(subdir)
        assert find_settings_file() == settings_file

    def test_directory_named_like_settings_is_skipped(self, tmp_path):
        """Test that only regular files count."""
        (tmp_path / "child").mkdir()
        (tmp_path / "child" / "confscope.yaml").mkdir()
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("cache: {}")
        assert find_settings_file(tmp_path / "child") == settings_file


class TestLoadSettings:
    """Test load_settings."""

    def test_valid_file(self, tmp_path):
        """Test loading a full settings file."""
        data = {"cache": {"max_entries": 25, "ttl_ms": 5000}, "scopes": {"project": 5}}
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text(yaml.dump(data))

        settings = load_settings(settings_file)
        assert settings.max_entries == 25
        assert settings.ttl_ms == 5000
        assert settings.priorities == {"user": 1, "project": 5, "local": 3}

    def test_missing_explicit_path(self, tmp_path):
        """Test that a missing file gives the defaults."""
        assert load_settings(tmp_path / "nonexistent.yaml") == EngineSettings()

    def test_searches_when_no_path(self, tmp_path, monkeypatch):
        """Test that the nearest confscope.yaml is used when no path is given."""
        (tmp_path / "confscope.yaml").write_text("cache: {max_entries: 3}")
        monkeypatch.chdir(tmp_path)
        assert load_settings().max_entries == 3

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives the defaults."""
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("")
        assert load_settings(settings_file) == EngineSettings()

    def test_invalid_yaml(self, tmp_path):
        """Test loading an invalid YAML file."""
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("invalid: yaml: content: [")
        with pytest.raises(SettingsError, match="Invalid confscope.yaml"):
            load_settings(settings_file)

    def test_invalid_values(self, tmp_path):
        """Test that bad values in the file are reported."""
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("cache:\n  ttl_ms: 0\n")
        with pytest.raises(SettingsError, match="ttl_ms"):
            load_settings(settings_file)

    @pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores file modes")
    def test_read_error(self, tmp_path):
        """Test graceful handling of read errors."""
        settings_file = tmp_path / "confscope.yaml"
        settings_file.write_text("cache: {max_entries: 3}")
        settings_file.chmod(0o000)
        try:
            assert load_settings(settings_file) == EngineSettings()
        finally:
            settings_file.chmod(0o644)


class TestEngineSettings:
    """Test EngineSettings parsing."""

    def test_defaults(self):
        """Test the reference sizing."""
        settings = EngineSettings.from_dict(None)
        assert settings.max_entries == 10
        assert settings.ttl_ms == 60_000
        assert settings.priorities == {"user": 1, "project": 2, "local": 3}

    @pytest.mark.parametrize(
        "data, message",
        [
            ({"cache": []}, "'cache'"),
            ({"cache": {"max_entries": 0}}, "max_entries"),
            ({"cache": {"max_entries": "10"}}, "max_entries"),
            ({"cache": {"ttl_ms": -1}}, "ttl_ms"),
            ({"scopes": ["user"]}, "'scopes'"),
            ({"scopes": {"user": "low"}}, "scopes.user"),
            (["cache"], "mapping"),
        ],
    )
    def test_invalid(self, data, message):
        """Test that wrong types raise SettingsError."""
        with pytest.raises(SettingsError, match=message):
            EngineSettings.from_dict(data)
