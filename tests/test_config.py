#!/usr/bin/env python3
"""Tests for projection settings."""

import logging

import pytest

from reminders import Settings, load_settings

ENV_KEYS = [
    "REMINDERS_CONFIG",
    "REMINDERS_MAX_OCCURRENCES",
    "REMINDERS_DEFAULT_TIME_WINDOW_DAYS",
    "REMINDERS_DEFAULT_MILEAGE_BUFFER",
    "REMINDERS_DEFAULT_PAGE_SIZE",
    "REMINDERS_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestSettings:
    """Tests for Settings validation."""

    def test_defaults(self):
        settings = Settings()
        assert settings.max_occurrences == 100
        assert settings.default_time_window_days == 30
        assert settings.default_mileage_buffer == 1000
        assert settings.default_page_size == 20
        assert settings.log_level == "WARNING"

    def test_max_occurrences_must_be_positive(self):
        with pytest.raises(ValueError, match="max_occurrences"):
            Settings(max_occurrences=0)

    def test_negative_window_rejected(self):
        with pytest.raises(ValueError, match="default_time_window_days"):
            Settings(default_time_window_days=-1)

    def test_negative_mileage_buffer_rejected(self):
        with pytest.raises(ValueError, match="default_mileage_buffer"):
            Settings(default_mileage_buffer=-5)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError, match="default_page_size"):
            Settings(default_page_size=0)


class TestLoadSettings:
    """Tests for load_settings layering."""

    def test_defaults_without_file_or_env(self):
        settings = load_settings()
        assert settings.max_occurrences == 100
        assert settings.default_page_size == 20

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("max_occurrences: 50\ndefault_mileage_buffer: 250\n")
        settings = load_settings(path)
        assert settings.max_occurrences == 50
        assert settings.default_mileage_buffer == 250.0
        assert settings.default_time_window_days == 30

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("default_page_size: 5\n")
        monkeypatch.setenv("REMINDERS_CONFIG", str(path))
        assert load_settings().default_page_size == 5

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("max_occurrences: 50\n")
        monkeypatch.setenv("REMINDERS_MAX_OCCURRENCES", "10")
        assert load_settings(path).max_occurrences == 10

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("REMINDERS_LOG_LEVEL", "debug")
        assert load_settings().log_level == "debug"

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("REMINDERS_DEFAULT_PAGE_SIZE", "lots")
        with pytest.raises(ValueError, match="Invalid reminder settings"):
            load_settings()

    def test_out_of_range_value(self, monkeypatch):
        monkeypatch.setenv("REMINDERS_MAX_OCCURRENCES", "0")
        with pytest.raises(ValueError, match="max_occurrences"):
            load_settings()

    def test_unknown_key_warns(self, tmp_path, caplog):
        path = tmp_path / "settings.yaml"
        path.write_text("max_occurences: 5\n")
        with caplog.at_level(logging.WARNING, logger="reminders.config"):
            settings = load_settings(path)
        assert settings.max_occurrences == 100
        assert "max_occurences" in caplog.text

    def test_empty_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_settings(tmp_path / "missing.yaml")
