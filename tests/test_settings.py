"""Tests for JSON-backed settings."""

import json

from timerdeck.settings import Settings, load_settings, save_settings


def test_defaults_when_missing(tmp_path):
    assert load_settings(tmp_path / "nope.json") == Settings()


def test_round_trip(tmp_path):
    path = tmp_path / "sub" / "settings.json"
    settings = Settings(tick_interval_ms=500, analytics_enabled=False)
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"log_level": "DEBUG", "theme": "dark"}))
    loaded = load_settings(path)
    assert loaded.log_level == "DEBUG"
    assert loaded.tick_interval_ms == 1000


def test_corrupt_file_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{broken")
    assert load_settings(path) == Settings()


def test_non_object_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")
    assert load_settings(path) == Settings()
