"""Tests for the boot-time configuration check."""

import pytest

from brainwaves.config import settings


def test_nothing_missing_with_test_env():
    assert settings.missing_settings() == []


def test_missing_values_are_reported(monkeypatch):
    monkeypatch.setattr(settings, "CLIENT_SECRET", "")
    monkeypatch.setattr(settings, "APP_REDIRECT_URL", "")

    assert settings.missing_settings() == ["SPOTIFY_CLIENT_SECRET", "APP_REDIRECT_URL"]


def test_ensure_settings_exits(monkeypatch):
    monkeypatch.setattr(settings, "PUBLIC_BASE_URL", "")

    with pytest.raises(SystemExit) as exc_info:
        settings.ensure_settings()

    assert exc_info.value.code == 1


def test_values_are_stripped(monkeypatch):
    monkeypatch.setenv("SOME_PADDED_VALUE", "  value \n")
    assert settings._env("SOME_PADDED_VALUE") == "value"
    assert settings._env("SOME_UNSET_VALUE_XYZ", "fallback") == "fallback"
