"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from jobboard.config.settings import get_settings


def test_admin_emails_are_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_EMAILS", " One@Example.com ,,two@example.com ")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.admin_emails == ("one@example.com", "two@example.com")
    assert settings.is_admin("ONE@example.com")
    assert not settings.is_admin(None)
    assert not settings.is_admin("three@example.com")


def test_numeric_settings_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUERY_CACHE_SIZE", "5")
    monkeypatch.setenv("COUNTS_CACHE_TTL", "2.5")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.query_cache_size == 5
    assert settings.counts_cache_ttl == 2.5
    assert get_settings() is settings
