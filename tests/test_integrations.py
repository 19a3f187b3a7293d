"""Tests for connectivity check helpers."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_mock

from jobboard.config.settings import get_settings
from jobboard.db.session import get_engine, get_session_factory
from jobboard.integrations import check_admin_api, check_database


@pytest.mark.asyncio
async def test_check_admin_api_success(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("jobboard.integrations.checks.AdminAPIClient")
    instance = client_mock.from_settings.return_value
    instance.ping = mocker.AsyncMock(return_value=True)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_admin_api()

    assert result.success
    instance.ping.assert_awaited_once()
    instance.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_check_admin_api_failure(mocker: pytest_mock.MockerFixture) -> None:
    client_mock = mocker.patch("jobboard.integrations.checks.AdminAPIClient")
    instance = client_mock.from_settings.return_value
    instance.ping = mocker.AsyncMock(return_value=False)
    instance.close = mocker.AsyncMock(return_value=None)

    result = await check_admin_api()

    assert not result.success
    assert "non-success" in result.message.lower()
    instance.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_check_database_against_sqlite(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'checks' / 'db.sqlite'}")
    get_settings.cache_clear()
    get_engine.cache_clear()
    get_session_factory.cache_clear()
    try:
        result = await check_database()
        assert result.success
        assert (tmp_path / "checks").is_dir()
    finally:
        await get_engine().dispose()
        get_engine.cache_clear()
        get_session_factory.cache_clear()
