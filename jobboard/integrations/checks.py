"""Connectivity checks for the admin API and the database."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from sqlalchemy import text

from jobboard.admin.client import AdminAPIClient
from jobboard.admin.dashboard import JOBS_PATH
from jobboard.config.settings import get_settings
from jobboard.db.session import get_engine


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(
    name: str,
    factory: Callable[[], Awaitable[bool]],
    success_message: str,
) -> IntegrationCheckResult:
    try:
        result = await factory()
    except Exception as exc:  # pragma: no cover
        return IntegrationCheckResult(name=name, success=False, message=str(exc))

    if result:
        return IntegrationCheckResult(name=name, success=True, message=success_message)
    return IntegrationCheckResult(
        name=name,
        success=False,
        message="Service responded with non-success status.",
    )


async def check_admin_api() -> IntegrationCheckResult:
    """Ping the admin API health endpoint."""

    client = AdminAPIClient.from_settings(get_settings(), JOBS_PATH)

    async def _ping() -> bool:
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check(
        name="Admin API",
        factory=_ping,
        success_message="Admin API is reachable.",
    )


async def check_database() -> IntegrationCheckResult:
    """Run a trivial query against the configured database."""

    async def _query() -> bool:
        async with get_engine().connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar_one() == 1

    return await _run_check(
        name="Database",
        factory=_query,
        success_message="Database accepts connections.",
    )


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    return list(await asyncio.gather(check_admin_api(), check_database()))
