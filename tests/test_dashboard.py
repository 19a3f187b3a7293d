"""End-to-end tests: the admin dashboard driving the real API over ASGI."""

from __future__ import annotations

from typing import AsyncIterator

import httpx
import pytest

from conftest import ADMIN_EMAIL, submit_application, submit_job
from jobboard.admin import AdminDashboard
from jobboard.config.settings import Settings
from jobboard.services.statuses import ModerationStatus


@pytest.fixture
def dashboard_settings() -> Settings:
    return Settings(
        admin_emails=(ADMIN_EMAIL,),
        admin_api_base_url="http://testserver",
        admin_api_email=ADMIN_EMAIL,
    )


@pytest.fixture
async def dashboard(
    dashboard_settings: Settings,
    asgi_transport: httpx.ASGITransport,
) -> AsyncIterator[AdminDashboard]:
    board = AdminDashboard.from_settings(dashboard_settings, transport=asgi_transport)
    yield board
    await board.close()


@pytest.mark.asyncio
async def test_load_mirrors_both_queues(http: httpx.AsyncClient, dashboard: AdminDashboard) -> None:
    job = await submit_job(http)
    application = await submit_application(http)

    await dashboard.load()

    assert [item.id for item in dashboard.list_pending_jobs()] == [job["id"]]
    assert [item.id for item in dashboard.list_pending_applications()] == [application["id"]]
    assert dashboard.jobs.items[0].title == "Smart Contract Engineer"
    summary = dashboard.summary()
    assert summary["jobs"].pending == 1
    assert summary["applications"].total == 1


@pytest.mark.asyncio
async def test_summary_is_zeroed_before_load(dashboard: AdminDashboard) -> None:
    summary = dashboard.summary()

    assert summary["jobs"].total == 0
    assert summary["applications"].pending == 0


@pytest.mark.asyncio
async def test_review_job_updates_server_and_local_counts(
    http: httpx.AsyncClient,
    dashboard: AdminDashboard,
) -> None:
    first = await submit_job(http)
    second = await submit_job(http, title="Protocol Researcher")
    await dashboard.load()

    assert await dashboard.review_job(first["id"], ModerationStatus.APPROVED)

    assert dashboard.jobs.counts.pending == 1
    assert dashboard.jobs.counts.approved == 1
    assert [item.id for item in dashboard.jobs.visible_items] == [second["id"]]
    public = (await http.get("/api/jobs")).json()["jobs"]
    assert [item["id"] for item in public] == [first["id"]]
    assert public[0]["reviewed_by"] == ADMIN_EMAIL


@pytest.mark.asyncio
async def test_review_of_vanished_record_resynchronises(
    http: httpx.AsyncClient,
    admin_headers: dict[str, str],
    dashboard: AdminDashboard,
) -> None:
    application = await submit_application(http)
    await dashboard.load()
    await http.delete(f"/api/applications/{application['id']}", headers=admin_headers)

    reviewed = await dashboard.review_application(application["id"], ModerationStatus.REJECTED)

    assert reviewed is False
    assert dashboard.applications.items == []


@pytest.mark.asyncio
async def test_delete_respects_confirmation(
    http: httpx.AsyncClient,
    dashboard_settings: Settings,
    asgi_transport: httpx.ASGITransport,
    admin_headers: dict[str, str],
) -> None:
    job = await submit_job(http)
    answers = iter([False, True])
    prompts: list[str] = []

    def _confirm(message: str) -> bool:
        prompts.append(message)
        return next(answers)

    board = AdminDashboard.from_settings(dashboard_settings, confirm=_confirm, transport=asgi_transport)
    try:
        await board.load()

        assert await board.jobs.delete_item(job["id"]) is False
        assert len(board.jobs.items) == 1

        assert await board.jobs.delete_item(job["id"]) is True
        assert board.jobs.items == []
        assert board.jobs.counts.total == 0
    finally:
        await board.close()

    assert prompts == ["Are you sure you want to delete this job posting?"] * 2
    listing = (await http.get("/api/admin/jobs", headers=admin_headers)).json()
    assert listing["jobs"] == []
