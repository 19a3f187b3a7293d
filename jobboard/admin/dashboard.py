"""Administrative review queues for job postings and membership applications."""

from __future__ import annotations

import asyncio
import logging

import httpx

from jobboard.admin.client import AdminAPIClient, AdminRequestError
from jobboard.admin.counts import AdminRecord, Counts
from jobboard.admin.store import AdminListStore, ConfirmCallback, extract_records
from jobboard.config.settings import Settings, get_settings
from jobboard.services.statuses import ALL_STATUSES, ModerationStatus, RecordStatus

logger = logging.getLogger(__name__)

JOBS_PATH = "/api/admin/jobs"
APPLICATIONS_PATH = "/api/applications"


class JobItem(AdminRecord):
    """Job posting as listed in the admin queue."""

    title: str = ""
    company: str = ""
    location: str = ""
    category: str = ""
    company_email: str = ""
    reviewed_by: str | None = None


class ApplicationItem(AdminRecord):
    """Membership application as listed in the admin queue."""

    name: str = ""
    email: str = ""
    school_name: str = ""
    telegram_id: str = ""
    reviewed_by: str | None = None


JobsStore = AdminListStore[JobItem, Counts]
ApplicationsStore = AdminListStore[ApplicationItem, Counts]


def create_jobs_store(
    settings: Settings | None = None,
    *,
    confirm: ConfirmCallback | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> JobsStore:
    """Jobs queue opens on the pending tab."""

    settings = settings or get_settings()
    client = AdminAPIClient.from_settings(settings, JOBS_PATH, transport=transport)
    return AdminListStore(
        client,
        record_type=JobItem,
        initial_status=RecordStatus.PENDING,
        transform=lambda payload: extract_records(payload, JobItem, ("jobs", "data")),
        confirm=confirm,
        confirm_message="Are you sure you want to delete this job posting?",
    )


def create_applications_store(
    settings: Settings | None = None,
    *,
    confirm: ConfirmCallback | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApplicationsStore:
    settings = settings or get_settings()
    client = AdminAPIClient.from_settings(settings, APPLICATIONS_PATH, transport=transport)
    return AdminListStore(
        client,
        record_type=ApplicationItem,
        initial_status=ALL_STATUSES,
        transform=lambda payload: extract_records(payload, ApplicationItem, ("data", "items")),
        confirm=confirm,
        confirm_message="Are you sure you want to delete this application?",
    )


class AdminDashboard:
    """Both review queues behind one object, as the admin pages use them."""

    def __init__(self, jobs: JobsStore, applications: ApplicationsStore) -> None:
        self.jobs = jobs
        self.applications = applications

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        confirm: ConfirmCallback | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AdminDashboard":
        return cls(
            create_jobs_store(settings, confirm=confirm, transport=transport),
            create_applications_store(settings, confirm=confirm, transport=transport),
        )

    async def load(self) -> None:
        """Fetch both queues concurrently."""

        await asyncio.gather(self.jobs.fetch_items(), self.applications.fetch_items())

    async def close(self) -> None:
        await asyncio.gather(self.jobs.close(), self.applications.close())

    def list_pending_jobs(self) -> list[JobItem]:
        """Return job postings waiting for review."""

        return [job for job in self.jobs.items if job.status == RecordStatus.PENDING.value]

    def list_pending_applications(self) -> list[ApplicationItem]:
        return [app for app in self.applications.items if app.status == RecordStatus.PENDING.value]

    def summary(self) -> dict[str, Counts]:
        """Counts per queue, zeroed when a queue has not loaded yet."""

        return {
            "jobs": self.jobs.counts or Counts(),
            "applications": self.applications.counts or Counts(),
        }

    async def review_job(self, job_id: str, status: ModerationStatus) -> bool:
        return await self._review(self.jobs, job_id, status)

    async def review_application(self, application_id: str, status: ModerationStatus) -> bool:
        return await self._review(self.applications, application_id, status)

    async def _review(self, store: AdminListStore, item_id: str, status: ModerationStatus) -> bool:
        # The store has already resynchronised by the time the error reaches us.
        try:
            await store.update_item_status(item_id, ModerationStatus(status).value)
        except AdminRequestError as exc:
            logger.error("Review of %s failed: %s", item_id, exc)
            return False
        return True
