"""HTTP routes for the public board and the admin review queues."""

from __future__ import annotations

import logging
import math
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.api.auth import AdminDependency
from jobboard.api.schemas import (
    ApplicationOut,
    ApplicationSubmission,
    CountsOut,
    JobOut,
    JobSubmission,
    PageMeta,
    ReviewRequest,
)
from jobboard.db.session import get_session
from jobboard.repositories import ApplicationRepository, JobRepository, Pagination
from jobboard.services.statuses import RecordStatus

logger = logging.getLogger(__name__)

admin_router = APIRouter(tags=["admin"])
public_router = APIRouter(tags=["public"])


def get_job_repository(request: Request) -> JobRepository:
    return request.app.state.job_repository


def get_application_repository(request: Request) -> ApplicationRepository:
    return request.app.state.application_repository


@admin_router.get("/api/admin/jobs")
async def list_admin_jobs(
    status_filter: RecordStatus | None = Query(default=None, alias="status"),
    aggregate: str | None = None,
    search: str | None = None,
    _admin: str = AdminDependency,
    session: AsyncSession = Depends(get_session),
    repository: JobRepository = Depends(get_job_repository),
) -> dict[str, Any]:
    """All postings newest first; ``?aggregate=counts`` returns only the tally."""

    counts = CountsOut.model_validate(await repository.get_counts(session))
    if aggregate == "counts":
        return {"counts": counts}

    filters = {"status": status_filter.value if status_filter else None, "search": search}
    result = await repository.find_all(session, filters=filters)
    return {"jobs": [JobOut.model_validate(job) for job in result.data], "counts": counts}


@admin_router.patch("/api/admin/jobs/{job_id}")
async def review_job(
    job_id: str,
    body: ReviewRequest,
    admin_email: str = AdminDependency,
    session: AsyncSession = Depends(get_session),
    repository: JobRepository = Depends(get_job_repository),
) -> dict[str, Any]:
    job = await repository.update_status(session, job_id, body.status, reviewed_by=admin_email)
    return {"job": JobOut.model_validate(job), "message": f"Job {body.status.value} successfully"}


@admin_router.delete("/api/admin/jobs/{job_id}")
async def delete_job(
    job_id: str,
    _admin: str = AdminDependency,
    session: AsyncSession = Depends(get_session),
    repository: JobRepository = Depends(get_job_repository),
) -> dict[str, str]:
    await repository.delete(session, job_id)
    return {"message": "Job deleted successfully"}


@admin_router.get("/api/applications")
async def list_applications(
    status_filter: RecordStatus | None = Query(default=None, alias="status"),
    aggregate: str | None = None,
    search: str | None = None,
    page: int | None = Query(default=None, ge=1),
    limit: int | None = Query(default=None, ge=1),
    _admin: str = AdminDependency,
    session: AsyncSession = Depends(get_session),
    repository: ApplicationRepository = Depends(get_application_repository),
) -> dict[str, Any]:
    """Applications newest first; paginated only when ``page`` or ``limit`` is given."""

    counts = CountsOut.model_validate(await repository.get_counts(session))
    if aggregate == "counts":
        return {"counts": counts}

    filters = {"status": status_filter.value if status_filter else None, "search": search}
    pagination = Pagination.validated(page, limit) if page or limit else None
    result = await repository.find_all(session, filters=filters, pagination=pagination)
    payload: dict[str, Any] = {
        "data": [ApplicationOut.model_validate(application) for application in result.data],
        "counts": counts,
    }
    if pagination:
        total = result.count or 0
        payload["meta"] = PageMeta(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            total_pages=math.ceil(total / pagination.limit),
        )
    return payload


@admin_router.patch("/api/applications/{application_id}")
async def review_application(
    application_id: str,
    body: ReviewRequest,
    admin_email: str = AdminDependency,
    session: AsyncSession = Depends(get_session),
    repository: ApplicationRepository = Depends(get_application_repository),
) -> dict[str, Any]:
    application = await repository.update_status(
        session,
        application_id,
        body.status,
        reviewed_by=admin_email,
    )
    return {"data": ApplicationOut.model_validate(application)}


@admin_router.delete("/api/applications/{application_id}")
async def delete_application(
    application_id: str,
    _admin: str = AdminDependency,
    session: AsyncSession = Depends(get_session),
    repository: ApplicationRepository = Depends(get_application_repository),
) -> dict[str, bool]:
    await repository.delete(session, application_id)
    return {"success": True}


@public_router.get("/api/jobs")
async def list_public_jobs(
    category: str | None = None,
    job_type: str | None = Query(default=None, alias="jobType"),
    location: str | None = None,
    search: str | None = None,
    session: AsyncSession = Depends(get_session),
    repository: JobRepository = Depends(get_job_repository),
) -> dict[str, Any]:
    jobs = await repository.find_public(
        session,
        category=category,
        job_type=job_type,
        location=location,
        search=search,
    )
    return {"jobs": [JobOut.model_validate(job) for job in jobs]}


@public_router.post("/api/jobs", status_code=status.HTTP_201_CREATED)
async def submit_job(
    body: JobSubmission,
    session: AsyncSession = Depends(get_session),
    repository: JobRepository = Depends(get_job_repository),
) -> dict[str, Any]:
    job = await repository.submit(session, body.model_dump())
    logger.info("Job posting received: %s at %s", job.title, job.company)
    return {"job": JobOut.model_validate(job), "message": "Job posting submitted for review"}


@public_router.post("/api/applications", status_code=status.HTTP_201_CREATED)
async def submit_application(
    body: ApplicationSubmission,
    session: AsyncSession = Depends(get_session),
    repository: ApplicationRepository = Depends(get_application_repository),
) -> dict[str, Any]:
    application = await repository.submit(session, body.model_dump())
    logger.info("Application received from %s", application.email)
    return {"data": ApplicationOut.model_validate(application)}
