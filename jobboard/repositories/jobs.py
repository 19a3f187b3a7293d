"""Repository for job postings."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.db.models import Job
from jobboard.repositories.base import BaseRepository
from jobboard.services.statuses import ALL_STATUSES, RecordStatus


class JobRepository(BaseRepository[Job]):
    """Admin and public access to job postings."""

    model = Job
    search_column = "title"

    async def submit(self, session: AsyncSession, values: Mapping[str, Any]) -> Job:
        """Store a publicly submitted posting in the pending queue."""

        payload = dict(values)
        payload["status"] = RecordStatus.PENDING.value
        for field in ("description", "requirements"):
            value = payload.get(field)
            if isinstance(value, str):
                payload[field] = [value]
        return await self.create(session, payload)

    async def find_public(
        self,
        session: AsyncSession,
        *,
        category: str | None = None,
        job_type: str | None = None,
        location: str | None = None,
        search: str | None = None,
    ) -> list[Job]:
        """Approved, unexpired postings for the public board."""

        filters = {
            "category": category,
            "job_type": job_type,
            "location": location,
            "search": search,
        }
        key = self.cache_key("public", filters=filters)
        cached = self._cached(key)
        if cached:
            data, _ = cached
            return list(data)

        stmt = select(Job).where(
            Job.status == RecordStatus.APPROVED.value,
            or_(Job.expires_at.is_(None), Job.expires_at > datetime.utcnow()),
        )
        if category and category != ALL_STATUSES:
            stmt = stmt.where(Job.category == category)
        if job_type and job_type != ALL_STATUSES:
            stmt = stmt.where(Job.job_type == job_type)
        if location:
            stmt = stmt.where(Job.location.ilike(f"%{location}%"))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Job.title.ilike(pattern), Job.company.ilike(pattern)))

        result = await session.execute(stmt.order_by(Job.created_at.desc()))
        jobs = list(result.scalars().all())
        if jobs:
            self._cache.set_cached_query(key, jobs, len(jobs), self._list_ttl)
        return jobs
