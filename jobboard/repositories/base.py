"""Shared query, caching and moderation logic for reviewable tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy import ColumnElement, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.cache import QueryResultCache, generate_query_cache_key, hash_cache_key
from jobboard.config.settings import Settings, get_settings
from jobboard.db.models import Base
from jobboard.metrics.prometheus_exporter import query_cache_lookups_total
from jobboard.services.statuses import ALL_STATUSES, ModerationStatus

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


class RecordNotFoundError(LookupError):
    """Raised when a record with the requested id does not exist."""

    def __init__(self, table: str, record_id: str) -> None:
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} record {record_id} not found")


@dataclass(slots=True)
class Pagination:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @classmethod
    def validated(cls, page: int | None = None, limit: int | None = None) -> "Pagination":
        """Clamp to ``page >= 1`` and ``1 <= limit <= MAX_PAGE_SIZE``."""

        return cls(
            page=max(1, page or 1),
            limit=min(max(1, limit or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def as_params(self) -> dict[str, int]:
        return {"page": self.page, "limit": self.limit}


@dataclass(slots=True)
class QueryResult(Generic[ModelT]):
    data: list[ModelT]
    count: int | None


class BaseRepository(Generic[ModelT]):
    """Facade over one reviewable table with an LRU cache in front of reads.

    Every write clears the table's cache, so cached reads are never older than
    the last write made through this repository.
    """

    model: type[ModelT]
    search_column: str = "id"

    def __init__(
        self,
        cache: QueryResultCache[Any] | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._cache: QueryResultCache[Any] = cache or QueryResultCache(
            settings.query_cache_size,
            settings.query_cache_ttl,
        )
        self._list_ttl = settings.query_cache_ttl
        self._counts_ttl = settings.counts_cache_ttl

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    @property
    def cache(self) -> QueryResultCache[Any]:
        return self._cache

    def cache_key(
        self,
        operation: str,
        pagination: Pagination | None = None,
        filters: Mapping[str, Any] | None = None,
        additional_params: Mapping[str, Any] | None = None,
    ) -> str:
        prefix = f"{self.table_name}-{operation}"
        key = generate_query_cache_key(
            prefix,
            pagination.as_params() if pagination else None,
            filters,
            additional_params,
        )
        return hash_cache_key(key)

    def clear_cache(self, pattern: str | None = None) -> None:
        if pattern:
            self._cache.delete_pattern(pattern)
        else:
            self._cache.clear()

    def _cached(self, key: str) -> tuple[Any, int | None] | None:
        cached = self._cache.get_cached_query(key)
        query_cache_lookups_total.labels(table=self.table_name, result="hit" if cached else "miss").inc()
        return cached

    def _filter_clauses(self, filters: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
        if not filters:
            return []
        clauses: list[ColumnElement[bool]] = []
        status = filters.get("status")
        if status and status != ALL_STATUSES:
            clauses.append(self.model.status == status)
        search = filters.get("search")
        if search:
            clauses.append(getattr(self.model, self.search_column).ilike(f"%{search}%"))
        if filters.get("date_from"):
            clauses.append(self.model.created_at >= filters["date_from"])
        if filters.get("date_to"):
            clauses.append(self.model.created_at <= filters["date_to"])
        return clauses

    async def find_all(
        self,
        session: AsyncSession,
        *,
        filters: Mapping[str, Any] | None = None,
        pagination: Pagination | None = None,
    ) -> QueryResult[ModelT]:
        """Return records newest first, optionally filtered and paginated."""

        key = self.cache_key("list", pagination, filters)
        cached = self._cached(key)
        if cached:
            data, count = cached
            return QueryResult(data=list(data), count=count)

        clauses = self._filter_clauses(filters)
        stmt = select(self.model).where(*clauses).order_by(self.model.created_at.desc())
        if pagination:
            stmt = stmt.offset(pagination.offset).limit(pagination.limit)
        result = await session.execute(stmt)
        data = list(result.scalars().all())

        count = len(data)
        if pagination:
            count_stmt = select(func.count()).select_from(self.model).where(*clauses)
            count = (await session.execute(count_stmt)).scalar_one()

        if data:
            self._cache.set_cached_query(key, data, count, self._list_ttl)
        return QueryResult(data=data, count=count)

    async def get_counts(self, session: AsyncSession) -> dict[str, int]:
        """Tally rows per moderation status; ``total`` covers every row."""

        key = f"{self.table_name}-counts"
        cached = self._cached(key)
        if cached:
            data, _ = cached
            return dict(data[0])

        stmt = select(self.model.status, func.count()).group_by(self.model.status)
        rows = (await session.execute(stmt)).all()
        by_status = {status: count for status, count in rows}
        counts = {"total": sum(by_status.values())}
        for status in ModerationStatus:
            counts[status.value] = by_status.get(status.value, 0)

        self._cache.set_cached_query(key, [counts], 1, self._counts_ttl)
        return counts

    async def get(self, session: AsyncSession, record_id: str) -> ModelT:
        record = await session.get(self.model, record_id)
        if record is None:
            raise RecordNotFoundError(self.table_name, record_id)
        return record

    async def create(self, session: AsyncSession, values: Mapping[str, Any]) -> ModelT:
        record = self.model(**values)
        session.add(record)
        await session.commit()
        await session.refresh(record)
        self.clear_cache()
        return record

    async def update_status(
        self,
        session: AsyncSession,
        record_id: str,
        status: ModerationStatus,
        *,
        reviewed_by: str | None = None,
    ) -> ModelT:
        """Persist a moderation decision together with who made it and when."""

        record = await self.get(session, record_id)
        record.status = ModerationStatus(status).value
        record.reviewed_by = reviewed_by
        record.reviewed_at = datetime.utcnow()
        session.add(record)
        await session.commit()
        await session.refresh(record)
        self.clear_cache()
        logger.info("%s %s marked %s by %s", self.table_name, record_id, record.status, reviewed_by)
        return record

    async def delete(self, session: AsyncSession, record_id: str) -> None:
        stmt = delete(self.model).where(self.model.id == record_id)
        result = await session.execute(stmt)
        await session.commit()
        if result.rowcount == 0:
            raise RecordNotFoundError(self.table_name, record_id)
        self.clear_cache()
        logger.info("%s %s deleted", self.table_name, record_id)

