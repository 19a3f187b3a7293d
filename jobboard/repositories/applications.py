"""Repository for membership applications."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.db.models import Application
from jobboard.repositories.base import BaseRepository
from jobboard.services.statuses import RecordStatus


class DuplicateApplicationError(ValueError):
    """Raised when an applicant has already applied."""


class ApplicationRepository(BaseRepository[Application]):
    model = Application
    search_column = "name"

    async def find_duplicate(
        self,
        session: AsyncSession,
        *,
        email: str,
        telegram_id: str,
        name: str,
        school_name: str,
    ) -> Application | None:
        """Match by e-mail, telegram id, or the name and school combination."""

        stmt = (
            select(Application)
            .where(
                or_(
                    Application.email == email,
                    Application.telegram_id == telegram_id,
                    and_(Application.name == name, Application.school_name == school_name),
                )
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def submit(self, session: AsyncSession, values: Mapping[str, Any]) -> Application:
        existing = await self.find_duplicate(
            session,
            email=values["email"],
            telegram_id=values["telegram_id"],
            name=values["name"],
            school_name=values["school_name"],
        )
        if existing is not None:
            raise DuplicateApplicationError(
                "An application with this email, telegram ID, or personal information already exists",
            )
        payload = dict(values)
        payload["status"] = RecordStatus.PENDING.value
        return await self.create(session, payload)
