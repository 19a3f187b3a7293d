"""SQLAlchemy models describing the job board tables."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from jobboard.services.statuses import RecordStatus


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class ReviewMixin:
    """Moderation columns shared by every reviewable submission."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    status: Mapped[str] = mapped_column(
        String(16), default=RecordStatus.PENDING.value, index=True, nullable=False
    )
    reviewed_by: Mapped[str | None] = mapped_column(String(255))
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class Job(ReviewMixin, Base):
    """Job posting submitted by a company and reviewed by admins."""

    __tablename__ = "jobs"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    job_type: Mapped[str] = mapped_column(String(32), nullable=False)
    job_level: Mapped[str] = mapped_column(String(32), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[list[str]] = mapped_column(JSON, default=list)
    requirements: Mapped[list[str]] = mapped_column(JSON, default=list)
    company_email: Mapped[str] = mapped_column(String(255), nullable=False)
    company_website: Mapped[str | None] = mapped_column(String(512))
    apply_url: Mapped[str | None] = mapped_column(String(512))
    salary_min: Mapped[int | None] = mapped_column(Integer)
    salary_max: Mapped[int | None] = mapped_column(Integer)
    is_remote: Mapped[bool] = mapped_column(Boolean, default=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class Application(ReviewMixin, Base):
    """Membership application submitted through the public form."""

    __tablename__ = "applications"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    student_status: Mapped[str] = mapped_column(String(32), nullable=False)
    school_name: Mapped[str] = mapped_column(String(200), nullable=False)
    major: Mapped[str] = mapped_column(String(200), nullable=False)
    years_since_graduation: Mapped[int | None] = mapped_column(Integer)
    telegram_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    why_join: Mapped[str] = mapped_column(Text, nullable=False)
    web3_interests: Mapped[str] = mapped_column(Text, nullable=False)
    skills_bringing: Mapped[str] = mapped_column(Text, nullable=False)
    web3_journey: Mapped[str] = mapped_column(Text, nullable=False)
    contribution_areas: Mapped[list[str]] = mapped_column(JSON, default=list)
    how_know_us: Mapped[list[str]] = mapped_column(JSON, default=list)
    referrer_name: Mapped[str | None] = mapped_column(String(100))
    last_words: Mapped[str | None] = mapped_column(Text)
