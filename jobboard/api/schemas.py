"""Request and response models for the HTTP API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobboard.services.statuses import ModerationStatus

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ReviewRequest(BaseModel):
    """Body of a moderation PATCH."""

    status: ModerationStatus


class CountsOut(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0


class JobSubmission(BaseModel):
    """Public job posting form."""

    title: str = Field(min_length=1, max_length=200)
    company: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=200)
    job_type: str = Field(min_length=1, max_length=32)
    job_level: str = Field(min_length=1, max_length=32)
    category: str = Field(min_length=1, max_length=64)
    description: list[str] | str
    requirements: list[str] | str
    company_email: str = Field(pattern=_EMAIL_PATTERN)
    company_website: str | None = None
    apply_url: str | None = None
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    is_remote: bool = False
    expires_at: datetime | None = None

    @field_validator("description", "requirements")
    @classmethod
    def _not_blank(cls, value: list[str] | str) -> list[str] | str:
        if not value:
            raise ValueError("must not be empty")
        return value


class JobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    title: str
    company: str
    location: str
    job_type: str
    job_level: str
    category: str
    description: list[str]
    requirements: list[str]
    company_email: str
    company_website: str | None = None
    apply_url: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    is_remote: bool = False
    expires_at: datetime | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ApplicationSubmission(BaseModel):
    """Public membership application form."""

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=_EMAIL_PATTERN)
    student_status: str = Field(min_length=1)
    school_name: str = Field(min_length=1, max_length=200)
    major: str = Field(min_length=1, max_length=200)
    years_since_graduation: int | None = Field(default=None, ge=0)
    telegram_id: str = Field(min_length=1, max_length=64)
    why_join: str = Field(min_length=1)
    web3_interests: str = Field(min_length=1)
    skills_bringing: str = Field(min_length=1)
    web3_journey: str = Field(min_length=1)
    contribution_areas: list[str] = Field(min_length=1)
    how_know_us: list[str] = Field(min_length=1)
    referrer_name: str | None = None
    last_words: str | None = None


class ApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: str
    name: str
    email: str
    student_status: str
    school_name: str
    major: str
    years_since_graduation: int | None = None
    telegram_id: str
    why_join: str
    web3_interests: str
    skills_bringing: str
    web3_journey: str
    contribution_areas: list[str]
    how_know_us: list[str]
    referrer_name: str | None = None
    last_words: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
