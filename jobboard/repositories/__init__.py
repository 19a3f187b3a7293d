"""Cached data access for reviewable tables."""

from .applications import ApplicationRepository, DuplicateApplicationError
from .base import BaseRepository, Pagination, QueryResult, RecordNotFoundError
from .jobs import JobRepository

__all__ = [
    "ApplicationRepository",
    "BaseRepository",
    "DuplicateApplicationError",
    "JobRepository",
    "Pagination",
    "QueryResult",
    "RecordNotFoundError",
]
