"""Admin data-management layer: HTTP client, list store and review queues."""

from .client import AdminAPIClient, AdminRequestError
from .counts import AdminRecord, Counts, calculate_counts_from_items
from .dashboard import (
    AdminDashboard,
    ApplicationItem,
    JobItem,
    create_applications_store,
    create_jobs_store,
)
from .store import AdminListStore, extract_records

__all__ = [
    "AdminAPIClient",
    "AdminDashboard",
    "AdminListStore",
    "AdminRecord",
    "AdminRequestError",
    "ApplicationItem",
    "Counts",
    "JobItem",
    "calculate_counts_from_items",
    "create_applications_store",
    "create_jobs_store",
    "extract_records",
]
