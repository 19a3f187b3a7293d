"""Enumerations describing record lifecycle statuses."""

from enum import Enum


class RecordStatus(str, Enum):
    """Every status an admin-manageable record can carry."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class ModerationStatus(str, Enum):
    """Statuses an admin may assign while reviewing a submission."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


ALL_STATUSES = "all"
