"""Record and status-count models shared by the admin list store."""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jobboard.services.statuses import ModerationStatus, RecordStatus

C = TypeVar("C", bound="Counts")

_MODERATION_KEYS = tuple(status.value for status in ModerationStatus)


class AdminRecord(BaseModel):
    """Admin-manageable entity identified by ``id`` with a lifecycle status."""

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: str
    status: RecordStatus
    created_at: datetime | None = None


class Counts(BaseModel):
    """Tally of records by moderation status."""

    model_config = ConfigDict(extra="ignore")

    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    other: dict[str, int] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_total(cls, data: Any) -> Any:
        # Server aggregates may omit the total.
        if isinstance(data, Mapping) and data.get("total") is None:
            data = dict(data)
            data["total"] = sum(int(data.get(key) or 0) for key in _MODERATION_KEYS)
        return data


def status_value(status: RecordStatus | ModerationStatus | str) -> str:
    """Return the wire value of a status given as an enum member or a string."""

    if isinstance(status, (RecordStatus, ModerationStatus)):
        return status.value
    return str(status)


def tally_statuses(items: Iterable[AdminRecord]) -> dict[str, Any]:
    """Reduce records into the raw counts mapping passed to count transforms."""

    by_status = Counter(status_value(item.status) for item in items)
    tally: dict[str, Any] = {key: by_status.pop(key, 0) for key in _MODERATION_KEYS}
    tally["total"] = sum(tally.values())
    tally["other"] = dict(by_status)
    return tally


def calculate_counts_from_items(items: Iterable[AdminRecord], counts_type: type[C] = Counts) -> C:
    """Derive counts locally; ``total`` always equals pending + approved + rejected."""

    return counts_type.model_validate(tally_statuses(items))
