"""Local mirror of a remote admin collection with optimistic status patches."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, Iterable, Mapping, TypeVar, Union

from jobboard.admin.client import AdminAPIClient, AdminRequestError
from jobboard.admin.counts import AdminRecord, Counts, status_value, tally_statuses
from jobboard.metrics.prometheus_exporter import store_fetch_total, store_mutation_total
from jobboard.services.statuses import ALL_STATUSES, RecordStatus

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=AdminRecord)
C = TypeVar("C", bound=Counts)

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]

DEFAULT_ENVELOPE_KEYS = ("data", "items", "jobs", "applications")
DEFAULT_CONFIRM_MESSAGE = "Are you sure you want to delete this item?"


def extract_records(
    payload: Any,
    record_type: type[T],
    envelope_keys: Iterable[str] = DEFAULT_ENVELOPE_KEYS,
) -> list[T]:
    """Pull the record list out of whichever success envelope the endpoint used."""

    rows: Any = payload
    if isinstance(payload, Mapping):
        rows = []
        for key in envelope_keys:
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break
    if not isinstance(rows, list):
        return []
    return [record_type.model_validate(row) for row in rows]


def _validate_filter(status: RecordStatus | str) -> str:
    value = status_value(status)
    if value != ALL_STATUSES:
        RecordStatus(value)
    return value


class AdminListStore(Generic[T, C]):
    """Mirror a remote collection of status-bearing records and their counts.

    ``items`` always holds the full fetched collection; ``visible_items`` applies
    the selected status filter. Status updates and deletes patch ``items`` once
    the request succeeds and fall back to a full refetch when it fails.
    """

    def __init__(
        self,
        client: AdminAPIClient,
        *,
        record_type: type[T],
        counts_type: type[C] = Counts,  # type: ignore[assignment]
        initial_status: RecordStatus | str = ALL_STATUSES,
        enable_counts: bool = True,
        transform: Callable[[Any], list[T]] | None = None,
        transform_counts: Callable[[Mapping[str, Any]], C] | None = None,
        confirm: ConfirmCallback | None = None,
        confirm_message: str = DEFAULT_CONFIRM_MESSAGE,
        refetch_on_status_change: bool = False,
        discard_stale_responses: bool = False,
        owns_client: bool = True,
    ) -> None:
        self._client = client
        self._record_type = record_type
        self._counts_type = counts_type
        self._enable_counts = enable_counts
        self._transform = transform or (lambda payload: extract_records(payload, record_type))
        self._transform_counts = transform_counts or (lambda data: counts_type.model_validate(data or {}))
        self._confirm = confirm
        self._confirm_message = confirm_message
        self._refetch_on_status_change = refetch_on_status_change
        self._discard_stale = discard_stale_responses
        self._owns_client = owns_client

        self.items: list[T] = []
        self.counts: C | None = None
        self.selected_status: str = _validate_filter(initial_status)
        self.last_error: Exception | None = None

        self._in_flight = 0
        self._generation = 0
        self._counts_derived_locally = False
        self._closed = False

    async def __aenter__(self) -> "AdminListStore[T, C]":
        await self.refresh()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def visible_items(self) -> list[T]:
        if self.selected_status == ALL_STATUSES:
            return list(self.items)
        return [item for item in self.items if status_value(item.status) == self.selected_status]

    def calculate_counts_from_items(self, items: Iterable[T]) -> C | None:
        """Reduce ``items`` into counts, or ``None`` when counts are disabled."""

        if not self._enable_counts:
            return None
        return self._transform_counts(tally_statuses(items))

    async def fetch_items(self, status: str | None = None) -> None:
        """Replace the local collection with the endpoint's current records.

        Failures clear the collection and are recorded in ``last_error``;
        nothing is raised and nothing is retried. A closed store sends nothing.
        """

        if self._closed:
            logger.debug("Skipping fetch on closed store for %s", self._client.collection_path)
            return

        self._generation += 1
        generation = self._generation
        self._in_flight += 1
        try:
            payload = await self._client.list_items(status)
            items = self._transform(payload)
        except (AdminRequestError, ValueError) as exc:
            if self._is_discarded(generation):
                return
            logger.error("Failed to fetch items from %s: %s", self._client.collection_path, exc)
            store_fetch_total.labels(outcome="failure").inc()
            self.items = []
            self.last_error = exc
            return
        finally:
            self._in_flight -= 1

        if self._is_discarded(generation):
            logger.debug("Discarding superseded response for %s", self._client.collection_path)
            return

        store_fetch_total.labels(outcome="success").inc()
        self.items = items
        self.last_error = None
        if not self._enable_counts:
            return

        server_counts = payload.get("counts") if isinstance(payload, Mapping) else None
        if server_counts is not None and not self._counts_derived_locally:
            self.counts = self._transform_counts(server_counts)
        else:
            self._recount()

    async def refresh(self) -> None:
        status = None
        if self._refetch_on_status_change and self.selected_status != ALL_STATUSES:
            status = self.selected_status
        await self.fetch_items(status)

    async def fetch_counts(self) -> C | None:
        """Fetch the server aggregate; failures are logged and leave counts as they are."""

        if self._closed:
            return None
        try:
            payload = await self._client.fetch_counts()
            counts = self._transform_counts(payload.get("counts", payload))
        except (AdminRequestError, ValueError) as exc:
            logger.warning("Failed to fetch counts from %s: %s", self._client.collection_path, exc)
            return None

        if self._closed:
            return None
        if self._enable_counts and not self._counts_derived_locally:
            self.counts = counts
        return counts

    async def update_item_status(self, item_id: str, status: RecordStatus | str) -> None:
        """Change one record's status remotely, then patch it locally.

        On failure the collection is refetched and the error is re-raised.
        """

        new_status = RecordStatus(status_value(status)).value
        try:
            await self._client.update_status(item_id, new_status)
        except AdminRequestError as exc:
            logger.error("Failed to update %s to %s: %s", item_id, new_status, exc)
            store_mutation_total.labels(operation="update", outcome="failure").inc()
            await self.refresh()
            raise

        store_mutation_total.labels(operation="update", outcome="success").inc()
        if self._closed:
            return
        self.items = [
            item.model_copy(update={"status": new_status}) if item.id == item_id else item
            for item in self.items
        ]
        self._recount()

    async def delete_item(self, item_id: str) -> bool:
        """Delete one record after confirmation.

        Returns ``False`` without sending a request when confirmation is declined.
        """

        if not await self._confirm_delete():
            logger.info("Deletion of %s cancelled", item_id)
            return False

        try:
            await self._client.delete_item(item_id)
        except AdminRequestError as exc:
            logger.error("Failed to delete %s: %s", item_id, exc)
            store_mutation_total.labels(operation="delete", outcome="failure").inc()
            await self.refresh()
            raise

        store_mutation_total.labels(operation="delete", outcome="success").inc()
        if self._closed:
            return True
        self.items = [item for item in self.items if item.id != item_id]
        self._recount()
        return True

    async def set_selected_status(self, status: RecordStatus | str) -> None:
        self.selected_status = _validate_filter(status)
        if self._refetch_on_status_change:
            await self.refresh()

    async def close(self) -> None:
        """Stop applying results of requests still in flight and release the client."""

        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.close()

    def _is_discarded(self, generation: int) -> bool:
        if self._closed:
            return True
        return self._discard_stale and generation != self._generation

    def _recount(self) -> None:
        counts = self.calculate_counts_from_items(self.items)
        if counts is not None:
            self.counts = counts
            self._counts_derived_locally = True

    async def _confirm_delete(self) -> bool:
        if self._confirm is None:
            return True
        answer = self._confirm(self._confirm_message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)
