"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


store_fetch_total = Counter(
    "admin_store_fetch_total",
    "Admin list store collection fetches by outcome.",
    ["outcome"],
)

store_mutation_total = Counter(
    "admin_store_mutation_total",
    "Admin list store status updates and deletes by outcome.",
    ["operation", "outcome"],
)

query_cache_lookups_total = Counter(
    "query_cache_lookups_total",
    "Repository query cache lookups by result.",
    ["table", "result"],
)
