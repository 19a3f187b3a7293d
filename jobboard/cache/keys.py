"""Deterministic cache key construction for query parameters."""

from __future__ import annotations

import json
from typing import Any, Mapping

MAX_KEY_LENGTH = 100
HASHED_PREFIX_LENGTH = 20

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def _format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        if isinstance(value, (set, frozenset)):
            value = sorted(value, key=str)
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)


def generate_cache_key(prefix: str, params: Mapping[str, Any]) -> str:
    """Build ``prefix-k1=v1&k2=v2`` with keys sorted so argument order never matters."""

    param_string = "&".join(f"{key}={_format_value(params[key])}" for key in sorted(params))
    return f"{prefix}-{param_string}"


def generate_pagination_cache_key(prefix: str, pagination: Mapping[str, Any] | None = None) -> str:
    if not pagination:
        return f"{prefix}-pagination=default"

    return generate_cache_key(
        prefix,
        {
            "page": pagination.get("page") or 1,
            "limit": pagination.get("limit") or 10,
            "offset": pagination.get("offset") or 0,
        },
    )


def generate_filter_cache_key(prefix: str, filters: Mapping[str, Any] | None = None) -> str:
    clean = {key: value for key, value in (filters or {}).items() if not _is_empty(value)}
    if not clean:
        return f"{prefix}-filters=none"
    return generate_cache_key(prefix, clean)


def generate_query_cache_key(
    prefix: str,
    pagination: Mapping[str, Any] | None = None,
    filters: Mapping[str, Any] | None = None,
    additional_params: Mapping[str, Any] | None = None,
) -> str:
    """Combine pagination, filters and extra parameters into a single key."""

    params: dict[str, Any] = {}
    if pagination:
        params["page"] = pagination.get("page") or 1
        params["limit"] = pagination.get("limit") or 10
        if pagination.get("offset") is not None:
            params["offset"] = pagination["offset"]

    for extra in (filters, additional_params):
        for key, value in (extra or {}).items():
            if not _is_empty(value):
                params[key] = value

    return generate_cache_key(prefix, params)


def _rolling_hash(text: str) -> int:
    """31-multiplier string hash wrapped to a signed 32-bit integer."""

    encoded = text.encode("utf-16-le")
    result = 0
    for index in range(0, len(encoded), 2):
        code_unit = encoded[index] | (encoded[index + 1] << 8)
        result = ((result << 5) - result + code_unit) & 0xFFFFFFFF
    if result & 0x80000000:
        result -= 1 << 32
    return result


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def hash_cache_key(key: str) -> str:
    """Shorten keys longer than ``MAX_KEY_LENGTH``; collisions are tolerated."""

    if len(key) <= MAX_KEY_LENGTH:
        return key
    return f"{key[:HASHED_PREFIX_LENGTH]}-hash:{_to_base36(abs(_rolling_hash(key)))}"
