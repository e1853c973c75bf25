"""Shared helpers for Supabase-backed repositories."""

import logging
from typing import Any, Protocol

import httpx
from postgrest.exceptions import APIError

from foodshare.domain.errors import StorageUnavailableError

_logger = logging.getLogger(__name__)


class _Executable(Protocol):
    def execute(self) -> Any: ...


def execute(query: _Executable, action: str) -> list[dict[str, Any]]:
    """Run a PostgREST query, translating transport failures."""
    try:
        response = query.execute()
    except (APIError, httpx.HTTPError) as exc:
        _logger.exception("Supabase %s failed", action)
        raise StorageUnavailableError(f"Supabase {action} failed") from exc
    return list(response.data or [])


def optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
