"""Helpers shared by Supabase repositories."""

from datetime import datetime
from typing import Any

import httpx
from postgrest.exceptions import APIError

from buyin_ledger.domain.errors import StoreError

UNIQUE_VIOLATION = "23505"


def execute(query: Any) -> Any:
    """Execute a PostgREST query, wrapping client failures in StoreError."""
    try:
        return query.execute()
    except APIError as exc:
        raise StoreError(f"Supabase request failed: {exc.message}") from exc
    except httpx.HTTPError as exc:
        raise StoreError(f"Supabase request failed: {exc}") from exc


def is_unique_violation(exc: StoreError) -> bool:
    """Return true when the wrapped error is a uniqueness violation."""
    cause = exc.__cause__
    return isinstance(cause, APIError) and cause.code == UNIQUE_VIOLATION


def parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
