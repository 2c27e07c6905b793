"""Supabase (PostgREST) backed date source."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from postgrest import APIError

from chainable.config import settings
from chainable.sources.base import resolve_owner_id
from chainable.utils.errors import ConfigurationError, DataSourceError, UnknownColumnError
from chainable.utils.supabase_client import get_service_client
from supabase import Client

logger = logging.getLogger(__name__)

# PostgREST caps each response at max-rows (1000 on Supabase)
DEFAULT_PAGE_SIZE = 1000


class SupabaseDateSource:
    """Read timestamps for an owner's rows from a Supabase table.

    Each association name maps to a table (the name itself unless ``tables``
    overrides it). Rows belong to the owner when ``owner_column`` equals the
    owner's id. Rows are read page by page until an empty page, so no history
    is cut off by the server's row limit.
    """

    def __init__(
        self,
        client: Client,
        owner_column: str = "user_id",
        tables: Mapping[str, str] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.client = client
        self.owner_column = owner_column
        self.tables = dict(tables or {})
        self.page_size = page_size

    @classmethod
    def from_settings(
        cls,
        owner_column: str = "user_id",
        tables: Mapping[str, str] | None = None,
    ) -> SupabaseDateSource:
        """Build a source on the service-role client from configured settings."""
        if not settings.has_supabase:
            raise ConfigurationError("Supabase connection settings are not configured")
        return cls(get_service_client(), owner_column=owner_column, tables=tables)

    def table_for(self, association: str) -> str:
        """Return the table backing ``association``."""
        return self.tables.get(association, association)

    def execute(self, query, default: Any = None) -> Any:
        """Execute a Supabase query and normalize API errors."""
        started = time.perf_counter()
        try:
            response = query.execute()
        except APIError as exc:
            message = getattr(exc, "message", None) or "Database request failed"
            logger.warning("Supabase query failed: %s", message)
            raise DataSourceError(str(message)) from exc

        elapsed_ms = (time.perf_counter() - started) * 1000
        threshold_ms = settings.slow_query_log_threshold_ms
        if threshold_ms > 0 and elapsed_ms >= threshold_ms:
            logger.warning("Slow Supabase query %.1fms", elapsed_ms)
        data = response.data
        return default if data is None and default is not None else data

    def fetch(self, owner: Any, association: str, column: str) -> list[Any]:
        """Return ``column`` for every row the owner has in the association table."""
        table = self.table_for(association)
        owner_id = resolve_owner_id(owner)

        values: list[Any] = []
        start = 0
        while True:
            query = (
                self.client.table(table)
                .select(column)
                .eq(self.owner_column, owner_id)
                .order(column, desc=True)
                .range(start, start + self.page_size - 1)
            )
            rows = self.execute(query, default=[])
            if not rows:
                break
            for row in rows:
                if column not in row:
                    raise UnknownColumnError(column, association)
                values.append(row[column])

            # the server may cap a page below page_size, so only an empty page ends
            start += len(rows)
        return values
