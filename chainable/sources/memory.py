"""In-process date source backed by plain Python records."""

from __future__ import annotations

import threading
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Any

from chainable.sources.base import resolve_owner_id
from chainable.utils.errors import UnknownAssociationError, UnknownColumnError


class InMemoryDateSource:
    """Hold related records per owner and association.

    Records may be mappings or arbitrary objects; the column is read with a
    key lookup for mappings and ``getattr`` otherwise.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, list[Any]]] = defaultdict(dict)
        self._associations: set[str] = set()
        self._lock = threading.Lock()

    def add(self, owner: Any, association: str, *records: Any) -> None:
        """Attach records to an owner under ``association``."""
        self.extend(owner, association, records)

    def extend(self, owner: Any, association: str, records: Iterable[Any]) -> None:
        """Attach an iterable of records to an owner under ``association``."""
        owner_id = resolve_owner_id(owner)
        with self._lock:
            self._associations.add(association)
            self._records[owner_id].setdefault(association, []).extend(records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._associations.clear()

    def fetch(self, owner: Any, association: str, column: str) -> list[Any]:
        """Return the ``column`` value of every record the owner has."""
        owner_id = resolve_owner_id(owner)
        with self._lock:
            if association not in self._associations:
                raise UnknownAssociationError(association)
            records = list(self._records.get(owner_id, {}).get(association, []))

        return [_read_column(record, column, association) for record in records]


def _read_column(record: Any, column: str, association: str) -> Any:
    if isinstance(record, Mapping):
        if column not in record:
            raise UnknownColumnError(column, association)
        return record[column]
    if not hasattr(record, column):
        raise UnknownColumnError(column, association)
    return getattr(record, column)
