"""Date source adapter interface."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DateSource(Protocol):
    """Anything that can list raw timestamps for an owner's related records."""

    def fetch(self, owner: Any, association: str, column: str) -> Sequence[Any]:
        """Return one raw timestamp per related record."""
        ...


def resolve_owner_id(owner: Any) -> str:
    """Return a stable string id for an application-defined owner value."""
    if isinstance(owner, Mapping) and "id" in owner:
        return str(owner["id"])
    owner_id = getattr(owner, "id", None)
    if owner_id is not None:
        return str(owner_id)
    return str(owner)
