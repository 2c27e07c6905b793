"""Date source adapters with lazy loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "DateSource": "chainable.sources.base",
    "InMemoryDateSource": "chainable.sources.memory",
    "SupabaseDateSource": "chainable.sources.supabase",
    "resolve_owner_id": "chainable.sources.base",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
