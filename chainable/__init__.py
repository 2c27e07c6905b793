"""Consecutive-day chains over an owner's timestamped records."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "ChainError": "chainable.utils.errors",
    "ChainMode": "chainable.engine",
    "ChainPolicy": "chainable.engine",
    "ChainService": "chainable.services.chain_service",
    "ChainSummary": "chainable.schemas.chain",
    "DEFAULT_COLUMN": "chainable.services.chain_service",
    "DateSource": "chainable.sources.base",
    "InMemoryDateSource": "chainable.sources.memory",
    "SupabaseDateSource": "chainable.sources.supabase",
    "build_date_set": "chainable.engine",
    "chain_length": "chainable.engine",
    "configure_logging": "chainable.utils.log",
    "extract_runs": "chainable.engine",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
