"""Chain lookups for an owner's related records."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from chainable.engine import ChainMode, ChainPolicy, Run, build_date_set, chain_length, extract_runs
from chainable.schemas.chain import ChainSummary
from chainable.sources.base import DateSource, resolve_owner_id
from chainable.utils.time import reference_zone, today_in_zone

DEFAULT_COLUMN = "created_at"

logger = logging.getLogger(__name__)


class ChainService:
    """Compute day chains from any date source.

    ``today`` supplies the current calendar day; it defaults to the day in
    the configured reference zone at call time.
    """

    def __init__(self, source: DateSource, today: Callable[[], date] | None = None) -> None:
        self.source = source
        self._today = today or today_in_zone

    def today(self) -> date:
        return self._today()

    def _runs(self, owner: Any, association: str, column: str) -> list[Run]:
        raw = self.source.fetch(owner, association, column)
        days = build_date_set(raw, reference_zone(), column)
        runs = extract_runs(days)
        logger.debug(
            "Chains for %s.%s on %s: %s records, %s days, %s runs",
            resolve_owner_id(owner),
            association,
            column,
            len(raw),
            len(days),
            len(runs),
        )
        return runs

    def chain_length_for(
        self,
        owner: Any,
        association: str,
        column: str = DEFAULT_COLUMN,
        except_today: bool = False,
        longest: bool = False,
    ) -> int:
        """Return the number of consecutive days the owner has records for.

        By default this is the current chain, which must include today. With
        ``except_today`` a chain ending yesterday still counts, since the owner
        may yet add a record today. With ``longest`` the longest chain in the
        whole history is reported instead.
        """
        policy = ChainPolicy(except_today=except_today, longest=longest)
        runs = self._runs(owner, association, column)
        return policy.apply(runs, self.today())

    def all_chains_for(
        self,
        owner: Any,
        association: str,
        column: str = DEFAULT_COLUMN,
    ) -> list[list[date]]:
        """Return every chain, most recent first, each listed newest day first.

        Single-day chains are included; filter the result for longer ones.
        """
        return [list(run) for run in self._runs(owner, association, column)]

    def summary(
        self,
        owner: Any,
        association: str,
        column: str = DEFAULT_COLUMN,
    ) -> ChainSummary:
        """Return current and longest chains from a single fetch."""
        runs = self._runs(owner, association, column)
        today = self.today()
        return ChainSummary(
            owner_id=resolve_owner_id(owner),
            association=association,
            column=column,
            today=today,
            current=chain_length(runs, today),
            current_except_today=chain_length(runs, today, except_today=True),
            longest=chain_length(runs, today, mode=ChainMode.LONGEST),
            chains=runs,
        )
