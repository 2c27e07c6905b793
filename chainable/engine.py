"""Chain engine: group calendar days into consecutive runs and measure them.

A chain (or run) is a maximal sequence of calendar days with no gaps, held
most recent day first. ``extract_runs`` partitions a set of days into chains
ordered from the most recent chain to the oldest, and ``chain_length`` reduces
that list to a single number under a current/longest policy.

Nothing here touches a clock or a data store. "Today" is always passed in.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta, tzinfo
from enum import Enum
from typing import Any

from chainable.utils.time import to_calendar_date

ONE_DAY = timedelta(days=1)

Run = list[date]


class ChainMode(str, Enum):
    """Which chain ``chain_length`` reports."""

    CURRENT = "current"
    LONGEST = "longest"


def build_date_set(
    values: Iterable[Any],
    zone: tzinfo | None = None,
    column: str | None = None,
) -> frozenset[date]:
    """Convert raw timestamps to calendar days, collapsing same-day records."""
    return frozenset(to_calendar_date(value, zone, column) for value in values)


def extract_runs(dates: Iterable[date]) -> list[Run]:
    """Partition days into consecutive-day runs, most recent run first."""
    days = sorted(set(dates), reverse=True)
    if not days:
        return []

    runs: list[Run] = []
    run = [days[0]]
    for previous, day in zip(days, days[1:]):
        # descending order, so the previous day is "tomorrow" when consecutive
        if previous == day + ONE_DAY:
            run.append(day)
        else:
            runs.append(run)
            run = [day]
    runs.append(run)
    return runs


def chain_length(
    runs: Sequence[Run],
    today: date,
    mode: ChainMode | str = ChainMode.CURRENT,
    except_today: bool = False,
) -> int:
    """Return the current or longest chain length.

    In ``CURRENT`` mode only the most recent run counts, and only while it is
    still alive: it must include ``today``, or ``today - 1`` when
    ``except_today`` allows for the rest of today to extend it. ``LONGEST``
    ignores both ``today`` and ``except_today``.
    """
    if not runs:
        return 0

    if ChainMode(mode) is ChainMode.LONGEST:
        return max(len(run) for run in runs)

    latest = runs[0]
    if today in latest or (except_today and today - ONE_DAY in latest):
        return len(latest)
    return 0


@dataclass(frozen=True)
class ChainPolicy:
    """Length policy flags for a chain lookup."""

    except_today: bool = False
    longest: bool = False

    @property
    def mode(self) -> ChainMode:
        return ChainMode.LONGEST if self.longest else ChainMode.CURRENT

    def apply(self, runs: Sequence[Run], today: date) -> int:
        """Reduce ``runs`` to a single length under this policy."""
        return chain_length(runs, today, mode=self.mode, except_today=self.except_today)
