"""Chain engine tests."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from chainable.engine import (
    ChainMode,
    ChainPolicy,
    build_date_set,
    chain_length,
    extract_runs,
)
from chainable.utils.errors import InvalidTimestampError

TODAY = date(2026, 2, 7)


def days_ago(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=n) for n in offsets]


def test_extract_runs_empty() -> None:
    """No dates should produce no runs, not one empty run."""
    assert extract_runs([]) == []


def test_extract_runs_single_day() -> None:
    """A single date is a run of one."""
    assert extract_runs([TODAY]) == [[TODAY]]


def test_extract_runs_splits_on_gaps() -> None:
    """Runs come back most recent first, each newest day first."""
    runs = extract_runs(days_ago(5, 0, 3, 1, 4))
    assert runs == [days_ago(0, 1), days_ago(3, 4, 5)]


def test_extract_runs_three_runs_longest_in_middle() -> None:
    """Gaps of a single missing day still break the run."""
    runs = extract_runs(days_ago(3, 4, 6, 7, 8, 10, 11))
    assert runs == [days_ago(3, 4), days_ago(6, 7, 8), days_ago(10, 11)]


def test_extract_runs_collapses_duplicates() -> None:
    """Repeated days count once."""
    runs = extract_runs([TODAY, TODAY, TODAY - timedelta(days=1), TODAY])
    assert runs == [days_ago(0, 1)]


def test_extract_runs_spans_month_boundary() -> None:
    """Consecutive days across a month end belong to one run."""
    runs = extract_runs([date(2026, 3, 1), date(2026, 2, 28), date(2026, 2, 27)])
    assert runs == [[date(2026, 3, 1), date(2026, 2, 28), date(2026, 2, 27)]]


@pytest.mark.parametrize(
    "offsets",
    [
        (0,),
        (0, 1, 2),
        (3, 4, 6, 7, 8, 10, 11),
        (0, 2, 4, 6, 8),
        (1, 2, 3, 30, 31, 365),
    ],
)
def test_extract_runs_partitions_and_is_maximal(offsets: tuple[int, ...]) -> None:
    """Runs cover every day once, are ordered by recency and cannot be merged."""
    dates = set(days_ago(*offsets))
    runs = extract_runs(dates)

    flattened = [day for run in runs for day in run]
    assert len(flattened) == len(dates)
    assert set(flattened) == dates

    for run in runs:
        for newer, older in zip(run, run[1:]):
            assert newer - older == timedelta(days=1)
        assert run[0] + timedelta(days=1) not in dates
        assert run[-1] - timedelta(days=1) not in dates

    firsts = [run[0] for run in runs]
    assert firsts == sorted(firsts, reverse=True)
    for newer, older in zip(runs, runs[1:]):
        assert newer[-1] - older[0] > timedelta(days=1)


def test_chain_length_empty_in_both_modes() -> None:
    """No runs means zero, whatever the mode."""
    assert chain_length([], TODAY) == 0
    assert chain_length([], TODAY, mode=ChainMode.LONGEST) == 0
    assert chain_length([], TODAY, except_today=True) == 0


def test_chain_length_current_includes_today() -> None:
    """A run containing today is current."""
    runs = extract_runs(days_ago(0, 1, 3, 4, 5))
    assert chain_length(runs, TODAY) == 2
    assert chain_length(runs, TODAY, mode=ChainMode.LONGEST) == 3


def test_chain_length_yesterday_needs_except_today() -> None:
    """A run ending yesterday only counts when today is excused."""
    runs = extract_runs(days_ago(1, 2, 3))
    assert chain_length(runs, TODAY) == 0
    assert chain_length(runs, TODAY, except_today=True) == 3


def test_chain_length_stale_run_is_zero() -> None:
    """An older, longer run never counts as current."""
    runs = extract_runs(days_ago(3, 4, 6, 7, 8, 10, 11))
    assert chain_length(runs, TODAY) == 0
    assert chain_length(runs, TODAY, except_today=True) == 0
    assert chain_length(runs, TODAY, mode=ChainMode.LONGEST) == 3


def test_chain_length_longest_ignores_today_flags() -> None:
    """Longest mode reports history even when nothing is current."""
    runs = extract_runs(days_ago(10, 11, 12, 13))
    assert chain_length(runs, TODAY, mode=ChainMode.LONGEST, except_today=True) == 4
    assert chain_length(runs, TODAY, mode=ChainMode.LONGEST, except_today=False) == 4


def test_chain_length_longest_with_tied_runs() -> None:
    """Ties between runs of equal size still report that size."""
    runs = extract_runs(days_ago(0, 1, 3, 4, 6))
    assert chain_length(runs, TODAY, mode=ChainMode.LONGEST) == 2


@pytest.mark.parametrize(
    ("policy", "expected"),
    [
        (ChainPolicy(), 0),
        (ChainPolicy(except_today=True), 2),
        (ChainPolicy(longest=True), 4),
        (ChainPolicy(except_today=True, longest=True), 4),
    ],
)
def test_chain_policy_dispatch(policy: ChainPolicy, expected: int) -> None:
    """Policy flags select mode and today handling."""
    runs = extract_runs(days_ago(1, 2, 5, 6, 7, 8))
    assert policy.apply(runs, TODAY) == expected


def test_chain_policy_mode() -> None:
    """The longest flag picks the longest mode."""
    assert ChainPolicy().mode is ChainMode.CURRENT
    assert ChainPolicy(longest=True).mode is ChainMode.LONGEST


def test_build_date_set_collapses_same_day_timestamps() -> None:
    """Several records on one calendar day become one date."""
    values = [
        datetime(2026, 2, 7, 1, 0, tzinfo=UTC),
        datetime(2026, 2, 7, 23, 59, tzinfo=UTC),
        "2026-02-06T12:00:00Z",
        date(2026, 2, 6),
    ]
    assert build_date_set(values, UTC) == frozenset({date(2026, 2, 7), date(2026, 2, 6)})


def test_build_date_set_rejects_bad_values() -> None:
    """Unconvertible values fail instead of being dropped."""
    with pytest.raises(InvalidTimestampError) as excinfo:
        build_date_set([TODAY, None], UTC, column="created_at")
    assert excinfo.value.column == "created_at"
    assert excinfo.value.to_dict()["code"] == "INVALID_TIMESTAMP"


@pytest.mark.parametrize(("mode", "expected"), [("longest", 3), ("current", 0)])
def test_chain_length_accepts_mode_values(mode: str, expected: int) -> None:
    """Plain mode strings select the same branch as the enum members."""
    runs = extract_runs(days_ago(5, 6, 7))
    assert chain_length(runs, TODAY, mode=mode) == expected


def test_chain_length_rejects_unknown_mode() -> None:
    """An unknown mode is an error, not a silent fallback to current."""
    with pytest.raises(ValueError):
        chain_length(extract_runs([TODAY]), TODAY, mode="weekly")
