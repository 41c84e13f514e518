"""
Aggregator
==========

Turns a record set (full or filtered) into an `Aggregate`: an ordered list of
`(label, value)` pairs. Every chart/grouping mode is one member of the closed
`AggregateMode` enum, each with its own bucket key, value, ordering and
truncation rule:

| mode            | bucket key                         | value                  | order        | limit |
|-----------------|------------------------------------|------------------------|--------------|-------|
| BY_MONTH        | date[:7]                           | affected               | key asc      | all   |
| BY_YEAR         | date[:4]                           | affected               | key asc      | all   |
| BY_YEAR_TOTAL   | calendar year                      | affected + potential   | year asc     | all   |
| BY_CATEGORY     | category or "Other"                | affected               | value desc   | top 10|
| BY_LOCATION     | county or location or "Other"      | affected               | value desc   | top 10|
| BY_COMPANY_TOP  | one row per record (company name)  | affected               | value desc   | top 10|

Descending sorts are stable: equal values keep first-encountered order.
The confirmed/potential split used by the header counters lives here too.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

import pandas as pd

from .models import LayoffRecord

Aggregate = List[Tuple[str, int]]

TOP_N = 10
OTHER = "Other"
UNKNOWN_YEAR = "Unknown"


class AggregateMode(Enum):
    BY_MONTH = "month"
    BY_YEAR = "year"
    BY_YEAR_TOTAL = "year_total"
    BY_CATEGORY = "category"
    BY_LOCATION = "location"
    BY_COMPANY_TOP = "company"

    @classmethod
    def parse(cls, name: str) -> "AggregateMode":
        """Look a mode up by its value ("month") or member name ("BY_MONTH")."""
        key = (name or "").strip()
        for m in cls:
            if key.lower() == m.value or key.upper() == m.name:
                return m
        raise ValueError(f"mode must be one of: {', '.join(m.value for m in cls)}")

    @property
    def is_timeline(self) -> bool:
        return self in (AggregateMode.BY_MONTH, AggregateMode.BY_YEAR)


def year_label(record: LayoffRecord) -> str:
    y = record.year()
    return str(y) if y is not None else UNKNOWN_YEAR


def _year_order(label: str) -> Tuple[bool, str]:
    # "Unknown" after every real year
    return (label == UNKNOWN_YEAR, label.zfill(4))


def _frame(records: Sequence[LayoffRecord],
           key: Callable[[LayoffRecord], str],
           value: Callable[[LayoffRecord], int]) -> pd.DataFrame:
    return pd.DataFrame({
        "key": [key(r) for r in records],
        "value": [value(r) for r in records],
    })


def _pairs(series: pd.Series) -> Aggregate:
    return [(str(k), int(v)) for k, v in series.items()]


def _grouped(df: pd.DataFrame) -> pd.Series:
    # sort=False keeps buckets in first-encountered order
    return df.groupby("key", sort=False)["value"].sum()


def _top(series: pd.Series, n: int) -> pd.Series:
    return series.sort_values(ascending=False, kind="stable").head(n)


def aggregate(records: Sequence[LayoffRecord], mode: AggregateMode, *, top_n: int = TOP_N) -> Aggregate:
    """Group `records` according to `mode`. Never mutates the input."""
    if not isinstance(mode, AggregateMode):
        raise TypeError(f"mode must be an AggregateMode, got {mode!r}")
    if not records:
        return []

    affected = lambda r: r.employees_affected

    if mode is AggregateMode.BY_MONTH:
        df = _frame(records, lambda r: r.date[:7], affected)
        return _pairs(df.groupby("key", sort=True)["value"].sum())

    if mode is AggregateMode.BY_YEAR:
        df = _frame(records, lambda r: r.date[:4], affected)
        return _pairs(df.groupby("key", sort=True)["value"].sum())

    if mode is AggregateMode.BY_YEAR_TOTAL:
        df = _frame(records, year_label, lambda r: r.employees_affected + r.potential_count())
        pairs = _pairs(_grouped(df))
        return sorted(pairs, key=lambda kv: _year_order(kv[0]))

    if mode is AggregateMode.BY_CATEGORY:
        df = _frame(records, lambda r: r.category or OTHER, affected)
        return _pairs(_top(_grouped(df), top_n))

    if mode is AggregateMode.BY_LOCATION:
        df = _frame(records, lambda r: r.county or r.location or OTHER, affected)
        return _pairs(_top(_grouped(df), top_n))

    # BY_COMPANY_TOP: no bucketing, one entry per record
    df = _frame(records, lambda r: r.company, affected)
    top = df.sort_values("value", ascending=False, kind="stable").head(top_n)
    return [(str(k), int(v)) for k, v in zip(top["key"], top["value"])]


# ---------------- Confirmed / potential split ----------------
@dataclass(frozen=True)
class ConfirmedPotentialSplit:
    """Per-year confirmed and potential sums, years ascending."""
    confirmed_by_year: Tuple[Tuple[str, int], ...] = ()
    potential_by_year: Tuple[Tuple[str, int], ...] = ()

    @property
    def confirmed_total(self) -> int:
        return sum(v for _, v in self.confirmed_by_year)

    @property
    def potential_total(self) -> int:
        return sum(v for _, v in self.potential_by_year)

    def years(self) -> List[str]:
        return [y for y, _ in self.confirmed_by_year]


def confirmed_potential_split(records: Sequence[LayoffRecord]) -> ConfirmedPotentialSplit:
    """Split each year's counts into confirmed and potential.

    A record flagged `is_potential` puts both its affected and potential counts
    into the potential bucket. Otherwise affected is confirmed and the potential
    figure (if any) still goes to potential.
    """
    confirmed: Dict[str, int] = {}
    potential: Dict[str, int] = {}
    for r in records:
        year = year_label(r)
        confirmed.setdefault(year, 0)
        potential.setdefault(year, 0)
        if r.is_potential:
            potential[year] += r.employees_affected + r.potential_count()
        else:
            confirmed[year] += r.employees_affected
            potential[year] += r.potential_count()

    years = sorted(confirmed, key=_year_order)
    return ConfirmedPotentialSplit(
        confirmed_by_year=tuple((y, confirmed[y]) for y in years),
        potential_by_year=tuple((y, potential[y]) for y in years),
    )
