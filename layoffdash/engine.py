"""
Dashboard engine
================

This is the object a presentation layer (the CLI here) talks to:

1) Load dataset -> immutable tuple of LayoffRecord (the Record Store)
2) Keep the current FilterCriteria and the filtered subset it produced
3) Re-run the filter pass over the *full* store on every criteria change
4) Hand out aggregates and projections for the full set or the filtered subset

View modes (timeline granularity, chart grouping, language) are explicit
arguments; the engine only remembers the defaults from its config.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import pandas as pd

from .aggregator import (
    TOP_N, Aggregate, AggregateMode, ConfirmedPotentialSplit,
    aggregate, confirmed_potential_split,
)
from .filters import FilterCriteria, effective_country, filter_records
from .gazetteer import ROMANIA, romania_locations
from .i18n import normalize_language
from .loader import DatasetError, load_layoffs_json, record_to_dict
from .models import LayoffRecord
from .preferences import load_language, save_language
from .projection import (
    ChartSeries, CollectionView, TotalsView,
    project_chart, project_collection, project_totals,
)

logger = logging.getLogger(__name__)

OPTION_KINDS = ("country", "location", "year", "category")

CSV_COLUMNS = (
    "record_id", "company", "date", "employees_affected", "employees_potential",
    "is_potential", "location", "county", "country", "category", "total_employees",
    "total_group_employees", "has_compensation", "sources",
)


@dataclass
class DashboardConfig:
    """Defaults for a dashboard session."""
    data_path: str = "data/layoffs.json"
    language: Optional[str] = None  # None -> saved preference
    prefs_path: Optional[str] = None
    top_n: int = TOP_N
    timeline_mode: AggregateMode = AggregateMode.BY_MONTH
    grouping_mode: AggregateMode = AggregateMode.BY_YEAR_TOTAL
    persist_language: bool = True


@dataclass
class QueryState:
    """Current criteria and the subset they select (like a view)."""
    criteria: FilterCriteria
    filtered: Tuple[LayoffRecord, ...]


@dataclass
class Dashboard:
    """Record Store plus the session's filter state.

    `records` never changes after construction; `state.filtered` is rebuilt
    from scratch by every `apply_filters` call.
    """
    records: Tuple[LayoffRecord, ...] = ()
    config: DashboardConfig = field(default_factory=DashboardConfig)
    load_error: Optional[str] = None
    # Filter commands in order (for the report footer)
    command_log: List[str] = field(default_factory=list)
    language: str = field(init=False)
    state: QueryState = field(init=False)

    def __post_init__(self) -> None:
        self.records = tuple(self.records)
        if self.config.language:
            self.language = normalize_language(self.config.language)
        else:
            self.language = load_language(self.config.prefs_path)
        self.state = QueryState(criteria=FilterCriteria(), filtered=self.records)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None, config: Optional[DashboardConfig] = None) -> "Dashboard":
        """Load the dataset once. A failed load gives an empty dashboard with `load_error` set."""
        config = config or DashboardConfig()
        path = path or config.data_path
        try:
            records = load_layoffs_json(path)
        except DatasetError as e:
            logger.error("Failed to load layoff data: %s", e)
            return cls(records=(), config=config, load_error=str(e))
        return cls(records=records, config=config)

    # ---------------- Filters ----------------
    @property
    def criteria(self) -> FilterCriteria:
        return self.state.criteria

    @property
    def filtered(self) -> Tuple[LayoffRecord, ...]:
        return self.state.filtered

    def apply_filters(self, criteria: FilterCriteria) -> Tuple[LayoffRecord, ...]:
        filtered = filter_records(self.records, criteria)
        self.state = QueryState(criteria=criteria, filtered=filtered)
        logger.debug("Filter pass %s -> %d of %d records", criteria, len(filtered), len(self.records))
        return filtered

    def set_filter(self, kind: str, value: Any) -> Tuple[LayoffRecord, ...]:
        """Set (or clear, with a blank value) one criterion and re-filter."""
        return self.apply_filters(self.criteria.with_value(kind, value))

    def clear_filters(self) -> Tuple[LayoffRecord, ...]:
        return self.apply_filters(FilterCriteria())

    def filter_options(self, kind: str) -> List[str]:
        """Distinct values for a filter picker."""
        if kind == "country":
            return sorted({c for c in map(effective_country, self.records) if c})
        if kind == "location":
            if self.criteria.country == ROMANIA:
                return romania_locations()
            return sorted({r.location or r.country for r in self.records if r.location or r.country})
        if kind == "year":
            return sorted({str(r.year()) for r in self.records if r.year() is not None}, reverse=True)
        if kind == "category":
            return sorted({r.category for r in self.records if r.category})
        raise ValueError(f"option kind must be one of: {', '.join(OPTION_KINDS)}")

    # ---------------- Aggregates / projections ----------------
    def _scope(self, filtered: bool) -> Tuple[LayoffRecord, ...]:
        return self.state.filtered if filtered else self.records

    def aggregate(self, mode: AggregateMode, *, filtered: bool = True) -> Aggregate:
        return aggregate(self._scope(filtered), mode, top_n=self.config.top_n)

    def split(self, *, filtered: bool = False) -> ConfirmedPotentialSplit:
        return confirmed_potential_split(self._scope(filtered))

    def totals(self) -> TotalsView:
        """Header counters; always over the full record set."""
        return project_totals(self.split(filtered=False), self.language)

    def chart(self, mode: Optional[AggregateMode] = None, *, filtered: bool = True) -> ChartSeries:
        mode = mode or self.config.grouping_mode
        return project_chart(self.aggregate(mode, filtered=filtered), mode, self.language)

    def timeline(self, mode: Optional[AggregateMode] = None) -> ChartSeries:
        mode = mode or self.config.timeline_mode
        if not mode.is_timeline:
            raise ValueError("timeline mode must be 'month' or 'year'")
        return self.chart(mode)

    def collection(self) -> CollectionView:
        return project_collection(self.state.filtered, self.language)

    # ---------------- Language ----------------
    def set_language(self, lang: str) -> str:
        self.language = normalize_language(lang)
        if self.config.persist_language:
            save_language(self.language, self.config.prefs_path)
        return self.language

    # ---------------- Export ----------------
    def export_csv(self, path: str) -> None:
        """Write the filtered subset as a flat CSV table."""
        rows = [
            {
                "record_id": r.record_id,
                "company": r.company,
                "date": r.date,
                "employees_affected": r.employees_affected,
                "employees_potential": r.employees_potential,
                "is_potential": r.is_potential,
                "location": r.location,
                "county": r.county,
                "country": r.country,
                "category": r.category,
                "total_employees": r.total_employees,
                "total_group_employees": r.total_group_employees,
                "has_compensation": r.has_compensation(),
                "sources": " ".join(s.url for s in r.sources),
            }
            for r in self.state.filtered
        ]
        pd.DataFrame(rows, columns=list(CSV_COLUMNS)).to_csv(path, index=False, encoding="utf-8")

    def export_json(self, path: str) -> None:
        """Write the filtered subset in the same `{"layoffs": [...]}` shape the loader reads."""
        payload = {"layoffs": [record_to_dict(r) for r in self.state.filtered]}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

