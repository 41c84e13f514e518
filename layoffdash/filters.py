"""
Filter engine
=============

`FilterCriteria` is rebuilt from the current UI/query state on every pass and
`filter_records` runs one linear scan over the full record set:

- every set criterion must match (logical AND), unset criteria match everything
- the output keeps the original relative order
- the input is never modified; the result is a fresh tuple
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .gazetteer import ROMANIA, is_romania_location
from .models import LayoffRecord


class CompensationFilter(str, Enum):
    WITH = "with"
    WITHOUT = "without"


@dataclass(frozen=True)
class FilterCriteria:
    country: Optional[str] = None
    location: Optional[str] = None
    year: Optional[str] = None
    category: Optional[str] = None
    compensation: Optional[CompensationFilter] = None
    search: Optional[str] = None

    def is_empty(self) -> bool:
        return self == FilterCriteria()

    def with_value(self, kind: str, value: Any) -> "FilterCriteria":
        """Return a copy with one criterion set (or cleared when value is blank)."""
        if kind not in FILTER_KINDS:
            raise ValueError(f"filter kind must be one of: {', '.join(FILTER_KINDS)}")
        merged = self.as_dict()
        merged[kind] = value
        return normalize_criteria(merged)

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "country": self.country,
            "location": self.location,
            "year": self.year,
            "category": self.category,
            "compensation": self.compensation.value if self.compensation else None,
            "search": self.search,
        }


FILTER_KINDS = ("country", "location", "year", "category", "compensation", "search")


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def normalize_criteria(raw: Dict[str, Any]) -> FilterCriteria:
    """Build FilterCriteria from loosely-typed input (form values, CLI args).

    Empty strings mean "unset". The search term is lowercased and trimmed here
    so the predicate does not redo it per record.
    """
    compensation = _blank_to_none(raw.get("compensation"))
    if compensation is not None:
        try:
            compensation = CompensationFilter(compensation.lower())
        except ValueError:
            raise ValueError("compensation filter must be 'with' or 'without'") from None

    search = _blank_to_none(raw.get("search"))
    return FilterCriteria(
        country=_blank_to_none(raw.get("country")),
        location=_blank_to_none(raw.get("location")),
        year=_blank_to_none(raw.get("year")),
        category=_blank_to_none(raw.get("category")),
        compensation=compensation,
        search=search.lower() if search else None,
    )


# ---------------- Predicates ----------------
def effective_country(record: LayoffRecord) -> Optional[str]:
    if record.country:
        return record.country
    if record.location == ROMANIA:
        return ROMANIA
    return None


def _fuzzy_match(needle: str, value: Optional[str]) -> bool:
    """Case-insensitive substring test in both directions; blanks never match."""
    if not needle or not value:
        return False
    a, b = needle.lower(), value.lower()
    return a in b or b in a


def _country_pred(country: str) -> Callable[[LayoffRecord], bool]:
    return lambda r: effective_country(r) == country or is_romania_location(r.location or "")

def _location_pred(location: str) -> Callable[[LayoffRecord], bool]:
    return lambda r: _fuzzy_match(location, r.location) or _fuzzy_match(location, r.county)

def _year_pred(year: str) -> Callable[[LayoffRecord], bool]:
    # malformed dates give year() None and never match
    return lambda r: r.year() is not None and str(r.year()) == year

def _compensation_pred(flag: CompensationFilter) -> Callable[[LayoffRecord], bool]:
    if flag is CompensationFilter.WITH:
        return lambda r: r.has_compensation()
    return lambda r: not r.has_compensation()

def _search_pred(term: str) -> Callable[[LayoffRecord], bool]:
    term = term.lower().strip()
    return lambda r: term in r.company.lower()


def build_predicates(criteria: FilterCriteria) -> List[Callable[[LayoffRecord], bool]]:
    preds: List[Callable[[LayoffRecord], bool]] = []
    if criteria.country:
        preds.append(_country_pred(criteria.country))
    if criteria.location:
        preds.append(_location_pred(criteria.location))
    if criteria.year:
        preds.append(_year_pred(criteria.year))
    if criteria.category:
        category = criteria.category
        preds.append(lambda r: r.category == category)
    if criteria.compensation:
        preds.append(_compensation_pred(criteria.compensation))
    if criteria.search:
        preds.append(_search_pred(criteria.search))
    return preds


def matches(record: LayoffRecord, criteria: FilterCriteria) -> bool:
    return all(p(record) for p in build_predicates(criteria))


def filter_records(records: Iterable[LayoffRecord], criteria: FilterCriteria) -> Tuple[LayoffRecord, ...]:
    """Return the records passing every set criterion, in their original order."""
    preds = build_predicates(criteria)
    return tuple(r for r in records if all(p(r) for p in preds))
