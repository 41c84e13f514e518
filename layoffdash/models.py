"""
Data model (LayoffRecord)
=========================

Each entry of the `layoffs` array in the JSON dataset is converted into a
`LayoffRecord` object. Records are immutable (`frozen=True`) so that:
- the loaded dataset cannot be modified by a filter or a chart, and
- the filtered subset is just a new tuple pointing at the same records.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Source:
    """One article/announcement backing a record."""
    url: str
    name: str = "Source"


@dataclass(frozen=True)
class Compensation:
    """What the company offered the affected employees."""
    severance_pay: bool = False
    severance_months: Optional[float] = None
    bonus_package: bool = False
    bonus_amount: Optional[str] = None
    bonus_amount_localized: Optional[str] = None
    support: bool = False
    support_details: Optional[str] = None
    support_details_localized: Optional[str] = None

    def offered(self) -> bool:
        return self.severance_pay or self.bonus_package or self.support


@dataclass(frozen=True)
class LayoffRecord:
    """One layoff event.

    `employees_affected` counts as *confirmed* unless `is_potential` is set;
    `employees_potential` is always a *potential* figure.
    """
    record_id: int
    company: str
    date: str  # ISO YYYY-MM-DD
    employees_affected: int = 0
    employees_potential: Optional[int] = None
    is_potential: bool = False
    company_localized: Optional[str] = None
    location: Optional[str] = None
    county: Optional[str] = None
    country: Optional[str] = None
    category: Optional[str] = None
    total_employees: Optional[int] = None
    total_group_employees: Optional[int] = None
    compensation: Optional[Compensation] = None
    sources: Tuple[Source, ...] = ()
    notes: Optional[str] = None
    notes_localized: Optional[str] = None

    def year(self) -> Optional[int]:
        """Calendar year of `date`, or None when the date is not a real date."""
        try:
            return datetime.strptime(self.date[:10], "%Y-%m-%d").year
        except (TypeError, ValueError):
            return None

    def has_compensation(self) -> bool:
        return self.compensation is not None and self.compensation.offered()

    def potential_count(self) -> int:
        return self.employees_potential or 0

    def date_key(self) -> str:
        """Sort key for newest-first listings (malformed dates sort as oldest)."""
        return self.date[:10] if self.year() is not None else ""
