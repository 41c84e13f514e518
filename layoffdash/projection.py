"""
View projection
===============

Formats records and aggregates into the shapes the presentation layer draws:

- `project_record`     -> RecordView (one card / list row, localized)
- `project_collection` -> CollectionView (newest-first cards, count label, "no results")
- `project_chart`      -> ChartSeries ({labels, values} for the chart collaborator)
- `project_totals`     -> TotalsView (header counters)

All locale-dependent choices (localized field vs. primary field, date and
number formats, month labels) are made here and nowhere else.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from .aggregator import Aggregate, AggregateMode, ConfirmedPotentialSplit
from .i18n import DEFAULT_LANGUAGE, MONTHS_LONG, MONTHS_SHORT, normalize_language, t
from .models import LayoffRecord, Source

CHART_TITLE_KEYS = {
    AggregateMode.BY_MONTH: "timelineChart",
    AggregateMode.BY_YEAR: "timelineChart",
    AggregateMode.BY_YEAR_TOTAL: "yearChart",
    AggregateMode.BY_CATEGORY: "categoryChart",
    AggregateMode.BY_LOCATION: "locationChart",
    AggregateMode.BY_COMPANY_TOP: "companyChart",
}


@dataclass(frozen=True)
class RecordView:
    record_id: int
    company: str
    date: str
    date_label: str
    employees_affected: int
    employees_label: str
    is_potential: bool
    status_label: str
    location: str = ""
    category: Optional[str] = None
    notes: Optional[str] = None
    local_percentage: Optional[float] = None
    group_percentage: Optional[float] = None
    has_compensation: bool = False
    compensation_lines: Tuple[str, ...] = ()
    sources: Tuple[Source, ...] = ()

    @property
    def primary_source(self) -> Optional[Source]:
        return self.sources[0] if self.sources else None


@dataclass(frozen=True)
class CollectionView:
    items: Tuple[RecordView, ...]
    count_label: str
    placeholder: Optional[str] = None

    @property
    def empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class ChartSeries:
    labels: List[str] = field(default_factory=list)
    values: List[int] = field(default_factory=list)
    title: str = ""


@dataclass(frozen=True)
class TotalsView:
    confirmed: int
    potential: int
    confirmed_label: str
    potential_label: str


# ---------------- Formatting helpers ----------------
def percentage(part: int, total: Optional[int]) -> Optional[float]:
    """Share of `total` as a percentage rounded to one decimal; None when total is 0/absent."""
    if not total:
        return None
    # ties round up (6.25 -> 6.3), not to even
    share = Decimal(repr(part / total * 100))
    return float(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_number(n: int, lang: str = DEFAULT_LANGUAGE) -> str:
    s = f"{int(n):,}"
    return s.replace(",", ".") if lang == "ro" else s


def format_date(date: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """Long date: "January 5, 2024" (en) / "5 ianuarie 2024" (ro). Unparseable input is returned as-is."""
    try:
        d = datetime.strptime(date[:10], "%Y-%m-%d")
    except (TypeError, ValueError):
        return date or ""
    month = MONTHS_LONG[lang][d.month - 1]
    if lang == "ro":
        return f"{d.day} {month} {d.year}"
    return f"{month} {d.day}, {d.year}"


def format_month_label(month_key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """Chart label for a month key: "2024-01" -> "Jan 2024" / "ian. 2024"."""
    try:
        d = datetime.strptime(month_key, "%Y-%m")
    except (TypeError, ValueError):
        return month_key
    return f"{MONTHS_SHORT[lang][d.month - 1]} {d.year}"


def _months(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def compensation_lines(record: LayoffRecord, lang: str = DEFAULT_LANGUAGE) -> Tuple[str, ...]:
    comp = record.compensation
    if comp is None or not comp.offered():
        return ()
    lines: List[str] = []
    if comp.severance_pay:
        line = t("severancePay", lang)
        if comp.severance_months:
            line += f": {_months(comp.severance_months)} {t('months', lang)}"
        lines.append(line)
    if comp.bonus_package:
        amount = (comp.bonus_amount_localized or comp.bonus_amount) if lang == "ro" else comp.bonus_amount
        lines.append(f"{t('bonusPackage', lang)}: {amount}" if amount else t("bonusPackage", lang))
    if comp.support:
        details = (comp.support_details_localized or comp.support_details) if lang == "ro" else comp.support_details
        lines.append(f"{t('support', lang)}: {details}" if details else t("support", lang))
    return tuple(lines)


# ---------------- Projections ----------------
def project_record(record: LayoffRecord, lang: str = DEFAULT_LANGUAGE) -> RecordView:
    lang = normalize_language(lang)
    ro = lang == "ro"
    return RecordView(
        record_id=record.record_id,
        company=(record.company_localized or record.company) if ro else record.company,
        date=record.date,
        date_label=format_date(record.date, lang),
        employees_affected=record.employees_affected,
        employees_label=format_number(record.employees_affected, lang),
        is_potential=record.is_potential,
        status_label=t("potential" if record.is_potential else "confirmed", lang),
        location=record.location or "",
        category=record.category,
        notes=(record.notes_localized or record.notes) if ro else record.notes,
        local_percentage=percentage(record.employees_affected, record.total_employees),
        group_percentage=percentage(record.employees_affected, record.total_group_employees),
        has_compensation=record.has_compensation(),
        compensation_lines=compensation_lines(record, lang),
        sources=record.sources,
    )


def newest_first(records: Sequence[LayoffRecord]) -> List[LayoffRecord]:
    """Stable sort by date, newest first; malformed dates go last."""
    return sorted(records, key=lambda r: r.date_key(), reverse=True)


def results_label(count: int, lang: str = DEFAULT_LANGUAGE) -> str:
    return f"{count} {t('result' if count == 1 else 'results', lang)}"


def project_collection(records: Sequence[LayoffRecord], lang: str = DEFAULT_LANGUAGE) -> CollectionView:
    lang = normalize_language(lang)
    items = tuple(project_record(r, lang) for r in newest_first(records))
    return CollectionView(
        items=items,
        count_label=results_label(len(items), lang),
        placeholder=None if items else t("noResults", lang),
    )


def project_chart(agg: Aggregate, mode: AggregateMode, lang: str = DEFAULT_LANGUAGE) -> ChartSeries:
    lang = normalize_language(lang)
    if mode is AggregateMode.BY_MONTH:
        labels = [format_month_label(k, lang) for k, _ in agg]
    else:
        labels = [k for k, _ in agg]
    return ChartSeries(labels=labels, values=[v for _, v in agg], title=t(CHART_TITLE_KEYS[mode], lang))


def project_totals(split: ConfirmedPotentialSplit, lang: str = DEFAULT_LANGUAGE) -> TotalsView:
    lang = normalize_language(lang)
    return TotalsView(
        confirmed=split.confirmed_total,
        potential=split.potential_total,
        confirmed_label=format_number(split.confirmed_total, lang),
        potential_label=format_number(split.potential_total, lang),
    )
