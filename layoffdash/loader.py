"""
Dataset loader (JSON -> LayoffRecord tuple)
===========================================

This module reads the dashboard dataset, a JSON document shaped like
`{"layoffs": [ {...}, {...} ]}`, and converts each entry into a `LayoffRecord`.

Key ideas:
- Field names are camelCase in the JSON; localized fields may use either the
  `...Localized` suffix or the older `...RO` suffix, so we try both.
- Conversion helpers (_to_int/_to_float/_to_str) turn blanks and junk into None
  instead of raising, because the aggregator treats missing numbers as zero.
- The legacy `source`/`sourceName` pair is normalized into a one-element `sources`.
- The loader returns an immutable tuple; nothing downstream edits it.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .models import Compensation, LayoffRecord, Source

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """The dataset file is missing, is not JSON, or has no `layoffs` array."""


def _to_int(x) -> Optional[int]:
    """Convert a value to int, returning None if missing/invalid."""
    if x is None or isinstance(x, bool):
        return None
    try: return int(float(x))
    except (TypeError, ValueError): return None

def _to_float(x) -> Optional[float]:
    if x is None or isinstance(x, bool):
        return None
    try: return float(x)
    except (TypeError, ValueError): return None

def _to_str(x) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None

def _pick(raw: Dict[str, Any], *names: str) -> Any:
    """Return the first present (non-None) value among several key spellings."""
    for n in names:
        if raw.get(n) is not None:
            return raw[n]
    return None

def _count(raw: Dict[str, Any], name: str, company: str) -> Optional[int]:
    n = _to_int(raw.get(name))
    if n is not None and n < 0:
        logger.warning("Negative %s for %r clamped to 0", name, company)
        return 0
    return n


def _compensation(raw: Any) -> Optional[Compensation]:
    if not isinstance(raw, dict):
        return None
    return Compensation(
        severance_pay=bool(raw.get("severancePay")),
        severance_months=_to_float(raw.get("severanceMonths")),
        bonus_package=bool(raw.get("bonusPackage")),
        bonus_amount=_to_str(raw.get("bonusAmount")),
        bonus_amount_localized=_to_str(_pick(raw, "bonusAmountLocalized", "bonusAmountRO")),
        support=bool(raw.get("support")),
        support_details=_to_str(raw.get("supportDetails")),
        support_details_localized=_to_str(_pick(raw, "supportDetailsLocalized", "supportDetailsRO")),
    )


def _sources(raw: Dict[str, Any], company: str) -> Tuple[Source, ...]:
    items = raw.get("sources")
    if items is None:
        url = _to_str(raw.get("source"))
        if not url:
            return ()
        return (Source(url=url, name=_to_str(raw.get("sourceName")) or "Source"),)

    out: List[Source] = []
    for item in items if isinstance(items, list) else []:
        url = _to_str(item.get("url")) if isinstance(item, dict) else None
        if not url:
            logger.warning("Skipping source without url for %r", company)
            continue
        out.append(Source(url=url, name=_to_str(item.get("name")) or "Source"))
    return tuple(out)


def record_from_dict(raw: Dict[str, Any], record_id: int) -> LayoffRecord:
    """Convert one JSON object into a LayoffRecord."""
    company = _to_str(raw.get("company")) or ""
    return LayoffRecord(
        record_id=record_id,
        company=company,
        date=_to_str(raw.get("date")) or "",
        employees_affected=_count(raw, "employeesAffected", company) or 0,
        employees_potential=_count(raw, "employeesPotential", company),
        is_potential=bool(raw.get("isPotential")),
        company_localized=_to_str(_pick(raw, "companyLocalized", "companyRO")),
        location=_to_str(raw.get("location")),
        county=_to_str(raw.get("county")),
        country=_to_str(raw.get("country")),
        category=_to_str(raw.get("category")),
        total_employees=_to_int(raw.get("totalEmployees")),
        total_group_employees=_to_int(raw.get("totalGroupEmployees")),
        compensation=_compensation(raw.get("compensation")),
        sources=_sources(raw, company),
        notes=_to_str(raw.get("notes")),
        notes_localized=_to_str(_pick(raw, "notesLocalized", "notesRO")),
    )


def records_from_payload(payload: Any) -> Tuple[LayoffRecord, ...]:
    """Convert an already-parsed `{"layoffs": [...]}` document."""
    if not isinstance(payload, dict) or not isinstance(payload.get("layoffs"), list):
        raise DatasetError("Dataset must be an object with a 'layoffs' array")
    records = []
    for i, raw in enumerate(payload["layoffs"]):
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object entry at index %d", i)
            continue
        records.append(record_from_dict(raw, record_id=i))
    return tuple(records)


def load_layoffs_json(path: Union[str, Path]) -> Tuple[LayoffRecord, ...]:
    """Read the dataset file and return its records.

    Raises DatasetError for a missing file or malformed document.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        raise DatasetError(f"Cannot read dataset {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DatasetError(f"Dataset {path} is not valid JSON: {e}") from e

    records = records_from_payload(payload)
    logger.info("Loaded %d layoff records from %s", len(records), path)
    return records


def record_to_dict(record: LayoffRecord) -> Dict[str, Any]:
    """Inverse of record_from_dict: camelCase keys, unset optionals omitted."""
    out: Dict[str, Any] = {
        "company": record.company,
        "date": record.date,
        "employeesAffected": record.employees_affected,
    }
    optional = {
        "companyLocalized": record.company_localized,
        "employeesPotential": record.employees_potential,
        "location": record.location,
        "county": record.county,
        "country": record.country,
        "category": record.category,
        "totalEmployees": record.total_employees,
        "totalGroupEmployees": record.total_group_employees,
        "notes": record.notes,
        "notesLocalized": record.notes_localized,
    }
    out.update({k: v for k, v in optional.items() if v is not None})
    if record.is_potential:
        out["isPotential"] = True
    c = record.compensation
    if c is not None:
        comp = {
            "severancePay": c.severance_pay,
            "severanceMonths": c.severance_months,
            "bonusPackage": c.bonus_package,
            "bonusAmount": c.bonus_amount,
            "bonusAmountLocalized": c.bonus_amount_localized,
            "support": c.support,
            "supportDetails": c.support_details,
            "supportDetailsLocalized": c.support_details_localized,
        }
        out["compensation"] = {k: v for k, v in comp.items() if v is not None}
    out["sources"] = [{"url": s.url, "name": s.name} for s in record.sources]
    return out
