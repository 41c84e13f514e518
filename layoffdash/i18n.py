"""Bilingual (English / Romanian) labels.

Lookup falls back from the active language to English, then to the key itself.
"""

from __future__ import annotations

from typing import Dict, Tuple

SUPPORTED_LANGUAGES: Tuple[str, ...] = ("en", "ro")
DEFAULT_LANGUAGE = "ro"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Layoff Tracker",
        "timelineChart": "Layoffs Over Time",
        "yearChart": "Employees Affected by Year",
        "companyChart": "Top Companies by Layoffs",
        "categoryChart": "Top Categories by Layoffs",
        "locationChart": "Top Locations by Layoffs",
        "noResults": "No companies found matching your search criteria.",
        "company": "Company",
        "date": "Date",
        "location": "Location",
        "category": "Category",
        "employeesAffected": "Employees Affected",
        "affected": "affected",
        "employees": "Employees",
        "severancePay": "Severance Pay",
        "bonusPackage": "Bonus Package",
        "support": "Support",
        "months": "months",
        "totalConfirmed": "Total Confirmed",
        "totalPotential": "Potentially Affected Employees",
        "confirmed": "Confirmed",
        "potential": "Potential",
        "year": "Year",
        "results": "results",
        "result": "result",
        "source": "Source",
        "sources": "Sources",
        "ofLocal": "of local",
        "ofGroup": "of group",
    },
    "ro": {
        "title": "Concedieri Romania",
        "timelineChart": "Concedieri în Timp",
        "yearChart": "Angajați Afectați pe Ani",
        "companyChart": "Top Companii după Concedieri",
        "categoryChart": "Top Categorii după Concedieri",
        "locationChart": "Top Locații după Concedieri",
        "noResults": "Nu s-au găsit companii care să corespundă criteriilor de căutare.",
        "company": "Companie",
        "date": "Data",
        "location": "Locație",
        "category": "Categorie",
        "employeesAffected": "Angajați Afectați",
        "affected": "afectați",
        "employees": "Angajați",
        "severancePay": "Salarii Compensatorii",
        "bonusPackage": "Pachet Bonus",
        "support": "Sustinere",
        "months": "luni",
        "totalConfirmed": "Total Confirmate",
        "totalPotential": "Angajați Posibil Afectați",
        "confirmed": "Confirmate",
        "potential": "Potențiale",
        "year": "An",
        "results": "rezultate",
        "result": "rezultat",
        "source": "Sursă",
        "sources": "Surse",
        "ofLocal": "din local",
        "ofGroup": "din grup",
    },
}

MONTHS_LONG: Dict[str, Tuple[str, ...]] = {
    "en": ("January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"),
    "ro": ("ianuarie", "februarie", "martie", "aprilie", "mai", "iunie", "iulie",
           "august", "septembrie", "octombrie", "noiembrie", "decembrie"),
}

MONTHS_SHORT: Dict[str, Tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "ro": ("ian.", "feb.", "mar.", "apr.", "mai", "iun.", "iul.", "aug.", "sept.", "oct.", "nov.", "dec."),
}


def normalize_language(lang: str) -> str:
    """Validate a language tag ("EN" -> "en"); raises ValueError for anything else."""
    tag = (lang or "").strip().lower()
    if tag not in SUPPORTED_LANGUAGES:
        raise ValueError(f"language must be one of: {', '.join(SUPPORTED_LANGUAGES)}")
    return tag


def t(key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """Return the label for `key` in `lang`, falling back to English, then the key."""
    active = TRANSLATIONS.get(lang, {})
    if key in active:
        return active[key]
    return TRANSLATIONS["en"].get(key, key)
