"""Shared fixtures: a small mixed dataset covering every optional field."""

import copy

import pytest

from layoffdash.engine import Dashboard, DashboardConfig
from layoffdash.loader import record_from_dict, records_from_payload

RAW_LAYOFFS = [
    {
        "company": "Alpha Soft",
        "companyLocalized": "Alpha Soft SRL",
        "date": "2024-01-05",
        "employeesAffected": 100,
        "location": "Cluj-Napoca",
        "county": "Cluj",
        "country": "Romania",
        "category": "IT",
        "totalEmployees": 400,
        "compensation": {"severancePay": True, "severanceMonths": 3, "bonusPackage": False, "support": False},
        "sources": [{"url": "https://example.com/alpha", "name": "Alpha News"}],
        "notes": "Office closed.",
        "notesRO": "Birou închis.",
    },
    {
        "company": "Beta Motors",
        "date": "2024-06-01",
        "employeesAffected": 50,
        "employeesPotential": 20,
        "isPotential": True,
        "location": "Timișoara",
        "county": "Timiș",
        "category": "Automotive",
        "totalEmployees": 0,
        "source": "https://example.com/beta",
    },
    {
        "company": "Gamma Bank",
        "date": "2023-11-20",
        "employeesAffected": 300,
        "employeesPotential": 100,
        "location": "Bucharest",
        "country": "Romania",
        "category": "Finance",
        "totalGroupEmployees": 12000,
        "compensation": {"severancePay": False, "bonusPackage": False, "support": False},
    },
    {
        "company": "Delta Foods",
        "date": "2023-02-15",
        "employeesAffected": 80,
        "location": "Berlin",
        "country": "Germany",
        "category": "Food",
    },
    {
        "company": "Epsilon",
        "date": "2024-01-20",
        "employeesAffected": 40,
        "location": "Romania",
    },
    {
        "company": "Zeta IT",
        "date": "not-a-date",
        "employeesAffected": 10,
        "location": "Iași",
        "category": "IT",
        "compensation": {"severancePay": False, "bonusPackage": False, "support": True},
    },
]


@pytest.fixture
def raw_layoffs():
    return copy.deepcopy(RAW_LAYOFFS)


@pytest.fixture
def records(raw_layoffs):
    return records_from_payload({"layoffs": raw_layoffs})


@pytest.fixture
def scenario_records():
    """Two-record example: one confirmed, one flagged potential."""
    return records_from_payload({"layoffs": [
        {"company": "A", "employeesAffected": 100, "date": "2024-01-05", "isPotential": False},
        {"company": "B", "employeesAffected": 50, "employeesPotential": 20, "date": "2024-06-01", "isPotential": True},
    ]})


@pytest.fixture
def make_record():
    """Factory building one record from camelCase keyword fields."""
    counter = iter(range(1000))

    def _make(**fields):
        fields.setdefault("company", "Acme")
        fields.setdefault("date", "2024-01-01")
        return record_from_dict(fields, record_id=next(counter))

    return _make


@pytest.fixture
def dashboard(records, tmp_path):
    config = DashboardConfig(language="en", prefs_path=str(tmp_path / "prefs.json"))
    return Dashboard(records=records, config=config)