"""Tests for grouping modes and the confirmed/potential split."""

import pytest

from layoffdash.aggregator import (
    AggregateMode, aggregate, confirmed_potential_split,
)


def _values(agg):
    return [v for _, v in agg]


def test_month_buckets_sorted_by_key(records):
    assert aggregate(records, AggregateMode.BY_MONTH) == [
        ("2023-02", 80), ("2023-11", 300), ("2024-01", 140), ("2024-06", 50), ("not-a-d", 10),
    ]


def test_year_buckets(records):
    assert aggregate(records, AggregateMode.BY_YEAR) == [("2023", 380), ("2024", 190), ("not-", 10)]


def test_timeline_sums_match_total_affected(records):
    total = sum(r.employees_affected for r in records)
    assert sum(_values(aggregate(records, AggregateMode.BY_MONTH))) == total
    assert sum(_values(aggregate(records, AggregateMode.BY_YEAR))) == total


def test_year_total_combines_confirmed_and_potential(records):
    assert aggregate(records, AggregateMode.BY_YEAR_TOTAL) == [
        ("2023", 480), ("2024", 210), ("Unknown", 10),
    ]


def test_category_sorted_desc_with_other(records):
    assert aggregate(records, AggregateMode.BY_CATEGORY) == [
        ("Finance", 300), ("IT", 110), ("Food", 80), ("Automotive", 50), ("Other", 40),
    ]


def test_location_prefers_county(records):
    assert aggregate(records, AggregateMode.BY_LOCATION) == [
        ("Bucharest", 300), ("Cluj", 100), ("Berlin", 80), ("Timiș", 50), ("Romania", 40), ("Iași", 10),
    ]


def test_company_top_is_per_record(records):
    agg = aggregate(records, AggregateMode.BY_COMPANY_TOP)
    assert [k for k, _ in agg] == ["Gamma Bank", "Alpha Soft", "Delta Foods", "Beta Motors", "Epsilon", "Zeta IT"]


def test_top_ten_truncation_and_stable_ties(make_record):
    recs = [make_record(company=f"C{i}", category=f"cat{i}", employeesAffected=5) for i in range(12)]
    recs.append(make_record(company="Big", category="big", employeesAffected=50))

    by_cat = aggregate(recs, AggregateMode.BY_CATEGORY)
    assert len(by_cat) == 10
    assert by_cat[0] == ("big", 50)
    # equal values keep first-encountered order
    assert [k for k, _ in by_cat[1:]] == [f"cat{i}" for i in range(9)]
    assert _values(by_cat) == sorted(_values(by_cat), reverse=True)

    by_company = aggregate(recs, AggregateMode.BY_COMPANY_TOP)
    assert [k for k, _ in by_company] == ["Big"] + [f"C{i}" for i in range(9)]


def test_duplicate_company_names_are_not_merged(make_record):
    recs = [make_record(company="Same", employeesAffected=10), make_record(company="Same", employeesAffected=20)]
    assert aggregate(recs, AggregateMode.BY_COMPANY_TOP) == [("Same", 20), ("Same", 10)]


def test_empty_input_gives_empty_series():
    for mode in AggregateMode:
        assert aggregate([], mode) == []


def test_input_not_mutated(records):
    before = list(records)
    aggregate(records, AggregateMode.BY_CATEGORY)
    assert list(records) == before


def test_reaggregation_is_idempotent(records):
    assert aggregate(records, AggregateMode.BY_LOCATION) == aggregate(records, AggregateMode.BY_LOCATION)


def test_split_scenario(scenario_records):
    split = confirmed_potential_split(scenario_records)
    assert split.confirmed_total == 100
    assert split.potential_total == 70
    assert aggregate(scenario_records, AggregateMode.BY_YEAR) == [("2024", 150)]


def test_split_per_year(records):
    split = confirmed_potential_split(records)
    assert split.confirmed_by_year == (("2023", 380), ("2024", 140), ("Unknown", 10))
    assert split.potential_by_year == (("2023", 100), ("2024", 70), ("Unknown", 0))


def test_split_totals_cover_every_count(records):
    split = confirmed_potential_split(records)
    expected = sum(r.employees_affected + (r.employees_potential or 0) for r in records)
    assert split.confirmed_total + split.potential_total == expected


def test_non_potential_record_still_feeds_potential(make_record):
    split = confirmed_potential_split([make_record(employeesAffected=10, employeesPotential=5)])
    assert (split.confirmed_total, split.potential_total) == (10, 5)


def test_split_of_nothing_is_zero():
    split = confirmed_potential_split([])
    assert split.confirmed_total == 0 and split.potential_total == 0
    assert split.years() == []


def test_mode_parse():
    assert AggregateMode.parse("month") is AggregateMode.BY_MONTH
    assert AggregateMode.parse("BY_COMPANY_TOP") is AggregateMode.BY_COMPANY_TOP
    with pytest.raises(ValueError):
        AggregateMode.parse("week")


def test_string_mode_is_rejected(records):
    with pytest.raises(TypeError):
        aggregate(records, "month")
