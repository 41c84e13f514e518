"""Tests for the Dashboard session object."""

import json

import pandas as pd
import pytest

from layoffdash.aggregator import AggregateMode
from layoffdash.engine import CSV_COLUMNS, Dashboard, DashboardConfig
from layoffdash.filters import FilterCriteria
from layoffdash.loader import load_layoffs_json


def _ids(records):
    return [r.record_id for r in records]


def test_starts_with_everything_selected(dashboard, records):
    assert dashboard.filtered == records
    assert dashboard.criteria.is_empty()


def test_set_filter_rebuilds_from_full_store(dashboard):
    dashboard.set_filter("year", "2024")
    assert _ids(dashboard.filtered) == [0, 1, 4]
    # switching the year re-filters the full set, not the previous subset
    dashboard.set_filter("year", "2023")
    assert _ids(dashboard.filtered) == [2, 3]
    dashboard.set_filter("year", "")
    assert len(dashboard.filtered) == 6


def test_filters_accumulate_until_cleared(dashboard):
    dashboard.set_filter("country", "Romania")
    dashboard.set_filter("compensation", "with")
    assert _ids(dashboard.filtered) == [0, 5]
    dashboard.clear_filters()
    assert len(dashboard.filtered) == 6


def test_records_are_never_modified(dashboard, records):
    dashboard.apply_filters(FilterCriteria(search="zzz"))
    assert dashboard.filtered == ()
    assert dashboard.records == records


def test_totals_use_full_set_charts_use_subset(dashboard):
    dashboard.set_filter("search", "alpha")
    totals = dashboard.totals()
    assert (totals.confirmed, totals.potential) == (530, 170)
    assert dashboard.chart(AggregateMode.BY_COMPANY_TOP).labels == ["Alpha Soft"]
    assert dashboard.split(filtered=True).confirmed_total == 100


def test_default_chart_and_timeline_modes(dashboard):
    assert dashboard.chart().labels == ["2023", "2024", "Unknown"]
    assert dashboard.timeline().labels[0] == "Feb 2023"
    assert dashboard.timeline(AggregateMode.BY_YEAR).labels == ["2023", "2024", "not-"]
    with pytest.raises(ValueError):
        dashboard.timeline(AggregateMode.BY_CATEGORY)


def test_filter_options(dashboard):
    assert dashboard.filter_options("country") == ["Germany", "Romania"]
    assert dashboard.filter_options("year") == ["2024", "2023"]
    assert dashboard.filter_options("category") == ["Automotive", "Finance", "Food", "IT"]
    assert "Berlin" in dashboard.filter_options("location")
    dashboard.set_filter("country", "Romania")
    locations = dashboard.filter_options("location")
    assert "Berlin" not in locations and "Cluj-Napoca" in locations
    with pytest.raises(ValueError):
        dashboard.filter_options("colour")


def test_failed_load_gives_empty_views(tmp_path):
    config = DashboardConfig(language="en", persist_language=False)
    dash = Dashboard.load(tmp_path / "missing.json", config=config)
    assert dash.load_error
    assert dash.records == ()
    assert dash.totals().confirmed == 0 and dash.totals().potential == 0
    for mode in AggregateMode:
        assert dash.chart(mode).values == []
    assert dash.collection().placeholder == "No companies found matching your search criteria."


def test_load_from_file(tmp_path, raw_layoffs):
    path = tmp_path / "layoffs.json"
    path.write_text(json.dumps({"layoffs": raw_layoffs}), encoding="utf-8")
    dash = Dashboard.load(path, config=DashboardConfig(language="ro", persist_language=False))
    assert dash.load_error is None
    assert len(dash.records) == len(raw_layoffs)
    assert dash.collection().count_label == "6 rezultate"


def test_language_comes_from_saved_preference(tmp_path, records):
    prefs = tmp_path / "prefs.json"
    prefs.write_text('{"language": "en"}', encoding="utf-8")
    dash = Dashboard(records=records, config=DashboardConfig(prefs_path=str(prefs)))
    assert dash.language == "en"


def test_set_language_persists(dashboard, tmp_path):
    dashboard.set_language("ro")
    saved = json.loads((tmp_path / "prefs.json").read_text(encoding="utf-8"))
    assert saved == {"language": "ro"}
    with pytest.raises(ValueError):
        dashboard.set_language("xx")


def test_export_csv(dashboard, tmp_path):
    dashboard.set_filter("category", "IT")
    out = tmp_path / "it.csv"
    dashboard.export_csv(str(out))
    df = pd.read_csv(out)
    assert list(df.columns) == list(CSV_COLUMNS)
    assert df["company"].tolist() == ["Alpha Soft", "Zeta IT"]


def test_export_json_reloads(dashboard, tmp_path):
    dashboard.set_filter("year", "2023")
    out = tmp_path / "subset.json"
    dashboard.export_json(str(out))
    reloaded = load_layoffs_json(out)
    assert [r.company for r in reloaded] == ["Gamma Bank", "Delta Foods"]
    assert reloaded[0].employees_potential == 100
