"""Tests for the interactive CLI."""

import json

import pytest

from layoffdash import cli


def _run(dashboard, capsys, line):
    cli.handle(dashboard, line)
    return capsys.readouterr().out


def test_stats(dashboard, capsys):
    out = _run(dashboard, capsys, "stats")
    assert "Total Confirmed: 530" in out
    assert "Potentially Affected Employees: 170" in out
    assert "6 results / 6" in out


def test_filter_and_show(dashboard, capsys):
    out = _run(dashboard, capsys, 'filter search "alpha"')
    assert "Filtered search=alpha. 1 result" in out
    out = _run(dashboard, capsys, "show")
    assert "Alpha Soft" in out
    assert "25.0% of local" in out
    assert "+ Severance Pay: 3 months" in out
    assert dashboard.command_log == ['filter search "alpha"']


def test_show_empty_prints_placeholder(dashboard, capsys):
    _run(dashboard, capsys, "filter search zzz")
    out = _run(dashboard, capsys, "show")
    assert "0 results" in out
    assert "No companies found" in out


def test_filter_without_value_clears(dashboard, capsys):
    _run(dashboard, capsys, "filter year 2023")
    out = _run(dashboard, capsys, "filter year")
    assert "year cleared" in out
    assert len(dashboard.filtered) == 6


def test_criteria_listing(dashboard, capsys):
    assert "No filters set." in _run(dashboard, capsys, "criteria")
    _run(dashboard, capsys, 'filter location "Cluj"')
    assert "location = Cluj" in _run(dashboard, capsys, "criteria")


def test_chart_prints_labels_and_values(dashboard, capsys):
    out = _run(dashboard, capsys, "chart category")
    assert out.splitlines()[0] == "Top Categories by Layoffs"
    assert "Finance" in out and "300" in out


def test_chart_rejects_unknown_mode(dashboard):
    with pytest.raises(ValueError):
        cli.handle(dashboard, "chart week")


def test_split_table(dashboard, capsys):
    out = _run(dashboard, capsys, "split")
    assert "2023\t380\t100" in out
    assert "=\t530\t170" in out


def test_values_and_unknown_command(dashboard, capsys):
    assert "2024" in _run(dashboard, capsys, "values year")
    assert "Unknown command" in _run(dashboard, capsys, "dance")


def test_lang_switch_changes_labels(dashboard, capsys):
    assert "Language set to ro." in _run(dashboard, capsys, "lang ro")
    assert "Total Confirmate: 530" in _run(dashboard, capsys, "stats")


def test_export_json(dashboard, capsys, tmp_path):
    out_path = tmp_path / "out.json"
    out = _run(dashboard, capsys, f'export json "{out_path}"')
    assert "Exported JSON" in out
    assert len(json.loads(out_path.read_text(encoding="utf-8"))["layoffs"]) == 6


def test_export_nothing_selected(dashboard, capsys, tmp_path):
    _run(dashboard, capsys, "filter search zzz")
    out = _run(dashboard, capsys, f'export csv "{tmp_path / "x.csv"}"')
    assert "Nothing to export" in out


def test_main_runs_repl_until_eof(monkeypatch, capsys, tmp_path, raw_layoffs):
    data = tmp_path / "layoffs.json"
    data.write_text(json.dumps({"layoffs": raw_layoffs}), encoding="utf-8")
    lines = iter(["filter compensation with", "oops extra", "filter compensation maybe", "stats"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    cli.main(["--json", str(data), "--lang", "en", "--prefs", str(tmp_path / "p.json")])
    out = capsys.readouterr().out
    assert "Loaded 6 records" in out
    assert "Filtered compensation=with. 2 results" in out
    assert "Error: compensation filter must be 'with' or 'without'" in out
    assert "2 results / 6" in out


def test_main_survives_missing_dataset(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr("builtins.input", lambda prompt: "quit")
    cli.main(["--json", str(tmp_path / "missing.json"), "--lang", "en", "--prefs", str(tmp_path / "p.json")])
    out = capsys.readouterr().out
    assert "Failed to load layoff data" in out
    assert "Loaded 0 records" in out
