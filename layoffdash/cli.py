"""
layoffdash Command Line Interface (CLI)
=======================================

This file provides the interactive terminal program you run like:

    python -m layoffdash.cli --json "data/layoffs.json"

It maps REPL commands onto `Dashboard` calls: every `filter` command rebuilds
the criteria and re-runs the filter pass over the full dataset, then `show`,
`chart`, `split` and `stats` read the current subset.

The CLI DOES NOT modify the dataset file.
"""

from __future__ import annotations
import argparse
import logging
import shlex
from typing import List, Optional

from .aggregator import AggregateMode
from .engine import Dashboard, DashboardConfig
from .filters import FILTER_KINDS
from .i18n import t
from .projection import RecordView, format_number, results_label

HELP = """
Commands:
  help
  stats
  criteria
  clear
  quit

  filter country "<Country>"       (example: filter country "Romania")
  filter location "<Place>"        (example: filter location "Cluj")
  filter year <yyyy>               (example: filter year 2024)
  filter category "<Category>"     (example: filter category "IT")
  filter compensation with|without
  filter search "<text>"           (example: filter search "soft")
  filter <kind>                    (clears that filter)

  values country|location|year|category
  show [n]
  chart month|year|year_total|category|location|company
  split
  lang en|ro

  export csv "<out.csv>"  |  export json "<out.json>"
  report "<out.docx>" [current|full]
"""


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the layoffdash CLI.

    1) Load dataset (a failed load still opens the REPL on an empty dataset)
    2) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(description="Explore the layoff dataset from the terminal.")
    ap.add_argument("--json", default="data/layoffs.json", help="Path to the layoffs JSON file")
    ap.add_argument("--lang", choices=("en", "ro"), help="Language (default: saved preference, else ro)")
    ap.add_argument("--prefs", help="Path to the preferences file")
    ap.add_argument("--verbose", action="store_true", help="Log INFO messages")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Loading dataset...")
    config = DashboardConfig(data_path=args.json, language=args.lang, prefs_path=args.prefs)
    dash = Dashboard.load(args.json, config=config)
    if dash.load_error:
        print("Failed to load layoff data. Showing an empty dataset.")
    print(f"Loaded {len(dash.records)} records. Type 'help' for commands.")

    while True:
        try:
            line = input("layoffs> ")
        except EOFError:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        try:
            handle(dash, stripped)
        except (ValueError, OSError, ImportError) as e:
            print(f"Error: {e}")


def handle(dash: Dashboard, line: str) -> None:
    """Handle one CLI command line."""
    parts = shlex.split(line)
    cmd = parts[0].lower()
    lang = dash.language

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        totals = dash.totals()
        print(f"{t('totalConfirmed', lang)}: {totals.confirmed_label}")
        print(f"{t('totalPotential', lang)}: {totals.potential_label}")
        print(f"{results_label(len(dash.filtered), lang)} / {len(dash.records)}")
        return

    if cmd == "criteria":
        active = {k: v for k, v in dash.criteria.as_dict().items() if v}
        if not active:
            print("No filters set.")
        for k, v in active.items():
            print(f"{k} = {v}")
        return

    if cmd == "clear":
        dash.clear_filters()
        dash.command_log.append(line)
        print(f"Filters cleared. {results_label(len(dash.filtered), lang)}")
        return

    if cmd == "filter":
        if len(parts) < 2:
            raise ValueError(f"filter kind must be one of: {', '.join(FILTER_KINDS)}")
        kind = parts[1].lower()
        value = " ".join(parts[2:])
        dash.set_filter(kind, value)
        dash.command_log.append(line)
        action = f"{kind}={value}" if value else f"{kind} cleared"
        print(f"Filtered {action}. {results_label(len(dash.filtered), lang)}")
        return

    if cmd == "values":
        if len(parts) < 2:
            raise ValueError("Usage: values country|location|year|category")
        vals = dash.filter_options(parts[1].lower())
        for v in vals[:50]:
            print(v)
        if len(vals) > 50:
            print(f"... ({len(vals)} total, showing 50)")
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        view = dash.collection()
        print(view.count_label)
        if view.empty:
            print(view.placeholder)
            return
        for item in view.items[:n]:
            _print_item(item, lang)
        return

    if cmd == "chart":
        mode = AggregateMode.parse(parts[1]) if len(parts) >= 2 else dash.config.grouping_mode
        series = dash.chart(mode)
        print(series.title)
        if not series.labels:
            print(t("noResults", lang))
            return
        width = max(len(label) for label in series.labels)
        for label, value in zip(series.labels, series.values):
            print(f"  {label.ljust(width)}  {format_number(value, lang)}")
        return

    if cmd == "split":
        split = dash.split(filtered=True)
        print(f"{t('year', lang)}\t{t('confirmed', lang)}\t{t('potential', lang)}")
        for (year, c), (_, p) in zip(split.confirmed_by_year, split.potential_by_year):
            print(f"{year}\t{format_number(c, lang)}\t{format_number(p, lang)}")
        print(f"=\t{format_number(split.confirmed_total, lang)}\t{format_number(split.potential_total, lang)}")
        return

    if cmd == "lang":
        if len(parts) < 2:
            print(dash.language)
            return
        print(f"Language set to {dash.set_language(parts[1])}.")
        return

    if cmd == "export":
        # export <csv|json> "<path>"
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt, out_path = parts[1].lower(), parts[2]
        if not dash.filtered:
            print("Nothing to export: current selection is empty.")
            return
        if fmt == "csv":
            dash.export_csv(out_path)
        elif fmt == "json":
            dash.export_json(out_path)
        else:
            print("Unknown export format. Use: csv or json")
            return
        print(f"Exported {fmt.upper()} to {out_path}")
        return

    if cmd == "report":
        # report "<path.docx>" [current|full]
        from .report import generate_docx_report, ReportConfig
        if len(parts) < 2:
            raise ValueError('Usage: report "out.docx" [current|full]')
        path = parts[1]
        scope = parts[2].lower() if len(parts) >= 3 else "current"
        if scope not in ("current", "full"):
            raise ValueError("report scope must be: current | full")
        if scope == "full":
            records, label = dash.records, "Full Dataset"
        else:
            records, label = dash.filtered, "Current Result Set"
        cfg = ReportConfig(
            dataset_name=dash.config.data_path,
            language=dash.language,
            top_n=dash.config.top_n,
            criteria_lines=[f"{k} = {v}" for k, v in dash.criteria.as_dict().items() if v],
            command_log=dash.command_log,
        )
        generate_docx_report(records, path, config=cfg, scope_label=label)
        print(f"Report written to {path}")
        return

    print("Unknown command. Type 'help'.")


def _print_item(item: RecordView, lang: str) -> None:
    shares = []
    if item.local_percentage is not None:
        shares.append(f"{item.local_percentage}% {t('ofLocal', lang)}")
    if item.group_percentage is not None:
        shares.append(f"{item.group_percentage}% {t('ofGroup', lang)}")
    extra = f" ({', '.join(shares)})" if shares else ""
    print(f"[{item.record_id}] {item.company} | {item.date_label} | {item.location or '-'} | "
          f"{item.employees_label} {t('employees', lang).lower()}{extra} | {item.status_label}")
    for c in item.compensation_lines:
        print(f"    + {c}")


if __name__ == "__main__":
    main()
