from __future__ import annotations

"""
Layoff report generator
-----------------------
This module generates a DOCX report from a list of LayoffRecord objects.

Design goals:
- Keep the dashboard usable even if report dependencies are missing (lazy imports).
- Draw every chart from the same ChartSeries projections the dashboard shows,
  so the report and the screen never disagree.
- Skip charts that carry no information for the current result set
  (e.g. a location chart when every record is in the same place).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import os
import tempfile

from .aggregator import AggregateMode, aggregate, confirmed_potential_split
from .i18n import DEFAULT_LANGUAGE, t
from .models import LayoffRecord
from .projection import ChartSeries, format_number, newest_first, project_chart, project_record


# -----------------------------
# Configuration
# -----------------------------

@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Layoff Tracker Report"
    subtitle: str = "Corporate layoff events"
    dataset_name: str = "data/layoffs.json"
    language: str = DEFAULT_LANGUAGE

    # How many categories/companies to show in bar charts
    top_n: int = 10

    # How many rows to show in the preview table
    max_rows_preview: int = 15

    # Optional: active filter criteria, printed in the footer
    criteria_lines: List[str] = field(default_factory=list)

    # Optional: list of CLI commands used to create the current result set
    command_log: Optional[List[str]] = None


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    records: Sequence[LayoffRecord],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    scope_label: str = "Current Result Set",
) -> str:
    """
    Generate a DOCX report + charts for a list of records.

    The dataset file is never touched; the report covers the in-memory selection.
    """
    config = config or ReportConfig()
    lang = config.language

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install with: python -m pip install matplotlib"
        ) from e

    if not records:
        raise ValueError("No records to report on (result set is empty).")

    # -----------------------------
    # 1) Compute aggregates + series
    # -----------------------------
    split = confirmed_potential_split(records)

    def _series(mode: AggregateMode) -> ChartSeries:
        return project_chart(aggregate(records, mode, top_n=config.top_n), mode, lang)

    timeline = _series(AggregateMode.BY_MONTH)
    yearly = _series(AggregateMode.BY_YEAR_TOTAL)
    categories = _series(AggregateMode.BY_CATEGORY)
    locations = _series(AggregateMode.BY_LOCATION)
    companies = _series(AggregateMode.BY_COMPANY_TOP)

    # -----------------------------
    # 2) Create charts
    # -----------------------------
    # charts live only until the DOCX is saved
    with tempfile.TemporaryDirectory(prefix="layoffdash_report_") as tmpdir:
        # Each chart is: (title, file_path)
        chart_paths: List[Tuple[str, str]] = []

        def _save(filename: str) -> str:
            path = os.path.join(tmpdir, filename)
            plt.tight_layout()
            plt.savefig(path, dpi=200)
            plt.close()
            return path

        def _line(series: ChartSeries, filename: str) -> None:
            plt.figure()
            plt.plot(series.labels, series.values, marker="o")
            plt.fill_between(range(len(series.values)), series.values, alpha=0.1)
            plt.xticks(rotation=45, ha="right")
            plt.title(series.title)
            plt.ylabel(t("employeesAffected", lang))
            chart_paths.append((series.title, _save(filename)))

        def _barh(series: ChartSeries, filename: str) -> None:
            plt.figure()
            # one row per entry (duplicate company names stay separate), largest on top
            rows = range(len(series.labels))
            plt.barh(rows, series.values[::-1])
            plt.yticks(rows, series.labels[::-1])
            plt.title(series.title)
            plt.xlabel(t("employeesAffected", lang))
            chart_paths.append((series.title, _save(filename)))

        if len(timeline.labels) > 1:
            _line(timeline, "timeline_months.png")
        if yearly.labels:
            _barh(yearly, "yearly_totals.png")
        if len(categories.labels) > 1:
            _barh(categories, "top_categories.png")
        if len(locations.labels) > 1:
            _barh(locations, "top_locations.png")
        if companies.labels:
            _barh(companies, "top_companies.png")

        # -----------------------------
        # 3) Build DOCX report
        # -----------------------------
        doc = Document()

        style = doc.styles["Normal"]
        style.font.name = "Calibri"
        style.font.size = Pt(11)

        def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
            p = doc.add_paragraph()
            r = p.add_run(text)
            r.bold = bold
            r.italic = italic
            r.font.size = Pt(size)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

        def _kv(key: str, value: str) -> None:
            p = doc.add_paragraph()
            r = p.add_run(f"{key}: ")
            r.bold = True
            p.add_run(value)

        _center_title(config.title, 22, bold=True)
        _center_title(config.subtitle, 12, italic=True)

        doc.add_paragraph("")
        _kv("Dataset", config.dataset_name)
        _kv("Scope", scope_label)
        _kv("Records in scope", str(len(records)))
        _kv(t("totalConfirmed", lang), format_number(split.confirmed_total, lang))
        _kv(t("totalPotential", lang), format_number(split.potential_total, lang))

        # Per-year confirmed / potential table
        doc.add_paragraph("")
        doc.add_heading(f"{t('confirmed', lang)} / {t('potential', lang)}", level=1)
        t1 = doc.add_table(rows=1, cols=3)
        h = t1.rows[0].cells
        h[0].text = t("year", lang)
        h[1].text = t("confirmed", lang)
        h[2].text = t("potential", lang)
        for (year, confirmed), (_, potential) in zip(split.confirmed_by_year, split.potential_by_year):
            row = t1.add_row().cells
            row[0].text = year
            row[1].text = format_number(confirmed, lang)
            row[2].text = format_number(potential, lang)

        # Visualizations
        if chart_paths:
            doc.add_paragraph("")
            doc.add_heading("Visualizations", level=1)
            for title, path in chart_paths:
                doc.add_paragraph(title)
                doc.add_picture(path, width=Inches(6.5))
                doc.add_paragraph("")

        # Preview table (newest first)
        doc.add_paragraph("")
        doc.add_heading("Preview of most recent records", level=1)
        preview = [project_record(r, lang) for r in newest_first(records)[:config.max_rows_preview]]
        t2 = doc.add_table(rows=1, cols=5)
        h = t2.rows[0].cells
        h[0].text = t("company", lang)
        h[1].text = t("date", lang)
        h[2].text = t("location", lang)
        h[3].text = t("employeesAffected", lang)
        h[4].text = t("category", lang)
        for v in preview:
            r = t2.add_row().cells
            r[0].text = v.company
            r[1].text = v.date_label
            r[2].text = v.location
            r[3].text = v.employees_label + ("" if not v.is_potential else f" ({v.status_label})")
            r[4].text = v.category or ""

        # -----------------------------
        # Reproducibility footer
        # -----------------------------
        doc.add_paragraph("")
        doc.add_heading("Reproducibility footer", level=1)

        from . import __version__ as package_version
        from datetime import datetime as _dt
        generated_at = _dt.now().isoformat(timespec="seconds")

        doc.add_paragraph(f"layoffdash version: {package_version}")
        doc.add_paragraph(f"Report generated at: {generated_at}")
        doc.add_paragraph(f"Records in scope: {len(records)}")

        if config.criteria_lines:
            doc.add_paragraph("Active filters:")
            for line in config.criteria_lines:
                doc.add_paragraph(line, style="List Bullet")

        if config.command_log:
            doc.add_paragraph("Commands used (log):")
            for line in config.command_log:
                doc.add_paragraph(line, style="List Bullet")

        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        doc.save(out_path)
    return out_path
