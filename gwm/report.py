from __future__ import annotations

"""
GWM report generator
--------------------
This module generates a DOCX report from a list of Reading objects.

Design goals:
- Keep GWM usable even if report dependencies are missing (lazy imports).
- Show the temperature trend the engine computes: yearly means plus the
  OLS line whose slope `temperature_slope` reports.
- Make data completeness visible (readings with the -99.0 sentinel).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import math
import os
import tempfile
from collections import Counter

from .models import Reading
from .regression import fit_line, temperature_series


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "GWM Temperature Report"
    subtitle: str = "Global Weather Manager (CLI)"
    dataset_name: str = "City temperature CSV"
    dataset_file: Optional[str] = None

    # How many localities to list in the coverage table
    top_n: int = 10

    # How many rows to show in the preview table
    max_rows_preview: int = 15

    # Optional: list of CLI commands run before the report
    command_log: List[str] = field(default_factory=list)


def _fmt_temp(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return ""
    return f"{value:.1f}"


def _locality(r: Reading) -> str:
    return ", ".join(p for p in (r.city, r.state, r.country) if p)


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    readings: Sequence[Reading],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    scope_label: str = "All readings",
) -> str:
    """
    Generate a DOCX report + trend chart for a list of readings.

    The source CSV is never modified; the report describes the in-memory readings.
    """
    config = config or ReportConfig()

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
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not readings:
        raise ValueError("No readings to report on (selection is empty).")

    # -----------------------------
    # 1) Compute stats
    # -----------------------------
    years, temps = temperature_series(readings)
    missing = len(readings) - len(temps)
    slope, intercept = fit_line(years, temps)

    # yearly means keep the chart readable for multi-year daily data
    by_year: dict = {}
    for y, t in zip(years, temps):
        by_year.setdefault(y, []).append(t)
    mean_years = sorted(by_year)
    mean_temps = [sum(by_year[y]) / len(by_year[y]) for y in mean_years]

    localities = Counter(_locality(r) for r in readings)
    all_years = [r.year for r in readings]

    # -----------------------------
    # 2) Charts
    # -----------------------------
    # charts live only until the document has embedded them
    with tempfile.TemporaryDirectory(prefix="gwm_report_") as tmpdir:
        chart_paths: List[Tuple[str, str, str]] = []

        def _save(filename: str) -> str:
            path = os.path.join(tmpdir, filename)
            plt.tight_layout()
            plt.savefig(path, dpi=150)
            plt.close()
            return path

        if mean_years:
            plt.figure()
            plt.plot(mean_years, mean_temps, marker="o", linestyle="-", label="Yearly mean")
            if math.isfinite(slope) and math.isfinite(intercept):
                xs = np.array([mean_years[0], mean_years[-1]], dtype=float)
                plt.plot(xs, slope * xs + intercept, linestyle="--", label=f"Trend ({slope:+.3f}/yr)")
            plt.title(f"Average temperature by year ({scope_label})")
            plt.xlabel("Year")
            plt.ylabel("Average temperature")
            plt.legend()
            chart_paths.append((
                f"Average temperature by year ({scope_label})",
                _save("yearly_trend.png"),
                "A line of yearly means with the least-squares trend shows the direction of change.",
            ))

        if len(temps) >= 2:
            plt.figure()
            plt.hist(temps, bins=min(30, max(5, len(temps) // 10)), edgecolor="black", linewidth=0.8)
            plt.title(f"Distribution of average temperatures ({scope_label})")
            plt.xlabel("Average temperature")
            plt.ylabel("Count")
            chart_paths.append((
                f"Distribution of average temperatures ({scope_label})",
                _save("hist_temps.png"),
                "A histogram shows the spread of daily averages and any outliers.",
            ))

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
        if config.dataset_file:
            _kv("Data file", config.dataset_file)
        _kv("Scope", scope_label)
        _kv("Readings in scope", str(len(readings)))
        _kv("Localities", str(len(localities)))
        _kv("Year range", f"{min(all_years)} to {max(all_years)}")
        _kv("Temperature slope (per year)", f"{slope:.4f}" if math.isfinite(slope) else "undefined")

        doc.add_paragraph("")
        doc.add_heading("Data completeness", level=1)
        t = doc.add_table(rows=1, cols=3)
        t.rows[0].cells[0].text = "Metric"
        t.rows[0].cells[1].text = "Available"
        t.rows[0].cells[2].text = "Missing"
        row = t.add_row().cells
        row[0].text = "Average temperature"
        row[1].text = str(len(temps))
        row[2].text = str(missing)

        doc.add_paragraph("")
        doc.add_heading("Coverage by locality", level=1)
        t2 = doc.add_table(rows=1, cols=2)
        t2.rows[0].cells[0].text = "Locality"
        t2.rows[0].cells[1].text = "Readings"
        for name, n in localities.most_common(config.top_n):
            row = t2.add_row().cells
            row[0].text = name
            row[1].text = str(n)

        if chart_paths:
            doc.add_paragraph("")
            doc.add_heading("Visualizations", level=1)
            for title, path, why in chart_paths:
                doc.add_paragraph(title)
                doc.add_picture(path, width=Inches(6.5))
                doc.add_paragraph("Why this graph is suitable: " + why)

        doc.add_paragraph("")
        doc.add_heading("Preview of first few readings", level=1)
        t3 = doc.add_table(rows=1, cols=4)
        h = t3.rows[0].cells
        h[0].text = "Locality"
        h[1].text = "Date"
        h[2].text = "Avg. temperature"
        h[3].text = "Region"
        for r in list(readings)[:config.max_rows_preview]:
            c = t3.add_row().cells
            c[0].text = _locality(r)
            c[1].text = f"{r.year:04d}-{r.month:02d}-{r.day:02d}"
            c[2].text = _fmt_temp(r.avg_temperature) if r.has_temperature else "missing"
            c[3].text = r.region

        # -----------------------------
        # Reproducibility footer
        # -----------------------------
        doc.add_paragraph("")
        doc.add_heading("Reproducibility footer", level=1)
        from . import __version__ as gwm_version
        from datetime import datetime as _dt
        doc.add_paragraph(f"GWM version: {gwm_version}")
        doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")
        if config.command_log:
            doc.add_paragraph("Commands used (log):")
            for line in config.command_log:
                doc.add_paragraph(line, style="List Bullet")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
