"""
CSV rendering of VPAT reports for spreadsheet import
"""

import csv
import io
from typing import Iterable, List

from vpat.errors import RenderError
from vpat.formatting import format_date
from vpat.models import Report

CRITERIA_HEADER = [
    "Criteria ID",
    "Criteria Name",
    "Level",
    "Conformance",
    "Evaluation Method",
    "Remarks",
    "Violations Count",
    "Violation Rules",
]

SUMMARY_HEADER = ["Metric", "Value"]

VIOLATIONS_HEADER = [
    "Criteria ID",
    "Criteria Name",
    "Rule ID",
    "Impact",
    "Count",
    "Description",
    "Help URL",
]


def _write_rows(header: List[str], rows: Iterable[List[str]]) -> str:
    """Write a header and rows with the standard CSV writer (CRLF line endings)"""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    try:
        writer.writerow(header)
        writer.writerows(rows)
    except csv.Error as e:
        raise RenderError(f"Failed to write CSV: {e}", format="csv") from e
    return buffer.getvalue()


def render_csv(report: Report) -> str:
    """
    Render one row per criterion

    Args:
        report: Generated report

    Returns:
        CSV text

    Raises:
        RenderError: If the CSV writer fails
    """
    rows = []
    for c in report.criteria:
        rows.append([
            c.id,
            c.name,
            c.level,
            c.conformance.value,
            c.evaluation_method.value,
            c.remarks,
            str(c.violation_count),
            "; ".join(v.rule_id for v in c.violations),
        ])
    return _write_rows(CRITERIA_HEADER, rows)


def render_csv_summary(report: Report) -> str:
    """Render the report summary as a Metric,Value sheet"""
    summary = report.summary
    rows = [
        ["Product", report.product.name],
        ["Version", report.product.version],
        ["Standard", report.standard],
        ["Evaluation Date", format_date(report.evaluation.date)],
        ["Total Criteria", str(summary.total_criteria)],
        ["Supports", str(summary.supports)],
        ["Partially Supports", str(summary.partially_supports)],
        ["Does Not Support", str(summary.does_not_support)],
        ["Not Applicable", str(summary.not_applicable)],
        ["Not Evaluated", str(summary.not_evaluated)],
        ["Automated Coverage (%)", f"{summary.automated_coverage:.1f}"],
        ["Total Violations", str(summary.total_violations)],
    ]
    return _write_rows(SUMMARY_HEADER, rows)


def render_csv_violations(report: Report) -> str:
    """Render one row per violation"""
    rows = []
    for c in report.criteria:
        for v in c.violations:
            rows.append([
                c.id,
                c.name,
                v.rule_id,
                v.impact,
                str(v.count),
                v.description,
                v.help_url,
            ])
    return _write_rows(VIOLATIONS_HEADER, rows)
