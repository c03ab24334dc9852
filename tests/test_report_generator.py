from __future__ import annotations

import io

import pytest

from vpat.errors import RenderError
from vpat.markdown_renderer import render_markdown
from vpat.report_generator import OutputFormat, ReportGenerator, render_report


@pytest.mark.parametrize("value, expected", [
    ("json", OutputFormat.JSON),
    ("markdown", OutputFormat.MARKDOWN),
    ("md", OutputFormat.MARKDOWN),
    ("HTML", OutputFormat.HTML),
    (" csv ", OutputFormat.CSV),
])
def test_parse_output_format(value, expected) -> None:
    assert OutputFormat.parse(value) is expected


@pytest.mark.parametrize("value", ["pdf", "", "xlsx"])
def test_parse_unknown_format(value) -> None:
    with pytest.raises(ValueError, match="unknown format"):
        OutputFormat.parse(value)


def test_render_report_dispatch(mixed_report) -> None:
    assert render_report(mixed_report, OutputFormat.MARKDOWN) == render_markdown(mixed_report)
    assert render_report(mixed_report, OutputFormat.HTML).startswith("<!DOCTYPE html>")
    assert render_report(mixed_report, OutputFormat.JSON).startswith("{")
    assert render_report(mixed_report, OutputFormat.CSV).startswith("Criteria ID,")
    assert render_report(mixed_report, OutputFormat.CSV, "summary").startswith("Metric,Value")
    assert render_report(mixed_report, OutputFormat.CSV, "violations").startswith("Criteria ID,Criteria Name,Rule ID")
    with pytest.raises(ValueError):
        render_report(mixed_report, OutputFormat.CSV, "pivot")


def test_write_to_stream(empty_report) -> None:
    stream = io.StringIO()
    assert ReportGenerator().write_report(empty_report, OutputFormat.MARKDOWN, stream=stream) is None
    assert stream.getvalue() == render_markdown(empty_report)


def test_json_to_stream_ends_with_newline(empty_report) -> None:
    stream = io.StringIO()
    ReportGenerator().write_report(empty_report, OutputFormat.JSON, stream=stream)
    assert stream.getvalue().endswith("}\n")


def test_write_to_file_keeps_line_endings(tmp_path, mixed_report) -> None:
    generator = ReportGenerator()

    csv_path = generator.write_report(mixed_report, OutputFormat.CSV, output=str(tmp_path / "out" / "vpat.csv"))
    data = csv_path.read_bytes()
    assert b"\r\n" in data
    assert b"\r\r\n" not in data

    md_path = generator.write_report(mixed_report, OutputFormat.MARKDOWN, output=str(tmp_path / "vpat.md"))
    assert b"\r" not in md_path.read_bytes()
    assert md_path.read_text(encoding="utf-8") == render_markdown(mixed_report)


def test_output_dir_uses_default_filename(tmp_path, mixed_report) -> None:
    generator = ReportGenerator(str(tmp_path / "reports"))

    html_path = generator.write_report(mixed_report, OutputFormat.HTML)
    summary_path = generator.write_report(mixed_report, OutputFormat.CSV, csv_sheet="summary")

    assert html_path == tmp_path / "reports" / "Example_Site_VPAT.html"
    assert summary_path.name == "Example_Site_VPAT_summary.csv"
    assert html_path.exists()


def test_default_filename_sanitizes_urls(empty_report) -> None:
    empty_report.product.name = "https://example.com/about us"
    assert ReportGenerator().default_filename(empty_report, OutputFormat.MARKDOWN) == "example_com_about_us_VPAT.md"
    empty_report.product.name = "///"
    assert ReportGenerator().default_filename(empty_report, OutputFormat.JSON) == "report_VPAT.json"


def test_write_failure_raises_render_error(tmp_path, empty_report) -> None:
    blocker = tmp_path / "file.txt"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(RenderError) as exc_info:
        ReportGenerator().write_report(empty_report, OutputFormat.HTML, output=str(blocker / "vpat.html"))
    assert exc_info.value.format == "html"
