from __future__ import annotations

import asyncio
import json
import logging

import pytest

from main import build_parser, main
from tests.factories import make_result, make_violation
from vpat.report_generator import OutputFormat
from vpat.results_storage import ResultsStorage
from vpat.schema import SCHEMA_ID


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def results_file(tmp_path):
    results = [
        make_result("https://example.com", [make_violation("image-alt", "critical", ["<img src=x>"])]),
        make_result("https://example.com/about", [make_violation("region", "moderate", ["<div>"])]),
    ]
    return str(ResultsStorage().save_results(results, str(tmp_path / "results.json")))


def run_cli(*argv) -> int:
    return asyncio.run(main(list(argv)))


def test_parser_accepts_format_aliases() -> None:
    args = build_parser().parse_args(["--format", "md", "https://example.com"])
    assert args.format is OutputFormat.MARKDOWN
    assert args.urls == ["https://example.com"]


def test_parser_rejects_unknown_format(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--format", "pdf", "https://example.com"])
    assert exc_info.value.code == 2
    assert "unknown format" in capsys.readouterr().err


def test_missing_urls_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        run_cli()
    assert exc_info.value.code == 2


def test_print_schema(capsys) -> None:
    assert run_cli("--print-schema") == 0
    assert json.loads(capsys.readouterr().out)["$id"] == SCHEMA_ID


def test_offline_json_report(tmp_path, results_file) -> None:
    output = tmp_path / "vpat.json"

    status = run_cli("--input", results_file, "--format", "json", "-o", str(output),
                     "--product", "Example Site", "--version", "2.1", "--evaluator", "QA Team")

    assert status == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["product"] == {"name": "Example Site", "version": "2.1"}
    assert data["evaluation"]["evaluator"] == "QA Team"
    assert data["evaluation"]["urls"] == ["https://example.com", "https://example.com/about"]
    assert data["summary"]["doesNotSupport"] == 1
    assert data["summary"]["totalViolations"] == 2


def test_product_name_falls_back_to_first_result_url(tmp_path, results_file) -> None:
    output = tmp_path / "vpat.json"
    assert run_cli("--input", results_file, "-f", "json", "-o", str(output)) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["product"]["name"] == "https://example.com"


def test_markdown_report_goes_to_stdout(results_file, capsys) -> None:
    assert run_cli("--input", results_file, "--product", "Acme") == 0

    captured = capsys.readouterr()
    assert captured.out.startswith("# Voluntary Product Accessibility Template (VPAT)")
    assert "| 1.1.1 Non-text Content | [FAIL] Does Not Support |" in captured.out
    assert "Summary:" not in captured.out


def test_csv_sheet_into_output_dir(tmp_path, results_file) -> None:
    status = run_cli("--input", results_file, "--product", "Acme", "--format", "csv",
                     "--csv-sheet", "violations", "--output-dir", str(tmp_path / "out"))

    assert status == 0
    written = (tmp_path / "out" / "Acme_VPAT_violations.csv").read_bytes()
    assert written.startswith(b"Criteria ID,Criteria Name,Rule ID")
    assert b"image-alt" in written


def test_fail_on_threshold(tmp_path, results_file) -> None:
    output = tmp_path / "vpat.md"
    assert run_cli("--input", results_file, "-o", str(output), "--fail-on", "critical") == 1
    assert output.exists()

    clean = str(ResultsStorage().save_results([make_result(violations=[make_violation("region", "minor")])],
                                              str(tmp_path / "clean.json")))
    assert run_cli("--input", clean, "-o", str(output), "--fail-on", "serious") == 0


def test_save_results_copy(tmp_path, results_file) -> None:
    saved = tmp_path / "copy.json"
    assert run_cli("--input", results_file, "-o", str(tmp_path / "vpat.md"), "--save-results", str(saved)) == 0
    assert len(ResultsStorage().load_results(str(saved))) == 2


def test_unreadable_input_returns_error_status(tmp_path) -> None:
    assert run_cli("--input", str(tmp_path / "missing.json")) == 1


def test_bad_config_file_is_a_usage_error(tmp_path, results_file) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("- not a mapping\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        run_cli("--input", results_file, "--config", str(config))
    assert exc_info.value.code == 2
