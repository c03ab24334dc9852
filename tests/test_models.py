from __future__ import annotations

from datetime import datetime, timezone

from vpat.models import (
    Conformance,
    CriterionResult,
    EvaluationInfo,
    EvaluationMethod,
    ProductInfo,
    RawResult,
    Report,
    ToolInfo,
    Violation,
    impact_rank,
)

AXE_PAYLOAD = {
    "url": "https://example.com",
    "timestamp": "2026-01-15T09:30:00.000Z",
    "testEngine": {"name": "axe-core", "version": "4.8.4"},
    "violations": [
        {
            "id": "image-alt",
            "impact": "critical",
            "tags": ["wcag2a", "wcag111"],
            "description": "Ensures <img> elements have alternate text",
            "help": "Images must have alternate text",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
            "nodes": [
                {"html": "<img src=a>", "target": ["img"], "failureSummary": "Fix any of the following"},
            ],
        },
        {
            "id": "region",
            "impact": None,
            "help": "All page content should be contained by landmarks",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/region",
            "nodes": [{"html": "<div>"}],
        },
    ],
    "passes": [{"id": "document-title"}],
    "incomplete": [],
    "inapplicable": [{"id": "blink"}],
}


def _criterion(conformance: Conformance, method: EvaluationMethod, counts=()) -> CriterionResult:
    return CriterionResult(
        id="1.1.1",
        name="Non-text Content",
        level="A",
        conformance=conformance,
        evaluation_method=method,
        violations=[Violation(rule_id="image-alt", description="d", impact="minor", count=n) for n in counts],
    )


def _report(criteria) -> Report:
    return Report(product=ProductInfo(name="Acme"), evaluation=EvaluationInfo(), criteria=list(criteria))


def test_raw_result_from_axe_payload() -> None:
    result = RawResult.from_dict(AXE_PAYLOAD)
    assert result.url == "https://example.com"
    assert result.engine_version == "4.8.4"
    assert [v.rule_id for v in result.violations] == ["image-alt", "region"]

    image = result.violations[0]
    assert image.help == "Images must have alternate text"
    assert image.help_url.endswith("/image-alt")
    assert image.nodes[0].html == "<img src=a>"
    assert image.nodes[0].target == ["img"]
    assert image.nodes[0].failure_summary == "Fix any of the following"

    # null impact from axe becomes an empty string
    assert result.violations[1].impact == ""
    assert len(result.passes) == 1
    assert len(result.inapplicable) == 1


def test_raw_result_to_dict_uses_axe_keys() -> None:
    data = RawResult.from_dict(AXE_PAYLOAD).to_dict()
    assert data["testEngine"]["version"] == "4.8.4"
    assert data["violations"][0]["id"] == "image-alt"
    assert data["violations"][0]["helpUrl"].endswith("/image-alt")
    assert data["violations"][0]["nodes"][0]["failureSummary"] == "Fix any of the following"
    assert RawResult.from_dict(data) == RawResult.from_dict(AXE_PAYLOAD)


def test_filter_violations_by_impact() -> None:
    result = RawResult.from_dict(AXE_PAYLOAD)
    assert [v.rule_id for v in result.filter_violations("critical")] == ["image-alt"]
    assert result.has_failures("serious")
    assert not RawResult(url="https://example.com").has_failures("minor")


def test_impact_rank_orders_known_impacts() -> None:
    assert impact_rank("critical") > impact_rank("serious") > impact_rank("moderate") > impact_rank("minor")
    assert impact_rank("Critical") == impact_rank("critical")
    assert impact_rank("") == 0
    assert impact_rank("cosmic") == 0


def test_tool_label() -> None:
    assert ToolInfo(name="axe-core", version="4.8.4").label == "axe-core 4.8.4"
    assert ToolInfo(name="manual review").label == "manual review"


def test_evaluation_defaults() -> None:
    evaluation = EvaluationInfo()
    assert evaluation.methods == ["Automated testing"]
    assert evaluation.date.tzinfo is not None
    assert EvaluationInfo().methods is not evaluation.methods


def test_calculate_summary_counts_each_conformance() -> None:
    report = _report([
        _criterion(Conformance.SUPPORTS, EvaluationMethod.AUTOMATED),
        _criterion(Conformance.SUPPORTS, EvaluationMethod.HYBRID),
        _criterion(Conformance.PARTIALLY_SUPPORTS, EvaluationMethod.AUTOMATED, counts=(2, 3)),
        _criterion(Conformance.DOES_NOT_SUPPORT, EvaluationMethod.AUTOMATED, counts=(4,)),
        _criterion(Conformance.NOT_APPLICABLE, EvaluationMethod.MANUAL),
        _criterion(Conformance.NOT_EVALUATED, EvaluationMethod.NOT_TESTED),
    ])

    summary = report.calculate_summary()

    assert summary is report.summary
    assert summary.total_criteria == 6
    assert summary.supports == 2
    assert summary.partially_supports == 1
    assert summary.does_not_support == 1
    assert summary.not_applicable == 1
    assert summary.not_evaluated == 1
    assert (summary.supports + summary.partially_supports + summary.does_not_support
            + summary.not_applicable + summary.not_evaluated) == summary.total_criteria
    assert summary.total_violations == 9
    # Automated and Hybrid both count towards coverage
    assert summary.automated_coverage == 4 / 6 * 100


def test_calculate_summary_is_idempotent() -> None:
    report = _report([_criterion(Conformance.PARTIALLY_SUPPORTS, EvaluationMethod.AUTOMATED, counts=(1,))])
    first = report.calculate_summary()
    second = report.calculate_summary()
    assert first == second
    assert second.total_violations == 1


def test_calculate_summary_with_no_criteria() -> None:
    summary = _report([]).calculate_summary()
    assert summary.total_criteria == 0
    assert summary.automated_coverage == 0.0


def test_violation_count_sums_instances() -> None:
    criterion = _criterion(Conformance.PARTIALLY_SUPPORTS, EvaluationMethod.AUTOMATED, counts=(1, 2, 3))
    assert criterion.violation_count == 6


def test_report_to_dict_uses_camel_case_and_omits_empty_values() -> None:
    stamp = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
    report = Report(
        product=ProductInfo(name="Acme"),
        evaluation=EvaluationInfo(date=stamp),
        criteria=[CriterionResult(
            id="1.2.3",
            name="Audio Description or Media Alternative (Prerecorded)",
            level="A",
            conformance=Conformance.NOT_EVALUATED,
            evaluation_method=EvaluationMethod.NOT_TESTED,
        )],
        generated_at=stamp,
    )
    report.calculate_summary()

    data = report.to_dict()

    assert data["product"] == {"name": "Acme"}
    assert data["evaluation"] == {"date": "2026-01-15T09:30:00Z", "methods": ["Automated testing"]}
    assert data["generatedAt"] == "2026-01-15T09:30:00Z"
    assert "notes" not in data
    criterion = data["criteria"][0]
    assert criterion["evaluationMethod"] == "Not Tested"
    assert criterion["conformance"] == "Not Evaluated"
    assert "remarks" not in criterion
    assert "violations" not in criterion
    assert "axeRules" not in criterion
    assert set(data["summary"]) == {
        "totalCriteria", "supports", "partiallySupports", "doesNotSupport",
        "notApplicable", "notEvaluated", "automatedCoverage", "totalViolations",
    }
