"""
Markdown rendering of VPAT reports (ITI VPAT layout)
"""

from typing import List

from vpat.formatting import (
    conformance_tag,
    format_date,
    format_timestamp,
    group_by_principle,
    remarks_with_issues,
    tool_labels,
    truncate_snippet,
)
from vpat.models import Report


def render_markdown(report: Report) -> str:
    """
    Render a report as GitHub-flavored Markdown

    Args:
        report: Generated report

    Returns:
        Markdown text with LF line endings
    """
    lines: List[str] = []
    out = lines.append

    out("# Voluntary Product Accessibility Template (VPAT)")
    out("")
    out(f"**Standard:** {report.standard}")
    out("")

    # Product information
    product = report.product
    out("## Product Information")
    out("")
    out("| Field | Value |")
    out("|-------|-------|")
    out(f"| **Product Name** | {product.name} |")
    if product.version:
        out(f"| **Version** | {product.version} |")
    if product.vendor:
        out(f"| **Vendor** | {product.vendor} |")
    if product.url:
        out(f"| **Product URL** | {product.url} |")
    if product.description:
        out(f"| **Description** | {product.description} |")
    out("")

    # Evaluation information
    evaluation = report.evaluation
    out("## Evaluation Information")
    out("")
    out("| Field | Value |")
    out("|-------|-------|")
    out(f"| **Evaluation Date** | {format_date(evaluation.date)} |")
    if evaluation.evaluator:
        out(f"| **Evaluator** | {evaluation.evaluator} |")
    out(f"| **Methods** | {', '.join(evaluation.methods)} |")
    if evaluation.tools:
        out(f"| **Tools** | {tool_labels(evaluation.tools)} |")
    if evaluation.scope:
        out(f"| **Scope** | {evaluation.scope} |")
    out("")

    if evaluation.urls:
        out("### URLs Evaluated")
        out("")
        for url in evaluation.urls:
            out(f"- {url}")
        out("")

    # Summary
    summary = report.summary
    out("## Summary")
    out("")
    out("| Conformance Level | Count |")
    out("|-------------------|-------|")
    out(f"| Supports | {summary.supports} |")
    out(f"| Partially Supports | {summary.partially_supports} |")
    out(f"| Does Not Support | {summary.does_not_support} |")
    out(f"| Not Applicable | {summary.not_applicable} |")
    out(f"| Not Evaluated | {summary.not_evaluated} |")
    out(f"| **Total** | **{summary.total_criteria}** |")
    out("")
    out(f"- **Automated Coverage:** {summary.automated_coverage:.1f}%")
    out(f"- **Total Violations Found:** {summary.total_violations}")
    out("")

    # Detailed results
    out("## Detailed Results")
    out("")
    for heading, criteria in group_by_principle(report.criteria):
        out(f"### Principle {heading}")
        out("")
        out("| Criteria | Conformance Level | Remarks |")
        out("|----------|-------------------|----------|")
        for c in criteria:
            remarks = remarks_with_issues(c.remarks, c)
            out(f"| {c.id} {c.name} | {conformance_tag(c.conformance)} {c.conformance.value} | {remarks} |")
        out("")

    if summary.total_violations > 0:
        out("## Violations Detail")
        out("")
        for c in report.criteria:
            if not c.violations:
                continue
            out(f"### {c.id} {c.name}")
            out("")
            for v in c.violations:
                out(f"**{v.rule_id}** - {v.description}")
                out("")
                out(f"- Impact: {v.impact}")
                out(f"- Instances: {v.count}")
                if v.help_url:
                    out(f"- More info: {v.help_url}")
                if v.elements:
                    out("- Example elements:")
                    for element in v.elements:
                        out("  ```html")
                        out(f"  {truncate_snippet(element)}")
                        out("  ```")
                out("")

    if report.notes:
        out("## Notes")
        out("")
        out(report.notes)
        out("")

    out("---")
    out("")
    out(f"*Generated: {format_timestamp(report.generated_at)}*")

    return "\n".join(lines) + "\n"
