"""
VPAT report generation from accessibility check results
"""

import copy
from typing import Dict, Iterable, List, Optional, Sequence
import logging

from vpat.criteria import Criterion, wcag22aa
from vpat.models import (
    Conformance,
    CriterionResult,
    EvaluationInfo,
    EvaluationMethod,
    Impact,
    ProductInfo,
    RawResult,
    RawViolation,
    Report,
    ToolInfo,
    Violation,
    local_now,
)

logger = logging.getLogger(__name__)


STANDARD_WCAG22AA = "WCAG 2.2 Level AA"

# A criterion with serious violations fails outright above this many instances
SERIOUS_VIOLATION_THRESHOLD = 5

MAX_EXAMPLE_ELEMENTS = 3

DEFAULT_METHODS = ("Automated testing",)

DEFAULT_TOOLS = (
    ToolInfo(name="axe-core", version="4.8.4"),
    ToolInfo(name="Vibium", version="0.2.0"),
)

DEFAULT_NOTES = (
    "This report was generated using automated accessibility testing tools. "
    "Automated testing can only detect approximately 30-40% of accessibility issues. "
    "A complete accessibility evaluation requires manual testing by accessibility experts."
)

REMARK_MANUAL_ONLY = "Requires manual testing"
REMARK_HYBRID_CLEAN = "No automated violations detected; manual testing required for full evaluation"
REMARK_MANUAL_ALSO = "manual testing also required"


def build_rule_index(results: Iterable[RawResult]) -> Dict[str, List[RawViolation]]:
    """
    Index violations by rule id across all results

    Violations keep input order; the same rule firing on several pages
    contributes once per page.

    Args:
        results: Accessibility results, one per page

    Returns:
        Mapping of rule id to its violations
    """
    index: Dict[str, List[RawViolation]] = {}
    for result in results:
        for violation in result.violations:
            index.setdefault(violation.rule_id, []).append(violation)
    return index


def collect_violations(criterion: Criterion,
                       rule_index: Dict[str, List[RawViolation]]) -> List[Violation]:
    """Report-side violations for a criterion, in catalog rule order"""
    collected = []
    for rule_id in criterion.rule_ids:
        for raw in rule_index.get(rule_id, []):
            collected.append(Violation(
                rule_id=raw.rule_id,
                description=raw.help,
                impact=raw.impact,
                count=len(raw.nodes),
                elements=[node.html for node in raw.nodes[:MAX_EXAMPLE_ELEMENTS]],
                help_url=raw.help_url
            ))
    return collected


def classify_conformance(violations: Sequence[Violation]) -> Conformance:
    """
    Decide conformance for a criterion that has violations

    Any critical violation, or serious violations totalling more than
    SERIOUS_VIOLATION_THRESHOLD instances, means the criterion is not
    supported. Anything else is partial support. Unknown impacts count
    towards the total but are neither critical nor serious.

    Args:
        violations: Non-empty list of violations for one criterion

    Returns:
        Conformance.DOES_NOT_SUPPORT or Conformance.PARTIALLY_SUPPORTS
    """
    total_issues = sum(v.count for v in violations)
    has_critical = any(v.impact == Impact.CRITICAL.value for v in violations)
    has_serious = any(v.impact == Impact.SERIOUS.value for v in violations)

    if has_critical or (has_serious and total_issues > SERIOUS_VIOLATION_THRESHOLD):
        return Conformance.DOES_NOT_SUPPORT
    return Conformance.PARTIALLY_SUPPORTS


def evaluate_criterion(criterion: Criterion,
                       rule_index: Dict[str, List[RawViolation]]) -> CriterionResult:
    """
    Evaluate a single criterion against the indexed violations

    Args:
        criterion: Catalog criterion
        rule_index: Output of build_rule_index()

    Returns:
        CriterionResult for the criterion
    """
    result = CriterionResult(
        id=criterion.id,
        name=criterion.name,
        level=criterion.level,
        conformance=Conformance.NOT_EVALUATED,
        evaluation_method=EvaluationMethod.NOT_TESTED,
        axe_rules=list(criterion.rule_ids)
    )

    # No rules map to this criterion; only a person can judge it
    if not criterion.rule_ids:
        result.remarks = REMARK_MANUAL_ONLY
        return result

    if criterion.can_automate:
        result.evaluation_method = EvaluationMethod.AUTOMATED
    else:
        result.evaluation_method = EvaluationMethod.HYBRID

    violations = collect_violations(criterion, rule_index)
    if not violations:
        result.conformance = Conformance.SUPPORTS
        if not criterion.can_automate:
            result.remarks = REMARK_HYBRID_CLEAN
        return result

    result.violations = violations
    result.conformance = classify_conformance(violations)

    remarks = [f"{sum(v.count for v in violations)} instance(s) detected"]
    if not criterion.can_automate:
        remarks.append(REMARK_MANUAL_ALSO)
    result.remarks = "; ".join(remarks)
    return result


class Generator:
    """Creates WCAG 2.2 AA VPAT reports from accessibility results"""

    def __init__(self, product: ProductInfo, tools: Optional[Sequence[ToolInfo]] = None,
                 criteria: Optional[Sequence[Criterion]] = None):
        """
        Initialize generator

        Args:
            product: Product being evaluated
            tools: Tools listed in the report (defaults to DEFAULT_TOOLS)
            criteria: Criteria to evaluate (defaults to the WCAG 2.2 A/AA catalog)
        """
        self.product = product
        self.criteria = list(criteria) if criteria is not None else wcag22aa()
        self.evaluation = EvaluationInfo(
            date=local_now(),
            methods=list(DEFAULT_METHODS),
            tools=[copy.copy(t) for t in (tools if tools is not None else DEFAULT_TOOLS)]
        )

    def set_evaluator(self, evaluator: str):
        """Set the person or organization performing the evaluation"""
        self.evaluation.evaluator = evaluator

    def set_scope(self, scope: str):
        """Describe what the evaluation covered"""
        self.evaluation.scope = scope

    def add_url(self, url: str):
        """Record an evaluated URL; blanks and duplicates are ignored"""
        if url and url not in self.evaluation.urls:
            self.evaluation.urls.append(url)

    def generate(self, results: Sequence[RawResult]) -> Report:
        """
        Generate a report from accessibility results

        Neither the results nor the generator's own state are modified.

        Args:
            results: One result per checked page

        Returns:
            Fully populated Report
        """
        evaluation = copy.deepcopy(self.evaluation)
        for result in results:
            if result.url and result.url not in evaluation.urls:
                evaluation.urls.append(result.url)

        rule_index = build_rule_index(results)
        logger.debug(f"Indexed {sum(len(v) for v in rule_index.values())} violations "
                     f"across {len(rule_index)} rules from {len(results)} results")

        report = Report(
            product=copy.deepcopy(self.product),
            evaluation=evaluation,
            standard=STANDARD_WCAG22AA,
            criteria=[evaluate_criterion(c, rule_index) for c in self.criteria],
            notes=DEFAULT_NOTES,
            generated_at=local_now()
        )
        report.calculate_summary()
        return report

    def generate_from_single_result(self, result: RawResult) -> Report:
        """Generate a report from a single page's results"""
        return self.generate([result])
