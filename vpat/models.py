"""
Data models for accessibility results and VPAT reports
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any
from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, TypeAdapter, with_config
from pydantic.alias_generators import to_camel

# Report entities serialize with camelCase keys ("generatedAt", "axeRules", ...)
REPORT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def local_now() -> datetime:
    """Current local time with timezone information"""
    return datetime.now().astimezone()


class Conformance(str, Enum):
    """Conformance level achieved for a criterion"""
    SUPPORTS = "Supports"
    PARTIALLY_SUPPORTS = "Partially Supports"
    DOES_NOT_SUPPORT = "Does Not Support"
    NOT_APPLICABLE = "Not Applicable"
    NOT_EVALUATED = "Not Evaluated"


class EvaluationMethod(str, Enum):
    """How a criterion was evaluated"""
    AUTOMATED = "Automated"
    MANUAL = "Manual"
    HYBRID = "Hybrid"
    NOT_TESTED = "Not Tested"


class Impact(str, Enum):
    """axe-core violation impact"""
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"


_IMPACT_RANK = {
    'critical': 4,
    'serious': 3,
    'moderate': 2,
    'minor': 1,
}


def impact_rank(impact: str) -> int:
    """Rank an impact string; unknown values rank 0"""
    return _IMPACT_RANK.get((impact or '').lower(), 0)


# Checker input

@dataclass
class RawNode:
    """An element flagged by the accessibility checker"""
    html: str
    target: List[str] = field(default_factory=list)
    failure_summary: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawNode':
        return cls(
            html=data.get('html') or '',
            target=[str(t) for t in data.get('target') or []],
            failure_summary=data.get('failureSummary') or ''
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'html': self.html,
            'target': list(self.target),
            'failureSummary': self.failure_summary
        }


@dataclass
class RawViolation:
    """A rule that fired on a page, as reported by axe-core"""
    rule_id: str
    help: str
    help_url: str
    impact: str
    nodes: List[RawNode] = field(default_factory=list)
    description: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawViolation':
        """
        Build a violation from an axe-core violation object

        Args:
            data: Dictionary with 'id', 'help', 'helpUrl', 'impact' and 'nodes'

        Returns:
            RawViolation object
        """
        return cls(
            rule_id=data.get('id') or '',
            help=data.get('help') or '',
            help_url=data.get('helpUrl') or '',
            # axe reports null impact for some rules
            impact=data.get('impact') or '',
            nodes=[RawNode.from_dict(n) for n in data.get('nodes') or []],
            description=data.get('description') or '',
            tags=list(data.get('tags') or [])
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.rule_id,
            'impact': self.impact,
            'tags': list(self.tags),
            'description': self.description,
            'help': self.help,
            'helpUrl': self.help_url,
            'nodes': [n.to_dict() for n in self.nodes]
        }


@dataclass
class RawResult:
    """Accessibility check results for a single page"""
    url: str = ""
    violations: List[RawViolation] = field(default_factory=list)
    passes: List[Dict[str, Any]] = field(default_factory=list)
    incomplete: List[Dict[str, Any]] = field(default_factory=list)
    inapplicable: List[Dict[str, Any]] = field(default_factory=list)
    timestamp: str = ""
    engine_version: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawResult':
        """
        Build a result from an axe-core results object

        Args:
            data: axe.run() output, optionally with a 'url' key

        Returns:
            RawResult object
        """
        engine = data.get('testEngine') or {}
        return cls(
            url=data.get('url') or '',
            violations=[RawViolation.from_dict(v) for v in data.get('violations') or []],
            passes=list(data.get('passes') or []),
            incomplete=list(data.get('incomplete') or []),
            inapplicable=list(data.get('inapplicable') or []),
            timestamp=data.get('timestamp') or '',
            engine_version=engine.get('version') or ''
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'timestamp': self.timestamp,
            'testEngine': {'name': 'axe-core', 'version': self.engine_version},
            'violations': [v.to_dict() for v in self.violations],
            'passes': list(self.passes),
            'incomplete': list(self.incomplete),
            'inapplicable': list(self.inapplicable)
        }

    def filter_violations(self, fail_on: str) -> List[RawViolation]:
        """Violations whose impact is at or above fail_on"""
        threshold = impact_rank(fail_on)
        return [v for v in self.violations if impact_rank(v.impact) >= threshold]

    def has_failures(self, fail_on: str) -> bool:
        """Whether any violation is at or above fail_on"""
        return len(self.filter_violations(fail_on)) > 0


# Report entities

@with_config(REPORT_CONFIG)
@dataclass
class ProductInfo:
    """The product being evaluated"""
    name: str
    version: str = ""
    description: str = ""
    vendor: str = ""
    url: str = ""


@with_config(REPORT_CONFIG)
@dataclass
class ToolInfo:
    """A tool used during evaluation"""
    name: str
    version: str = ""

    @property
    def label(self) -> str:
        return f"{self.name} {self.version}" if self.version else self.name


@with_config(REPORT_CONFIG)
@dataclass
class EvaluationInfo:
    """How the evaluation was conducted"""
    date: datetime = field(default_factory=local_now)
    evaluator: str = ""
    methods: List[str] = field(default_factory=lambda: ["Automated testing"])
    tools: List[ToolInfo] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)
    scope: str = ""


@with_config(REPORT_CONFIG)
@dataclass
class Violation:
    """A rule violation attached to a criterion"""
    rule_id: str = ""
    description: str = ""
    impact: str = ""
    count: int = 0
    elements: List[str] = field(default_factory=list)  # untruncated HTML snippets
    help_url: str = ""


@with_config(REPORT_CONFIG)
@dataclass
class CriterionResult:
    """Evaluation result for a single WCAG criterion"""
    id: str
    name: str
    level: str
    conformance: Conformance
    evaluation_method: EvaluationMethod
    remarks: str = ""
    violations: List[Violation] = field(default_factory=list)
    axe_rules: List[str] = field(default_factory=list)

    @property
    def violation_count(self) -> int:
        return sum(v.count for v in self.violations)


@with_config(REPORT_CONFIG)
@dataclass
class Summary:
    """Aggregate conformance statistics"""
    total_criteria: int = 0
    supports: int = 0
    partially_supports: int = 0
    does_not_support: int = 0
    not_applicable: int = 0
    not_evaluated: int = 0
    automated_coverage: float = 0.0
    total_violations: int = 0


_SUMMARY_COUNTERS = {
    Conformance.SUPPORTS: 'supports',
    Conformance.PARTIALLY_SUPPORTS: 'partially_supports',
    Conformance.DOES_NOT_SUPPORT: 'does_not_support',
    Conformance.NOT_APPLICABLE: 'not_applicable',
    Conformance.NOT_EVALUATED: 'not_evaluated',
}


@with_config(REPORT_CONFIG)
@dataclass
class Report:
    """A complete VPAT accessibility conformance report"""
    product: ProductInfo
    evaluation: EvaluationInfo
    standard: str = "WCAG 2.2 Level AA"
    criteria: List[CriterionResult] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    notes: str = ""
    generated_at: datetime = field(default_factory=local_now)

    def calculate_summary(self) -> Summary:
        """
        Compute the summary from the criteria results

        Replaces the current summary; calling it twice gives the same result.

        Returns:
            The new Summary
        """
        summary = Summary(total_criteria=len(self.criteria))
        automated = 0

        for criterion in self.criteria:
            counter = _SUMMARY_COUNTERS.get(criterion.conformance)
            if counter:
                setattr(summary, counter, getattr(summary, counter) + 1)

            if criterion.evaluation_method in (EvaluationMethod.AUTOMATED, EvaluationMethod.HYBRID):
                automated += 1

            summary.total_violations += criterion.violation_count

        if summary.total_criteria > 0:
            summary.automated_coverage = automated / summary.total_criteria * 100

        self.summary = summary
        return summary

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the report to a JSON-ready dictionary

        Keys come from the camelCase aliases; optional empty strings and
        lists are left out.
        """
        data = REPORT_ADAPTER.dump_python(self, mode='json', by_alias=True)

        evaluation = data['evaluation']
        evaluation['tools'] = [_compact(t, required=('name',)) for t in evaluation['tools']]

        data['product'] = _compact(data['product'], required=('name',))
        data['evaluation'] = _compact(evaluation, required=('date', 'methods'))
        data['criteria'] = [_compact_criterion(c) for c in data['criteria']]
        return _compact(data, required=('product', 'evaluation', 'standard', 'criteria',
                                        'summary', 'generatedAt'))


def _compact_criterion(criterion: Dict[str, Any]) -> Dict[str, Any]:
    criterion['violations'] = [
        _compact(v, required=('description', 'count')) for v in criterion['violations']
    ]
    return _compact(criterion, required=('id', 'name', 'level', 'conformance', 'evaluationMethod'))


def _compact(data: Dict[str, Any], required: tuple = ()) -> Dict[str, Any]:
    """Drop empty optional values, keeping the required keys"""
    return {k: v for k, v in data.items() if k in required or v not in ("", [], None)}


REPORT_ADAPTER = TypeAdapter(Report)
