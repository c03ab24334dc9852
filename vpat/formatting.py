"""
Text helpers shared by the report renderers
"""

import re
from datetime import datetime
from typing import Dict, List, Sequence, Tuple

from vpat.criteria import PRINCIPLES
from vpat.models import Conformance, CriterionResult, ToolInfo

SNIPPET_MAX_LENGTH = 200

DATE_FORMAT = '%Y-%m-%d'
TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S %Z'

CONFORMANCE_TAGS: Dict[Conformance, str] = {
    Conformance.SUPPORTS: "[PASS]",
    Conformance.PARTIALLY_SUPPORTS: "[PARTIAL]",
    Conformance.DOES_NOT_SUPPORT: "[FAIL]",
    Conformance.NOT_APPLICABLE: "[N/A]",
    Conformance.NOT_EVALUATED: "[?]",
}

CONFORMANCE_CLASSES: Dict[Conformance, str] = {
    Conformance.SUPPORTS: "supports",
    Conformance.PARTIALLY_SUPPORTS: "partially-supports",
    Conformance.DOES_NOT_SUPPORT: "does-not-support",
    Conformance.NOT_APPLICABLE: "not-applicable",
    Conformance.NOT_EVALUATED: "not-evaluated",
}

_WHITESPACE = re.compile(r'\s+')


def truncate_snippet(snippet: str, max_length: int = SNIPPET_MAX_LENGTH) -> str:
    """
    Flatten an HTML snippet onto one line and cap its length

    Newlines and whitespace runs collapse to single spaces. Snippets longer
    than max_length are cut so that, with a trailing "...", they are exactly
    max_length characters.

    Args:
        snippet: Raw HTML
        max_length: Maximum length of the returned text

    Returns:
        Normalized, possibly truncated snippet
    """
    text = _WHITESPACE.sub(' ', snippet).strip()
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def conformance_tag(conformance: Conformance) -> str:
    return CONFORMANCE_TAGS.get(conformance, "")


def conformance_class(conformance: Conformance) -> str:
    return CONFORMANCE_CLASSES.get(conformance, "")


def tool_labels(tools: Sequence[ToolInfo]) -> str:
    """'name version' labels joined by commas"""
    return ", ".join(t.label for t in tools)


def issues_summary(criterion: CriterionResult) -> str:
    """'rule (count), ...' for a criterion's violations"""
    return ", ".join(f"{v.rule_id} ({v.count})" for v in criterion.violations)


def remarks_with_issues(remarks: str, criterion: CriterionResult) -> str:
    """Append the issue list to remarks when the criterion has violations"""
    if not criterion.violations:
        return remarks
    if remarks:
        remarks += "; "
    return remarks + "Issues: " + issues_summary(criterion)


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def format_timestamp(value: datetime) -> str:
    """Naive times and bare UTC offsets are shown in local time so the zone has a name"""
    name = value.tzname() or ''
    if not name.isalpha():
        value = value.astimezone()
    return value.strftime(TIMESTAMP_FORMAT).rstrip()


def group_by_principle(criteria: Sequence[CriterionResult]) -> List[Tuple[str, List[CriterionResult]]]:
    """
    Split criteria into the four WCAG principles

    Returns:
        (heading, criteria) pairs in principle order; empty principles are kept
    """
    return [
        (heading, [c for c in criteria if c.id.startswith(prefix)])
        for prefix, heading in PRINCIPLES
    ]
