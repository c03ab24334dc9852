"""
JSON rendering and parsing of VPAT reports
"""

import json
import logging

from pydantic import ValidationError

from vpat.errors import SerializationError
from vpat.models import REPORT_ADAPTER, Report

logger = logging.getLogger(__name__)


def render_json(report: Report) -> str:
    """
    Render a report as JSON with camelCase keys and two-space indentation

    Args:
        report: Generated report

    Returns:
        JSON text

    Raises:
        SerializationError: If the report holds values JSON cannot encode
    """
    try:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode report as JSON: {e}") from e


def parse_json(text: str) -> Report:
    """
    Rebuild a report from render_json() output

    Args:
        text: JSON text

    Returns:
        Report object

    Raises:
        SerializationError: If the text is not a valid report
    """
    try:
        return REPORT_ADAPTER.validate_json(text)
    except ValidationError as e:
        logger.debug(f"Report JSON failed validation: {e}")
        raise SerializationError(f"Invalid report JSON: {e.error_count()} error(s)") from e
