"""
JSON Schema for the VPAT report format
"""

import json
from typing import Any, Dict

from vpat.models import REPORT_ADAPTER

SCHEMA_ID = "https://github.com/agentplexus/vibium-go/vpat/vpat.schema.json"
SCHEMA_TITLE = "VPAT Report Schema"
SCHEMA_DESCRIPTION = "JSON Schema for Vibium VPAT (Voluntary Product Accessibility Template) reports"


def report_json_schema() -> Dict[str, Any]:
    """
    Build the JSON Schema describing render_json() output

    Returns:
        Schema dictionary keyed by camelCase property names
    """
    schema = REPORT_ADAPTER.json_schema(by_alias=True)
    return {
        '$schema': "https://json-schema.org/draft/2020-12/schema",
        '$id': SCHEMA_ID,
        **schema,
        'title': SCHEMA_TITLE,
        'description': SCHEMA_DESCRIPTION,
    }


def render_json_schema() -> str:
    return json.dumps(report_json_schema(), indent=2)
