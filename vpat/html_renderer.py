"""
HTML rendering of VPAT reports, styled after the ITI VPAT 2.5 template
"""

from typing import Any, Dict

from jinja2 import Environment

from vpat.formatting import (
    conformance_class,
    format_date,
    format_timestamp,
    group_by_principle,
    remarks_with_issues,
    tool_labels,
    truncate_snippet,
)
from vpat.models import Report

# Autoescaping covers every piece of report text placed in the page
_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>VPAT - {{ product.name }}</title>
<style>
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, sans-serif;
  line-height: 1.6;
  max-width: 1200px;
  margin: 0 auto;
  padding: 20px;
  color: #333;
}
h1, h2, h3 { color: #1a1a2e; }
table {
  width: 100%;
  border-collapse: collapse;
  margin: 1em 0;
}
th, td {
  border: 1px solid #ddd;
  padding: 12px;
  text-align: left;
}
th {
  background-color: #f5f5f5;
  font-weight: 600;
}
tr:nth-child(even) { background-color: #fafafa; }
.supports { color: #22863a; font-weight: bold; }
.partially-supports { color: #b08800; font-weight: bold; }
.does-not-support { color: #cb2431; font-weight: bold; }
.not-applicable { color: #6a737d; }
.not-evaluated { color: #6a737d; font-style: italic; }
.summary-box {
  background: #f6f8fa;
  border: 1px solid #e1e4e8;
  border-radius: 6px;
  padding: 16px;
  margin: 1em 0;
}
.violation {
  background: #ffeef0;
  border-left: 4px solid #cb2431;
  padding: 12px;
  margin: 1em 0;
}
.violation code {
  background: #f6f8fa;
  padding: 2px 6px;
  border-radius: 3px;
  font-size: 0.9em;
}
.note {
  background: #fff8c5;
  border: 1px solid #f9c513;
  border-radius: 6px;
  padding: 16px;
  margin: 1em 0;
}
footer {
  margin-top: 2em;
  padding-top: 1em;
  border-top: 1px solid #e1e4e8;
  color: #6a737d;
  font-size: 0.9em;
}
</style>
</head>
<body>
<h1>Voluntary Product Accessibility Template (VPAT)</h1>
<p><strong>Standard:</strong> {{ standard }}</p>
<h2>Product Information</h2>
<table>
<tr><th>Field</th><th>Value</th></tr>
<tr><td>Product Name</td><td>{{ product.name }}</td></tr>
{% if product.version %}
<tr><td>Version</td><td>{{ product.version }}</td></tr>
{% endif %}
{% if product.vendor %}
<tr><td>Vendor</td><td>{{ product.vendor }}</td></tr>
{% endif %}
{% if product.url %}
<tr><td>Product URL</td><td><a href="{{ product.url }}">{{ product.url }}</a></td></tr>
{% endif %}
{% if product.description %}
<tr><td>Description</td><td>{{ product.description }}</td></tr>
{% endif %}
</table>
<h2>Evaluation Information</h2>
<table>
<tr><th>Field</th><th>Value</th></tr>
<tr><td>Evaluation Date</td><td>{{ evaluation_date }}</td></tr>
{% if evaluation.evaluator %}
<tr><td>Evaluator</td><td>{{ evaluation.evaluator }}</td></tr>
{% endif %}
<tr><td>Methods</td><td>{{ evaluation.methods | join(", ") }}</td></tr>
{% if tools %}
<tr><td>Tools</td><td>{{ tools }}</td></tr>
{% endif %}
{% if evaluation.scope %}
<tr><td>Scope</td><td>{{ evaluation.scope }}</td></tr>
{% endif %}
</table>
{% if evaluation.urls %}
<h3>URLs Evaluated</h3>
<ul>
{% for url in evaluation.urls %}
<li><a href="{{ url }}">{{ url }}</a></li>
{% endfor %}
</ul>
{% endif %}
<h2>Summary</h2>
<div class="summary-box">
<table>
<tr><th>Conformance Level</th><th>Count</th></tr>
<tr><td class="supports">Supports</td><td>{{ summary.supports }}</td></tr>
<tr><td class="partially-supports">Partially Supports</td><td>{{ summary.partially_supports }}</td></tr>
<tr><td class="does-not-support">Does Not Support</td><td>{{ summary.does_not_support }}</td></tr>
<tr><td class="not-applicable">Not Applicable</td><td>{{ summary.not_applicable }}</td></tr>
<tr><td class="not-evaluated">Not Evaluated</td><td>{{ summary.not_evaluated }}</td></tr>
<tr><th>Total</th><th>{{ summary.total_criteria }}</th></tr>
</table>
<p><strong>Automated Coverage:</strong> {{ coverage }}%</p>
<p><strong>Total Violations Found:</strong> {{ summary.total_violations }}</p>
</div>
<h2>Detailed Results</h2>
{% for heading, rows in principles %}
<h3>Principle {{ heading }}</h3>
<table>
<tr><th>Criteria</th><th>Conformance Level</th><th>Remarks</th></tr>
{% for row in rows %}
<tr><td>{{ row.id }} {{ row.name }}</td><td class="{{ row.css_class }}">{{ row.conformance }}</td><td>{{ row.remarks }}</td></tr>
{% endfor %}
</table>
{% endfor %}
{% if summary.total_violations > 0 %}
<h2>Violations Detail</h2>
{% for criterion in violating %}
<h3>{{ criterion.id }} {{ criterion.name }}</h3>
{% for v in criterion.violations %}
<div class="violation">
<p><strong>{{ v.rule_id }}</strong> - {{ v.description }}</p>
<ul>
<li>Impact: {{ v.impact }}</li>
<li>Instances: {{ v.count }}</li>
{% if v.help_url %}
<li>More info: <a href="{{ v.help_url }}">{{ v.help_url }}</a></li>
{% endif %}
</ul>
{% if v.elements %}
<p>Example elements:</p>
{% for element in v.elements %}
<pre><code>{{ element | snippet }}</code></pre>
{% endfor %}
{% endif %}
</div>
{% endfor %}
{% endfor %}
{% endif %}
{% if notes %}
<div class="note">
<h2>Notes</h2>
<p>{{ notes }}</p>
</div>
{% endif %}
<footer>
<p>Generated: {{ generated_at }}</p>
</footer>
</body>
</html>
"""

_env.filters['snippet'] = truncate_snippet
_template = _env.from_string(HTML_TEMPLATE)


def _template_data(report: Report) -> Dict[str, Any]:
    """Prepare data for the template"""
    principles = []
    for heading, criteria in group_by_principle(report.criteria):
        rows = [
            {
                'id': c.id,
                'name': c.name,
                'conformance': c.conformance.value,
                'css_class': conformance_class(c.conformance),
                'remarks': remarks_with_issues(c.remarks, c),
            }
            for c in criteria
        ]
        principles.append((heading, rows))

    return {
        'standard': report.standard,
        'product': report.product,
        'evaluation': report.evaluation,
        'evaluation_date': format_date(report.evaluation.date),
        'tools': tool_labels(report.evaluation.tools),
        'summary': report.summary,
        'coverage': f"{report.summary.automated_coverage:.1f}",
        'principles': principles,
        'violating': [c for c in report.criteria if c.violations],
        'notes': report.notes,
        'generated_at': format_timestamp(report.generated_at),
    }


def render_html(report: Report) -> str:
    """
    Render a report as a self-contained HTML5 document

    Args:
        report: Generated report

    Returns:
        HTML text with inline CSS and no external assets
    """
    return _template.render(**_template_data(report))
