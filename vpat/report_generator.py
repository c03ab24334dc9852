"""
Report output: format selection, rendering and writing
"""

import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, TextIO
import logging

from vpat.csv_renderer import render_csv, render_csv_summary, render_csv_violations
from vpat.errors import RenderError
from vpat.html_renderer import render_html
from vpat.json_renderer import render_json
from vpat.markdown_renderer import render_markdown
from vpat.models import Report

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Supported output formats"""
    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"
    CSV = "csv"

    @classmethod
    def parse(cls, value: str) -> 'OutputFormat':
        """
        Parse a format name, accepting "md" for Markdown

        Raises:
            ValueError: For unknown formats
        """
        name = (value or '').strip().lower()
        if name == 'md':
            return cls.MARKDOWN
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unknown format: {value} (use json, markdown, html, or csv)") from None


FORMAT_EXTENSIONS = {
    OutputFormat.JSON: 'json',
    OutputFormat.MARKDOWN: 'md',
    OutputFormat.HTML: 'html',
    OutputFormat.CSV: 'csv',
}

CSV_SHEETS: Dict[str, Callable[[Report], str]] = {
    'main': render_csv,
    'summary': render_csv_summary,
    'violations': render_csv_violations,
}

_RENDERERS: Dict[OutputFormat, Callable[[Report], str]] = {
    OutputFormat.JSON: render_json,
    OutputFormat.MARKDOWN: render_markdown,
    OutputFormat.HTML: render_html,
}


def render_report(report: Report, fmt: OutputFormat, csv_sheet: str = 'main') -> str:
    """
    Render a report in the given format

    Args:
        report: Generated report
        fmt: Output format
        csv_sheet: CSV variant ('main', 'summary' or 'violations'); CSV only

    Returns:
        Rendered text
    """
    if fmt == OutputFormat.CSV:
        if csv_sheet not in CSV_SHEETS:
            raise ValueError(f"unknown CSV sheet: {csv_sheet}")
        return CSV_SHEETS[csv_sheet](report)
    return _RENDERERS[fmt](report)


class ReportGenerator:
    """Renders reports and writes them to files or a stream"""

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize report generator

        Args:
            output_dir: Directory for reports written under their default name
        """
        self.output_dir = Path(output_dir) if output_dir else None
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)

    def default_filename(self, report: Report, fmt: OutputFormat, csv_sheet: str = 'main') -> str:
        """File name derived from the product name, e.g. Example_Site_VPAT.html"""
        name = self._sanitize_name(report.product.name) or 'report'
        suffix = '' if csv_sheet == 'main' or fmt != OutputFormat.CSV else f"_{csv_sheet}"
        return f"{name}_VPAT{suffix}.{FORMAT_EXTENSIONS[fmt]}"

    def write_report(self, report: Report, fmt: OutputFormat, output: Optional[str] = None,
                     csv_sheet: str = 'main', stream: Optional[TextIO] = None) -> Optional[Path]:
        """
        Render a report and write it out

        Written to `output` when given, else into output_dir under the
        default file name, else to `stream` (stdout by default).

        Args:
            report: Generated report
            fmt: Output format
            output: Destination file path
            csv_sheet: CSV variant
            stream: Stream used when no file destination applies

        Returns:
            Path of the written file, or None when written to a stream

        Raises:
            RenderError: If rendering or writing fails
        """
        content = render_report(report, fmt, csv_sheet)

        if output:
            filepath = Path(output)
        elif self.output_dir:
            filepath = self.output_dir / self.default_filename(report, fmt, csv_sheet)
        else:
            target = stream or sys.stdout
            target.write(content)
            if not content.endswith('\n'):
                target.write('\n')
            target.flush()
            return None

        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            # CSV keeps the writer's CRLF endings; everything else is LF
            newline = '' if fmt == OutputFormat.CSV else '\n'
            with open(filepath, 'w', encoding='utf-8', newline=newline) as f:
                f.write(content)
        except OSError as e:
            raise RenderError(f"Failed to write output to {filepath}: {e}", format=fmt.value) from e

        logger.info(f"VPAT report written to: {filepath}")
        return filepath

    @staticmethod
    def _sanitize_name(name: str) -> str:
        """
        Sanitize a product name for use in file names

        Args:
            name: Product name or URL

        Returns:
            Sanitized string safe for the file system
        """
        for prefix in ('https://', 'http://'):
            if name.startswith(prefix):
                name = name[len(prefix):]
        # Replace invalid characters with underscores
        sanitized = name.replace(':', '_').replace('/', '_').replace('\\', '_')
        sanitized = sanitized.replace(' ', '_').replace('.', '_')
        while '__' in sanitized:
            sanitized = sanitized.replace('__', '_')
        return sanitized.strip('_')
