#!/usr/bin/env python3
"""
Main CLI entry point for VPAT accessibility conformance reports
"""

import asyncio
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from vpat.accessibility_tester import AXE_SCRIPT_URL, AXE_VERSION, AccessibilityTester, STANDARD_TAGS
from vpat.browser_manager import BrowserManager
from vpat.config_loader import ConfigLoader
from vpat.errors import CheckError, VPATError
from vpat.generator import Generator
from vpat.models import Impact, ProductInfo, RawResult, Report
from vpat.report_generator import CSV_SHEETS, OutputFormat, ReportGenerator
from vpat.results_storage import ResultsStorage
from vpat.schema import render_json_schema
from vpat.url_reader import UrlReader

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_PRODUCT_NAME = "Untitled Product"

logger = logging.getLogger(__name__)


class UTF8StreamHandler(logging.StreamHandler):
    """StreamHandler that uses UTF-8 encoding for Windows compatibility"""
    def __init__(self, stream=None):
        if stream is None:
            # stdout carries the rendered report
            stream = sys.stderr
        if sys.platform == 'win32' and hasattr(stream, 'reconfigure'):
            try:
                stream.reconfigure(encoding='utf-8', errors='replace')
            except (AttributeError, ValueError):
                pass
        super().__init__(stream)


def configure_logging(config: Dict[str, Any], verbose: bool = False):
    """Configure root logging from the 'logging' config section"""
    log_config = config.get('logging', {})
    level = logging.DEBUG if verbose else getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO)

    handlers: List[logging.Handler] = [UTF8StreamHandler()]
    if log_config.get('file'):
        handlers.append(logging.FileHandler(log_config['file'], encoding='utf-8'))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _output_format(value: str) -> OutputFormat:
    try:
        return OutputFormat.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser"""
    parser = argparse.ArgumentParser(
        prog='vpat',
        description='Generate a VPAT (Voluntary Product Accessibility Template) report',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Runs automated accessibility checks (axe-core) against one or more URLs and
maps the findings to WCAG 2.2 Level A/AA success criteria.

Output formats:
  json      JSON intermediate representation
  markdown  Markdown (ITI VPAT layout)
  html      HTML (ITI VPAT layout)
  csv       CSV for spreadsheet import

Examples:
  vpat https://example.com --product "Example Site" --format html -o vpat.html
  vpat https://example.com https://example.com/about --format markdown
  vpat --input results.json --format csv --csv-sheet violations
        """
    )

    parser.add_argument('urls', nargs='*', metavar='url', help='URLs to evaluate')
    parser.add_argument('-f', '--format', type=_output_format, default=None,
                        help='Output format: json, markdown, html, csv (default: markdown)')
    parser.add_argument('-o', '--output', default=None, help='Output file (default: stdout)')
    parser.add_argument('--output-dir', default=None,
                        help='Write the report into this directory under a name derived from the product')
    parser.add_argument('--product', default='', help='Product name for the report')
    parser.add_argument('--version', default='', help='Product version')
    parser.add_argument('--vendor', default='', help='Vendor/organization name')
    parser.add_argument('--description', default='', help='Brief product description')
    parser.add_argument('--product-url', default='', help='Product website URL')
    parser.add_argument('--evaluator', default='', help='Evaluator name')
    parser.add_argument('--scope', default='', help='Evaluation scope description')
    parser.add_argument('--standard', default=None, choices=sorted(STANDARD_TAGS),
                        help='WCAG standard used for the axe-core run (default: wcag22aa)')
    parser.add_argument('--csv-sheet', default='main', choices=sorted(CSV_SHEETS),
                        help='CSV variant: per-criterion rows, summary metrics or violations')
    parser.add_argument('--input', default=None,
                        help='Build the report from saved accessibility results (JSON) instead of a browser run')
    parser.add_argument('--urls-file', default=None,
                        help='Read additional URLs from an Excel, CSV or text file')
    parser.add_argument('--save-results', default=None,
                        help='Save the raw accessibility results to this JSON file')
    parser.add_argument('--fail-on', default=None, choices=[i.value for i in Impact],
                        help='Exit with status 1 when a violation at or above this impact is found')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Total timeout in seconds for all checks (default: 600)')
    parser.add_argument('--config', default=None,
                        help='Path to configuration YAML file (default: config/default_config.yaml)')
    parser.add_argument('--headless', default=None, help='Run browser in headless mode (true/false)')
    parser.add_argument('--print-schema', action='store_true', help='Print the report JSON Schema and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


async def collect_results(urls: List[str], config: Dict[str, Any], standard: str) -> List[RawResult]:
    """
    Run axe-core against each URL in a single browser session

    Args:
        urls: URLs to check, in order
        config: Configuration dictionary
        standard: WCAG standard token

    Returns:
        One RawResult per URL
    """
    browser_config = config.get('browser', {})
    axe_config = config.get('axe', {})

    tester = AccessibilityTester(
        standard=standard,
        axe_version=axe_config.get('version', AXE_VERSION),
        script_url=axe_config.get('script_url', AXE_SCRIPT_URL),
        timeout=float(axe_config.get('timeout', 30))
    )

    results: List[RawResult] = []
    async with BrowserManager(
        headless=browser_config.get('headless', True),
        timeout=browser_config.get('timeout', 30000),
        viewport=browser_config.get('viewport'),
        wait_until=browser_config.get('wait_until', 'networkidle')
    ) as browser:
        page = await browser.new_page()
        for url in urls:
            logger.info(f"Checking: {url}")
            if not await browser.navigate(page, url):
                # Non-fatal: check whatever has loaded
                logger.warning(f"Page may not be fully loaded: {url}")

            result = await tester.run_test(page, url)
            results.append(result)
            logger.info(f"  Found {len(result.violations)} violations, {len(result.passes)} passes")

    return results


def build_generator(args: argparse.Namespace, config: Dict[str, Any],
                    urls: List[str], results: List[RawResult]) -> Generator:
    """Create a generator from CLI arguments and configuration"""
    name = args.product or (urls[0] if urls else '')
    if not name:
        name = next((r.url for r in results if r.url), DEFAULT_PRODUCT_NAME)

    product = ProductInfo(
        name=name,
        version=args.version,
        description=args.description,
        vendor=args.vendor,
        url=args.product_url
    )

    generator = Generator(product, tools=ConfigLoader.get_tools(config))
    if args.evaluator:
        generator.set_evaluator(args.evaluator)
    if args.scope:
        generator.set_scope(args.scope)
    for url in urls:
        generator.add_url(url)
    return generator


def log_summary(report: Report):
    summary = report.summary
    logger.info("Summary:")
    logger.info(f"  Supports:           {summary.supports}")
    logger.info(f"  Partially Supports: {summary.partially_supports}")
    logger.info(f"  Does Not Support:   {summary.does_not_support}")
    logger.info(f"  Not Evaluated:      {summary.not_evaluated}")
    logger.info(f"  Automated Coverage: {summary.automated_coverage:.1f}%")
    logger.info(f"  Total Violations:   {summary.total_violations}")


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution function

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.print_schema:
        print(render_json_schema())
        return 0

    try:
        config = ConfigLoader.load_config(args.config)
    except VPATError as e:
        parser.error(str(e))

    # Apply CLI overrides
    if args.headless:
        config.setdefault('browser', {})['headless'] = args.headless.lower() == 'true'

    configure_logging(config, args.verbose)

    vpat_config = config.get('vpat', {})
    try:
        fmt = args.format or OutputFormat.parse(vpat_config.get('format', 'markdown'))
    except ValueError as e:
        parser.error(f"config vpat.format: {e}")
    standard = args.standard or vpat_config.get('standard', 'wcag22aa')
    timeout = args.timeout if args.timeout is not None else float(vpat_config.get('timeout', 600))

    try:
        urls = list(args.urls)
        if args.urls_file:
            for url in UrlReader().read_urls(args.urls_file):
                if url not in urls:
                    urls.append(url)

        if not urls and not args.input:
            parser.error("at least one URL, --urls-file or --input is required")

        storage = ResultsStorage()
        results: List[RawResult] = []
        if args.input:
            results.extend(storage.load_results(args.input))

        if urls:
            try:
                results.extend(await asyncio.wait_for(collect_results(urls, config, standard), timeout=timeout))
            except asyncio.TimeoutError:
                raise CheckError(f"accessibility checks did not finish within {timeout:g}s") from None

        if args.save_results:
            storage.save_results(results, args.save_results)

        generator = build_generator(args, config, urls, results)
        report = generator.generate(results)

        ReportGenerator(args.output_dir).write_report(
            report, fmt, output=args.output, csv_sheet=args.csv_sheet
        )
        log_summary(report)

        if args.fail_on and any(r.has_failures(args.fail_on) for r in results):
            logger.warning(f"Violations at or above '{args.fail_on}' impact were found")
            return 1
        return 0

    except VPATError as e:
        logger.error(f"Error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Error during execution: {e}", exc_info=True)
        return 1


def run():
    """Console script entry point"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
