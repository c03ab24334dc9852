"""
Accessibility testing using axe-core via Playwright
"""

import asyncio
from typing import List, Dict, Any, Optional
import logging

from playwright.async_api import Page
from playwright.async_api import Error as PlaywrightError

from vpat.errors import CheckError
from vpat.models import RawResult, local_now

logger = logging.getLogger(__name__)


# axe-core tag sets for each supported standard
STANDARD_TAGS: Dict[str, List[str]] = {
    'wcag2a': ['wcag2a'],
    'wcag2aa': ['wcag2a', 'wcag2aa'],
    'wcag2aaa': ['wcag2a', 'wcag2aa', 'wcag2aaa'],
    'wcag21a': ['wcag2a', 'wcag21a'],
    'wcag21aa': ['wcag2a', 'wcag2aa', 'wcag21a', 'wcag21aa'],
    'wcag21aaa': ['wcag2a', 'wcag2aa', 'wcag2aaa', 'wcag21a', 'wcag21aa', 'wcag21aaa'],
    'wcag22aa': ['wcag2a', 'wcag2aa', 'wcag21a', 'wcag21aa', 'wcag22aa'],
}

DEFAULT_STANDARD = 'wcag22aa'

AXE_VERSION = '4.8.4'
AXE_SCRIPT_URL = 'https://cdnjs.cloudflare.com/ajax/libs/axe-core/{version}/axe.min.js'


def standard_to_tags(standard: str) -> List[str]:
    """axe-core tags for a standard; unknown standards fall back to WCAG 2.2 AA"""
    return list(STANDARD_TAGS.get((standard or '').lower(), STANDARD_TAGS[DEFAULT_STANDARD]))


class AccessibilityTester:
    """Runs accessibility tests using axe-core"""

    def __init__(self, standard: str = DEFAULT_STANDARD, rules: List[str] = None,
                 disabled_rules: List[str] = None, include: Optional[str] = None,
                 exclude: Optional[str] = None, axe_version: str = AXE_VERSION,
                 script_url: str = AXE_SCRIPT_URL, timeout: float = 30.0):
        """
        Initialize accessibility tester

        Args:
            standard: WCAG standard token (e.g. 'wcag22aa')
            rules: Run only these axe rules (takes precedence over the standard)
            disabled_rules: axe rules to skip
            include: CSS selector limiting the checked region
            exclude: CSS selector excluded from the check
            axe_version: axe-core version to inject
            script_url: axe-core script URL; '{version}' is substituted
            timeout: Seconds to wait for axe.run()
        """
        self.standard = standard
        self.rules = rules or []
        self.disabled_rules = disabled_rules or []
        self.include = include
        self.exclude = exclude
        self.script_url = script_url.format(version=axe_version)
        self.timeout = timeout

    def build_run_arguments(self) -> Dict[str, Any]:
        """
        Build the context and options passed to axe.run()

        Returns:
            Dictionary with 'context' (may be None) and 'options'
        """
        options: Dict[str, Any] = {}
        if self.rules:
            options['runOnly'] = {'type': 'rule', 'values': list(self.rules)}
        else:
            options['runOnly'] = {'type': 'tag', 'values': standard_to_tags(self.standard)}

        if self.disabled_rules:
            options['rules'] = {rule: {'enabled': False} for rule in self.disabled_rules}

        context = None
        if self.include or self.exclude:
            context = {}
            if self.include:
                context['include'] = [self.include]
            if self.exclude:
                context['exclude'] = [self.exclude]

        return {'context': context, 'options': options}

    async def run_test(self, page: Page, url: str) -> RawResult:
        """
        Run accessibility test on a page

        Args:
            page: Playwright page object
            url: URL being tested

        Returns:
            RawResult with the axe-core findings

        Raises:
            CheckError: If axe-core could not be loaded or run
        """
        try:
            # Check if axe is already injected
            axe_loaded = await page.evaluate("() => typeof window.axe !== 'undefined'")

            if not axe_loaded:
                logger.debug(f"Injecting axe-core from {self.script_url}")
                await page.add_script_tag(url=self.script_url)

            # Run axe with timeout to prevent hanging
            results = await asyncio.wait_for(
                page.evaluate("""async (args) => {
                    const context = args.context || document;
                    return await axe.run(context, args.options);
                }""", self.build_run_arguments()),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            raise CheckError(f"axe-core timed out after {self.timeout}s on {url}", url=url) from None
        except PlaywrightError as e:
            raise CheckError(f"axe-core execution failed on {url}: {e}", url=url) from e

        results = dict(results or {})
        results['url'] = url
        results.setdefault('timestamp', local_now().isoformat())

        result = RawResult.from_dict(results)
        logger.debug(f"axe-core on {url}: {len(result.violations)} violations, "
                     f"{len(result.passes)} passes, {len(result.incomplete)} incomplete")
        return result
