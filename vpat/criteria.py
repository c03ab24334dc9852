"""
WCAG 2.2 success criteria and their axe-core rule mappings
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Criterion:
    """A WCAG success criterion and the axe-core rules that test it"""
    id: str  # e.g. "1.1.1"
    name: str
    level: str  # "A", "AA" or "AAA"
    description: str
    rule_ids: Tuple[str, ...] = field(default_factory=tuple)
    can_automate: bool = False

    @property
    def principle(self) -> str:
        """Leading digit of the criterion id ("1" for Perceivable, ...)"""
        return self.id.split('.', 1)[0]


LEVELS = ("A", "AA", "AAA")

# (prefix, heading) in report order
PRINCIPLES = (
    ("1.", "1. Perceivable"),
    ("2.", "2. Operable"),
    ("3.", "3. Understandable"),
    ("4.", "4. Robust"),
)


_WCAG22AA: Tuple[Criterion, ...] = (
    # Principle 1: Perceivable
    # 1.1 Text Alternatives
    Criterion(
        "1.1.1", "Non-text Content", "A",
        "All non-text content has a text alternative",
        ("image-alt", "input-image-alt", "area-alt", "object-alt", "svg-img-alt"),
        True,
    ),

    # 1.2 Time-based Media
    Criterion(
        "1.2.1", "Audio-only and Video-only (Prerecorded)", "A",
        "Alternatives for prerecorded audio-only and video-only content",
        ("video-caption", "audio-caption"),
    ),
    Criterion(
        "1.2.2", "Captions (Prerecorded)", "A",
        "Captions are provided for prerecorded audio content",
        ("video-caption",),
    ),
    Criterion(
        "1.2.3", "Audio Description or Media Alternative (Prerecorded)", "A",
        "Alternative or audio description for prerecorded video",
    ),
    Criterion(
        "1.2.4", "Captions (Live)", "AA",
        "Captions are provided for live audio content",
    ),
    Criterion(
        "1.2.5", "Audio Description (Prerecorded)", "AA",
        "Audio description for prerecorded video content",
    ),

    # 1.3 Adaptable
    Criterion(
        "1.3.1", "Info and Relationships", "A",
        "Information and relationships conveyed through presentation can be programmatically determined",
        ("definition-list", "dlitem", "list", "listitem", "table-fake-caption",
         "td-headers-attr", "th-has-data-cells", "empty-table-header",
         "scope-attr-valid", "p-as-heading"),
        True,
    ),
    Criterion(
        "1.3.2", "Meaningful Sequence", "A",
        "Correct reading sequence can be programmatically determined",
    ),
    Criterion(
        "1.3.3", "Sensory Characteristics", "A",
        "Instructions don't rely solely on sensory characteristics",
    ),
    Criterion(
        "1.3.4", "Orientation", "AA",
        "Content does not restrict its view to a single orientation",
        ("css-orientation-lock",),
        True,
    ),
    Criterion(
        "1.3.5", "Identify Input Purpose", "AA",
        "Input field purpose can be programmatically determined",
        ("autocomplete-valid",),
        True,
    ),

    # 1.4 Distinguishable
    Criterion(
        "1.4.1", "Use of Color", "A",
        "Color is not the only visual means of conveying information",
        ("link-in-text-block",),
    ),
    Criterion(
        "1.4.2", "Audio Control", "A",
        "Mechanism to pause or stop audio that plays automatically",
        ("no-autoplay-audio",),
        True,
    ),
    Criterion(
        "1.4.3", "Contrast (Minimum)", "AA",
        "Text has a contrast ratio of at least 4.5:1",
        ("color-contrast",),
        True,
    ),
    Criterion(
        "1.4.4", "Resize Text", "AA",
        "Text can be resized up to 200% without loss of functionality",
        ("meta-viewport",),
    ),
    Criterion(
        "1.4.5", "Images of Text", "AA",
        "Text is used to convey information rather than images of text",
    ),
    Criterion(
        "1.4.10", "Reflow", "AA",
        "Content can reflow without horizontal scrolling at 320 CSS pixels",
    ),
    Criterion(
        "1.4.11", "Non-text Contrast", "AA",
        "UI components and graphics have a contrast ratio of at least 3:1",
    ),
    Criterion(
        "1.4.12", "Text Spacing", "AA",
        "No loss of content when text spacing is adjusted",
    ),
    Criterion(
        "1.4.13", "Content on Hover or Focus", "AA",
        "Additional content triggered by hover/focus is dismissible, hoverable, and persistent",
    ),

    # Principle 2: Operable
    # 2.1 Keyboard Accessible
    Criterion(
        "2.1.1", "Keyboard", "A",
        "All functionality is operable via keyboard",
        ("scrollable-region-focusable",),
    ),
    Criterion(
        "2.1.2", "No Keyboard Trap", "A",
        "Keyboard focus can be moved away from any component",
    ),
    Criterion(
        "2.1.4", "Character Key Shortcuts", "A",
        "Single character key shortcuts can be turned off or remapped",
    ),

    # 2.2 Enough Time
    Criterion(
        "2.2.1", "Timing Adjustable", "A",
        "Time limits can be turned off, adjusted, or extended",
        ("meta-refresh",),
    ),
    Criterion(
        "2.2.2", "Pause, Stop, Hide", "A",
        "Moving, blinking, scrolling content can be paused, stopped, or hidden",
        ("blink", "marquee"),
        True,
    ),

    # 2.3 Seizures and Physical Reactions
    Criterion(
        "2.3.1", "Three Flashes or Below Threshold", "A",
        "No content flashes more than three times per second",
    ),

    # 2.4 Navigable
    Criterion(
        "2.4.1", "Bypass Blocks", "A",
        "Mechanism to bypass repeated blocks of content",
        ("bypass", "region"),
        True,
    ),
    Criterion(
        "2.4.2", "Page Titled", "A",
        "Pages have titles that describe topic or purpose",
        ("document-title",),
        True,
    ),
    Criterion(
        "2.4.3", "Focus Order", "A",
        "Focus order preserves meaning and operability",
        ("tabindex",),
    ),
    Criterion(
        "2.4.4", "Link Purpose (In Context)", "A",
        "Link purpose can be determined from link text or context",
        ("link-name",),
        True,
    ),
    Criterion(
        "2.4.5", "Multiple Ways", "AA",
        "More than one way to locate a page within a set",
    ),
    Criterion(
        "2.4.6", "Headings and Labels", "AA",
        "Headings and labels describe topic or purpose",
        ("empty-heading",),
    ),
    Criterion(
        "2.4.7", "Focus Visible", "AA",
        "Keyboard focus indicator is visible",
    ),
    Criterion(
        "2.4.11", "Focus Not Obscured (Minimum)", "AA",
        "Focused element is not entirely hidden by other content",
    ),

    # 2.5 Input Modalities
    Criterion(
        "2.5.1", "Pointer Gestures", "A",
        "Multipoint or path-based gestures have single-pointer alternatives",
    ),
    Criterion(
        "2.5.2", "Pointer Cancellation", "A",
        "Single-pointer functionality can be cancelled",
    ),
    Criterion(
        "2.5.3", "Label in Name", "A",
        "Visible label is part of accessible name",
        ("label-content-name-mismatch",),
        True,
    ),
    Criterion(
        "2.5.4", "Motion Actuation", "A",
        "Motion-triggered functionality can be disabled and has alternatives",
    ),
    Criterion(
        "2.5.7", "Dragging Movements", "AA",
        "Dragging functionality has single-pointer alternatives",
    ),
    Criterion(
        "2.5.8", "Target Size (Minimum)", "AA",
        "Touch targets are at least 24x24 CSS pixels",
        ("target-size",),
        True,
    ),

    # Principle 3: Understandable
    # 3.1 Readable
    Criterion(
        "3.1.1", "Language of Page", "A",
        "Default human language can be programmatically determined",
        ("html-has-lang", "html-lang-valid"),
        True,
    ),
    Criterion(
        "3.1.2", "Language of Parts", "AA",
        "Language of parts can be programmatically determined",
        ("valid-lang",),
        True,
    ),

    # 3.2 Predictable
    Criterion(
        "3.2.1", "On Focus", "A",
        "Focus does not trigger unexpected context changes",
    ),
    Criterion(
        "3.2.2", "On Input", "A",
        "Input does not trigger unexpected context changes",
    ),
    Criterion(
        "3.2.3", "Consistent Navigation", "AA",
        "Navigation mechanisms are consistent across pages",
    ),
    Criterion(
        "3.2.4", "Consistent Identification", "AA",
        "Components with same functionality are identified consistently",
    ),
    Criterion(
        "3.2.6", "Consistent Help", "A",
        "Help mechanisms are in consistent locations",
    ),

    # 3.3 Input Assistance
    Criterion(
        "3.3.1", "Error Identification", "A",
        "Input errors are identified and described in text",
    ),
    Criterion(
        "3.3.2", "Labels or Instructions", "A",
        "Labels or instructions are provided for user input",
        ("label", "select-name", "input-button-name"),
        True,
    ),
    Criterion(
        "3.3.3", "Error Suggestion", "AA",
        "Suggestions are provided when input errors are detected",
    ),
    Criterion(
        "3.3.4", "Error Prevention (Legal, Financial, Data)", "AA",
        "Submissions are reversible, verifiable, or confirmable",
    ),
    Criterion(
        "3.3.7", "Redundant Entry", "A",
        "Previously entered information is auto-populated or available for selection",
    ),
    Criterion(
        "3.3.8", "Accessible Authentication (Minimum)", "AA",
        "Authentication does not require cognitive function test",
    ),

    # Principle 4: Robust
    # 4.1 Compatible
    Criterion(
        "4.1.1", "Parsing", "A",
        "No major parsing errors (obsolete in WCAG 2.2)",
        ("duplicate-id", "duplicate-id-active", "duplicate-id-aria"),
        True,
    ),
    Criterion(
        "4.1.2", "Name, Role, Value", "A",
        "Name, role, and value can be programmatically determined",
        ("aria-allowed-attr", "aria-allowed-role", "aria-command-name",
         "aria-dialog-name", "aria-hidden-body", "aria-hidden-focus",
         "aria-input-field-name", "aria-meter-name", "aria-progressbar-name",
         "aria-required-attr", "aria-required-children", "aria-required-parent",
         "aria-roledescription", "aria-roles", "aria-toggle-field-name",
         "aria-tooltip-name", "aria-valid-attr", "aria-valid-attr-value",
         "button-name", "form-field-multiple-labels", "frame-title",
         "input-button-name", "role-img-alt"),
        True,
    ),
    Criterion(
        "4.1.3", "Status Messages", "AA",
        "Status messages can be programmatically determined",
        ("aria-live-region-attr",),
    ),
)


def wcag22aa() -> List[Criterion]:
    """
    Return all WCAG 2.2 Level A and AA criteria

    The list is newly allocated on each call and ordered by principle,
    guideline, then criterion number.

    Returns:
        List of Criterion objects
    """
    return list(_WCAG22AA)


def get_by_level(criteria: Sequence[Criterion], *levels: str) -> List[Criterion]:
    """
    Filter criteria by WCAG level

    Args:
        criteria: Criteria to filter
        levels: Levels to keep ("A", "AA", "AAA")

    Returns:
        Criteria whose level is one of the given levels, in input order
    """
    wanted = set(levels)
    return [c for c in criteria if c.level in wanted]


def get_automatable(criteria: Sequence[Criterion]) -> List[Criterion]:
    """Return criteria flagged as fully automatable, in input order"""
    return [c for c in criteria if c.can_automate]


def get_criterion(criterion_id: str) -> Optional[Criterion]:
    """Look up a catalog criterion by id"""
    for criterion in _WCAG22AA:
        if criterion.id == criterion_id:
            return criterion
    return None
