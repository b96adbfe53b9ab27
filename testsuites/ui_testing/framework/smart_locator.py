"""
================================================================================
Smart Locator with Self-Healing Element Resolution
================================================================================

Element location with a fixed chain of fallbacks:
    1. Primary selector as given
    2. Selector cached for the element description by an earlier healing
    3. Heuristic candidates derived from the primary selector
       (text literal, role fragment, loosened attribute match)
    4. The primary selector again, so the caller's click/fill fails with a
       clear "element not found" error

Heuristic rewriting is a list of pure functions (selector -> candidate),
each testable on its own.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import Locator, Page

from autotest_tools.common import log_step


class ElementNotFoundError(RuntimeError):
    """Raised when an interaction fails after the element was resolved."""
    pass


# =============================================================================
# Candidate strategies
# =============================================================================

_TEXT_FRAGMENT = re.compile(r"""(?:has-text\(\s*|(?<![\w-])text\s*=\s*)(['"])(.+?)\1""")
_ROLE_FRAGMENT = re.compile(r"""(?<![\w-])role\s*=\s*(?:(['"])(.+?)\1|([A-Za-z][\w-]*))""")
_EXACT_ATTRIBUTE = re.compile(r"""\[\s*([\w:-]+)\s*=\s*(['"]?)([^'"\]]*)\2\s*\]""")


def text_candidate(selector: str) -> Optional[str]:
    """
    Text-match locator from a has-text(...) or text=... fragment.

    Quoted attribute values do not count; `input[name='username']` has
    no text candidate.

        >>> text_candidate("button:has-text('Login')")
        'text=Login'
    """
    match = _TEXT_FRAGMENT.search(selector)
    if not match:
        return None
    return f"text={match.group(2)}"


def role_candidate(selector: str) -> Optional[str]:
    """
    Role attribute locator from a role fragment.

        >>> role_candidate("div[role='navigation'] a")
        "[role='navigation']"
    """
    match = _ROLE_FRAGMENT.search(selector)
    if not match:
        return None
    role = match.group(2) or match.group(3)
    return f"[role='{role}']"


def loose_attribute_candidate(selector: str) -> Optional[str]:
    """
    First exact attribute match turned into a substring match.

        >>> loose_attribute_candidate("input[name='username']")
        "[name*='username']"
    """
    match = _EXACT_ATTRIBUTE.search(selector)
    if not match or not match.group(3):
        return None
    attribute, value = match.group(1), match.group(3)
    return f"[{attribute}*='{value}']"


# Order matters: first successful candidate wins
HEALING_STRATEGIES: List[Tuple[str, Callable[[str], Optional[str]]]] = [
    ("text", text_candidate),
    ("role", role_candidate),
    ("attribute", loose_attribute_candidate),
]


def candidate_selectors(selector: str) -> List[Tuple[str, str]]:
    """
    Derive heuristic fallback selectors for a failed primary selector.

    Returns:
        (strategy_name, candidate) pairs in strategy order, skipping
        strategies that do not apply and duplicates.
    """
    candidates: List[Tuple[str, str]] = []
    seen = {selector}
    for name, strategy in HEALING_STRATEGIES:
        candidate = strategy(selector)
        if candidate and candidate not in seen:
            seen.add(candidate)
            candidates.append((name, candidate))
    return candidates


# =============================================================================
# Selector cache
# =============================================================================

@dataclass
class LocatorHealth:
    """
    One healing event, kept for the health report.

    Attributes:
        element_name: Human-readable element description
        primary_selector: The selector that failed
        fallback_name: Strategy that succeeded ("cache", "text", "role", ...)
        fallback_selector: The selector that was used instead
    """
    element_name: str
    primary_selector: str
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


@dataclass
class SelectorCache:
    """
    Description -> last working selector, plus healing attempt counters.

    Lives for the whole test session and is shared by every page's
    SmartLocator. Entries never expire; clear() is the only reset.
    """
    selectors: Dict[str, str] = field(default_factory=dict)
    attempts: Dict[str, int] = field(default_factory=dict)
    events: List[LocatorHealth] = field(default_factory=list)

    def get(self, description: str) -> Optional[str]:
        return self.selectors.get(description)

    def remember(self, description: str, selector: str) -> None:
        self.selectors[description] = selector
        logger.debug(f"Cached selector for '{description}': {selector}")

    def record_attempt(self, description: str) -> int:
        count = self.attempts.get(description, 0) + 1
        self.attempts[description] = count
        return count

    def attempts_for(self, description: str) -> int:
        return self.attempts.get(description, 0)

    @property
    def total_attempts(self) -> int:
        return sum(self.attempts.values())

    def clear(self) -> None:
        self.selectors.clear()
        self.attempts.clear()
        self.events.clear()
        logger.debug("Selector cache cleared")

    def __len__(self) -> int:
        return len(self.selectors)

    def log_stats(self) -> None:
        """Log healing statistics (called after every scenario)."""
        if not self.selectors and not self.attempts:
            logger.info("No selectors were healed during this test run")
            return

        logger.info("=== Selector Healing Statistics ===")
        logger.info(f"Total healed selectors: {len(self.selectors)}")
        logger.info(f"Total healing attempts: {self.total_attempts}")
        for description in sorted(set(self.selectors) | set(self.attempts)):
            selector = self.selectors.get(description, "<not healed>")
            logger.info(
                f"  - {description} -> {selector} "
                f"(attempts: {self.attempts_for(description)})"
            )

    def health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements whose primary selector needed healing; these are
        the candidates for a selector update in the page objects.
        """
        if not self.events:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Healed Selectors:",
            "",
            "The following elements needed a fallback selector.",
            "Consider updating the primary selectors:",
            "",
        ]
        for health in self.events:
            report_lines.extend([
                f"  [{health.element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])
        return "\n".join(report_lines)


# =============================================================================
# Smart locator
# =============================================================================

class SmartLocator:
    """
    Self-healing element locator bound to one Playwright page.

    Features:
        - Primary selector first, waiting up to `timeout` for visibility
        - Cached selector from earlier healings of the same description
        - Heuristic candidates from HEALING_STRATEGIES
        - Never raises: the worst case is the unhealed primary locator

    Usage:
        >>> cache = SelectorCache()
        >>> smart = SmartLocator(page, cache)
        >>> smart.locate("button:has-text('Login')", "login button").click()

    The heuristics can mask a genuine UI regression. Every healing is
    logged as a warning and listed in the health report; set
    `self.healing.enabled: false` to make selector drift fail loudly.
    """

    def __init__(
        self,
        page: Page,
        cache: Optional[SelectorCache] = None,
        healing_enabled: bool = True,
        timeout: int = 5000,
    ):
        """
        Args:
            page: Playwright Page object
            cache: Session-wide selector cache (a private one if omitted)
            healing_enabled: When False, locate() returns the primary locator as-is
            timeout: Milliseconds to wait for the primary selector
        """
        self.page = page
        self.cache = cache if cache is not None else SelectorCache()
        self.healing_enabled = healing_enabled
        self.timeout = timeout

    def locate(
        self,
        selector: str,
        description: str,
        timeout: Optional[int] = None,
    ) -> Locator:
        """
        Resolve a usable locator for `selector`.

        Args:
            selector: Primary CSS / Playwright selector
            description: Human description used as the cache key ("login button")
            timeout: Override for the primary selector wait (ms)

        Returns:
            Locator for the first usable match, or the primary locator when
            nothing matched so that the caller's interaction reports the failure.
        """
        if not self.healing_enabled:
            return self.page.locator(selector).first

        primary_timeout = self.timeout if timeout is None else timeout
        found = self._try_selector(selector, primary_timeout)
        if found is not None:
            logger.debug(f"✅ Element '{description}' found: {selector}")
            return found

        logger.debug(f"Primary selector failed, attempting to heal: {selector}")
        tried = {selector}

        cached = self.cache.get(description)
        if cached and cached not in tried:
            tried.add(cached)
            found = self._try_selector(cached)
            if found is not None:
                self.cache.record_attempt(description)
                self._record_event(description, selector, "cache", cached)
                logger.info(f"Healed selector for: {description} (cached: {cached})")
                return found

        log_step(f"Attempting fallback strategies for: {description}")
        for strategy_name, candidate in candidate_selectors(selector):
            if candidate in tried:
                continue
            tried.add(candidate)
            found = self._try_selector(candidate)
            if found is not None:
                self.cache.remember(description, candidate)
                self.cache.record_attempt(description)
                self._record_event(description, selector, strategy_name, candidate)
                logger.warning(
                    f"⚠️ Element '{description}' healed using {strategy_name}: "
                    f"{selector} -> {candidate}"
                )
                return found

        self.cache.record_attempt(description)
        logger.warning(
            f"⚠️ Could not heal selector: {selector} for element: {description}. "
            f"Using original selector."
        )
        return self.page.locator(selector).first

    def exists(self, selector: str, description: str, timeout: int = 0) -> bool:
        """Check presence through the healing chain. Never raises."""
        try:
            return self.locate(selector, description, timeout=timeout).count() > 0
        except Exception as e:
            logger.debug(f"Existence check failed for '{description}': {e}")
            return False

    def disable_healing(self) -> None:
        self.healing_enabled = False
        logger.debug("Self-healing disabled")

    def enable_healing(self) -> None:
        self.healing_enabled = True
        logger.debug("Self-healing enabled")

    def _try_selector(self, selector: str, timeout: int = 0) -> Optional[Locator]:
        """Return the first visible match for `selector`, or None."""
        try:
            locator = self.page.locator(selector)
            if timeout:
                locator.first.wait_for(state="visible", timeout=timeout)
            if locator.count() > 0 and locator.first.is_visible():
                return locator.first
        except Exception as e:
            logger.debug(f"Selector attempt failed: {selector} -> {str(e)[:80]}")
        return None

    def _record_event(
        self,
        description: str,
        primary: str,
        strategy_name: str,
        used: str,
    ) -> None:
        self.cache.events.append(
            LocatorHealth(
                element_name=description,
                primary_selector=primary,
                fallback_name=strategy_name,
                fallback_selector=used,
            )
        )


__all__ = [
    "SmartLocator",
    "SelectorCache",
    "LocatorHealth",
    "ElementNotFoundError",
    "HEALING_STRATEGIES",
    "candidate_selectors",
    "text_candidate",
    "role_candidate",
    "loose_attribute_candidate",
]
