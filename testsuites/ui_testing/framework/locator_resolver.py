"""
================================================================================
Self-Healing Locator Resolver
================================================================================

Resolves a logical UI element to a live Playwright locator:
    - Primary selector first, with the larger timeout budget
    - Ordered fallback selectors with a shorter budget, first success wins
    - Healing events counted per (description, selector) pair
    - Advisory log once a pair keeps healing past the threshold
    - Deterministic LocatorExhaustedError when every selector fails

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page


DEFAULT_PRIMARY_TIMEOUT_MS = 5000
DEFAULT_FALLBACK_TIMEOUT_MS = 3000
DEFAULT_HEALING_THRESHOLD = 3


class LocatorExhaustedError(Exception):
    """
    Raised when the primary selector and every fallback failed.

    Attributes:
        description: Human-readable element name
        primary: Primary selector that was attempted
        fallback_count: Number of fallback selectors attempted
        failures: Ordered (selector, reason) pairs, one per attempt
    """

    def __init__(
        self,
        description: str,
        primary: str,
        fallback_count: int,
        failures: Optional[List[Tuple[str, str]]] = None,
    ):
        self.description = description
        self.primary = primary
        self.fallback_count = fallback_count
        self.failures = list(failures or [])

        if fallback_count == 0:
            message = (
                f"No fallback strategies available for '{description}': "
                f"primary '{primary}' failed and 0 fallbacks were configured."
            )
        else:
            message = (
                f"All locator strategies failed for '{description}'. "
                f"Primary '{primary}' and {fallback_count} fallbacks exhausted."
            )
        if self.failures:
            message += "\n" + "\n".join(
                f"  - {selector} -> {reason}" for selector, reason in self.failures
            )
        super().__init__(message)


# Short name used by page objects and tests
LocatorExhausted = LocatorExhaustedError


def _as_selector_tuple(fallbacks: Any, description: str) -> Tuple[str, ...]:
    """Normalise fallbacks to a tuple; a bare string is one selector, not characters."""
    if isinstance(fallbacks, str):
        return (fallbacks,)
    try:
        return tuple(fallbacks)
    except TypeError as e:
        raise ValueError(
            f"LocatorStrategy '{description}' fallbacks must be a sequence of selectors, "
            f"got {type(fallbacks).__name__}"
        ) from e


@dataclass(frozen=True)
class LocatorStrategy:
    """
    One logical element: a primary selector plus ordered fallbacks.

    Attributes:
        primary: Preferred selector (must be non-empty)
        fallbacks: Selectors tried in order when primary fails
        description: Label for logs and error messages, never used for matching
    """
    primary: str
    fallbacks: Tuple[str, ...] = field(default_factory=tuple)
    description: str = "custom_element"

    def __post_init__(self) -> None:
        if not isinstance(self.primary, str) or not self.primary.strip():
            raise ValueError(
                f"LocatorStrategy '{self.description}' requires a non-empty primary selector"
            )
        fallbacks = _as_selector_tuple(self.fallbacks, self.description)
        for fallback in fallbacks:
            if not isinstance(fallback, str) or not fallback.strip():
                raise ValueError(
                    f"LocatorStrategy '{self.description}' has an empty fallback selector"
                )
        # Frozen dataclass: bypass __setattr__ to normalise lists into tuples
        object.__setattr__(self, "fallbacks", fallbacks)

    @property
    def selectors(self) -> Tuple[str, ...]:
        """Primary followed by fallbacks, in attempt order."""
        return (self.primary, *self.fallbacks)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LocatorStrategy":
        """
        Build a strategy from a plain mapping.

        Accepts either `fallbacks` or the singular `fallback` key.
        """
        fallbacks = data.get("fallbacks", data.get("fallback")) or ()
        return cls(
            primary=data.get("primary", ""),
            fallbacks=fallbacks,
            description=data.get("description", "custom_element"),
        )


class HealingRecord:
    """
    Thread-safe counter of fallback wins keyed by (description, selector).

    Entries are created on the first win and never removed. One record may be
    shared by the resolvers of several browser sessions.
    """

    def __init__(self) -> None:
        self._counts: Dict[Tuple[str, str], int] = {}
        self._lock = threading.Lock()

    def record(self, description: str, selector: str) -> int:
        """Increment the pair's count and return the new value."""
        key = (description, selector)
        with self._lock:
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count
        return count

    def count(self, description: str, selector: str) -> int:
        with self._lock:
            return self._counts.get((description, selector), 0)

    def snapshot(self) -> Dict[Tuple[str, str], int]:
        """Copy of all counts."""
        with self._lock:
            return dict(self._counts)

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._counts

    def report(self, threshold: int = DEFAULT_HEALING_THRESHOLD) -> str:
        """
        Generate locator health report.

        Lists every element that needed a fallback, most healed first, and
        flags pairs whose count exceeds `threshold` as maintenance candidates.

        Returns:
            Formatted health report string
        """
        counts = self.snapshot()
        if not counts:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        for (description, selector), count in ordered:
            flag = "  [UPDATE PRIMARY]" if count > threshold else ""
            report_lines.extend([
                f"  [{description}]{flag}",
                f"    Healed by: {selector} ({count}x)",
                "",
            ])

        return "\n".join(report_lines)


class _Attempt(NamedTuple):
    """Outcome of one bounded wait: a locator or the failure reason."""
    locator: Optional[Locator]
    error: Optional[str]

    @property
    def ok(self) -> bool:
        return self.locator is not None


class LocatorResolver:
    """
    Self-healing resolver bound to one Playwright page.

    Usage:
        >>> resolver = LocatorResolver(page)
        >>> login = LocatorStrategy(
        ...     primary="#login-btn",
        ...     fallbacks=("[data-test='login-button']",),
        ...     description="Login Button",
        ... )
        >>> button = await resolver.resolve(login)
        >>> await button.click()

    Element handles are never cached; each call re-queries the live page.
    """

    def __init__(
        self,
        page: Page,
        primary_timeout: int = DEFAULT_PRIMARY_TIMEOUT_MS,
        fallback_timeout: int = DEFAULT_FALLBACK_TIMEOUT_MS,
        healing_threshold: int = DEFAULT_HEALING_THRESHOLD,
        healing_record: Optional[HealingRecord] = None,
        wait_state: str = "visible",
    ):
        """
        Initialize resolver.

        Args:
            page: Playwright Page the selectors are evaluated against
            primary_timeout: Wait budget for the primary selector (ms)
            fallback_timeout: Wait budget for each fallback selector (ms)
            healing_threshold: Count above which healing triggers an advisory
            healing_record: Shared record; a private one is created if None
            wait_state: Playwright wait state ('visible' or 'attached')
        """
        self.page = page
        self.primary_timeout = primary_timeout
        self.fallback_timeout = fallback_timeout
        self.healing_threshold = healing_threshold
        self.healing_record = healing_record if healing_record is not None else HealingRecord()
        self.wait_state = wait_state

    @classmethod
    def from_config(
        cls,
        page: Page,
        config: Any = None,
        healing_record: Optional[HealingRecord] = None,
    ) -> "LocatorResolver":
        """Build a resolver from the `locator` configuration section."""
        if config is None:
            from .config_loader import ConfigLoader
            config = ConfigLoader()

        return cls(
            page,
            primary_timeout=config.get("locator.primary_timeout_ms", DEFAULT_PRIMARY_TIMEOUT_MS),
            fallback_timeout=config.get("locator.fallback_timeout_ms", DEFAULT_FALLBACK_TIMEOUT_MS),
            healing_threshold=config.get("locator.healing_threshold", DEFAULT_HEALING_THRESHOLD),
            healing_record=healing_record,
            wait_state=config.get("locator.wait_state", "visible"),
        )

    async def resolve(
        self,
        strategy: LocatorStrategy,
        primary_timeout: Optional[int] = None,
        fallback_timeout: Optional[int] = None,
        quiet: bool = False,
    ) -> Locator:
        """
        Resolve a strategy to a visible element.

        Args:
            strategy: Element to resolve
            primary_timeout: Override for the primary wait budget (ms)
            fallback_timeout: Override for each fallback wait budget (ms)
            quiet: Log misses at DEBUG; for callers that treat absence as an answer

        Returns:
            Playwright Locator for the found element

        Raises:
            LocatorExhaustedError: When primary and all fallbacks fail
        """
        if primary_timeout is None:
            primary_timeout = self.primary_timeout
        if fallback_timeout is None:
            fallback_timeout = self.fallback_timeout

        description = strategy.description
        miss_level = "DEBUG" if quiet else "WARNING"
        failure_level = "DEBUG" if quiet else "ERROR"

        attempt = await self._attempt(strategy.primary, primary_timeout)
        if attempt.ok:
            logger.debug(
                f"Primary locator successful for {description}: {strategy.primary}"
            )
            return attempt.locator

        logger.log(miss_level, f"Primary locator failed for {description}: {strategy.primary}")
        failures = [(strategy.primary, attempt.error)]

        if not strategy.fallbacks:
            logger.log(
                failure_level,
                f"Complete healing failure for {description}: no fallbacks configured.",
            )
            raise LocatorExhaustedError(description, strategy.primary, 0, failures)

        for index, candidate in enumerate(strategy.fallbacks, start=1):
            attempt = await self._attempt(candidate, fallback_timeout)
            if attempt.ok:
                self._record_healing(description, candidate)
                logger.info(
                    f"Self-healing successful for {description} "
                    f"using fallback {index}: {candidate}"
                )
                return attempt.locator

            logger.debug(f"Fallback {index} failed for {description}: {candidate}")
            failures.append((candidate, attempt.error))

        logger.log(
            failure_level,
            f"Complete healing failure for {description}. Manual intervention required.",
        )
        raise LocatorExhaustedError(
            description, strategy.primary, len(strategy.fallbacks), failures
        )

    async def _attempt(self, selector: str, timeout: int) -> _Attempt:
        """Locate `selector` and wait up to `timeout` ms; never raises Playwright errors."""
        try:
            locator = self.page.locator(selector)
            await locator.wait_for(state=self.wait_state, timeout=timeout)
        except PlaywrightError as e:
            reason = str(e).strip()
            return _Attempt(None, reason.splitlines()[0][:120] if reason else type(e).__name__)
        return _Attempt(locator, None)

    def _record_healing(self, description: str, selector: str) -> None:
        count = self.healing_record.record(description, selector)
        if count > self.healing_threshold:
            logger.error(
                f"Healing strategy for {description} has been used {count} times. "
                f"Consider updating primary locator (healed by: {selector})."
            )

    def get_health_report(self) -> str:
        """Locator health report for this resolver's healing record."""
        return self.healing_record.report(self.healing_threshold)


def as_strategy(
    primary: str,
    fallbacks: Optional[Iterable[str]] = None,
    description: str = "custom_element",
) -> LocatorStrategy:
    """Shorthand used by page objects for ad-hoc strategies."""
    return LocatorStrategy(primary, tuple(fallbacks or ()), description)


__all__ = [
    "LocatorResolver",
    "LocatorStrategy",
    "HealingRecord",
    "LocatorExhaustedError",
    "LocatorExhausted",
    "as_strategy",
    "DEFAULT_PRIMARY_TIMEOUT_MS",
    "DEFAULT_FALLBACK_TIMEOUT_MS",
    "DEFAULT_HEALING_THRESHOLD",
]
